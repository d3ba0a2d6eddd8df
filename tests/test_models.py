import pytest

from marketplace.models import Product, Seller, ShopType


def test_seller_from_api_payload_defaults_missing_counters():
    seller = Seller.from_mapping(
        {
            "id": 7,
            "userId": 42,
            "shopName": "Men's Style",
            "shopType": "brand",
            "mainCategory": "Thời trang nam",
            "rating": None,
        }
    )
    assert seller.owner_id == 42
    assert seller.shop_type is ShopType.BRAND
    assert seller.rating == 0
    assert seller.review_count == 0
    assert seller.product_count == 0
    assert seller.is_default is False


def test_seller_owner_id_takes_precedence_over_user_id():
    seller = Seller.from_mapping(
        {"id": 1, "ownerId": 5, "userId": 9, "shopName": "A", "shopType": "official"}
    )
    assert seller.owner_id == 5


def test_seller_negative_counts_are_clamped():
    seller = Seller.from_mapping(
        {"id": 1, "ownerId": 1, "shopName": "A", "shopType": "individual", "reviewCount": -3}
    )
    assert seller.review_count == 0


def test_seller_blank_main_category_is_none():
    seller = Seller.from_mapping(
        {"id": 1, "ownerId": 1, "shopName": "A", "shopType": "individual", "mainCategory": "  "}
    )
    assert seller.main_category is None


@pytest.mark.parametrize(
    "payload",
    [
        {"id": 1, "shopName": "A", "shopType": "brand"},
        {"id": 1, "ownerId": 1, "shopName": "A", "shopType": "wholesale"},
        {"ownerId": 1, "shopName": "A", "shopType": "brand"},
    ],
)
def test_seller_invalid_payload_raises(payload):
    with pytest.raises(ValueError):
        Seller.from_mapping(payload)


def test_seller_payload_uses_camel_case():
    seller = Seller(id=3, owner_id=30, shop_name="Trend", shop_type=ShopType.SMALL_BUSINESS)
    payload = seller.to_payload()
    assert payload["ownerId"] == 30
    assert payload["shopType"] == "small-business"
    assert Seller.from_mapping(payload) == seller


def test_product_with_seller_returns_copy():
    product = Product.from_mapping({"id": 10, "category": "ao-thun", "sellerId": 1, "name": "Áo"})
    moved = product.with_seller(3)
    assert moved.seller_id == 3
    assert product.seller_id == 1
    assert moved.to_payload() == {"id": 10, "category": "ao-thun", "sellerId": 3, "name": "Áo"}
