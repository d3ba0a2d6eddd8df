import pytest
import yaml

from marketplace.store import ProductFilter, SnapshotStore, StoreError

SNAPSHOT = """
sellers:
  - {id: 1, userId: 1, shopName: Fashion Paradise, shopType: small-business}
  - {id: 2, userId: 2, shopName: Men's Style, shopType: brand}
  - {id: 3, userId: 3, shopName: Trend Accessories, shopType: individual, mainCategory: ao-thun}
products:
  - {id: 10, category: ao-thun, sellerId: 1, name: Áo thun trắng}
  - {id: 11, category: quan-jean, sellerId: 1, name: Quần jean}
  - {id: 12, category: ao-thun, sellerId: 3}
"""


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(SNAPSHOT, encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_snapshot_loads_sellers_and_products(snapshot_path):
    store = SnapshotStore.from_file(snapshot_path)
    sellers = await store.list_sellers()
    products = await store.list_products()
    assert [seller.owner_id for seller in sellers] == [1, 2, 3]
    assert sellers[2].main_category == "ao-thun"
    assert [product.id for product in products] == [10, 11, 12]


@pytest.mark.asyncio
async def test_snapshot_filters(snapshot_path):
    store = SnapshotStore.from_file(snapshot_path)
    by_category = await store.list_products(ProductFilter(category="ao-thun"))
    by_seller = await store.list_products(ProductFilter(seller_id=3, category="quan-jean"))
    by_search = await store.list_products(ProductFilter(search="JEAN"))
    assert [product.id for product in by_category] == [10, 12]
    assert [product.id for product in by_seller] == [12]
    assert [product.id for product in by_search] == [11]


@pytest.mark.asyncio
async def test_snapshot_update_and_dump(snapshot_path, tmp_path):
    store = SnapshotStore.from_file(snapshot_path)
    assert (await store.update_seller_id(11, 3)).ok
    missing = await store.update_seller_id(99, 3)
    assert not missing.ok
    assert missing.error == "product not found"

    out = tmp_path / "out" / "catalog.yaml"
    store.dump(out)
    payload = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert [item["sellerId"] for item in payload["products"]] == [1, 3, 3]
    reloaded = SnapshotStore.from_file(out)
    assert len(await reloaded.list_sellers()) == 3


def test_snapshot_accepts_json(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text('{"sellers": [], "products": [{"id": 1, "category": "vay", "sellerId": 1}]}', encoding="utf-8")
    store = SnapshotStore.from_file(path)
    assert store.to_payload()["products"][0]["category"] == "vay"


@pytest.mark.parametrize(
    "content",
    ["- just\n- a list\n", "sellers: [{id: 1}]\n", "sellers: [unclosed\n"],
)
def test_snapshot_invalid_content(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StoreError):
        SnapshotStore.from_file(path)


def test_snapshot_missing_file(tmp_path):
    with pytest.raises(StoreError):
        SnapshotStore.from_file(tmp_path / "absent.yaml")


def test_snapshot_rejects_duplicate_product_ids(tmp_path, product_factory):
    with pytest.raises(StoreError, match="Duplicate product id 10"):
        SnapshotStore([], [product_factory(10, "ao-thun"), product_factory(10, "vay")])

    path = tmp_path / "dupes.yaml"
    path.write_text(SNAPSHOT + "  - {id: 11, category: vay, sellerId: 2}\n", encoding="utf-8")
    with pytest.raises(StoreError, match="Duplicate product id 11"):
        SnapshotStore.from_file(path)
