"""Seller and product snapshots exchanged with the marketplace data layer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping

__all__ = ["Product", "Seller", "ShopType"]


class ShopType(str, Enum):
    OFFICIAL = "official"
    BRAND = "brand"
    SMALL_BUSINESS = "small-business"
    INDIVIDUAL = "individual"


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _to_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_count(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True, slots=True)
class Seller:
    """A merchant storefront, distinct from the account (``owner_id``) behind it."""

    id: int
    owner_id: int
    shop_name: str
    shop_type: ShopType
    main_category: str | None = None
    rating: float = 0.0
    review_count: int = 0
    product_count: int = 0
    is_default: bool = False
    is_verified: bool = False
    shop_logo: str | None = None
    shop_banner: str | None = None
    shop_description: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Seller":
        """Build a seller from an API payload.

        Both the camelCase shape served by ``/api/sellers`` and snake_case keys
        are accepted. ``userId`` is the legacy name of ``ownerId``. Absent
        ``rating``, ``reviewCount`` and ``productCount`` become 0.
        """

        try:
            seller_id = int(payload["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid seller payload: {exc}") from exc

        shop_name = _first(payload, "shopName", "shop_name")
        if shop_name is None:
            raise ValueError(f"Seller {seller_id} has no shop name")

        owner_raw = _first(payload, "ownerId", "owner_id", "userId", "user_id")
        if owner_raw is None:
            raise ValueError(f"Seller {seller_id} has no owner id")

        return cls(
            id=seller_id,
            owner_id=int(owner_raw),
            shop_name=str(shop_name),
            shop_type=ShopType(str(_first(payload, "shopType", "shop_type") or "")),
            main_category=_optional_text(_first(payload, "mainCategory", "main_category")),
            rating=_to_float(payload.get("rating")),
            review_count=_to_count(_first(payload, "reviewCount", "review_count")),
            product_count=_to_count(_first(payload, "productCount", "product_count")),
            is_default=bool(_first(payload, "isDefault", "is_default")),
            is_verified=bool(_first(payload, "isVerified", "is_verified")),
            shop_logo=_optional_text(_first(payload, "shopLogo", "shop_logo")),
            shop_banner=_optional_text(_first(payload, "shopBanner", "shop_banner")),
            shop_description=_optional_text(_first(payload, "shopDescription", "shop_description")),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "shopName": self.shop_name,
            "shopType": self.shop_type.value,
            "mainCategory": self.main_category,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "productCount": self.product_count,
            "isDefault": self.is_default,
            "isVerified": self.is_verified,
            "shopLogo": self.shop_logo,
            "shopBanner": self.shop_banner,
            "shopDescription": self.shop_description,
        }


@dataclass(frozen=True, slots=True)
class Product:
    id: int
    category: str
    seller_id: int
    name: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Product":
        try:
            product_id = int(payload["id"])
            category = str(payload["category"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid product payload: {exc}") from exc
        seller_raw = _first(payload, "sellerId", "seller_id")
        return cls(
            id=product_id,
            category=category,
            seller_id=int(seller_raw) if seller_raw is not None else 0,
            name=_optional_text(payload.get("name")),
        )

    def with_seller(self, owner_id: int) -> "Product":
        return replace(self, seller_id=owner_id)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "category": self.category,
            "sellerId": self.seller_id,
        }
        if self.name is not None:
            payload["name"] = self.name
        return payload
