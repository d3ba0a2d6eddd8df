"""Collaborator interfaces of the seller and product stores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from marketplace.models import Product, Seller


class StoreError(RuntimeError):
    """Raised when a store cannot return a snapshot."""


@dataclass(frozen=True, slots=True)
class ProductFilter:
    category: str | None = None
    search: str | None = None
    flash_sale: bool = False
    featured: bool = False
    seller_id: int | None = None

    def to_params(self) -> dict[str, Any]:
        """Query parameters understood by ``GET /api/products``."""

        if self.seller_id is not None:
            # the API ignores every other filter when sellerId is present
            return {"sellerId": self.seller_id}
        params: dict[str, Any] = {}
        if self.category:
            params["category"] = self.category
        if self.search:
            params["search"] = self.search
        if self.flash_sale:
            params["flashSale"] = "true"
        if self.featured:
            params["featured"] = "true"
        return params


@dataclass(frozen=True, slots=True)
class UpdateResult:
    product_id: int
    ok: bool
    error: str | None = None


class SellerStore(Protocol):
    async def list_sellers(self) -> list[Seller]: ...


class ProductStore(Protocol):
    async def list_products(self, filters: ProductFilter | None = None) -> list[Product]: ...

    async def update_seller_id(self, product_id: int, seller_id: int) -> UpdateResult: ...


class CatalogStore(SellerStore, ProductStore, Protocol):
    """A store serving both sellers and products."""


__all__ = [
    "CatalogStore",
    "ProductFilter",
    "ProductStore",
    "SellerStore",
    "StoreError",
    "UpdateResult",
]
