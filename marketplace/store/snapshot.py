"""File-backed store for offline rebalancing runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from marketplace.models import Product, Seller
from marketplace.store.base import ProductFilter, StoreError, UpdateResult

log = logging.getLogger("store.snapshot")


def _matches(product: Product, filters: ProductFilter) -> bool:
    if filters.seller_id is not None:
        return product.seller_id == filters.seller_id
    if filters.category and product.category != filters.category:
        return False
    if filters.search:
        haystack = (product.name or "").lower()
        if filters.search.strip().lower() not in haystack:
            return False
    return True


class SnapshotStore:
    """In-memory seller/product snapshot loaded from YAML or JSON.

    ``flash_sale`` and ``featured`` filters are ignored: snapshots only carry
    the fields the engine works with.
    """

    def __init__(self, sellers: Iterable[Seller] = (), products: Iterable[Product] = ()) -> None:
        self._sellers = list(sellers)
        self._products: dict[int, Product] = {}
        for product in products:
            # a collapsed duplicate would shift every later position
            if product.id in self._products:
                raise StoreError(f"Duplicate product id {product.id} in snapshot")
            self._products[product.id] = product
        self.updates: list[UpdateResult] = []

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SnapshotStore":
        try:
            sellers = [Seller.from_mapping(item) for item in payload.get("sellers") or []]
            products = [Product.from_mapping(item) for item in payload.get("products") or []]
        except ValueError as exc:
            raise StoreError(f"Invalid snapshot: {exc}") from exc
        return cls(sellers, products)

    @classmethod
    def from_file(cls, path: str | Path) -> "SnapshotStore":
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as fh:
                payload = yaml.safe_load(fh) or {}
        except FileNotFoundError as exc:
            raise StoreError(f"{path} is missing") from exc
        except yaml.YAMLError as exc:
            raise StoreError(f"{path} is not valid YAML/JSON") from exc
        if not isinstance(payload, Mapping):
            raise StoreError(f"{path} must contain a mapping at the top level")
        store = cls.from_payload(payload)
        log.info("snapshot %s: %s sellers, %s products", path, len(store._sellers), len(store._products))
        return store

    def to_payload(self) -> dict[str, Any]:
        return {
            "sellers": [seller.to_payload() for seller in self._sellers],
            "products": [product.to_payload() for product in self._products.values()],
        }

    def dump(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump(self.to_payload(), fh, allow_unicode=True, sort_keys=False)

    async def list_sellers(self) -> list[Seller]:
        return list(self._sellers)

    async def list_products(self, filters: ProductFilter | None = None) -> list[Product]:
        products = list(self._products.values())
        if filters is None:
            return products
        return [product for product in products if _matches(product, filters)]

    async def update_seller_id(self, product_id: int, seller_id: int) -> UpdateResult:
        product = self._products.get(product_id)
        if product is None:
            result = UpdateResult(product_id, ok=False, error="product not found")
        else:
            self._products[product_id] = product.with_seller(seller_id)
            result = UpdateResult(product_id, ok=True)
        self.updates.append(result)
        return result


__all__ = ["SnapshotStore"]
