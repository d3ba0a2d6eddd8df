from __future__ import annotations

from .base import CatalogStore, ProductFilter, ProductStore, SellerStore, StoreError, UpdateResult
from .http import CircuitBreaker, CircuitBreakerOpenError
from .rest import RestStore
from .snapshot import SnapshotStore

__all__ = [
    "CatalogStore",
    "CircuitBreaker",
    "CircuitBreakerOpenError",
    "ProductFilter",
    "ProductStore",
    "RestStore",
    "SellerStore",
    "SnapshotStore",
    "StoreError",
    "UpdateResult",
]
