from __future__ import annotations

from .affinity import CategoryAffinityIndex
from .allocator import (
    DEFAULT_RESERVED_COUNT,
    InsufficientSellersError,
    ProductAllocator,
    RandomSource,
    Reassignment,
    allocate_products,
    allocate_products_partitioned,
    diff_assignments,
    eligible_sellers,
    seeded_rng,
    spawn_streams,
)

__all__ = [
    "CategoryAffinityIndex",
    "DEFAULT_RESERVED_COUNT",
    "InsufficientSellersError",
    "ProductAllocator",
    "RandomSource",
    "Reassignment",
    "allocate_products",
    "allocate_products_partitioned",
    "diff_assignments",
    "eligible_sellers",
    "seeded_rng",
    "spawn_streams",
]
