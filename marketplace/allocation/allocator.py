"""Redistribution of a product catalog across sellers.

Every product at an even position stays with the default (legacy) owner.
Products at odd positions go to a non-default seller: one whose main category
matches the product category when such sellers exist, otherwise any
non-default seller. Random picks go through an injected source so a seeded
``random.Random`` reproduces the same assignment.
"""

from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence, TypeVar

from marketplace.allocation.affinity import CategoryAffinityIndex
from marketplace.models import Product, Seller

log = logging.getLogger("allocation")

T = TypeVar("T")

DEFAULT_RESERVED_COUNT = 2


class RandomSource(Protocol):
    """Anything with ``random.Random.choice`` semantics."""

    def choice(self, seq: Sequence[T]) -> T: ...


class InsufficientSellersError(RuntimeError):
    """Raised when no non-default seller can receive redistributed products."""

    def __init__(self, total: int, excluded: int) -> None:
        super().__init__(
            f"No eligible sellers for allocation: {total} supplied, {excluded} reserved as default"
        )
        self.total = total
        self.excluded = excluded


@dataclass(frozen=True, slots=True)
class Reassignment:
    product_id: int
    previous_seller_id: int
    seller_id: int


def seeded_rng(seed: int | None = None) -> random.Random:
    return random.Random(seed)


def spawn_streams(rng: random.Random, count: int) -> list[random.Random]:
    """Derive ``count`` independent generators from ``rng``.

    Each worker of a partitioned allocation owns one stream, so no generator
    is shared between threads.
    """

    if count <= 0:
        raise ValueError("count must be positive")
    return [random.Random(rng.getrandbits(64)) for _ in range(count)]


def eligible_sellers(sellers: Sequence[Seller], reserved_count: int = DEFAULT_RESERVED_COUNT) -> list[Seller]:
    """Return sellers allowed to receive redistributed products.

    Sellers flagged ``is_default`` are excluded when any flag is present;
    otherwise the first ``reserved_count`` sellers are treated as the default
    accounts.
    """

    if any(seller.is_default for seller in sellers):
        return [seller for seller in sellers if not seller.is_default]
    return list(sellers[max(0, reserved_count):])


@dataclass
class ProductAllocator:
    default_owner_id: int
    rng: RandomSource = field(default_factory=random.Random)
    reserved_count: int = DEFAULT_RESERVED_COUNT

    def __post_init__(self) -> None:
        if not self.default_owner_id:
            raise ValueError("default_owner_id must be a valid owner id")

    def pool(self, sellers: Sequence[Seller]) -> list[Seller]:
        pool = eligible_sellers(sellers, self.reserved_count)
        if not pool:
            raise InsufficientSellersError(len(sellers), len(sellers) - len(pool))
        return pool

    def allocate(
        self,
        products: Iterable[Product],
        sellers: Sequence[Seller],
        *,
        start_index: int = 0,
    ) -> list[Product]:
        """Return copies of ``products`` with ``seller_id`` reassigned.

        ``start_index`` is the global position of the first product, used when
        the catalog is split into chunks.
        """

        pool = self.pool(sellers)
        index = CategoryAffinityIndex.build(pool)
        allocated: list[Product] = []
        affinity_hits = 0
        for position, product in enumerate(products, start=start_index):
            if position % 2 == 0:
                allocated.append(product.with_seller(self.default_owner_id))
                continue
            matches = index.lookup(product.category)
            if matches:
                affinity_hits += 1
                chosen = self.rng.choice(matches)
            else:
                chosen = self.rng.choice(pool)
            allocated.append(product.with_seller(chosen.owner_id))

        log.debug(
            "allocated %s products (start=%s pool=%s affinity=%s)",
            len(allocated),
            start_index,
            len(pool),
            affinity_hits,
        )
        return allocated


def allocate_products(
    products: Iterable[Product],
    sellers: Sequence[Seller],
    default_owner_id: int,
    rng: RandomSource,
    *,
    reserved_count: int = DEFAULT_RESERVED_COUNT,
) -> list[Product]:
    allocator = ProductAllocator(default_owner_id=default_owner_id, rng=rng, reserved_count=reserved_count)
    return allocator.allocate(products, sellers)


def allocate_products_partitioned(
    products: Sequence[Product],
    sellers: Sequence[Seller],
    default_owner_id: int,
    rngs: Sequence[RandomSource],
    *,
    reserved_count: int = DEFAULT_RESERVED_COUNT,
) -> list[Product]:
    """Allocate contiguous chunks of ``products`` on worker threads.

    Chunk ``i`` uses ``rngs[i]``; positions stay global so the parity rule is
    unaffected by the split.
    """

    if not rngs:
        raise ValueError("at least one random stream is required")
    # Fail before any worker starts.
    eligible = eligible_sellers(sellers, reserved_count)
    if not eligible:
        raise InsufficientSellersError(len(sellers), len(sellers) - len(eligible))

    size = -(-len(products) // len(rngs)) if products else 0
    chunks = [
        (start, products[start:start + size], rng)
        for start, rng in zip(range(0, len(products), size or 1), rngs)
    ]

    def _run(start: int, chunk: Sequence[Product], rng: RandomSource) -> list[Product]:
        allocator = ProductAllocator(default_owner_id=default_owner_id, rng=rng, reserved_count=reserved_count)
        return allocator.allocate(chunk, sellers, start_index=start)

    if not chunks:
        return []
    with ThreadPoolExecutor(max_workers=len(chunks), thread_name_prefix="allocate") as pool:
        results = list(pool.map(lambda args: _run(*args), chunks))
    return [product for chunk in results for product in chunk]


def diff_assignments(before: Iterable[Product], after: Iterable[Product]) -> list[Reassignment]:
    """List products whose ``seller_id`` differs between two aligned snapshots."""

    changes: list[Reassignment] = []
    for old, new in zip(before, after):
        if old.id != new.id:
            raise ValueError(f"Snapshots are not aligned: {old.id} != {new.id}")
        if old.seller_id != new.seller_id:
            changes.append(Reassignment(new.id, old.seller_id, new.seller_id))
    return changes


__all__ = [
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
