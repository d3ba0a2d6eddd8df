"""Catalog maintenance job: redistribute products across sellers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from marketplace.allocation import ProductAllocator, RandomSource, diff_assignments, seeded_rng
from marketplace.config import settings
from marketplace.store.base import CatalogStore, ProductFilter

log = logging.getLogger("rebalance")


@dataclass
class RebalanceReport:
    total: int = 0
    unchanged: int = 0
    updated: list[int] = field(default_factory=list)
    failed: dict[int, str] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> dict[str, int | bool]:
        return {
            "total": self.total,
            "unchanged": self.unchanged,
            "updated": len(self.updated),
            "failed": len(self.failed),
            "dry_run": self.dry_run,
        }


async def rebalance_catalog(
    store: CatalogStore,
    *,
    rng: RandomSource | None = None,
    default_owner_id: int | None = None,
    reserved_count: int | None = None,
    filters: ProductFilter | None = None,
    dry_run: bool = False,
) -> RebalanceReport:
    """Reassign product owners and push every change back to ``store``.

    :class:`~marketplace.allocation.InsufficientSellersError` propagates
    before any update is sent.
    """

    sellers = await store.list_sellers()
    products = await store.list_products(filters)
    allocator = ProductAllocator(
        default_owner_id=default_owner_id or settings.DEFAULT_OWNER_ID,
        rng=rng or seeded_rng(settings.ALLOCATION_SEED),
        reserved_count=settings.RESERVED_SELLER_COUNT if reserved_count is None else reserved_count,
    )
    log.info("rebalance start: sellers=%s products=%s dry_run=%s", len(sellers), len(products), dry_run)

    allocated = allocator.allocate(products, sellers)
    changes = diff_assignments(products, allocated)
    report = RebalanceReport(total=len(products), unchanged=len(products) - len(changes), dry_run=dry_run)

    for change in changes:
        if dry_run:
            report.updated.append(change.product_id)
            continue
        result = await store.update_seller_id(change.product_id, change.seller_id)
        if result.ok:
            report.updated.append(change.product_id)
        else:
            report.failed[change.product_id] = result.error or "unknown error"

    if report.failed:
        log.warning("rebalance finished with failures: %s", report.summary())
    else:
        log.info("rebalance finished: %s", report.summary())
    return report


__all__ = ["RebalanceReport", "rebalance_catalog"]
