"""Storefront ordering of sellers."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from marketplace.config import settings
from marketplace.models import Seller, ShopType
from marketplace.sellers.dedupe import dedupe_sellers

log = logging.getLogger("sellers.ranking")

# The "featured sellers" block is never rendered empty.
FALLBACK_SELLERS: tuple[Seller, ...] = (
    Seller(
        id=1,
        owner_id=1,
        shop_name="Fashion Paradise",
        shop_type=ShopType.SMALL_BUSINESS,
        main_category="Thời trang nữ",
        rating=4.9,
        review_count=156,
        product_count=542,
        is_verified=True,
        shop_description="Chuyên đầm, váy, áo kiểu nữ",
    ),
    Seller(
        id=2,
        owner_id=2,
        shop_name="Men's Style",
        shop_type=ShopType.BRAND,
        main_category="Thời trang nam",
        rating=4.8,
        review_count=124,
        product_count=326,
        is_verified=True,
        shop_description="Thời trang nam cao cấp",
    ),
    Seller(
        id=3,
        owner_id=3,
        shop_name="Trend Accessories",
        shop_type=ShopType.INDIVIDUAL,
        main_category="Phụ kiện",
        rating=4.7,
        review_count=98,
        product_count=218,
        is_verified=True,
        shop_description="Phụ kiện thời trang",
    ),
)

BRAND_SHOP_TYPES = frozenset({ShopType.OFFICIAL, ShopType.BRAND})


def _sort_key(seller: Seller) -> tuple[float, int]:
    return (-(seller.rating or 0.0), -(seller.review_count or 0))


def rank_sellers(sellers: Sequence[Seller], limit: int = 5) -> list[Seller]:
    """Order sellers by rating, then review count, and keep the first ``limit``.

    ``sorted`` is stable, so sellers with equal keys keep their input order.
    An empty input yields :data:`FALLBACK_SELLERS`.
    """

    if limit <= 0:
        return []
    if not sellers:
        log.info("rank_sellers: no sellers, serving fallback set")
        return list(FALLBACK_SELLERS[:limit])
    return sorted(sellers, key=_sort_key)[:limit]


def top_sellers(sellers: Iterable[Seller], limit: int | None = None) -> list[Seller]:
    """Dedupe and rank raw sellers for the storefront."""

    if limit is None:
        limit = settings.TOP_SELLERS_LIMIT
    return rank_sellers(dedupe_sellers(sellers), limit=limit)


def brand_sellers(sellers: Iterable[Seller]) -> list[Seller]:
    return [seller for seller in sellers if seller.shop_type in BRAND_SHOP_TYPES]


__all__ = ["BRAND_SHOP_TYPES", "FALLBACK_SELLERS", "brand_sellers", "rank_sellers", "top_sellers"]
