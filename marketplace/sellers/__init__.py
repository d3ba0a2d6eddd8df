from __future__ import annotations

from .dedupe import dedupe_sellers
from .ranking import BRAND_SHOP_TYPES, FALLBACK_SELLERS, brand_sellers, rank_sellers, top_sellers

__all__ = [
    "BRAND_SHOP_TYPES",
    "FALLBACK_SELLERS",
    "brand_sellers",
    "dedupe_sellers",
    "rank_sellers",
    "top_sellers",
]
