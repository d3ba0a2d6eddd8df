"""Seller ranking and product allocation for the marketplace storefront."""

from __future__ import annotations

from .allocation import (
    CategoryAffinityIndex,
    InsufficientSellersError,
    ProductAllocator,
    allocate_products,
)
from .models import Product, Seller, ShopType
from .sellers import FALLBACK_SELLERS, brand_sellers, dedupe_sellers, rank_sellers, top_sellers

__version__ = "0.1.0"

__all__ = [
    "CategoryAffinityIndex",
    "FALLBACK_SELLERS",
    "InsufficientSellersError",
    "Product",
    "ProductAllocator",
    "Seller",
    "ShopType",
    "allocate_products",
    "brand_sellers",
    "dedupe_sellers",
    "rank_sellers",
    "top_sellers",
]
