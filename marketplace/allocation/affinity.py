"""Lookup of sellers by their declared main category."""

from __future__ import annotations

from typing import Iterable, Mapping

from marketplace.models import Seller


class CategoryAffinityIndex:
    """Buckets of sellers keyed by ``main_category``.

    Seller order inside a bucket follows the input order. Sellers without a
    main category are not indexed.
    """

    def __init__(self, buckets: Mapping[str, tuple[Seller, ...]] | None = None) -> None:
        self._buckets: dict[str, tuple[Seller, ...]] = dict(buckets or {})

    @classmethod
    def build(cls, sellers: Iterable[Seller]) -> "CategoryAffinityIndex":
        grouped: dict[str, list[Seller]] = {}
        for seller in sellers:
            if not seller.main_category:
                continue
            grouped.setdefault(seller.main_category, []).append(seller)
        return cls({category: tuple(items) for category, items in grouped.items()})

    def lookup(self, category: str) -> tuple[Seller, ...]:
        return self._buckets.get(category, ())

    def categories(self) -> list[str]:
        return list(self._buckets)

    def __contains__(self, category: object) -> bool:
        return category in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)


__all__ = ["CategoryAffinityIndex"]
