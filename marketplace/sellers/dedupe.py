"""Collapse seller records that share a display name."""

from __future__ import annotations

import logging
from typing import Iterable

from marketplace.models import Seller

log = logging.getLogger("sellers.dedupe")


def dedupe_sellers(sellers: Iterable[Seller]) -> list[Seller]:
    """Return one survivor per ``shop_name``.

    A later record replaces the stored survivor only when its rating is
    strictly higher, so ties keep the first-seen record. Survivors are
    returned in the order their name was first encountered.
    """

    survivors: dict[str, Seller] = {}
    dropped = 0
    for seller in sellers:
        current = survivors.get(seller.shop_name)
        if current is None:
            survivors[seller.shop_name] = seller
            continue
        dropped += 1
        if (seller.rating or 0) > (current.rating or 0):
            # dict keeps the original insertion slot on reassignment
            survivors[seller.shop_name] = seller

    if dropped:
        log.debug("dedupe_sellers collapsed %s duplicate records", dropped)
    return list(survivors.values())


__all__ = ["dedupe_sellers"]
