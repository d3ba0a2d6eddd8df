"""Store backed by the marketplace REST API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, TypeVar

import httpx

from marketplace.config import settings
from marketplace.models import Product, Seller
from marketplace.store.base import ProductFilter, StoreError, UpdateResult
from marketplace.store.http import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    request_with_retries,
    store_http_client,
)

log = logging.getLogger("store")

R = TypeVar("R")

SELLERS_PATH = "/api/sellers"
PRODUCTS_PATH = "/api/products"
ADMIN_PRODUCT_PATH = "/api/admin/products/{product_id}"
LOGIN_PATH = "/api/login"


def _parse_items(payload: Any, parser: Callable[[dict[str, Any]], R], kind: str) -> list[R]:
    # Allocation reserves sellers by position: a dropped record would shift it.
    if not isinstance(payload, list):
        raise StoreError(f"{kind} endpoint must return a JSON array")
    items: list[R] = []
    for position, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise StoreError(f"{kind} record #{position} is not an object")
        try:
            items.append(parser(raw))
        except ValueError as exc:
            raise StoreError(f"malformed {kind} record #{position}: {exc}") from exc
    return items


class RestStore:
    """Seller and product store talking to ``/api/*`` endpoints.

    Admin writes need a session: :meth:`connect` logs in with
    ``STORE_ADMIN_USERNAME``/``STORE_ADMIN_PASSWORD`` and the client cookie
    jar carries the session cookie. A bearer token is sent as well when
    ``STORE_ADMIN_TOKEN`` is set.
    """

    def __init__(self, client: httpx.AsyncClient, *, breaker: CircuitBreaker | None = None) -> None:
        self._client = client
        self._breaker = breaker or CircuitBreaker.from_settings("store")

    @classmethod
    @asynccontextmanager
    async def connect(
        cls,
        base_url: str | None = None,
        *,
        username: str | None = None,
        password: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AsyncIterator["RestStore"]:
        username = username or settings.STORE_ADMIN_USERNAME
        password = password or settings.STORE_ADMIN_PASSWORD
        token = token or settings.STORE_ADMIN_TOKEN
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        async with store_http_client(base_url, headers=headers, transport=transport) as client:
            store = cls(client)
            if username and password:
                await store.login(username, password)
            yield store

    async def login(self, username: str, password: str) -> None:
        """Open an admin session; raises :class:`StoreError` when rejected."""

        try:
            response = await request_with_retries(
                self._client,
                "POST",
                LOGIN_PATH,
                breaker=self._breaker,
                json={"username": username, "password": password},
            )
        except (httpx.HTTPError, CircuitBreakerOpenError) as exc:
            raise StoreError(f"POST {LOGIN_PATH} failed: {exc}") from exc
        if response.status_code >= 400:
            raise StoreError(f"login rejected for {username}: HTTP {response.status_code}")
        log.info("admin session opened for %s", username)

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await request_with_retries(self._client, "GET", path, breaker=self._breaker, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, CircuitBreakerOpenError, ValueError) as exc:
            raise StoreError(f"GET {path} failed: {exc}") from exc

    async def list_sellers(self) -> list[Seller]:
        payload = await self._get_json(SELLERS_PATH)
        sellers = _parse_items(payload, Seller.from_mapping, "seller")
        log.debug("fetched %s sellers", len(sellers))
        return sellers

    async def list_products(self, filters: ProductFilter | None = None) -> list[Product]:
        params = filters.to_params() if filters else None
        payload = await self._get_json(PRODUCTS_PATH, params or None)
        products = _parse_items(payload, Product.from_mapping, "product")
        log.debug("fetched %s products params=%s", len(products), params)
        return products

    async def update_seller_id(self, product_id: int, seller_id: int) -> UpdateResult:
        path = ADMIN_PRODUCT_PATH.format(product_id=product_id)
        try:
            response = await request_with_retries(
                self._client,
                "PUT",
                path,
                breaker=self._breaker,
                json={"sellerId": seller_id},
            )
        except (httpx.HTTPError, CircuitBreakerOpenError) as exc:
            log.warning("update product=%s seller=%s failed: %s", product_id, seller_id, exc)
            return UpdateResult(product_id, ok=False, error=str(exc))
        if response.status_code >= 400:
            log.warning("update product=%s rejected: HTTP %s", product_id, response.status_code)
            return UpdateResult(product_id, ok=False, error=f"HTTP {response.status_code}")
        return UpdateResult(product_id, ok=True)


__all__ = ["RestStore"]
