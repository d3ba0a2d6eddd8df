"""HTTP plumbing for the REST store: timeouts, retries and a circuit breaker."""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Iterable, TypeVar

import httpx

from marketplace.config import settings

T = TypeVar("T")

log = logging.getLogger("store.http")


class CircuitBreakerOpenError(RuntimeError):
    """Raised when the breaker rejects a call while open."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Circuit breaker '{name}' is open")
        self.name = name


class RetryableStatusError(httpx.HTTPError):
    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"Retryable response: {response.status_code}")
        self.response = response


class CircuitBreaker:
    """Counts consecutive failures and rejects calls for a growing cool-down."""

    def __init__(self, *, max_failures: int, base_delay: float, max_delay: float, name: str) -> None:
        if max_failures <= 0:
            raise ValueError("max_failures must be positive")
        if base_delay < 0 or max_delay < 0:
            raise ValueError("delay values must be non-negative")
        self.name = name
        self._max_failures = max_failures
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._failures = 0
        self._trips = 0
        self._open_until = 0.0
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, name: str) -> "CircuitBreaker":
        return cls(
            max_failures=settings.HTTP_CIRCUIT_BREAKER_MAX_FAILURES,
            base_delay=settings.HTTP_CIRCUIT_BREAKER_BASE_DELAY,
            max_delay=settings.HTTP_CIRCUIT_BREAKER_MAX_DELAY,
            name=name,
        )

    @property
    def is_open(self) -> bool:
        return self._open_until > time.monotonic()

    async def call(self, func: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            if self.is_open:
                raise CircuitBreakerOpenError(self.name)
        try:
            result = await func()
        except Exception:
            await self._record_failure()
            raise
        async with self._lock:
            self._failures = 0
            self._trips = 0
        return result

    async def _record_failure(self) -> None:
        async with self._lock:
            self._failures += 1
            if self._failures < self._max_failures:
                return
            self._trips += 1
            delay = self._base_delay * (2 ** (self._trips - 1))
            if self._max_delay:
                delay = min(delay, self._max_delay)
            self._open_until = time.monotonic() + delay
            self._failures = 0
            log.warning("circuit %s opened for %.1fs", self.name, delay)


@asynccontextmanager
async def store_http_client(
    base_url: str | None = None,
    *,
    headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Create an AsyncClient bound to the store with configured timeouts."""

    timeout = httpx.Timeout(
        timeout=settings.HTTP_TIMEOUT_TOTAL,
        connect=settings.HTTP_TIMEOUT_CONNECT,
        read=settings.HTTP_TIMEOUT_READ,
        write=settings.HTTP_TIMEOUT_WRITE,
    )
    options: dict[str, Any] = {
        "base_url": base_url or settings.STORE_BASE_URL,
        "timeout": timeout,
        "headers": headers or {},
    }
    if transport is not None:
        options["transport"] = transport

    async with httpx.AsyncClient(**options) as client:
        yield client


async def request_with_retries(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    breaker: CircuitBreaker,
    retries: int | None = None,
    backoff: float | None = None,
    backoff_max: float | None = None,
    retry_statuses: Iterable[int] | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request, retrying timeouts, network errors and 5xx responses."""

    attempts = max(1, (settings.HTTP_RETRY_ATTEMPTS if retries is None else retries) + 1)
    delay = max(0.0, settings.HTTP_RETRY_BACKOFF_INITIAL if backoff is None else backoff)
    ceiling = settings.HTTP_RETRY_BACKOFF_MAX if backoff_max is None else backoff_max
    statuses = set(settings.HTTP_RETRY_STATUS_CODES if retry_statuses is None else retry_statuses)

    async def _attempt() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in statuses:
            raise RetryableStatusError(response)
        return response

    for attempt in range(1, attempts + 1):
        try:
            return await breaker.call(_attempt)
        except (RetryableStatusError, httpx.TimeoutException, httpx.NetworkError) as exc:
            if attempt >= attempts:
                raise
            log.info("%s %s failed (%s), retry %s/%s", method, url, exc, attempt, attempts - 1)
        if delay > 0:
            await asyncio.sleep(delay)
            delay = min(delay * 2, ceiling) if ceiling > 0 else delay * 2

    raise AssertionError("unreachable")  # pragma: no cover


__all__ = [
    "CircuitBreaker",
    "CircuitBreakerOpenError",
    "RetryableStatusError",
    "request_with_retries",
    "store_http_client",
]
