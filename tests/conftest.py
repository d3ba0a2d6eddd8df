"""Test configuration helpers."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from marketplace.models import Product, Seller, ShopType  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register the asyncio marker for the lightweight runner below."""

    config.addinivalue_line("markers", "asyncio: execute the test inside an event loop")


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute ``@pytest.mark.asyncio`` tests without requiring pytest-asyncio."""

    marker = pyfuncitem.get_closest_marker("asyncio")
    if marker is None:
        return None

    func = pyfuncitem.obj
    if not asyncio.iscoroutinefunction(func):
        return None

    argnames = pyfuncitem._fixtureinfo.argnames
    kwargs = {name: pyfuncitem.funcargs[name] for name in argnames}
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(func(**kwargs))
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True


def _build_seller(seller_id: int, **overrides: Any) -> Seller:
    data: dict[str, Any] = {
        "id": seller_id,
        "owner_id": seller_id,
        "shop_name": f"Shop {seller_id}",
        "shop_type": ShopType.INDIVIDUAL,
    }
    data.update(overrides)
    return Seller(**data)


def _build_product(product_id: int, category: str, seller_id: int = 1) -> Product:
    return Product(id=product_id, category=category, seller_id=seller_id)


@pytest.fixture
def seller_factory() -> Callable[..., Seller]:
    """Build a seller; ``owner_id`` and ``shop_name`` derive from the id."""

    return _build_seller


@pytest.fixture
def product_factory() -> Callable[..., Product]:
    return _build_product


@pytest.fixture
def scenario_sellers() -> list[Seller]:
    return [
        _build_seller(1, rating=0),
        _build_seller(2, rating=0),
        _build_seller(3, main_category="ao-thun"),
    ]


@pytest.fixture
def scenario_products() -> list[Product]:
    return [
        _build_product(10, "ao-thun"),
        _build_product(11, "quan-jean"),
        _build_product(12, "ao-thun"),
    ]
