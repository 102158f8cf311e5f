"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fakes import FakeGateway, MemoryLocalStore

from stocksync.application.services import StockServices, build_stock_services, reset_stock_services
from stocksync.config import reset_settings
from stocksync.core.entities import Order, OrderItem, Product
from stocksync.infrastructure.storage.sqlite import ConnectionPool, SQLiteLocalStore, reset_local_store


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point storage at a temp dir and leave the remote unconfigured."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("REMOTE_URL", "")
    monkeypatch.setenv("REMOTE_API_KEY", "")
    reset_settings()
    reset_stock_services()
    reset_local_store()
    yield
    reset_settings()
    reset_stock_services()
    reset_local_store()


@pytest.fixture
def local_store() -> MemoryLocalStore:
    return MemoryLocalStore()


@pytest.fixture
def gateway() -> FakeGateway:
    """Connected fake remote."""
    return FakeGateway(available=True)


@pytest.fixture
def offline_gateway() -> FakeGateway:
    """Disconnected fake remote that can be reconnected."""
    return FakeGateway(available=False, reachable=True)


@pytest.fixture
def services(local_store: MemoryLocalStore, gateway: FakeGateway) -> StockServices:
    return build_stock_services(local_store, gateway)


@pytest.fixture
def offline_services(local_store: MemoryLocalStore, offline_gateway: FakeGateway) -> StockServices:
    return build_stock_services(local_store, offline_gateway)


@pytest.fixture
async def sqlite_pool(tmp_path: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Initialized pool over a temporary database."""
    pool = ConnectionPool(tmp_path / "cache.db", pool_size=1)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def sqlite_store(sqlite_pool: ConnectionPool) -> SQLiteLocalStore:
    return SQLiteLocalStore(sqlite_pool)


@pytest.fixture
def product_a1() -> Product:
    return Product(id="A1", name="Cable 3x2.5mm", qty=10)


@pytest.fixture
def sample_order() -> Order:
    return Order(
        order_number="101",
        customer_name="ACME",
        filial="01",
        matricula="007",
        items=[OrderItem(product_id="A1", product_name="Cable 3x2.5mm", qty_requested=2)],
    )
