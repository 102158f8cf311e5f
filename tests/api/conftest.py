"""Fixtures for API tests: the app over in-memory services."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from stocksync.api.dependencies import get_services
from stocksync.api.main import app
from stocksync.application.services import StockServices


@pytest.fixture
async def client(services: StockServices) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_services] = lambda: services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_services, None)


@pytest.fixture
async def offline_client(offline_services: StockServices) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_services] = lambda: offline_services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_services, None)
