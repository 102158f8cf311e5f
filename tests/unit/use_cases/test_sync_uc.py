"""Tests for SyncUseCase, ReconnectUseCase and ClearHistoryUseCase."""

from unittest.mock import AsyncMock

import pytest
from fakes import FakeGateway

from stocksync.application.notifications import NotificationCollector, NotificationKind
from stocksync.application.services import StockServices
from stocksync.application.use_cases import ClearHistoryUseCase, ReconnectUseCase, SyncUseCase
from stocksync.core.entities import Collection, DrainStatus, Movement, Product, ReconnectResult
from stocksync.core.exceptions import RemoteError, RemoteErrorReason
from stocksync.core.services import SyncEngine


@pytest.fixture
def notifier() -> NotificationCollector:
    return NotificationCollector()


async def _queue_products(services: StockServices, *codes: str) -> None:
    for code in codes:
        await services.products.save(Product(id=code, name=f"Item {code}", qty=1), is_new=True)


class TestSyncUseCase:
    async def test_offline(self, offline_services: StockServices, notifier: NotificationCollector):
        await _queue_products(offline_services, "A1")

        result = await SyncUseCase(services=offline_services, notifier=notifier).execute()

        assert result.online is False
        assert result.pending == 1
        assert result.drain.status == DrainStatus.OFFLINE
        assert notifier.notifications[0].kind == NotificationKind.ERROR

    async def test_drain_reports_synced_and_failed(
        self,
        offline_services: StockServices,
        offline_gateway: FakeGateway,
        notifier: NotificationCollector,
    ):
        await _queue_products(offline_services, "A1", "B2")
        offline_gateway.available = True
        offline_gateway.fail_identities["B2"] = RemoteError(RemoteErrorReason.REQUEST_FAILED, "no")

        result = await SyncUseCase(services=offline_services, notifier=notifier).execute()

        assert result.drain.synced == 1
        assert result.drain.failed == 1
        assert result.pending == 1
        assert [(n.kind, n.message) for n in notifier.notifications] == [
            (NotificationKind.SUCCESS, "Synced 1 pending items."),
            (NotificationKind.ERROR, "1 pending items could not be synced."),
        ]

    async def test_empty_queue_is_quiet(self, services: StockServices, notifier: NotificationCollector):
        result = await SyncUseCase(services=services, notifier=notifier).execute()

        assert result.drain.status == DrainStatus.EMPTY
        assert notifier.notifications == []


class TestReconnectUseCase:
    async def test_unreachable(self, offline_services: StockServices, offline_gateway: FakeGateway, notifier):
        offline_gateway.reachable = False

        result = await ReconnectUseCase(services=offline_services, notifier=notifier).execute()

        assert result.online is False
        assert result.drain is None
        assert notifier.notifications[0].message == "Could not connect to the server."

    async def test_reconnect_drains_queue(
        self,
        offline_services: StockServices,
        offline_gateway: FakeGateway,
        notifier: NotificationCollector,
    ):
        await _queue_products(offline_services, "A1")

        result = await ReconnectUseCase(services=offline_services, notifier=notifier).execute()

        assert result.online is True
        assert result.pending == 0
        assert "A1" in offline_gateway.tables[Collection.PRODUCTS]
        assert [n.message for n in notifier.notifications] == [
            "Connected.",
            "Synced 1 pending items.",
        ]
        assert [p.id for p in await offline_services.products.list_all()] == ["A1"]

    async def test_reconnect_without_drain(self, notifier: NotificationCollector):
        engine = AsyncMock(spec=SyncEngine)
        engine.reconnect.return_value = ReconnectResult(connected=True, drain=None)
        engine.pending_count.return_value = 3
        services = StockServices(
            engine=engine, products=AsyncMock(), movements=AsyncMock(), orders=AsyncMock()
        )

        result = await ReconnectUseCase(services=services, notifier=notifier).execute()

        assert result.online is True
        assert result.pending == 3
        assert [n.message for n in notifier.notifications] == ["Connected."]


class TestClearHistoryUseCase:
    async def test_clear(self, services: StockServices, notifier: NotificationCollector):
        await services.movements.record(Movement(prod_id="A1", prod_name="Cable", qty=1))

        await ClearHistoryUseCase(services=services, notifier=notifier).execute()

        assert await services.movements.list_all() == []
        assert notifier.notifications[0].message == "History cleared."
