"""Sync Use Cases: explicit drain and reconnect."""

from dataclasses import dataclass

from stocksync.application.notifications import NotificationKind
from stocksync.application.use_cases.base import StockUseCase
from stocksync.config import get_logger
from stocksync.core.entities.sync import DrainResult, DrainStatus

logger = get_logger(__name__)


@dataclass
class SyncResult:
    online: bool
    pending: int
    drain: DrainResult | None = None


class SyncUseCase(StockUseCase):
    """Drain the pending queue over the current connection."""

    async def execute(self) -> SyncResult:
        services = await self._get_services()
        drain = await services.engine.drain()
        self._report(drain)
        return SyncResult(
            online=services.gateway.is_available(),
            pending=await services.engine.pending_count(),
            drain=drain,
        )

    def _report(self, drain: DrainResult) -> None:
        if drain.status == DrainStatus.COMPLETED:
            if drain.synced:
                self._notify(NotificationKind.SUCCESS, drain.message)
            if drain.failed:
                self._notify(
                    NotificationKind.ERROR,
                    f"{drain.failed} pending items could not be synced.",
                )
        elif drain.status == DrainStatus.OFFLINE:
            self._notify(NotificationKind.ERROR, "Offline. Pending items stay queued.")


class ReconnectUseCase(SyncUseCase):
    """Re-establish the remote connection, drain once and refresh caches."""

    async def execute(self) -> SyncResult:
        services = await self._get_services()
        result = await services.engine.reconnect()

        if not result.connected:
            self._notify(NotificationKind.ERROR, "Could not connect to the server.")
        else:
            self._notify(NotificationKind.INFO, "Connected.")
            if result.drain is not None:
                self._report(result.drain)

        logger.info("reconnect_complete", connected=result.connected)
        return SyncResult(
            online=result.connected,
            pending=await services.engine.pending_count(),
            drain=result.drain,
        )
