"""Shared wiring for stock use cases."""

from stocksync.application.notifications import (
    Notification,
    NotificationKind,
    Notifier,
    log_notifier,
)
from stocksync.application.services import StockServices


class StockUseCase:
    """Lazily resolves the shared services bundle; reports through a notifier."""

    def __init__(
        self,
        services: StockServices | None = None,
        notifier: Notifier | None = None,
    ):
        self._services = services
        self._notifier = notifier or log_notifier

    async def _get_services(self) -> StockServices:
        if self._services is None:
            from stocksync.application.services import get_stock_services

            self._services = await get_stock_services()
        return self._services

    def _notify(self, kind: NotificationKind, message: str) -> None:
        self._notifier(Notification(kind=kind, message=message))
