"""Clear History Use Case."""

from stocksync.application.notifications import NotificationKind
from stocksync.application.use_cases.base import StockUseCase


class ClearHistoryUseCase(StockUseCase):
    """Delete every movement, remotely first when connected."""

    async def execute(self) -> None:
        services = await self._get_services()
        await services.movements.clear_history()
        self._notify(NotificationKind.SUCCESS, "History cleared.")
