"""Delete Order Use Case."""

from stocksync.application.notifications import NotificationKind, saved_message
from stocksync.application.use_cases.base import StockUseCase


class DeleteOrderUseCase(StockUseCase):
    """Remove an order; queued for the remote store when offline."""

    async def execute(self, order_id: str) -> None:
        services = await self._get_services()
        await services.orders.delete(order_id)
        self._notify(
            NotificationKind.SUCCESS,
            saved_message(services.gateway.is_available(), "Order deleted."),
        )
