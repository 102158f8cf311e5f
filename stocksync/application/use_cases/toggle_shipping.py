"""Toggle Shipping Use Case."""

from stocksync.application.notifications import NotificationKind, saved_message
from stocksync.application.use_cases.base import StockUseCase
from stocksync.config import get_logger
from stocksync.core.entities.movement import Movement
from stocksync.core.entities.order import Order, OrderStatus, ShippingMethod
from stocksync.core.exceptions import OrderNotFoundError

logger = get_logger(__name__)


class ToggleShippingUseCase(StockUseCase):
    """
    Flip a shipping flag and save the order.

    The transition into completed is logged in the stock history as a
    zero-quantity system event.
    """

    async def execute(self, order_id: str, method: ShippingMethod) -> Order:
        services = await self._get_services()

        order = await services.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        was_completed = order.status == OrderStatus.COMPLETED
        order.toggle_shipping(method)
        order = await services.orders.save(order, is_new=False)

        if order.status == OrderStatus.COMPLETED and not was_completed:
            await services.movements.record(
                Movement(
                    prod_id=None,
                    prod_name=f"Order #{order.order_number} shipment",
                    qty=0,
                    obs=f"Order completed. Via: {order.shipping_label}. Branch: {order.filial}",
                    matricula=order.matricula or None,
                )
            )
            logger.info(
                "order_completed",
                order_number=order.order_number,
                shipping=order.shipping_label,
            )

        self._notify(
            NotificationKind.SUCCESS,
            saved_message(services.gateway.is_available(), "Shipping updated!"),
        )
        return order
