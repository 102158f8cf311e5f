"""Pick Order Item Use Case: one unit from stock into an order."""

from dataclasses import dataclass

from stocksync.application.dto.responses import (
    MovementResponse,
    OrderResponse,
    PickItemResponse,
    ProductResponse,
)
from stocksync.application.notifications import NotificationKind
from stocksync.application.use_cases.base import StockUseCase
from stocksync.config import get_logger
from stocksync.core.entities.movement import Movement
from stocksync.core.entities.order import Order
from stocksync.core.entities.product import Product
from stocksync.core.exceptions import (
    OrderItemNotFoundError,
    OrderNotFoundError,
)

logger = get_logger(__name__)


@dataclass
class PickResult:
    """Result of a pick; picked is False when the line was already complete."""

    order: Order
    picked: bool
    product: Product | None = None
    movement: Movement | None = None


class PickOrderItemUseCase(StockUseCase):
    """Decrement stock by one and count it against an order line."""

    async def execute(self, order_id: str, product_id: str, silent: bool = False) -> PickResult:
        """
        Pick one unit.

        Args:
            order_id: Order being picked
            product_id: Product code of the line
            silent: Skip the success and info notifications (scanner flow)

        Raises:
            OrderNotFoundError: Unknown order
            OrderItemNotFoundError: Product is not part of the order
            ProductNotFoundError: Product missing from stock
            InsufficientStockError: Product has no stock left
        """
        services = await self._get_services()

        order = await services.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        item = order.find_item(product_id)
        if item is None:
            raise OrderItemNotFoundError(order.order_number, product_id)

        if item.is_fully_picked:
            if not silent:
                self._notify(NotificationKind.INFO, "Item already fully picked.")
            return PickResult(order=order, picked=False)

        # 1. Stock -1 (rejects unknown products and empty stock)
        product = await services.products.adjust_quantity(product_id, -1)

        # 2. History
        movement = Movement(
            prod_id=item.product_id,
            prod_name=item.product_name,
            qty=-1,
            obs=f"Order #{order.order_number} picking",
            matricula=order.matricula or None,
        )
        await services.movements.record(movement)

        # 3. Order line
        item.qty_picked += 1
        order = await services.orders.save(order, is_new=False)

        logger.info(
            "order_item_picked",
            order_number=order.order_number,
            product_id=product_id,
            qty_picked=item.qty_picked,
            qty_requested=item.qty_requested,
        )
        if not silent:
            self._notify(NotificationKind.SUCCESS, f"Picked 1x {item.product_name}")

        return PickResult(order=order, picked=True, product=product, movement=movement)

    def to_response(self, result: PickResult) -> PickItemResponse:
        """Convert result to API response."""
        return PickItemResponse(
            order=OrderResponse.from_entity(result.order),
            picked=result.picked,
            product=ProductResponse.from_entity(result.product) if result.product else None,
            movement=MovementResponse.from_entity(result.movement) if result.movement else None,
        )
