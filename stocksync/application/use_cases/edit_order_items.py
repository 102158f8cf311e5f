"""Edit Order Items Use Case: add products and change requested quantities."""

from stocksync.application.notifications import NotificationKind, saved_message
from stocksync.application.use_cases.base import StockUseCase
from stocksync.config import get_logger
from stocksync.core.entities.order import Order
from stocksync.core.exceptions import (
    OrderItemNotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
)

logger = get_logger(__name__)


class EditOrderItemsUseCase(StockUseCase):
    """
    Change the lines of an existing order.

    Both operations save the order as an update; an order left without
    lines is rejected by the order repository.
    """

    async def add_product(self, order_id: str, product_id: str) -> Order:
        """
        Request one more unit of a catalogue product.

        Raises:
            OrderNotFoundError: Unknown order
            ProductNotFoundError: Product missing from stock
        """
        services = await self._get_services()
        order = await self._get_order(order_id)

        product = await services.products.get(product_id.strip())
        if product is None:
            raise ProductNotFoundError(product_id)

        item = order.add_product(product)
        order = await services.orders.save(order, is_new=False)

        logger.info(
            "order_item_added",
            order_number=order.order_number,
            product_id=product.id,
            qty_requested=item.qty_requested,
        )
        self._notify(
            NotificationKind.SUCCESS,
            saved_message(services.gateway.is_available(), f"Added {product.name}"),
        )
        return order

    async def set_quantity(self, order_id: str, product_id: str, qty: int) -> Order:
        """
        Set the requested quantity of a line; zero or less removes it.

        Raises:
            OrderNotFoundError: Unknown order
            OrderItemNotFoundError: Product is not part of the order
        """
        services = await self._get_services()
        order = await self._get_order(order_id)

        if order.find_item(product_id) is None:
            raise OrderItemNotFoundError(order.order_number, product_id)

        order.set_item_quantity(product_id, qty)
        order = await services.orders.save(order, is_new=False)

        logger.info(
            "order_item_quantity_set",
            order_number=order.order_number,
            product_id=product_id,
            qty=qty,
        )
        self._notify(
            NotificationKind.SUCCESS,
            saved_message(services.gateway.is_available(), "Order saved!"),
        )
        return order

    async def _get_order(self, order_id: str) -> Order:
        services = await self._get_services()
        order = await services.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order
