"""Save Order Use Case."""

from dataclasses import dataclass

from stocksync.application.dto.requests import SaveOrderRequest
from stocksync.application.notifications import NotificationKind, saved_message
from stocksync.application.use_cases.base import StockUseCase
from stocksync.core.entities.order import Order, OrderItem


@dataclass
class SaveOrderResult:
    order: Order
    is_new: bool


class SaveOrderUseCase(StockUseCase):
    """Create or edit an order; new vs existing is decided by the cache."""

    async def execute(self, request: SaveOrderRequest) -> SaveOrderResult:
        services = await self._get_services()

        order = Order(
            order_number=request.order_number.strip(),
            customer_name=request.customer_name.strip(),
            filial=request.filial,
            matricula=request.matricula,
            items=[OrderItem(**item.model_dump()) for item in request.items],
            obs=request.obs,
            envio_malote=request.envio_malote,
            entrega_matriz=request.entrega_matriz,
        )
        if request.id:
            order.id = request.id
        existing = await services.orders.get(order.id)
        is_new = existing is None
        if request.date:
            order.date = request.date
        elif existing is not None:
            order.date = existing.date
        order = await services.orders.save(order, is_new=is_new)

        self._notify(
            NotificationKind.SUCCESS,
            saved_message(services.gateway.is_available(), "Order saved!"),
        )
        return SaveOrderResult(order=order, is_new=is_new)
