"""Handle Scan Use Case: route a decoded code to the right flow."""

from dataclasses import dataclass
from enum import Enum

from stocksync.application.dto.responses import OrderResponse, ProductResponse, ScanResponse
from stocksync.application.notifications import NotificationKind
from stocksync.application.use_cases.base import StockUseCase
from stocksync.application.use_cases.pick_order_item import PickOrderItemUseCase
from stocksync.config import get_logger
from stocksync.core.entities.order import Order
from stocksync.core.entities.product import Product
from stocksync.core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    OrderNotFoundError,
)

logger = get_logger(__name__)


class ScanAction(str, Enum):
    """What the display layer should do next."""

    TRANSACTION = "transaction"  # known product: open a stock transaction
    REGISTER = "register"  # unknown code: open a new product form
    PICKED = "picked"
    ALREADY_PICKED = "already_picked"
    REJECTED = "rejected"


@dataclass
class ScanResult:
    action: ScanAction
    code: str
    product: Product | None = None
    order: Order | None = None


class HandleScanUseCase(StockUseCase):
    """
    Global mode looks the code up in the catalogue; order mode picks one
    unit of the matching order line without confirmation.
    """

    async def execute(self, code: str, order_id: str | None = None) -> ScanResult:
        code = code.strip()
        logger.info("scan_received", code=code, order_id=order_id)

        if order_id is None:
            return await self._global_scan(code)
        return await self._order_scan(code, order_id)

    async def _global_scan(self, code: str) -> ScanResult:
        services = await self._get_services()
        product = await services.products.get(code)
        if product is None:
            self._notify(NotificationKind.INFO, f"Product {code} not found. Register it?")
            return ScanResult(action=ScanAction.REGISTER, code=code)
        return ScanResult(action=ScanAction.TRANSACTION, code=code, product=product)

    async def _order_scan(self, code: str, order_id: str) -> ScanResult:
        services = await self._get_services()
        order = await services.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if order.find_item(code) is None:
            self._notify(NotificationKind.ERROR, "This product does not belong to this order.")
            return ScanResult(action=ScanAction.REJECTED, code=code, order=order)

        picker = PickOrderItemUseCase(services=services, notifier=self._notifier)
        try:
            result = await picker.execute(order_id, code, silent=True)
        except (NotFoundError, InsufficientStockError) as e:
            self._notify(NotificationKind.ERROR, e.message)
            return ScanResult(action=ScanAction.REJECTED, code=code, order=order)

        action = ScanAction.PICKED if result.picked else ScanAction.ALREADY_PICKED
        return ScanResult(
            action=action,
            code=code,
            product=result.product,
            order=result.order,
        )

    def to_response(self, result: ScanResult) -> ScanResponse:
        """Convert result to API response."""
        return ScanResponse(
            action=result.action.value,
            code=result.code,
            product=ProductResponse.from_entity(result.product) if result.product else None,
            order=OrderResponse.from_entity(result.order) if result.order else None,
        )
