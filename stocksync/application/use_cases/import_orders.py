"""Import Orders Use Case: bulk order creation from delimited text."""

from dataclasses import dataclass, field

from stocksync.application.dto.responses import ImportOrdersResponse, OrderResponse
from stocksync.application.notifications import NotificationKind
from stocksync.application.use_cases.base import StockUseCase
from stocksync.config import get_logger
from stocksync.core.entities.order import Order
from stocksync.core.services.order_import import parse_orders

logger = get_logger(__name__)


@dataclass
class ImportOrdersResult:
    orders: list[Order] = field(default_factory=list)
    items_imported: int = 0
    rows_skipped: int = 0


class ImportOrdersUseCase(StockUseCase):
    """Parse import text against the product cache and save every order as new."""

    async def execute(self, content: str) -> ImportOrdersResult:
        services = await self._get_services()

        products = await services.products.list_all()
        parsed = parse_orders(content, products)

        saved: list[Order] = []
        for order in parsed.orders:
            saved.append(await services.orders.save(order, is_new=True))

        logger.info(
            "orders_imported",
            orders=len(saved),
            items=parsed.item_count,
            skipped=parsed.rows_skipped,
        )
        if saved:
            self._notify(NotificationKind.SUCCESS, f"{len(saved)} orders imported!")
        else:
            self._notify(NotificationKind.INFO, "No orders found in the file.")

        return ImportOrdersResult(
            orders=saved,
            items_imported=parsed.item_count,
            rows_skipped=parsed.rows_skipped,
        )

    def to_response(self, result: ImportOrdersResult) -> ImportOrdersResponse:
        """Convert result to API response."""
        return ImportOrdersResponse(
            orders=[OrderResponse.from_entity(o) for o in result.orders],
            orders_created=len(result.orders),
            items_imported=result.items_imported,
            rows_skipped=result.rows_skipped,
        )
