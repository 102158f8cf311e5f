"""Stock Transaction Use Case: inbound or outbound stock with history."""

from dataclasses import dataclass

from stocksync.application.dto.requests import (
    StockTransactionRequest,
    TransactionDirection,
)
from stocksync.application.dto.responses import (
    MovementResponse,
    ProductResponse,
    StockTransactionResponse,
)
from stocksync.application.notifications import NotificationKind, saved_message
from stocksync.application.use_cases.base import StockUseCase
from stocksync.config import get_logger
from stocksync.core.entities.movement import Movement
from stocksync.core.entities.product import Product
from stocksync.core.exceptions import ValidationError

logger = get_logger(__name__)


@dataclass
class StockTransactionResult:
    """Result of a stock transaction."""

    product: Product
    movement: Movement
    online: bool


class StockTransactionUseCase(StockUseCase):
    """Apply a signed stock change and record it in the history."""

    async def execute(self, request: StockTransactionRequest) -> StockTransactionResult:
        """
        Execute the transaction.

        The product update and the movement are two separate writes. If the
        movement fails after the product was saved, stock reflects the change
        and history does not; the failure is logged and re-raised.

        Raises:
            ValidationError: Missing operator or non-positive quantity
            ProductNotFoundError: Unknown product
            InsufficientStockError: Outbound quantity exceeds stock
        """
        if not request.matricula.strip():
            raise ValidationError("matricula", "Operator id is required")
        if "]" in request.matricula:
            raise ValidationError("matricula", "Operator id cannot contain ']'", request.matricula)
        if request.quantity <= 0:
            raise ValidationError("quantity", "Quantity must be positive", request.quantity)

        delta = request.quantity if request.direction == TransactionDirection.IN else -request.quantity

        logger.info(
            "stock_transaction_started",
            product_id=request.product_id,
            delta=delta,
            matricula=request.matricula,
        )

        services = await self._get_services()

        # 1. Update stock (rejects shortfalls before any write)
        product = await services.products.adjust_quantity(request.product_id, delta)

        # 2. Record the movement
        movement = Movement(
            prod_id=product.id,
            prod_name=product.name,
            qty=delta,
            obs=request.obs,
            matricula=request.matricula.strip(),
        )
        try:
            await services.movements.record(movement)
        except Exception as e:
            logger.error(
                "stock_movement_not_recorded",
                product_id=product.id,
                delta=delta,
                error=str(e),
            )
            raise

        online = services.gateway.is_available()
        self._notify(NotificationKind.SUCCESS, saved_message(online, "Stock updated!"))

        logger.info(
            "stock_transaction_complete",
            product_id=product.id,
            qty=product.qty,
            online=online,
        )
        return StockTransactionResult(product=product, movement=movement, online=online)

    def to_response(self, result: StockTransactionResult) -> StockTransactionResponse:
        """Convert result to API response."""
        return StockTransactionResponse(
            product=ProductResponse.from_entity(result.product),
            movement=MovementResponse.from_entity(result.movement),
        )
