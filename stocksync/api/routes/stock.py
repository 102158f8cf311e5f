"""Stock transaction endpoint."""

from fastapi import APIRouter, Depends, status

from stocksync.api.dependencies import get_notifier, get_stock_transaction_use_case
from stocksync.application.dto.requests import StockTransactionRequest
from stocksync.application.dto.responses import ErrorResponse, StockTransactionResponse
from stocksync.application.notifications import NotificationCollector
from stocksync.application.use_cases import StockTransactionUseCase

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.post(
    "/transactions",
    response_model=StockTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def create_transaction(
    request: StockTransactionRequest,
    use_case: StockTransactionUseCase = Depends(get_stock_transaction_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> StockTransactionResponse:
    """Receive (in) or issue (out) stock and record the movement."""
    result = await use_case.execute(request)
    response = use_case.to_response(result)
    response.notifications = notifier.notifications
    return response
