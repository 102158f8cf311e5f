"""Stock history endpoints."""

from fastapi import APIRouter, Depends, Query, status

from stocksync.api.dependencies import get_clear_history_use_case, get_services
from stocksync.application.dto.responses import (
    ErrorResponse,
    MovementListResponse,
    MovementResponse,
)
from stocksync.application.services import StockServices
from stocksync.application.use_cases import ClearHistoryUseCase

router = APIRouter(prefix="/api/movements", tags=["movements"])


@router.get("", response_model=MovementListResponse)
async def list_movements(
    product_id: str | None = Query(default=None, description="Filter by product code"),
    limit: int = Query(default=200, ge=1, le=5000),
    services: StockServices = Depends(get_services),
) -> MovementListResponse:
    """List cached movements, newest first."""
    movements = await services.movements.list_all()
    if product_id is not None:
        movements = [m for m in movements if m.prod_id == product_id]
    movements = movements[:limit]
    return MovementListResponse(
        movements=[MovementResponse.from_entity(m) for m in movements],
        total=len(movements),
    )


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={502: {"model": ErrorResponse}},
)
async def clear_history(
    use_case: ClearHistoryUseCase = Depends(get_clear_history_use_case),
) -> None:
    """Delete the whole history (remote first when connected)."""
    await use_case.execute()
