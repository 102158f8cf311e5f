"""Scanner input endpoint."""

from fastapi import APIRouter, Depends

from stocksync.api.dependencies import get_handle_scan_use_case, get_notifier
from stocksync.application.dto.requests import ScanRequest
from stocksync.application.dto.responses import ErrorResponse, ScanResponse
from stocksync.application.notifications import NotificationCollector
from stocksync.application.use_cases import HandleScanUseCase

router = APIRouter(prefix="/api/scan", tags=["scan"])


@router.post(
    "",
    response_model=ScanResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def scan(
    request: ScanRequest,
    use_case: HandleScanUseCase = Depends(get_handle_scan_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> ScanResponse:
    """Route a scanned code: catalogue lookup, or a pick when order_id is set."""
    result = await use_case.execute(request.code, order_id=request.order_id)
    response = use_case.to_response(result)
    response.notifications = notifier.notifications
    return response
