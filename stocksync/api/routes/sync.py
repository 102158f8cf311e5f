"""Offline queue and connectivity endpoints."""

from fastapi import APIRouter, Depends

from stocksync.api.dependencies import (
    get_notifier,
    get_reconnect_use_case,
    get_services,
    get_sync_use_case,
)
from stocksync.application.dto.responses import (
    DrainResponse,
    PendingMutationResponse,
    SyncResponse,
    SyncStatusResponse,
)
from stocksync.application.notifications import NotificationCollector
from stocksync.application.services import StockServices
from stocksync.application.use_cases import ReconnectUseCase, SyncResult, SyncUseCase

router = APIRouter(prefix="/api/sync", tags=["sync"])


def _to_response(result: SyncResult, notifier: NotificationCollector) -> SyncResponse:
    return SyncResponse(
        online=result.online,
        pending=result.pending,
        drain=DrainResponse.from_result(result.drain) if result.drain else None,
        notifications=notifier.notifications,
    )


@router.get("", response_model=SyncStatusResponse)
async def sync_status(
    services: StockServices = Depends(get_services),
) -> SyncStatusResponse:
    """Connectivity and pending queue."""
    pending = await services.engine.pending()
    return SyncStatusResponse(
        online=services.gateway.is_available(),
        draining=services.engine.is_draining,
        pending=len(pending),
        items=[PendingMutationResponse.from_entity(m) for m in pending],
    )


@router.post("/drain", response_model=SyncResponse)
async def drain(
    use_case: SyncUseCase = Depends(get_sync_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SyncResponse:
    """Replay the pending queue over the current connection."""
    return _to_response(await use_case.execute(), notifier)


@router.post("/reconnect", response_model=SyncResponse)
async def reconnect(
    use_case: ReconnectUseCase = Depends(get_reconnect_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SyncResponse:
    """Reconnect, drain once and refresh every cache."""
    return _to_response(await use_case.execute(), notifier)
