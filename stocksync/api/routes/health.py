"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stocksync import __version__
from stocksync.api.dependencies import get_services
from stocksync.application.dto.responses import ComponentHealthResponse, HealthResponse
from stocksync.application.services import StockServices

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    services: StockServices = Depends(get_services),
) -> HealthResponse:
    """
    Basic health check.

    Offline is a supported mode, so a disconnected remote reports
    "degraded" rather than unhealthy.
    """
    online = services.gateway.is_available()
    return HealthResponse(
        status="healthy" if online else "degraded",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        remote=ComponentHealthResponse(name="remote", available=online),
        pending=await services.engine.pending_count(),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Local cache health check.

    Tests SQLite connectivity and response time.
    """
    from stocksync.infrastructure.storage.sqlite import get_pool

    db_status = ComponentHealthResponse(
        name="sqlite",
        available=False,
    )

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        latency = (time.time() - start) * 1000

        db_status = ComponentHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=latency,
        )

    except Exception as e:
        db_status = ComponentHealthResponse(
            name="sqlite",
            available=False,
            error=str(e),
        )

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
