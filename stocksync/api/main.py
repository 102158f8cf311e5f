"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stocksync import __version__
from stocksync.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stocksync.api.middleware.error_handler import setup_exception_handlers
from stocksync.api.routes import (
    health_router,
    movements_router,
    orders_router,
    products_router,
    scan_router,
    stock_router,
    sync_router,
)
from stocksync.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Opens the local cache, optionally connects to the remote backend and
    drains whatever was queued in a previous run. Startup never fails
    because the remote is unreachable: the app simply starts offline.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        environment=settings.environment,
    )

    try:
        from stocksync.infrastructure.storage.sqlite import get_pool

        await get_pool()
        logger.info("local_cache_ready", db_path=str(settings.storage.db_path))

    except Exception as e:
        logger.error("local_cache_init_failed", error=str(e))
        raise

    if settings.remote.connect_on_startup:
        from stocksync.application.services import get_stock_services

        services = await get_stock_services()
        result = await services.engine.reconnect()
        logger.info(
            "remote_startup_connect",
            connected=result.connected,
            synced=result.drain.synced if result.drain else 0,
        )

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        from stocksync.infrastructure.remote import close_remote_gateway

        await close_remote_gateway()
    except Exception as e:
        logger.warning("remote_close_failed", error=str(e))

    try:
        from stocksync.application.services import reset_stock_services
        from stocksync.infrastructure.storage.sqlite import close_pool, reset_local_store

        reset_stock_services()
        reset_local_store()
        await close_pool()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="StockSync API",
        description="Offline-first inventory and order picking",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(movements_router)
    app.include_router(orders_router)
    app.include_router(stock_router)
    app.include_router(scan_router)
    app.include_router(sync_router)

    return app


# Create app instance
app = create_app()


@app.get("/")
async def root() -> dict[str, str]:
    """API info."""
    return {"name": "StockSync API", "version": __version__, "health": "/api/health"}
