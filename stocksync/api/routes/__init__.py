"""API route modules."""

from stocksync.api.routes.health import router as health_router
from stocksync.api.routes.movements import router as movements_router
from stocksync.api.routes.orders import router as orders_router
from stocksync.api.routes.products import router as products_router
from stocksync.api.routes.scan import router as scan_router
from stocksync.api.routes.stock import router as stock_router
from stocksync.api.routes.sync import router as sync_router

__all__ = [
    "health_router",
    "products_router",
    "movements_router",
    "orders_router",
    "stock_router",
    "scan_router",
    "sync_router",
]
