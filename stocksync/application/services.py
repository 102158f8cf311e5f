"""
Service factory functions for dependency injection.

This module wires infrastructure implementations (local store, remote
gateway) to core services (sync engine, repositories). Use cases import
from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stocksync.config import get_settings
from stocksync.core.services import (
    MovementRepository,
    OrderRepository,
    ProductRepository,
    SyncEngine,
)

if TYPE_CHECKING:
    from stocksync.config.settings import Settings
    from stocksync.core.interfaces import ILocalStore, IRemoteGateway


@dataclass
class StockServices:
    """One gateway, one engine and the repositories that share them."""

    engine: SyncEngine
    products: ProductRepository
    movements: MovementRepository
    orders: OrderRepository

    @property
    def gateway(self) -> "IRemoteGateway":
        return self.engine.gateway


# Singleton service bundle
_stock_services: StockServices | None = None


def build_stock_services(
    local_store: "ILocalStore",
    gateway: "IRemoteGateway",
    settings: "Settings | None" = None,
) -> StockServices:
    """
    Wire an engine and its repositories around explicit collaborators.

    Args:
        local_store: Offline cache
        gateway: Remote backend gateway
        settings: Optional settings override

    Returns:
        Configured StockServices
    """
    settings = settings or get_settings()

    engine = SyncEngine(
        local_store=local_store,
        gateway=gateway,
        drain_on_reconnect=settings.sync.drain_on_reconnect,
        refresh_after_drain=settings.sync.refresh_after_drain,
    )
    return StockServices(
        engine=engine,
        products=ProductRepository(local_store, gateway, engine),
        movements=MovementRepository(
            local_store,
            gateway,
            engine,
            fetch_limit=settings.sync.movement_fetch_limit,
        ),
        orders=OrderRepository(local_store, gateway, engine),
    )


async def get_stock_services(
    local_store: "ILocalStore | None" = None,
    gateway: "IRemoteGateway | None" = None,
) -> StockServices:
    """
    Get or create the shared StockServices bundle.

    Creates infrastructure dependencies if not provided. Overrides are
    never cached.
    """
    global _stock_services

    if _stock_services is not None and local_store is None and gateway is None:
        return _stock_services

    # Lazy import infrastructure to avoid circular imports
    from stocksync.infrastructure.remote import get_remote_gateway
    from stocksync.infrastructure.storage.sqlite import get_local_store

    store = local_store or await get_local_store()
    remote = gateway or get_remote_gateway()
    services = build_stock_services(store, remote)

    if local_store is None and gateway is None:
        _stock_services = services

    return services


def reset_stock_services() -> None:
    """Drop the cached bundle (testing, shutdown)."""
    global _stock_services
    _stock_services = None
