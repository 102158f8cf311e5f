"""Core domain entities."""

from stocksync.core.entities.movement import Movement, next_movement_id
from stocksync.core.entities.order import (
    Order,
    OrderItem,
    OrderStatus,
    ShippingMethod,
)
from stocksync.core.entities.product import Product
from stocksync.core.entities.sync import (
    Collection,
    DrainResult,
    DrainStatus,
    EntityKind,
    PendingMutation,
    ReconnectResult,
    RemoteCommand,
)

__all__ = [
    # Product
    "Product",
    # Movement
    "Movement",
    "next_movement_id",
    # Order
    "Order",
    "OrderItem",
    "OrderStatus",
    "ShippingMethod",
    # Sync
    "Collection",
    "EntityKind",
    "RemoteCommand",
    "PendingMutation",
    "DrainStatus",
    "DrainResult",
    "ReconnectResult",
]
