"""
Core business logic services.

Layer-pure services that depend only on:
- stocksync/core/entities/*
- stocksync/core/interfaces/*
- stocksync/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stocksync.core.services.base_repository import WriteThroughRepository
from stocksync.core.services.movement_repository import MovementRepository
from stocksync.core.services.order_import import ParsedImport, parse_orders
from stocksync.core.services.order_repository import OrderRepository
from stocksync.core.services.product_repository import ProductRepository
from stocksync.core.services.sync_engine import SyncEngine

__all__ = [
    # Sync
    "SyncEngine",
    # Repositories
    "WriteThroughRepository",
    "ProductRepository",
    "MovementRepository",
    "OrderRepository",
    # Import
    "ParsedImport",
    "parse_orders",
]
