"""Application use cases."""

from stocksync.application.use_cases.clear_history import ClearHistoryUseCase
from stocksync.application.use_cases.delete_order import DeleteOrderUseCase
from stocksync.application.use_cases.edit_order_items import EditOrderItemsUseCase
from stocksync.application.use_cases.handle_scan import (
    HandleScanUseCase,
    ScanAction,
    ScanResult,
)
from stocksync.application.use_cases.import_orders import (
    ImportOrdersResult,
    ImportOrdersUseCase,
)
from stocksync.application.use_cases.pick_order_item import PickOrderItemUseCase, PickResult
from stocksync.application.use_cases.save_order import SaveOrderResult, SaveOrderUseCase
from stocksync.application.use_cases.save_product import SaveProductUseCase
from stocksync.application.use_cases.stock_transaction import (
    StockTransactionResult,
    StockTransactionUseCase,
)
from stocksync.application.use_cases.sync import ReconnectUseCase, SyncResult, SyncUseCase
from stocksync.application.use_cases.toggle_shipping import ToggleShippingUseCase

__all__ = [
    "StockTransactionUseCase",
    "StockTransactionResult",
    "SaveProductUseCase",
    "SaveOrderUseCase",
    "SaveOrderResult",
    "DeleteOrderUseCase",
    "EditOrderItemsUseCase",
    "PickOrderItemUseCase",
    "PickResult",
    "ToggleShippingUseCase",
    "ImportOrdersUseCase",
    "ImportOrdersResult",
    "HandleScanUseCase",
    "ScanAction",
    "ScanResult",
    "SyncUseCase",
    "ReconnectUseCase",
    "SyncResult",
    "ClearHistoryUseCase",
]
