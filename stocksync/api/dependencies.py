"""
Dependency injection container for FastAPI.

Provides service instances and use cases to route handlers. Each request
gets its own NotificationCollector; FastAPI caches it per request so the
use case and the route share the same instance.
"""

from fastapi import Depends

from stocksync.application.notifications import NotificationCollector
from stocksync.application.services import StockServices, get_stock_services
from stocksync.application.use_cases import (
    ClearHistoryUseCase,
    DeleteOrderUseCase,
    EditOrderItemsUseCase,
    HandleScanUseCase,
    ImportOrdersUseCase,
    PickOrderItemUseCase,
    ReconnectUseCase,
    SaveOrderUseCase,
    SaveProductUseCase,
    StockTransactionUseCase,
    SyncUseCase,
    ToggleShippingUseCase,
)


async def get_services() -> StockServices:
    """Get the shared engine and repositories."""
    return await get_stock_services()


def get_notifier() -> NotificationCollector:
    """Per-request notification sink."""
    return NotificationCollector()


# Use case dependencies
def get_stock_transaction_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> StockTransactionUseCase:
    return StockTransactionUseCase(services=services, notifier=notifier)


def get_save_product_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveProductUseCase:
    return SaveProductUseCase(services=services, notifier=notifier)


def get_save_order_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveOrderUseCase:
    return SaveOrderUseCase(services=services, notifier=notifier)


def get_delete_order_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> DeleteOrderUseCase:
    return DeleteOrderUseCase(services=services, notifier=notifier)


def get_edit_order_items_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> EditOrderItemsUseCase:
    return EditOrderItemsUseCase(services=services, notifier=notifier)


def get_pick_order_item_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> PickOrderItemUseCase:
    return PickOrderItemUseCase(services=services, notifier=notifier)


def get_toggle_shipping_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> ToggleShippingUseCase:
    return ToggleShippingUseCase(services=services, notifier=notifier)


def get_import_orders_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> ImportOrdersUseCase:
    return ImportOrdersUseCase(services=services, notifier=notifier)


def get_handle_scan_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> HandleScanUseCase:
    return HandleScanUseCase(services=services, notifier=notifier)


def get_sync_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SyncUseCase:
    return SyncUseCase(services=services, notifier=notifier)


def get_reconnect_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> ReconnectUseCase:
    return ReconnectUseCase(services=services, notifier=notifier)


def get_clear_history_use_case(
    services: StockServices = Depends(get_services),
    notifier: NotificationCollector = Depends(get_notifier),
) -> ClearHistoryUseCase:
    return ClearHistoryUseCase(services=services, notifier=notifier)
