"""Order endpoints: editing, picking, shipping and bulk import."""

from fastapi import APIRouter, Depends, Query, status

from stocksync.api.dependencies import (
    get_delete_order_use_case,
    get_edit_order_items_use_case,
    get_import_orders_use_case,
    get_notifier,
    get_pick_order_item_use_case,
    get_save_order_use_case,
    get_services,
    get_toggle_shipping_use_case,
)
from stocksync.application.dto.requests import (
    AddOrderItemRequest,
    ImportOrdersRequest,
    PickItemRequest,
    SaveOrderRequest,
    SetItemQuantityRequest,
    ToggleShippingRequest,
)
from stocksync.application.dto.responses import (
    ErrorResponse,
    ImportOrdersResponse,
    OrderListResponse,
    OrderResponse,
    PickItemResponse,
    SaveOrderResponse,
)
from stocksync.application.notifications import NotificationCollector
from stocksync.application.services import StockServices
from stocksync.application.use_cases import (
    DeleteOrderUseCase,
    EditOrderItemsUseCase,
    ImportOrdersUseCase,
    PickOrderItemUseCase,
    SaveOrderUseCase,
    ToggleShippingUseCase,
)
from stocksync.core.entities.order import OrderStatus
from stocksync.core.exceptions import OrderNotFoundError

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status_filter: OrderStatus | None = Query(default=None, alias="status"),
    services: StockServices = Depends(get_services),
) -> OrderListResponse:
    """List cached orders, optionally by status."""
    orders = await services.orders.list_all()
    if status_filter is not None:
        orders = [o for o in orders if o.status == status_filter]
    return OrderListResponse(
        orders=[OrderResponse.from_entity(o) for o in orders],
        total=len(orders),
    )


@router.post(
    "/import",
    response_model=ImportOrdersResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def import_orders(
    request: ImportOrdersRequest,
    use_case: ImportOrdersUseCase = Depends(get_import_orders_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> ImportOrdersResponse:
    """Create orders from semicolon-delimited rows."""
    result = await use_case.execute(request.content)
    response = use_case.to_response(result)
    response.notifications = notifier.notifications
    return response


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: str,
    services: StockServices = Depends(get_services),
) -> OrderResponse:
    """Get one order."""
    order = await services.orders.get(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return OrderResponse.from_entity(order)


@router.post(
    "",
    response_model=SaveOrderResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def save_order(
    request: SaveOrderRequest,
    use_case: SaveOrderUseCase = Depends(get_save_order_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveOrderResponse:
    """Create an order, or edit it when the id is already cached."""
    result = await use_case.execute(request)
    return SaveOrderResponse(
        order=OrderResponse.from_entity(result.order),
        is_new=result.is_new,
        notifications=notifier.notifications,
    )


@router.put(
    "/{order_id}",
    response_model=SaveOrderResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def update_order(
    order_id: str,
    request: SaveOrderRequest,
    use_case: SaveOrderUseCase = Depends(get_save_order_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveOrderResponse:
    """Edit an order by id."""
    result = await use_case.execute(request.model_copy(update={"id": order_id}))
    return SaveOrderResponse(
        order=OrderResponse.from_entity(result.order),
        is_new=result.is_new,
        notifications=notifier.notifications,
    )


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def delete_order(
    order_id: str,
    use_case: DeleteOrderUseCase = Depends(get_delete_order_use_case),
) -> None:
    """Delete an order."""
    await use_case.execute(order_id)


@router.post(
    "/{order_id}/pick",
    response_model=PickItemResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def pick_item(
    order_id: str,
    request: PickItemRequest,
    use_case: PickOrderItemUseCase = Depends(get_pick_order_item_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> PickItemResponse:
    """Pick one unit of an order line from stock."""
    result = await use_case.execute(order_id, request.product_id)
    response = use_case.to_response(result)
    response.notifications = notifier.notifications
    return response


@router.post(
    "/{order_id}/shipping",
    response_model=SaveOrderResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def toggle_shipping(
    order_id: str,
    request: ToggleShippingRequest,
    use_case: ToggleShippingUseCase = Depends(get_toggle_shipping_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveOrderResponse:
    """Flip a shipping method flag."""
    order = await use_case.execute(order_id, request.method)
    return SaveOrderResponse(
        order=OrderResponse.from_entity(order),
        is_new=False,
        notifications=notifier.notifications,
    )


@router.post(
    "/{order_id}/items",
    response_model=SaveOrderResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def add_order_item(
    order_id: str,
    request: AddOrderItemRequest,
    use_case: EditOrderItemsUseCase = Depends(get_edit_order_items_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveOrderResponse:
    """Request one more unit of a product, adding the line if needed."""
    order = await use_case.add_product(order_id, request.product_id)
    return SaveOrderResponse(
        order=OrderResponse.from_entity(order),
        is_new=False,
        notifications=notifier.notifications,
    )


@router.patch(
    "/{order_id}/items/{product_id}",
    response_model=SaveOrderResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def set_order_item_quantity(
    order_id: str,
    product_id: str,
    request: SetItemQuantityRequest,
    use_case: EditOrderItemsUseCase = Depends(get_edit_order_items_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveOrderResponse:
    """Set the requested quantity of a line; zero removes it."""
    order = await use_case.set_quantity(order_id, product_id, request.qty_requested)
    return SaveOrderResponse(
        order=OrderResponse.from_entity(order),
        is_new=False,
        notifications=notifier.notifications,
    )
