"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

import datetime as dt
from datetime import datetime

from pydantic import BaseModel, Field

from stocksync.application.notifications import Notification
from stocksync.core.entities.movement import Movement
from stocksync.core.entities.order import Order
from stocksync.core.entities.product import Product
from stocksync.core.entities.sync import DrainResult, PendingMutation


# --- Products ---


class ProductResponse(BaseModel):
    """Product as held in the local cache."""

    id: str
    name: str
    qty: int

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls(id=product.id, name=product.name, qty=product.qty)


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int


class SaveProductResponse(BaseModel):
    product: ProductResponse
    notifications: list[Notification] = Field(default_factory=list)


# --- Movements ---


class MovementResponse(BaseModel):
    """Stock history entry; prod_id is null for system events."""

    id: int
    date: datetime
    prod_id: str | None
    prod_name: str
    qty: int
    obs: str | None = None
    matricula: str | None = None

    @classmethod
    def from_entity(cls, movement: Movement) -> "MovementResponse":
        return cls(**movement.model_dump())


class MovementListResponse(BaseModel):
    movements: list[MovementResponse]
    total: int


class StockTransactionResponse(BaseModel):
    """Result of an inbound or outbound transaction."""

    product: ProductResponse
    movement: MovementResponse
    notifications: list[Notification] = Field(default_factory=list)


# --- Orders ---


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    qty_requested: int
    qty_picked: int
    fully_picked: bool


class OrderResponse(BaseModel):
    """Order with its derived status and shipping label."""

    id: str
    order_number: str
    customer_name: str
    filial: str
    matricula: str
    date: dt.date
    status: str
    shipping: str = Field(..., description="Malote, Matriz or Pending")
    items: list[OrderItemResponse]
    obs: str | None = None
    envio_malote: bool
    entrega_matriz: bool

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            order_number=order.order_number,
            customer_name=order.customer_name,
            filial=order.filial,
            matricula=order.matricula,
            date=order.date,
            status=order.status.value,
            shipping=order.shipping_label,
            items=[
                OrderItemResponse(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    qty_requested=item.qty_requested,
                    qty_picked=item.qty_picked,
                    fully_picked=item.is_fully_picked,
                )
                for item in order.items
            ],
            obs=order.obs,
            envio_malote=order.envio_malote,
            entrega_matriz=order.entrega_matriz,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int


class SaveOrderResponse(BaseModel):
    order: OrderResponse
    is_new: bool
    notifications: list[Notification] = Field(default_factory=list)


class PickItemResponse(BaseModel):
    """Outcome of a pick; picked is false for an already complete line."""

    order: OrderResponse
    picked: bool
    product: ProductResponse | None = None
    movement: MovementResponse | None = None
    notifications: list[Notification] = Field(default_factory=list)


class ImportOrdersResponse(BaseModel):
    orders: list[OrderResponse]
    orders_created: int
    items_imported: int
    rows_skipped: int
    notifications: list[Notification] = Field(default_factory=list)


# --- Scan ---


class ScanResponse(BaseModel):
    """
    Scan outcome.

    action is one of:
    - transaction: known product, open a stock transaction
    - register: unknown code, open a new product form
    - picked: order mode, one unit picked
    - already_picked: order mode, the line was complete
    - rejected: order mode, nothing picked
    """

    action: str
    code: str
    product: ProductResponse | None = None
    order: OrderResponse | None = None
    notifications: list[Notification] = Field(default_factory=list)


# --- Sync ---


class PendingMutationResponse(BaseModel):
    id: str | int
    kind: str
    command: str
    enqueued_at: datetime

    @classmethod
    def from_entity(cls, mutation: PendingMutation) -> "PendingMutationResponse":
        return cls(
            id=mutation.id,
            kind=mutation.kind.value,
            command=mutation.command.value,
            enqueued_at=mutation.enqueued_at,
        )


class SyncStatusResponse(BaseModel):
    """Connectivity and queue state."""

    online: bool
    draining: bool
    pending: int
    items: list[PendingMutationResponse] = Field(default_factory=list)


class DrainResponse(BaseModel):
    status: str
    synced: int
    failed: int
    message: str

    @classmethod
    def from_result(cls, result: DrainResult) -> "DrainResponse":
        return cls(
            status=result.status.value,
            synced=result.synced,
            failed=result.failed,
            message=result.message,
        )


class SyncResponse(BaseModel):
    """Result of a drain or reconnect request."""

    online: bool
    pending: int
    drain: DrainResponse | None = None
    notifications: list[Notification] = Field(default_factory=list)


# --- Health / errors ---


class ComponentHealthResponse(BaseModel):
    """Component health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None
    remote: ComponentHealthResponse | None = None
    pending: int | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PRODUCT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
