"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from stocksync.application.dto.requests import (
    AddOrderItemRequest,
    ImportOrdersRequest,
    OrderItemRequest,
    PickItemRequest,
    SaveOrderRequest,
    SaveProductRequest,
    ScanRequest,
    SetItemQuantityRequest,
    StockTransactionRequest,
    ToggleShippingRequest,
    TransactionDirection,
    UpdateProductRequest,
)
from stocksync.application.dto.responses import (
    ComponentHealthResponse,
    DrainResponse,
    ErrorResponse,
    HealthResponse,
    ImportOrdersResponse,
    MovementListResponse,
    MovementResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    PendingMutationResponse,
    PickItemResponse,
    ProductListResponse,
    ProductResponse,
    SaveOrderResponse,
    SaveProductResponse,
    ScanResponse,
    StockTransactionResponse,
    SyncResponse,
    SyncStatusResponse,
)

__all__ = [
    # Requests
    "SaveProductRequest",
    "UpdateProductRequest",
    "StockTransactionRequest",
    "TransactionDirection",
    "OrderItemRequest",
    "SaveOrderRequest",
    "AddOrderItemRequest",
    "SetItemQuantityRequest",
    "PickItemRequest",
    "ToggleShippingRequest",
    "ImportOrdersRequest",
    "ScanRequest",
    # Responses
    "ProductResponse",
    "ProductListResponse",
    "SaveProductResponse",
    "MovementResponse",
    "MovementListResponse",
    "StockTransactionResponse",
    "OrderItemResponse",
    "OrderResponse",
    "OrderListResponse",
    "SaveOrderResponse",
    "PickItemResponse",
    "ImportOrdersResponse",
    "ScanResponse",
    "PendingMutationResponse",
    "SyncStatusResponse",
    "DrainResponse",
    "SyncResponse",
    "ComponentHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
