"""
Domain exceptions for the StockSync application.

Provides specific exception types for different error scenarios.
"""

from enum import Enum
from typing import Any


class StockSyncError(Exception):
    """Base exception for all StockSync errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(StockSyncError):
    """Base exception for local cache operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Lookup Exceptions
class NotFoundError(StockSyncError):
    """Base exception for missing entities."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not present in the local cache."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class OrderNotFoundError(NotFoundError):
    """Order not present in the local cache."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class OrderItemNotFoundError(NotFoundError):
    """Product does not belong to the order."""

    def __init__(self, order_number: str, product_id: str):
        super().__init__(
            f"Product {product_id} does not belong to order #{order_number}",
            code="ORDER_ITEM_NOT_FOUND",
            details={"order_number": order_number, "product_id": product_id},
        )


# Domain rule violations
class DuplicateError(StockSyncError):
    """Offline insert of an identity that already exists locally."""

    def __init__(self, entity: str, identity: str | int):
        super().__init__(
            f"{entity} already exists offline: {identity}",
            code="DUPLICATE_ENTITY",
            details={"entity": entity, "identity": identity},
        )


class InsufficientStockError(StockSyncError):
    """Requested quantity exceeds the stock on hand."""

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {product_id}: requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )


# Remote Exceptions
class RemoteErrorReason(str, Enum):
    """Classification of remote gateway failures."""

    UNAVAILABLE = "unavailable"
    SCHEMA_MISMATCH = "schema_mismatch"
    NETWORK = "network"
    REQUEST_FAILED = "request_failed"


class RemoteError(StockSyncError):
    """Remote backend call failed."""

    def __init__(
        self,
        reason: RemoteErrorReason,
        message: str,
        table: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            f"Remote error ({reason.value}): {message}",
            code="REMOTE_ERROR",
            details={
                "reason": reason.value,
                "table": table,
                "status_code": status_code,
            },
        )
        self.reason = reason


class RemoteUnavailableError(RemoteError):
    """No remote handle is established."""

    def __init__(self, operation: str, table: str | None = None):
        super().__init__(
            RemoteErrorReason.UNAVAILABLE,
            f"remote backend not connected, cannot {operation}",
            table=table,
        )
        self.code = "REMOTE_UNAVAILABLE"


class SchemaMismatchError(RemoteError):
    """Backend rejected a scalar where its column expects an array."""

    def __init__(self, table: str, message: str, status_code: int | None = None):
        super().__init__(
            RemoteErrorReason.SCHEMA_MISMATCH,
            message,
            table=table,
            status_code=status_code,
        )
        self.code = "SCHEMA_MISMATCH"


# Validation Exceptions
class ValidationError(StockSyncError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ConfigurationError(StockSyncError):
    """Configuration error."""

    pass
