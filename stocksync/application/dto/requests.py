"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Required business fields default to empty values; the domain layer
rejects them with ValidationError (HTTP 400).
"""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field

from stocksync.core.entities.order import ShippingMethod


class TransactionDirection(str, Enum):
    """Stock transaction direction."""

    IN = "in"
    OUT = "out"


# --- Products ---


class SaveProductRequest(BaseModel):
    """Create or update a product."""

    id: str = Field(default="", description="Product code (barcode or manual)")
    name: str = Field(default="", description="Display name")
    qty: int = Field(default=0, description="Stock on hand")
    is_new: bool = Field(default=True, description="Insert (true) or update (false)")


class UpdateProductRequest(BaseModel):
    """Update an existing product; the code comes from the path."""

    name: str = Field(default="", description="Display name")
    qty: int = Field(default=0, description="Stock on hand")


# --- Stock ---


class StockTransactionRequest(BaseModel):
    """Inbound or outbound stock transaction."""

    product_id: str = Field(..., description="Product code")
    direction: TransactionDirection = Field(..., description="in or out")
    quantity: int = Field(..., gt=0, description="Units moved")
    matricula: str = Field(default="", description="Operator identifier")
    obs: str | None = Field(default=None, description="Free-text note")


# --- Orders ---


class OrderItemRequest(BaseModel):
    """A product line in an order form."""

    product_id: str = Field(..., description="Product code")
    product_name: str = Field(default="", description="Display name")
    qty_requested: int = Field(default=1, ge=0)
    qty_picked: int = Field(default=0, ge=0)


class SaveOrderRequest(BaseModel):
    """Create or edit an order.

    Status is not accepted: it is always derived from items and shipping flags.
    """

    id: str | None = Field(default=None, description="Existing order id when editing")
    order_number: str = Field(default="", description="Order number")
    customer_name: str = Field(default="", description="Customer name")
    filial: str = Field(default="", description="Branch")
    matricula: str = Field(default="", description="Operator identifier")
    date: dt.date | None = Field(default=None, description="Order date (defaults to today)")
    items: list[OrderItemRequest] = Field(default_factory=list)
    obs: str | None = None
    envio_malote: bool = False
    entrega_matriz: bool = False


class AddOrderItemRequest(BaseModel):
    """Add one unit of a catalogue product to an order."""

    product_id: str = Field(..., description="Product code, scanned or chosen")


class SetItemQuantityRequest(BaseModel):
    """Change the requested quantity of an order line."""

    qty_requested: int = Field(..., description="New quantity; zero or less removes the line")


class PickItemRequest(BaseModel):
    """Pick one unit of a product for an order."""

    product_id: str = Field(..., description="Product code")


class ToggleShippingRequest(BaseModel):
    """Flip one shipping method flag."""

    method: ShippingMethod


class ImportOrdersRequest(BaseModel):
    """Bulk order import."""

    content: str = Field(
        ...,
        description="Semicolon-delimited rows: orderNumber;customerName;branch;operatorId;date;productCode;quantity",
        examples=["101;ACME;01;007;2024-05-01;A1;3"],
    )


# --- Scan ---


class ScanRequest(BaseModel):
    """A decoded scanner read."""

    code: str = Field(..., description="Decoded barcode text")
    order_id: str | None = Field(
        default=None,
        description="Order being picked; omitted for global scans",
    )
