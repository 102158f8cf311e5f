"""Order picking domain entities."""

import datetime as dt
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from stocksync.core.entities.product import Product


class OrderStatus(str, Enum):
    """Order fulfilment status, always derived from items and shipping flags."""

    PENDING = "pending"
    COMPLETED = "completed"


class ShippingMethod(str, Enum):
    """Fulfilment channels an order can be shipped through."""

    MALOTE = "malote"
    MATRIZ = "matriz"


class OrderItem(BaseModel):
    """A product line embedded in an order."""

    product_id: str
    product_name: str
    qty_requested: int = 0
    qty_picked: int = 0

    @property
    def is_fully_picked(self) -> bool:
        return self.qty_picked >= self.qty_requested


class Order(BaseModel):
    """Customer order to be picked from stock and shipped."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    order_number: str
    customer_name: str
    filial: str = ""  # branch
    matricula: str = ""  # operator identifier
    date: dt.date = Field(default_factory=dt.date.today)
    status: OrderStatus = OrderStatus.PENDING
    items: list[OrderItem] = Field(default_factory=list)
    obs: str | None = None
    envio_malote: bool = False
    entrega_matriz: bool = False

    @property
    def all_items_picked(self) -> bool:
        return all(item.is_fully_picked for item in self.items)

    @property
    def has_shipping_method(self) -> bool:
        return self.envio_malote or self.entrega_matriz

    @property
    def shipping_label(self) -> str:
        if self.envio_malote:
            return "Malote"
        if self.entrega_matriz:
            return "Matriz"
        return "Pending"

    def derive_status(self) -> OrderStatus:
        """Completed iff every item is fully picked and a shipping flag is set."""
        if self.all_items_picked and self.has_shipping_method:
            return OrderStatus.COMPLETED
        return OrderStatus.PENDING

    def refresh_status(self) -> "Order":
        """Overwrite the stored status with the derived one."""
        self.status = self.derive_status()
        return self

    def find_item(self, product_id: str) -> OrderItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_product(self, product: Product) -> OrderItem:
        """Request one more unit of a product, adding the line if needed."""
        item = self.find_item(product.id)
        if item is None:
            item = OrderItem(
                product_id=product.id,
                product_name=product.name,
                qty_requested=1,
            )
            self.items.append(item)
        else:
            item.qty_requested += 1
        return item

    def set_item_quantity(self, product_id: str, qty: int) -> None:
        """Change the requested quantity; zero or less drops the line."""
        if qty <= 0:
            self.items = [i for i in self.items if i.product_id != product_id]
            return
        item = self.find_item(product_id)
        if item is not None:
            item.qty_requested = qty

    def toggle_shipping(self, method: ShippingMethod) -> None:
        if method == ShippingMethod.MALOTE:
            self.envio_malote = not self.envio_malote
        else:
            self.entrega_matriz = not self.entrega_matriz
