"""Product domain entity."""

from pydantic import BaseModel


class Product(BaseModel):
    """A stocked product, identified by its user-assigned code (barcode or manual)."""

    id: str
    name: str = ""
    qty: int = 0

    def with_qty(self, qty: int) -> "Product":
        """Copy of this product with a new stock level."""
        return self.model_copy(update={"qty": qty})
