"""Product repository: the stock catalogue."""

from typing import Any

from stocksync.config import get_logger
from stocksync.core.entities.product import Product
from stocksync.core.entities.sync import Collection, EntityKind, RemoteCommand
from stocksync.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from stocksync.core.services.base_repository import WriteThroughRepository

logger = get_logger(__name__)


class ProductRepository(WriteThroughRepository[Product]):
    """Products keyed by their user-assigned code."""

    collection = Collection.PRODUCTS
    kind = EntityKind.PRODUCT
    entity_name = "Product"

    def identity(self, entity: Product) -> str:
        return entity.id

    def from_record(self, record: dict[str, Any]) -> Product:
        return Product.model_validate(record)

    def command_for(self, is_new: bool) -> RemoteCommand:
        return RemoteCommand.INSERT if is_new else RemoteCommand.UPSERT

    def validate(self, entity: Product) -> None:
        if not entity.id or not entity.id.strip():
            raise ValidationError("id", "Product code is required")
        if not entity.name or not entity.name.strip():
            raise ValidationError("name", "Product name is required", entity.id)
        if entity.qty < 0:
            raise ValidationError("qty", "Stock cannot be negative", entity.qty)

    async def _apply_remote(self, command: RemoteCommand, entity: Product) -> None:
        record = self.to_record(entity)
        if command == RemoteCommand.INSERT:
            await self._gateway.insert(self.collection, record)
        elif command == RemoteCommand.UPSERT:
            await self._gateway.upsert(self.collection, record)
        else:
            raise ValueError(f"Unsupported product command: {command.value}")

    async def _fetch_remote(self) -> list[Product]:
        records = await self._gateway.query(self.collection, order_by="name")
        return [self.from_record(r) for r in records]

    async def adjust_quantity(self, product_id: str, delta: int) -> Product:
        """
        Apply a signed stock delta to a cached product and save it.

        Read and write happen under the repository lock so two concurrent
        transactions on the same product never lose an update.

        Raises:
            ProductNotFoundError: Product is not in the cache
            InsufficientStockError: Result would drop below zero
        """
        async with self._lock:
            product = await self.get(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            new_qty = product.qty + delta
            if new_qty < 0:
                raise InsufficientStockError(
                    product_id=product_id,
                    requested=-delta,
                    available=product.qty,
                )

            updated = await self._save_unlocked(product.with_qty(new_qty), is_new=False)

        logger.info(
            "stock_adjusted",
            product_id=product_id,
            delta=delta,
            qty=updated.qty,
        )
        return updated
