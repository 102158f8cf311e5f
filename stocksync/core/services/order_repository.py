"""Order repository: customer orders and their picking state."""

from typing import Any

from stocksync.config import get_logger
from stocksync.core.entities.order import Order
from stocksync.core.entities.sync import (
    Collection,
    EntityKind,
    PendingMutation,
    RemoteCommand,
)
from stocksync.core.exceptions import OrderNotFoundError, ValidationError
from stocksync.core.interfaces.local_store import ILocalStore
from stocksync.core.interfaces.remote_gateway import IRemoteGateway
from stocksync.core.services.base_repository import WriteThroughRepository
from stocksync.core.services.sync_engine import SyncEngine

logger = get_logger(__name__)


class OrderRepository(WriteThroughRepository[Order]):
    """
    Orders keyed by their generated id.

    Status is never trusted from input: it is re-derived whenever an order
    is saved or read back from the cache.
    """

    collection = Collection.ORDERS
    kind = EntityKind.ORDER
    entity_name = "Order"

    def __init__(
        self,
        local_store: ILocalStore,
        gateway: IRemoteGateway,
        sync_engine: SyncEngine,
    ):
        super().__init__(local_store, gateway, sync_engine)
        sync_engine.register(EntityKind.DELETE_ORDER, self)

    def identity(self, entity: Order) -> str:
        return entity.id

    def from_record(self, record: dict[str, Any]) -> Order:
        return Order.model_validate(record).refresh_status()

    def command_for(self, is_new: bool) -> RemoteCommand:
        return RemoteCommand.UPSERT if is_new else RemoteCommand.UPDATE

    def validate(self, entity: Order) -> None:
        if not entity.order_number or not entity.order_number.strip():
            raise ValidationError("order_number", "Order number is required")
        if not entity.customer_name or not entity.customer_name.strip():
            raise ValidationError("customer_name", "Customer name is required", entity.order_number)
        if not entity.items:
            raise ValidationError("items", "Order needs at least one item", entity.order_number)

    async def save(self, entity: Order, is_new: bool) -> Order:
        entity.refresh_status()
        return await super().save(entity, is_new)

    async def _apply_remote(self, command: RemoteCommand, entity: Order) -> None:
        record = self.to_record(entity)
        if command == RemoteCommand.UPSERT:
            await self._gateway.upsert(self.collection, record)
        elif command == RemoteCommand.UPDATE:
            await self._gateway.update(self.collection, entity.id, record)
        else:
            raise ValueError(f"Unsupported order command: {command.value}")

    async def _fetch_remote(self) -> list[Order]:
        records = await self._gateway.query(self.collection, order_by="date", descending=True)
        return [self.from_record(r) for r in records]

    def _pending_kinds(self) -> tuple[EntityKind, ...]:
        return (EntityKind.ORDER, EntityKind.DELETE_ORDER)

    async def delete(self, order_id: str) -> None:
        """Delete remotely when possible, otherwise queue the deletion."""
        async with self._lock:
            orders = await self._load()
            remaining = [o for o in orders if o.id != order_id]
            if len(remaining) == len(orders):
                raise OrderNotFoundError(order_id)

            online = self._gateway.is_available()
            if online:
                await self._gateway.delete(self.collection, order_id)

            await self._store(remaining)

            if not online:
                await self._sync_engine.enqueue(
                    EntityKind.DELETE_ORDER,
                    RemoteCommand.DELETE,
                    order_id,
                    order_id,
                )

        logger.info("order_deleted", order_id=order_id, online=online)

    async def replay(self, mutation: PendingMutation) -> None:
        if mutation.kind == EntityKind.DELETE_ORDER:
            await self._gateway.delete(self.collection, str(mutation.payload))
            return
        await super().replay(mutation)
