"""Movement repository: append-only stock history."""

from typing import Any

from stocksync.config import get_logger
from stocksync.core.entities.movement import Movement
from stocksync.core.entities.sync import Collection, EntityKind, RemoteCommand
from stocksync.core.exceptions import ValidationError
from stocksync.core.interfaces.local_store import ILocalStore
from stocksync.core.interfaces.remote_gateway import IRemoteGateway
from stocksync.core.services.base_repository import WriteThroughRepository
from stocksync.core.services.sync_engine import SyncEngine

logger = get_logger(__name__)

# Upper bound for the bulk history delete; covers every real timestamp
HISTORY_CEILING = "3000-01-01"


class MovementRepository(WriteThroughRepository[Movement]):
    """Movements are only ever inserted; history is cleared in bulk."""

    collection = Collection.MOVEMENTS
    kind = EntityKind.MOVEMENT
    entity_name = "Movement"

    def __init__(
        self,
        local_store: ILocalStore,
        gateway: IRemoteGateway,
        sync_engine: SyncEngine,
        fetch_limit: int = 200,
    ):
        super().__init__(local_store, gateway, sync_engine)
        self._fetch_limit = fetch_limit

    def identity(self, entity: Movement) -> int:
        return entity.id

    def from_record(self, record: dict[str, Any]) -> Movement:
        return Movement.model_validate(record)

    def command_for(self, is_new: bool) -> RemoteCommand:
        return RemoteCommand.INSERT

    def validate(self, entity: Movement) -> None:
        if not entity.prod_name:
            raise ValidationError("prod_name", "Movement needs a product or event name")

    async def record(self, movement: Movement) -> Movement:
        """Append a movement to the history."""
        return await self.save(movement, is_new=True)

    async def _apply_remote(self, command: RemoteCommand, entity: Movement) -> None:
        if command != RemoteCommand.INSERT:
            raise ValueError(f"Unsupported movement command: {command.value}")
        await self._gateway.insert(self.collection, self.to_record(entity))

    async def _fetch_remote(self) -> list[Movement]:
        records = await self._gateway.query(
            self.collection,
            order_by="date",
            descending=True,
            limit=self._fetch_limit,
        )
        return [self.from_record(r) for r in records]

    async def clear_history(self) -> None:
        """
        Delete the whole movement history.

        Remote rows go first when the gateway is available; a remote failure
        leaves the local history intact. Never queued.
        """
        async with self._lock:
            online = self._gateway.is_available()
            if online:
                await self._gateway.delete_up_to(self.collection, "date", HISTORY_CEILING)
            await self._local_store.clear_collection(self.collection)

        logger.info("movement_history_cleared", remote=online)
