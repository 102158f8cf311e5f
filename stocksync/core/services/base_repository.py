"""
Write-through-with-fallback repository base.

Every save follows the same shape:

1. validate locally;
2. if the gateway is available, apply the write remotely; a failure there
   propagates and leaves the cache untouched;
3. update the local cache (the UI's read of record);
4. if the gateway is unavailable, hand the mutation to the sync engine.

Callers are told an offline write succeeded: the cache already reflects it
and the queue owes it to the remote store.
"""

import asyncio
from abc import abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from stocksync.config import get_logger
from stocksync.core.entities.sync import (
    Collection,
    EntityKind,
    PendingMutation,
    RemoteCommand,
)
from stocksync.core.exceptions import DuplicateError
from stocksync.core.interfaces.local_store import ILocalStore
from stocksync.core.interfaces.remote_gateway import IRemoteGateway
from stocksync.core.interfaces.sync_target import ISyncTarget
from stocksync.core.services.sync_engine import SyncEngine

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class WriteThroughRepository(ISyncTarget, Generic[T]):
    """Shared cache and queue plumbing for entity repositories."""

    collection: Collection
    kind: EntityKind
    entity_name: str = "Entity"

    def __init__(
        self,
        local_store: ILocalStore,
        gateway: IRemoteGateway,
        sync_engine: SyncEngine,
    ):
        self._local_store = local_store
        self._gateway = gateway
        self._sync_engine = sync_engine
        # One logical mutation at a time per collection
        self._lock = asyncio.Lock()
        sync_engine.register(self.kind, self)

    # Entity hooks

    @abstractmethod
    def identity(self, entity: T) -> str | int:
        """Identity used for merging and duplicate detection."""

    @abstractmethod
    def from_record(self, record: dict[str, Any]) -> T:
        """Build an entity from a cached record."""

    @abstractmethod
    def command_for(self, is_new: bool) -> RemoteCommand:
        """Remote command a save maps to."""

    @abstractmethod
    async def _apply_remote(self, command: RemoteCommand, entity: T) -> None:
        """Single dispatch point for every remote write of this entity."""

    @abstractmethod
    async def _fetch_remote(self) -> list[T]:
        """Authoritative remote read used by refresh()."""

    def to_record(self, entity: T) -> dict[str, Any]:
        return entity.model_dump(mode="json")

    def validate(self, entity: T) -> None:
        """Raise ValidationError for missing required fields."""

    # Reads (always served from the cache)

    async def list_all(self) -> list[T]:
        return await self._load()

    async def get(self, identity: str | int) -> T | None:
        for entity in await self._load():
            if str(self.identity(entity)) == str(identity):
                return entity
        return None

    async def _load(self) -> list[T]:
        records = await self._local_store.read_collection(self.collection)
        return [self.from_record(record) for record in records]

    async def _store(self, entities: list[T]) -> None:
        await self._local_store.write_collection(
            self.collection, [self.to_record(e) for e in entities]
        )

    # Writes

    async def save(self, entity: T, is_new: bool) -> T:
        """Validate, write through to remote when possible, cache, queue if offline."""
        async with self._lock:
            return await self._save_unlocked(entity, is_new)

    async def _save_unlocked(self, entity: T, is_new: bool) -> T:
        self.validate(entity)
        command = self.command_for(is_new)
        online = self._gateway.is_available()

        if online:
            await self._apply_remote(command, entity)

        await self._write_local(entity, is_new=is_new, check_duplicate=not online)

        if not online:
            await self._sync_engine.enqueue(
                self.kind,
                command,
                self.identity(entity),
                self.to_record(entity),
                is_new=is_new,
            )

        logger.info(
            f"{self.entity_name.lower()}_saved",
            identity=self.identity(entity),
            is_new=is_new,
            online=online,
        )
        return entity

    async def _write_local(self, entity: T, is_new: bool, check_duplicate: bool) -> None:
        """Insert new identities at the front, merge existing ones in place."""
        entities = await self._load()
        key = str(self.identity(entity))
        position = next(
            (i for i, e in enumerate(entities) if str(self.identity(e)) == key),
            None,
        )

        if is_new and check_duplicate and position is not None:
            raise DuplicateError(self.entity_name, self.identity(entity))

        if position is None:
            # Identities the cache never held surface first
            entities.insert(0, entity)
        else:
            entities[position] = entity

        await self._store(entities)

    # Sync target

    async def replay(self, mutation: PendingMutation) -> None:
        """
        Apply a queued mutation remotely; the cache already reflects it.

        Runs without the repository lock. An online save to the same identity
        during a drain can be overwritten remotely by this older snapshot, and
        the refresh that follows a reconnect then caches the stale value.
        """
        if not isinstance(mutation.payload, dict):
            raise ValueError(f"{self.entity_name} mutation payload must be a record")
        entity = self.from_record(mutation.payload)
        await self._apply_remote(mutation.command, entity)

    async def refresh(self) -> None:
        """
        Replace the cache with the remote view.

        Identities that still have queued work keep their local version, so
        unsynced changes never disappear from the UI.
        """
        remote = await self._fetch_remote()
        async with self._lock:
            pending = await self._sync_engine.pending_identities(*self._pending_kinds())
            local = {str(self.identity(e)): e for e in await self._load()}

            merged: list[T] = []
            seen: set[str] = set()
            for entity in remote:
                key = str(self.identity(entity))
                seen.add(key)
                if key not in pending:
                    merged.append(entity)
                elif key in local:
                    merged.append(local[key])
                # pending and gone locally: a queued deletion, keep it hidden

            unsynced = [
                e for key, e in local.items() if key in pending and key not in seen
            ]
            await self._store(unsynced + merged)

        logger.info(
            "cache_refreshed",
            collection=self.collection.value,
            remote=len(remote),
            kept_unsynced=len(unsynced),
        )

    def _pending_kinds(self) -> tuple[EntityKind, ...]:
        return (self.kind,)
