"""
Offline queue lifecycle: enqueue, drain, reconnect.

The engine owns the pending-mutation queue. Repositories hand it mutations
they applied locally while the gateway was unavailable; draining replays
them through the same repositories once a connection is back.
"""

import asyncio
from typing import Any

from stocksync.config import get_logger
from stocksync.core.entities.sync import (
    DrainResult,
    DrainStatus,
    EntityKind,
    PendingMutation,
    ReconnectResult,
    RemoteCommand,
)
from stocksync.core.exceptions import ConfigurationError
from stocksync.core.interfaces.local_store import ILocalStore
from stocksync.core.interfaces.remote_gateway import IRemoteGateway
from stocksync.core.interfaces.sync_target import ISyncTarget

logger = get_logger(__name__)


class SyncEngine:
    """
    Pending-mutation queue owner.

    State machine: idle -> draining -> idle. A drain starts only when the
    queue is non-empty and the gateway is available; a drain requested while
    another is running is ignored.
    """

    def __init__(
        self,
        local_store: ILocalStore,
        gateway: IRemoteGateway,
        drain_on_reconnect: bool = True,
        refresh_after_drain: bool = True,
    ):
        self._local_store = local_store
        self._gateway = gateway
        self._drain_on_reconnect = drain_on_reconnect
        self._refresh_after_drain = refresh_after_drain
        self._targets: dict[EntityKind, ISyncTarget] = {}
        self._queue_lock = asyncio.Lock()
        self._draining = False

    @property
    def gateway(self) -> IRemoteGateway:
        return self._gateway

    @property
    def is_draining(self) -> bool:
        return self._draining

    def register(self, kind: EntityKind, target: ISyncTarget) -> None:
        """Route queued mutations of a kind to a repository."""
        self._targets[kind] = target

    # Queue

    async def enqueue(
        self,
        kind: EntityKind,
        command: RemoteCommand,
        identity: str | int,
        payload: dict[str, Any] | str,
        is_new: bool | None = None,
    ) -> PendingMutation:
        """Append a mutation to the end of the queue."""
        mutation = PendingMutation(
            id=identity,
            kind=kind,
            command=command,
            payload=payload,
            is_new=is_new,
        )
        async with self._queue_lock:
            queue = await self._local_store.read_queue()
            queue.append(mutation)
            await self._local_store.write_queue(queue)

        logger.info(
            "mutation_enqueued",
            kind=kind.value,
            command=command.value,
            identity=identity,
            queue_size=len(queue),
        )
        return mutation

    async def pending(self) -> list[PendingMutation]:
        return await self._local_store.read_queue()

    async def pending_count(self) -> int:
        return len(await self._local_store.read_queue())

    async def pending_identities(self, *kinds: EntityKind) -> set[str]:
        """Identities with queued work, used to protect unsynced cache entries."""
        queue = await self._local_store.read_queue()
        return {str(m.id) for m in queue if not kinds or m.kind in kinds}

    # Drain

    async def drain(self) -> DrainResult:
        """
        Replay a snapshot of the queue, in order, without stopping on failures.

        Failed items stay queued in their original relative order, followed by
        anything enqueued while the drain was running.
        """
        if self._draining:
            logger.info("sync_drain_skipped", reason="already_draining")
            return DrainResult(status=DrainStatus.BUSY)

        self._draining = True
        try:
            if not self._gateway.is_available():
                return DrainResult(status=DrainStatus.OFFLINE)

            snapshot = await self._local_store.read_queue()
            if not snapshot:
                return DrainResult(status=DrainStatus.EMPTY)

            logger.info("sync_drain_started", items=len(snapshot))

            synced = 0
            failed: list[PendingMutation] = []
            for mutation in snapshot:
                try:
                    await self._replay(mutation)
                    synced += 1
                except Exception as e:
                    # Per-item isolation: the rest of the batch still goes out
                    logger.warning(
                        "sync_item_failed",
                        kind=mutation.kind.value,
                        command=mutation.command.value,
                        identity=mutation.id,
                        error=str(e),
                    )
                    failed.append(mutation)

            await self._settle_queue(snapshot, failed)

            logger.info("sync_drain_complete", synced=synced, failed=len(failed))
            return DrainResult(
                status=DrainStatus.COMPLETED,
                synced=synced,
                failed=len(failed),
            )
        finally:
            self._draining = False

    async def _replay(self, mutation: PendingMutation) -> None:
        target = self._targets.get(mutation.kind)
        if target is None:
            raise ConfigurationError(f"No sync target registered for {mutation.kind.value}")
        await target.replay(mutation)

    async def _settle_queue(
        self, snapshot: list[PendingMutation], failed: list[PendingMutation]
    ) -> None:
        async with self._queue_lock:
            current = await self._local_store.read_queue()
            # Items appended during the drain sit after the snapshot prefix
            arrived = current[len(snapshot):]
            await self._local_store.write_queue(failed + arrived)

    # Reconnect

    async def reconnect(self) -> ReconnectResult:
        """Re-establish the gateway, drain once, then refresh every cache."""
        connected = await self._gateway.connect()
        if not connected:
            logger.warning("sync_reconnect_failed")
            return ReconnectResult(connected=False)

        drain = await self.drain() if self._drain_on_reconnect else None
        if self._refresh_after_drain:
            await self.refresh_all()

        return ReconnectResult(connected=True, drain=drain)

    async def refresh_all(self) -> None:
        """Reload every registered cache from remote; failures keep the cache."""
        seen: set[int] = set()
        for kind, target in self._targets.items():
            if id(target) in seen:
                continue
            seen.add(id(target))
            try:
                await target.refresh()
            except Exception as e:
                logger.warning("cache_refresh_failed", kind=kind.value, error=str(e))
