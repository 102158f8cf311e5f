"""Abstract interface for the local (offline) cache."""

from abc import ABC, abstractmethod
from typing import Any

from stocksync.core.entities.sync import Collection, PendingMutation


class ILocalStore(ABC):
    """
    Durable key-value cache of entity collections plus the pending queue.

    No business logic and no merging: callers always pass the complete
    desired collection. A missing key reads as an empty collection.
    """

    @abstractmethod
    async def read_collection(self, collection: Collection) -> list[dict[str, Any]]:
        """Read a whole collection, in stored order."""
        pass

    @abstractmethod
    async def write_collection(
        self, collection: Collection, records: list[dict[str, Any]]
    ) -> None:
        """Replace a whole collection."""
        pass

    @abstractmethod
    async def clear_collection(self, collection: Collection) -> None:
        """Remove a collection key entirely."""
        pass

    @abstractmethod
    async def read_queue(self) -> list[PendingMutation]:
        """Read the pending-mutation queue in enqueue order."""
        pass

    @abstractmethod
    async def write_queue(self, items: list[PendingMutation]) -> None:
        """Replace the queue; an empty list removes the queue key."""
        pass

    @abstractmethod
    async def has_queue(self) -> bool:
        """True when a queue key is stored (pending work recorded)."""
        pass
