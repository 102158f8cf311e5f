"""Abstract interface for components the sync engine replays into."""

from abc import ABC, abstractmethod

from stocksync.core.entities.sync import PendingMutation


class ISyncTarget(ABC):
    """A repository that can replay queued mutations and refresh its cache."""

    @abstractmethod
    async def replay(self, mutation: PendingMutation) -> None:
        """Apply a queued mutation remotely, without touching the cache."""
        pass

    @abstractmethod
    async def refresh(self) -> None:
        """Reload the local cache from the remote source of truth."""
        pass
