"""Abstract interface for the remote backend gateway."""

from abc import ABC, abstractmethod
from typing import Any

from stocksync.core.entities.sync import Collection


class IRemoteGateway(ABC):
    """
    Per-collection access to the hosted data API.

    Availability is explicit state: it only changes through connect() and
    disconnect(). Every data call made while unavailable raises
    RemoteUnavailableError without touching the network.

    Records and field names are domain-shaped (as cached locally); the
    implementation owns the wire encoding of each collection.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Whether a client handle is currently established."""
        pass

    @abstractmethod
    async def connect(self) -> bool:
        """(Re)establish the client handle. Returns availability."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Tear down the client handle."""
        pass

    @abstractmethod
    async def insert(self, collection: Collection, record: dict[str, Any]) -> None:
        """Insert a record."""
        pass

    @abstractmethod
    async def upsert(self, collection: Collection, record: dict[str, Any]) -> None:
        """Insert or replace a record by identity."""
        pass

    @abstractmethod
    async def update(
        self, collection: Collection, record_id: str | int, fields: dict[str, Any]
    ) -> None:
        """Partially update a record by identity."""
        pass

    @abstractmethod
    async def delete(self, collection: Collection, record_id: str | int) -> None:
        """Delete a record by identity."""
        pass

    @abstractmethod
    async def delete_up_to(
        self, collection: Collection, column: str, ceiling: str
    ) -> None:
        """Bulk delete every record whose field is <= ceiling."""
        pass

    @abstractmethod
    async def query(
        self,
        collection: Collection,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Filtered, sorted read returning domain-shaped records."""
        pass
