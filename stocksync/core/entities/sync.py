"""Offline synchronization entities."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Collection(str, Enum):
    """Entity collections held in the local cache and the remote backend."""

    PRODUCTS = "products"
    MOVEMENTS = "movements"
    ORDERS = "orders"


class EntityKind(str, Enum):
    """What a queued mutation applies to."""

    PRODUCT = "PRODUCT"
    MOVEMENT = "MOVEMENT"
    ORDER = "ORDER"
    DELETE_ORDER = "DELETE_ORDER"


class RemoteCommand(str, Enum):
    """Remote write operation a repository dispatches on."""

    INSERT = "insert"
    UPSERT = "upsert"
    UPDATE = "update"
    DELETE = "delete"


class PendingMutation(BaseModel):
    """
    A locally applied change still owed to the remote backend.

    payload is the repository-level entity snapshot (or the bare identifier
    for deletions), never a raw network request.
    """

    id: str | int
    kind: EntityKind
    command: RemoteCommand
    payload: dict[str, Any] | str
    is_new: bool | None = None
    enqueued_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class DrainStatus(str, Enum):
    """Outcome of a queue drain request."""

    OFFLINE = "offline"
    EMPTY = "empty"
    BUSY = "busy"
    COMPLETED = "completed"


class DrainResult(BaseModel):
    """Aggregate result of one drain pass."""

    status: DrainStatus
    synced: int = 0
    failed: int = 0

    @property
    def message(self) -> str:
        if self.status == DrainStatus.COMPLETED:
            return f"Synced {self.synced} pending items."
        if self.status == DrainStatus.OFFLINE:
            return "Offline"
        if self.status == DrainStatus.BUSY:
            return "Sync already in progress"
        return "Nothing to sync"


class ReconnectResult(BaseModel):
    """Outcome of an explicit reconnect."""

    connected: bool
    drain: DrainResult | None = None
