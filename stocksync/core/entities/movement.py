"""Stock movement (history) domain entity."""

import threading
import time
from datetime import UTC, datetime

from pydantic import BaseModel, Field

_id_lock = threading.Lock()
_last_id = 0


def next_movement_id() -> int:
    """
    Creation timestamp in milliseconds, bumped to stay strictly increasing.

    Two movements recorded within the same millisecond (a pick followed by a
    shipment log, for instance) still receive distinct ids.
    """
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return candidate


class Movement(BaseModel):
    """
    Append-only stock history record.

    qty is signed: negative for removals, positive for additions and zero for
    informational events. prod_id is None for system-level events such as an
    order shipment.
    """

    id: int = Field(default_factory=next_movement_id)
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    prod_id: str | None = None
    prod_name: str
    qty: int
    obs: str | None = None
    matricula: str | None = None  # operator identifier

    @property
    def is_system_event(self) -> bool:
        return self.prod_id is None
