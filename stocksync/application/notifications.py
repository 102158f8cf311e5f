"""
User-facing notifications.

Use cases report outcomes as {kind, message} events through a Notifier
callable; the display layer decides how to render them.
"""

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel

from stocksync.config import get_logger

logger = get_logger(__name__)

OFFLINE_SAVED = "Saved offline. Will be sent when connected."


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    """A single message for the operator."""

    kind: NotificationKind
    message: str


Notifier = Callable[[Notification], None]


def log_notifier(notification: Notification) -> None:
    """Default notifier: log only."""
    logger.info(
        "notification",
        kind=notification.kind.value,
        message=notification.message,
    )


class NotificationCollector:
    """Notifier that keeps every notification, e.g. for one HTTP request."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self.notifications.append(notification)
        log_notifier(notification)


def saved_message(online: bool, online_message: str) -> str:
    """Success text for a write, depending on where it landed."""
    return online_message if online else OFFLINE_SAVED
