"""Core interfaces (ports) implemented by the infrastructure layer."""

from stocksync.core.interfaces.local_store import ILocalStore
from stocksync.core.interfaces.remote_gateway import IRemoteGateway
from stocksync.core.interfaces.sync_target import ISyncTarget

__all__ = [
    "ILocalStore",
    "IRemoteGateway",
    "ISyncTarget",
]
