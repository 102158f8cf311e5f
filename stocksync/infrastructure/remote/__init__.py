"""Remote backend gateway implementations."""

from stocksync.infrastructure.remote.postgrest import PostgRESTGateway

# Singleton instance
_gateway: PostgRESTGateway | None = None


def get_remote_gateway() -> PostgRESTGateway:
    """Get or create the remote gateway singleton (not yet connected)."""
    global _gateway
    if _gateway is None:
        _gateway = PostgRESTGateway()
    return _gateway


async def close_remote_gateway() -> None:
    """Disconnect and drop the gateway singleton."""
    global _gateway
    if _gateway is not None:
        await _gateway.disconnect()
        _gateway = None


__all__ = [
    "PostgRESTGateway",
    "get_remote_gateway",
    "close_remote_gateway",
]
