"""API middleware."""

from stocksync.api.middleware.error_handler import ErrorHandlerMiddleware
from stocksync.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
