"""HTTP middleware."""

from skillswap.shared.middleware.request_logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
