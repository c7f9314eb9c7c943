"""Request logging middleware for SkillSwap API.

This module provides middleware for logging HTTP requests and responses
with timing and a per-request ID.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from skillswap.core.logging import logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            Response: The response from the handler, tagged with ``X-Request-ID``
        """
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method = request.method
        path = request.url.path
        client_ip = self._get_client_ip(request)

        structlog.contextvars.bind_contextvars(request_id=request_id)
        start_time = time.perf_counter()

        logger.info(
            "request_started",
            method=method,
            path=path,
            query_params=str(request.query_params) if request.query_params else None,
            client_ip=client_ip,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request_failed",
                method=method,
                path=path,
                process_time=time.perf_counter() - start_time,
                exception=str(exc),
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        logger.info(
            "request_completed",
            request_id=request_id,
            method=method,
            path=path,
            status_code=response.status_code,
            process_time=time.perf_counter() - start_time,
        )

        response.headers["X-Request-ID"] = request_id
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request.

        Args:
            request: The incoming request

        Returns:
            str: Client IP address
        """
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            # First hop is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client is not None:
            return request.client.host

        return "unknown"
