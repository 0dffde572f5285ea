"""
FastAPI middleware for observability.

CorrelationMiddleware binds an X-Correlation-ID to the request context so
every log line of the request carries it; RequestLoggingMiddleware logs
one line per request with the caller, status and timing.

Dependencies: fastapi, starlette, curriculum.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from curriculum.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Probed by load balancers every few seconds
QUIET_PATH_SUFFIXES = ("/health", "/health/db")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request once it completes (or fails)."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        path = request.url.path
        context = {
            "method": request.method,
            "path": path,
            "user_id": request.headers.get("X-User-Id"),
            "user_role": request.headers.get("X-User-Role"),
        }

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request.method} {path} - unhandled {type(e).__name__}",
                extra={**context, "process_time_ms": _elapsed_ms(start)},
            )
            raise

        level = logging.DEBUG if path.endswith(QUIET_PATH_SUFFIXES) else logging.INFO
        logger.log(
            level,
            f"{request.method} {path} - {response.status_code}",
            extra={
                **context,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(start),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Propagate or mint a correlation ID and echo it on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
