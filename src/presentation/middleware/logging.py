"""Request/response logging middleware with timing."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.core.metrics import record_http_request
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _endpoint(request: Request) -> str:
    """
    Route template for the metric label, including any router prefix.

    Depending on the FastAPI version the matched route's ``path`` is either
    the full template or the template relative to the including router.
    Each template segment matches exactly one path segment, so the prefix
    is whatever leading segments of the concrete path the template does
    not cover.
    """
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    if not template:
        return request.url.path

    segments = request.url.path.split("/")
    covered = template.count("/")
    if covered >= len(segments):
        return template
    prefix = "/".join(segments[: len(segments) - covered])
    return f"{prefix}{template}"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration, and records HTTP metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        query = str(request.query_params) if request.query_params else None

        log = logger.bind(
            request_id=get_request_id(),
            method=method,
            path=path,
        )

        log.info("request_started", query=query)

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            record_http_request(method, _endpoint(request), response.status_code, duration)

            return response

        except Exception as e:
            duration = time.perf_counter() - start_time

            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            record_http_request(method, _endpoint(request), 500, duration)
            raise
