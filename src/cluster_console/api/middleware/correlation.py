"""Correlation ID middleware for session API requests."""

from __future__ import annotations

import time
import uuid
from contextvars import ContextVar

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


logger = structlog.get_logger(__name__)

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Tags every request, and every log line it produces, with a correlation id.

    The id is taken from the ``X-Correlation-ID`` header when present and
    echoed back on the response. Requests on ``/sessions/{id}/...`` also
    carry the session id in their log context.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        correlation_id_ctx.set(correlation_id)

        bound = {"correlation_id": correlation_id}
        session_id = _session_id(request.url.path)
        if session_id:
            bound["session_id"] = session_id
        structlog.contextvars.bind_contextvars(**bound)

        started = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
        finally:
            structlog.contextvars.unbind_contextvars(*bound)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response


def _session_id(path: str) -> str:
    parts = path.strip("/").split("/")
    if "sessions" in parts:
        index = parts.index("sessions") + 1
        if index < len(parts):
            return parts[index]
    return ""


def get_correlation_id() -> str:
    """Get the current correlation ID."""
    return correlation_id_ctx.get()
