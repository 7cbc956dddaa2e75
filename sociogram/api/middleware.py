"""
sociogram/api/middleware.py

RequestContextMiddleware
    Binds a request id to structlog's context variables so every log line
    emitted while analysing a graph (integrity warnings, aggregation, ...)
    can be traced back to its HTTP call.  The id is taken from the incoming
    X-Request-ID header when present and echoed on the response together
    with the server-side processing time.

    One "http_request" line is logged per call, except for the liveness
    probe and the OpenAPI assets.
"""
from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time-Ms"

_SILENT_PATHS: frozenset[str] = frozenset(
    {"/health", "/docs", "/redoc", "/openapi.json"}
)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag logs with a request id and report per-request latency."""

    async def dispatch(self, request: Request, call_next: object) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        try:
            response: Response = await call_next(request)  # type: ignore[arg-type]
            duration_ms = round((time.perf_counter() - start) * 1000, 2)

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[PROCESS_TIME_HEADER] = str(duration_ms)

            if request.url.path not in _SILENT_PATHS:
                logger.info(
                    "http_request",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=duration_ms,
                )
            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
