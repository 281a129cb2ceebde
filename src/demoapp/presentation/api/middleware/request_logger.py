"""
Request logging and metrics middleware.
"""

import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Scope

from demoapp.infrastructure.monitoring import metrics
from demoapp.infrastructure.monitoring.system_reporter import SystemReporter

REQUEST_ID_HEADER = "X-Request-ID"

# Handler label for requests that matched no route
UNMATCHED_HANDLER = "unmatched"


def new_request_id(request_id: Optional[str] = None) -> str:
    """
    Return the incoming request id, or generate one.

    Args:
        request_id: Id sent by the client, if any

    Returns:
        The request id
    """
    return request_id or uuid.uuid4().hex


def handler_label(scope: Scope) -> str:
    """
    Metric label for the route that handled a request.

    Uses the route's path template so the number of series stays bounded.
    Requests refused or unmatched inside a mounted application are
    labeled with the mount path.

    Args:
        scope: ASGI scope after routing

    Returns:
        Handler label
    """
    root_path = scope.get("root_path", "")
    route = scope.get("route")
    if route is not None:
        return root_path + route.path
    return root_path or UNMATCHED_HANDLER


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Log every request and record HTTP metrics.

    Records:
    - Request count by handler/status code
    - Request duration by handler
    - Response size by handler

    Adds the X-Request-ID header to responses.
    """

    def __init__(self, app: ASGIApp, reporter: SystemReporter):
        super().__init__(app)
        self.reporter = reporter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request with logging and metrics.

        Args:
            request: FastAPI request
            call_next: Next middleware/handler

        Returns:
            Response with X-Request-ID header
        """
        request_id = new_request_id(request.headers.get(REQUEST_ID_HEADER))
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, 0, start_time, request_id)
            raise

        size = int(response.headers.get("content-length", 0))
        self._record(request, response.status_code, size, start_time, request_id)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _record(
        self,
        request: Request,
        code: int,
        size: int,
        start_time: float,
        request_id: str,
    ) -> None:
        duration = time.perf_counter() - start_time
        handler = handler_label(request.scope)

        metrics.http_requests_total.labels(handler=handler, code=str(code)).inc()
        metrics.http_request_duration_seconds.labels(handler=handler).observe(duration)
        metrics.http_response_size_bytes.labels(handler=handler).observe(size)

        self.reporter.debug(
            f"{request.method} {request.url.path} -> {code} "
            f"({size} bytes, {duration * 1000:.2f}ms, request_id={request_id})",
            context="HTTP",
            verbose_level=1,
        )
