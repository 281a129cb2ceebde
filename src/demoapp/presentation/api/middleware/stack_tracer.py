"""
Stack tracer middleware.

Logs the traceback of any exception escaping a handler, then re-raises it
so the server answers 500 and ends the request.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from demoapp.infrastructure.monitoring.system_reporter import SystemReporter


class StackTracerMiddleware(BaseHTTPMiddleware):
    """Log unhandled handler exceptions with their stack trace."""

    def __init__(self, app: ASGIApp, reporter: SystemReporter):
        super().__init__(app)
        self.reporter = reporter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            self.reporter.error(
                f"Unhandled error in HTTP handler "
                f"{request.method} {request.url.path}: {e}",
                context="HTTP",
                exc_info=True,
            )
            raise
