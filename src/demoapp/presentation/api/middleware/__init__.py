"""
HTTP middleware and exception handlers.
"""

from demoapp.presentation.api.middleware.error_handler import (
    demoapp_exception_handler,
    service_unavailable_handler,
)
from demoapp.presentation.api.middleware.request_logger import (
    REQUEST_ID_HEADER,
    UNMATCHED_HANDLER,
    RequestLoggerMiddleware,
    handler_label,
    new_request_id,
)
from demoapp.presentation.api.middleware.stack_tracer import StackTracerMiddleware

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestLoggerMiddleware",
    "StackTracerMiddleware",
    "UNMATCHED_HANDLER",
    "demoapp_exception_handler",
    "handler_label",
    "new_request_id",
    "service_unavailable_handler",
]
