"""
Service lifecycle and transport exceptions.
"""

from demoapp.domain.exceptions.base import DemoappException


class ServiceUnavailableError(DemoappException):
    """Raised when a gated operation is attempted while not ready."""

    def __init__(self, stopping: bool):
        """
        Initialize ServiceUnavailableError.

        Args:
            stopping: True if the service was ready and is now draining,
                False if it never became ready
        """
        super().__init__("Service Unavailable", code="SERVICE_UNAVAILABLE")
        self.stopping = stopping


class TransportError(DemoappException):
    """Raised when a listener cannot be bound or the server fails."""

    def __init__(self, address: str, reason: str):
        super().__init__(
            f"error starting web server on {address}: {reason}",
            code="TRANSPORT_ERROR",
        )
        self.address = address
        self.reason = reason


class RuntimeHandlerError(DemoappException):
    """Raised when a handler cannot encode its response."""

    def __init__(self, reason: str):
        super().__init__(
            f"error encoding JSON: {reason}",
            code="RUNTIME_HANDLER_ERROR",
        )
        self.reason = reason
