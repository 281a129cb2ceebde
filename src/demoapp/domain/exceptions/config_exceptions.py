"""
Configuration and reload exceptions.
"""

from typing import Optional

from demoapp.domain.exceptions.base import DemoappException


class ConfigError(DemoappException):
    """Raised when the configuration file cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        """
        Initialize ConfigError.

        Args:
            path: Configuration file path
            reason: Why the file could not be loaded
        """
        super().__init__(
            f"couldn't load configuration (--config.file={path}): {reason}",
            code="CONFIG_ERROR",
        )
        self.path = path
        self.reason = reason


class SubscriberError(DemoappException):
    """
    Raised when a subscriber rejects a freshly loaded configuration.

    Subscribers notified before the failing one have already applied the
    new configuration; nothing is rolled back.
    """

    def __init__(
        self,
        subscriber: str,
        position: int,
        cause: Optional[BaseException] = None,
    ):
        """
        Initialize SubscriberError.

        Args:
            subscriber: Name of the failing subscriber
            position: Zero-based registration index of the subscriber
            cause: Exception raised by the subscriber, if any
        """
        reason = str(cause) if cause else "subscriber rejected configuration"
        super().__init__(
            f"one or more errors occurred while applying the new "
            f"configuration (subscriber #{position} {subscriber}): {reason}",
            code="SUBSCRIBER_ERROR",
        )
        self.subscriber = subscriber
        self.position = position
        self.cause = cause


class ReloadUnavailableError(DemoappException):
    """Raised when a reload request can no longer be served."""

    def __init__(self, reason: str = "reload service is shutting down"):
        super().__init__(reason, code="RELOAD_UNAVAILABLE")
