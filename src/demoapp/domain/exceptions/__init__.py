"""
Domain exceptions for demoapp.
"""

from demoapp.domain.exceptions.base import DemoappException
from demoapp.domain.exceptions.config_exceptions import (
    ConfigError,
    ReloadUnavailableError,
    SubscriberError,
)
from demoapp.domain.exceptions.service_exceptions import (
    RuntimeHandlerError,
    ServiceUnavailableError,
    TransportError,
)

__all__ = [
    "DemoappException",
    "ConfigError",
    "ReloadUnavailableError",
    "SubscriberError",
    "RuntimeHandlerError",
    "ServiceUnavailableError",
    "TransportError",
]
