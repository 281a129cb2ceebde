"""
Reload request serialization.
"""

from demoapp.infrastructure.reload.gateway import (
    SOURCE_HTTP,
    SOURCE_SIGNAL,
    ReloadGateway,
    ReloadRequest,
)

__all__ = ["ReloadGateway", "ReloadRequest", "SOURCE_HTTP", "SOURCE_SIGNAL"]
