"""
Versioned HTTP API.
"""

from demoapp.presentation.api.v1.status import router as status_router

__all__ = ["status_router"]
