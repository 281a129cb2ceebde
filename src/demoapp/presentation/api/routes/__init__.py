"""
API routes for demoapp.
"""

from demoapp.presentation.api.routes.lifecycle import router as lifecycle_router
from demoapp.presentation.api.routes.web import router as web_router

__all__ = ["lifecycle_router", "web_router"]
