"""
Response schemas for demoapp API.
"""

from demoapp.presentation.schemas.api import (
    STATUS_ERROR,
    STATUS_SUCCESS,
    ApiResponse,
    ConfigData,
)

__all__ = ["ApiResponse", "ConfigData", "STATUS_ERROR", "STATUS_SUCCESS"]
