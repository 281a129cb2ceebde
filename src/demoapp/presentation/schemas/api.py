"""
Schemas for API v1 responses.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


class ApiResponse(BaseModel):
    """
    Envelope for every /api/v1 response.

    Empty fields are omitted when serialized.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="success or error")
    data: Optional[Any] = Field(default=None, description="Response payload")
    error_type: Optional[str] = Field(
        default=None, alias="errorType", description="Error category"
    )
    error: Optional[str] = Field(default=None, description="Error message")

    def to_json(self) -> str:
        """Serialize with public field names, omitting empty fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class ConfigData(BaseModel):
    """Payload of /api/v1/status/config."""

    yaml: str = Field(..., description="Current configuration as YAML")
