"""
Build metadata exposed on /version and /api/v1/status/buildinfo.
"""

import os
import platform
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from demoapp import __version__

UNKNOWN = "unknown"


class BuildInfo(BaseModel):
    """Build information about demoapp."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str = Field(default=__version__)
    revision: str = Field(default=UNKNOWN)
    branch: str = Field(default=UNKNOWN)
    build_user: str = Field(default=UNKNOWN, alias="buildUser")
    build_date: str = Field(default=UNKNOWN, alias="buildDate")
    python_version: str = Field(
        default_factory=platform.python_version, alias="pythonVersion"
    )

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "BuildInfo":
        """
        Build metadata from DEMOAPP_BUILD_* environment variables.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            BuildInfo instance
        """
        env = os.environ if environ is None else environ
        return cls(
            revision=env.get("DEMOAPP_BUILD_REVISION", UNKNOWN),
            branch=env.get("DEMOAPP_BUILD_BRANCH", UNKNOWN),
            build_user=env.get("DEMOAPP_BUILD_USER", UNKNOWN),
            build_date=env.get("DEMOAPP_BUILD_DATE", UNKNOWN),
        )

    def to_dict(self) -> dict:
        """Serialize using the public camelCase field names."""
        return self.model_dump(by_alias=True)

    def summary(self) -> str:
        """One-line summary used in logs and --version."""
        return (
            f"(version={self.version}, branch={self.branch}, "
            f"revision={self.revision})"
        )
