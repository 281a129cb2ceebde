"""
ConfigModel - immutable snapshot of the reloadable configuration file.

Every reload builds a brand-new instance; instances are never mutated.
"""

from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from demoapp.domain.exceptions import ConfigError


class ConfigModel(BaseModel):
    """
    Parsed contents of the YAML configuration file.

    Unknown keys are ignored. ``source_path`` records where the snapshot
    was loaded from and is never serialized back.

    Attributes:
        date_format: Name of the format used by the status date endpoint
        log_level: Log level to apply on reload (empty keeps current level)
        source_path: File the snapshot was loaded from
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    LOG_LEVELS: ClassVar[Tuple[str, ...]] = (
        "debug",
        "info",
        "warn",
        "warning",
        "error",
    )

    date_format: str = Field(default="", description="Date format name")
    log_level: str = Field(default="", description="Log level to apply")
    source_path: Optional[str] = Field(default=None, exclude=True)

    @field_validator("date_format", mode="before")
    @classmethod
    def validate_date_format(cls, v: Any) -> str:
        """Treat an explicit null as unset."""
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError("date_format must be a string")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Validate log level."""
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError("log_level must be a string")
        v_lower = v.strip().lower()
        if v_lower and v_lower not in cls.LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level {v!r}. Must be one of: {list(cls.LOG_LEVELS)}"
            )
        return v_lower

    @classmethod
    def load_file(cls, path: str) -> "ConfigModel":
        """
        Read and parse a configuration file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            New ConfigModel instance

        Raises:
            ConfigError: If the file is missing, unreadable or malformed
        """
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(path, str(e)) from e

        return cls.load(content, source_path=path)

    @classmethod
    def load(cls, content: str, source_path: Optional[str] = None) -> "ConfigModel":
        """
        Parse configuration from YAML text.

        Args:
            content: YAML document
            source_path: Optional origin, used in error messages

        Returns:
            New ConfigModel instance

        Raises:
            ConfigError: If the document is not a valid configuration
        """
        origin = source_path or "<string>"

        try:
            loaded = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(origin, f"parsing YAML: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                origin,
                f"expected a mapping at top level, got {type(loaded).__name__}",
            )

        data: Dict[str, Any] = {str(k): v for k, v in loaded.items()}
        data["source_path"] = source_path

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(origin, _describe_validation_error(e)) from e

    def to_yaml(self) -> str:
        """
        Serialize the configuration back to YAML.

        Returns:
            YAML document without the source path
        """
        return yaml.safe_dump(self.model_dump(), sort_keys=False)

    def __str__(self) -> str:
        return self.to_yaml()


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "config"
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)
