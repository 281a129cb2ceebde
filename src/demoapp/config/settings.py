"""
Process settings for demoapp.

Startup-only settings (listen addresses, timeouts, lifecycle switch,
logging). The reloadable application configuration lives in the file
named by ``config_file``; see ``demoapp.domain.config_model``.

Priority: CLI flags > environment variables > .env file > defaults
"""

import re
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from demoapp.infrastructure.monitoring.system_reporter import LEVELS, LOG_FORMATS
from demoapp.infrastructure.web.http_server import parse_listen_address

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}

# Settings field -> command-line flag name
FLAG_NAMES: Dict[str, str] = {
    "config_file": "config.file",
    "listen_addresses": "web.listen-address",
    "read_timeout": "web.read-timeout",
    "max_connections": "web.max-connections",
    "enable_lifecycle": "web.enable-lifecycle",
    "shutdown_timeout": "web.shutdown-timeout",
    "log_level": "log.level",
    "log_format": "log.format",
    "log_file": "log.file",
}


def parse_duration(value: Any) -> float:
    """
    Parse a duration into seconds.

    Accepts numbers (seconds) and Go-style strings such as "5m",
    "1h30m", "250ms" or "90s".

    Args:
        value: Duration value

    Returns:
        Duration in seconds

    Raises:
        ValueError: If the value is not a valid duration
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = str(value).strip()
        try:
            seconds = float(text)
        except ValueError:
            position = 0
            seconds = 0.0
            for match in _DURATION_PART.finditer(text):
                if match.start() != position:
                    break
                seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
                position = match.end()
            if not text or position != len(text):
                raise ValueError(f"invalid duration {value!r}") from None

    if seconds <= 0:
        raise ValueError(f"duration must be positive, got {value!r}")
    return seconds


class Settings(BaseSettings):
    """
    demoapp process settings.

    Loads settings from:
    1. Command-line flags (passed as keyword arguments, highest priority)
    2. Environment variables prefixed with DEMOAPP_
    3. .env file
    4. Pydantic defaults (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_prefix="DEMOAPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="demoapp", description="Name shown in responses")

    # Reloadable configuration
    config_file: str = Field(
        default="config.yaml",
        description="Path to the reloadable configuration file",
    )

    # Web server
    # Comma separated in the environment
    listen_addresses: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["0.0.0.0:8080"],
        description="Addresses to listen on (host:port, :port or [v6]:port)",
    )
    read_timeout: float = Field(
        default=300.0,
        description="Seconds before idle connections are closed",
    )
    max_connections: int = Field(
        default=512,
        ge=1,
        description="Maximum number of concurrent connections",
    )
    enable_lifecycle: bool = Field(
        default=True,
        description="Enable shutdown and reload via HTTP request",
    )
    shutdown_timeout: float = Field(
        default=30.0,
        description="Maximum seconds to drain requests on shutdown",
    )

    # Logging
    log_level: str = Field(default="info")
    log_format: str = Field(default="text")
    log_file: Optional[str] = Field(default=None)

    @field_validator("listen_addresses", mode="before")
    @classmethod
    def split_listen_addresses(cls, v: Any) -> Any:
        """Accept a comma separated string as well as a list."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("listen_addresses")
    @classmethod
    def validate_listen_addresses(cls, v: List[str]) -> List[str]:
        """Require at least one well-formed address."""
        if not v:
            raise ValueError("at least one listen address is required")
        for address in v:
            parse_listen_address(address)
        return v

    @field_validator("read_timeout", "shutdown_timeout", mode="before")
    @classmethod
    def validate_duration(cls, v: Any) -> float:
        """Parse Go-style durations."""
        return parse_duration(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        v_lower = v.lower()
        if v_lower not in LEVELS:
            raise ValueError(f"Invalid log_level. Must be one of: {sorted(LEVELS)}")
        return v_lower

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        v_lower = v.lower()
        if v_lower not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format. Must be one of: {list(LOG_FORMATS)}")
        return v_lower

    def flags(self) -> Dict[str, str]:
        """
        Effective settings keyed by command-line flag name.

        Returns:
            Flag name to string value, as served by /status/flags
        """
        flags = {}
        for field_name, flag_name in FLAG_NAMES.items():
            value = getattr(self, field_name)
            if isinstance(value, list):
                value = ",".join(value)
            elif isinstance(value, bool):
                value = str(value).lower()
            elif value is None:
                value = ""
            flags[flag_name] = str(value)
        return flags


def load_settings(
    env_file: Optional[str] = None,
    **overrides: Any,
) -> Settings:
    """
    Load settings from the environment and command-line overrides.

    Args:
        env_file: Optional .env file to load before reading the environment
        **overrides: Values from command-line flags; None values are ignored

    Returns:
        Settings instance

    Raises:
        ValidationError: If a setting is invalid
    """
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    explicit = {key: value for key, value in overrides.items() if value is not None}
    return Settings(**explicit)
