"""
Domain layer: configuration snapshot, readiness state and value helpers.
"""

from demoapp.domain.build_info import BuildInfo
from demoapp.domain.config_model import ConfigModel
from demoapp.domain.date_format import format_date
from demoapp.domain.readiness import ReadinessState

__all__ = ["BuildInfo", "ConfigModel", "ReadinessState", "format_date"]
