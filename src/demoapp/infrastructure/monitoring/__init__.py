"""
Logging and metrics.
"""

from demoapp.infrastructure.monitoring.system_reporter import (
    JSONFormatter,
    SystemReporter,
    parse_level,
)

__all__ = ["JSONFormatter", "SystemReporter", "parse_level"]
