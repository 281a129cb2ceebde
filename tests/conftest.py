"""
Test fixtures and configuration.
"""

import logging
from pathlib import Path
from typing import Callable

import pytest

from demoapp.config.settings import Settings
from demoapp.di import Container
from demoapp.domain.build_info import BuildInfo
from demoapp.infrastructure.monitoring.system_reporter import SystemReporter

CONFIG_RFC3339 = "date_format: RFC3339\nlog_level: info\n"
CONFIG_UNIX_DATE = "date_format: UnixDate\n"


@pytest.fixture
def reporter() -> SystemReporter:
    """Reporter logging to stdout at debug level (captured by pytest)."""
    return SystemReporter(name="demoapp-test", level=logging.DEBUG, verbose=3)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], str]:
    """Write a configuration file and return its path."""
    path = tmp_path / "config.yaml"

    def _write(content: str) -> str:
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def config_file(write_config) -> str:
    """Valid configuration file using RFC3339 dates."""
    return write_config(CONFIG_RFC3339)


@pytest.fixture
def settings(config_file: str) -> Settings:
    """Settings pointing at the test configuration file."""
    return Settings(
        _env_file=None,
        config_file=config_file,
        listen_addresses=["127.0.0.1:0"],
        shutdown_timeout=1,
    )


@pytest.fixture
def build_info() -> BuildInfo:
    """Fixed build metadata."""
    return BuildInfo(
        version="1.2.3",
        revision="abc123",
        branch="main",
        build_user="ci@builder",
        build_date="20260101-00:00:00",
    )


@pytest.fixture
def container(settings: Settings, reporter: SystemReporter, build_info: BuildInfo):
    """Container with subscribers registered."""
    container = Container(settings, reporter=reporter, build_info=build_info)
    container.register_subscribers()
    return container


class RecordingHandler(logging.Handler):
    """Keeps emitted log records in memory."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def messages(self):
        return [record.getMessage() for record in self.records]


@pytest.fixture
def log_records(reporter: SystemReporter):
    """Capture everything the test reporter logs."""
    handler = RecordingHandler()
    reporter.logger.addHandler(handler)
    yield handler
    reporter.logger.removeHandler(handler)
