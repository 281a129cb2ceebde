"""
Unit tests for SystemReporter.

Tests level handling, verbose filtering and output formats.
"""

import json
import logging

import pytest

from demoapp.infrastructure.monitoring import JSONFormatter, SystemReporter, parse_level


class TestParseLevel:
    """Unit tests for parse_level."""

    @pytest.mark.parametrize(
        "name,level",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warn", logging.WARNING),
            ("warning", logging.WARNING),
            (" error ", logging.ERROR),
        ],
    )
    def test_known_levels(self, name, level):
        """Test level names map to logging levels."""
        assert parse_level(name) == level

    def test_unknown_level(self):
        """Test unknown names are rejected."""
        with pytest.raises(ValueError):
            parse_level("loud")


class TestSystemReporter:
    """Unit tests for SystemReporter."""

    # ================================================================
    # Output tests
    # ================================================================

    def test_text_output_has_context(self, capsys):
        """Test text lines carry the context tag."""
        reporter = SystemReporter(name="demoapp-test-text")

        reporter.info("hello", context="Unit")

        out = capsys.readouterr().out
        assert "[Unit] hello" in out
        assert "INFO" in out

    def test_json_output(self, capsys):
        """Test JSON format emits one object per line."""
        reporter = SystemReporter(name="demoapp-test-json", log_format="json")

        reporter.warning("careful", context="Unit")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["message"] == "careful"
        assert data["level"] == "WARNING"
        assert data["component"] == "Unit"

    def test_file_output(self, tmp_path):
        """Test the optional file handler."""
        log_file = tmp_path / "logs" / "demoapp.log"
        reporter = SystemReporter(name="demoapp-test-file", log_file=str(log_file))

        reporter.error("written", context="Unit")
        for handler in reporter.logger.handlers:
            handler.flush()

        assert "[Unit] written" in log_file.read_text(encoding="utf-8")

    def test_error_with_traceback(self, capsys):
        """Test exc_info adds the traceback."""
        reporter = SystemReporter(name="demoapp-test-exc")

        try:
            raise ValueError("kaboom")
        except ValueError:
            reporter.error("failed", context="Unit", exc_info=True)

        out = capsys.readouterr().out
        assert "Traceback" in out
        assert "kaboom" in out

    def test_invalid_format(self):
        """Test unknown formats are rejected."""
        with pytest.raises(ValueError):
            SystemReporter(name="demoapp-test-bad", log_format="xml")

    # ================================================================
    # Level tests
    # ================================================================

    def test_set_level(self, capsys):
        """Test the active level can change at runtime."""
        reporter = SystemReporter(name="demoapp-test-level", verbose=3)

        reporter.debug("hidden", context="Unit")
        reporter.set_level("debug")
        reporter.debug("shown", context="Unit")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out
        assert reporter.level_name == "debug"

    def test_set_level_warn_alias(self):
        """Test the warn alias maps to warning."""
        reporter = SystemReporter(name="demoapp-test-warn")

        reporter.set_level("warn")

        assert reporter.level_name == "warning"

    def test_verbose_filter(self, capsys):
        """Test messages above the verbose level are dropped."""
        reporter = SystemReporter(name="demoapp-test-verbose", verbose=1)

        reporter.info("detail", context="Unit", verbose_level=2)
        reporter.info("important", context="Unit", verbose_level=1)

        out = capsys.readouterr().out
        assert "detail" not in out
        assert "important" in out


class TestJSONFormatter:
    """Unit tests for JSONFormatter."""

    def test_format_without_context(self):
        """Test records without context omit the component field."""
        record = logging.LogRecord(
            "demoapp", logging.INFO, __file__, 1, "plain", None, None
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "plain"
        assert "component" not in data
