"""
Unit tests for ConfigModel.

Tests loading, validation and serialization of the configuration file.
"""

import pytest

from demoapp.domain.config_model import ConfigModel
from demoapp.domain.exceptions import ConfigError


class TestConfigModel:
    """Unit tests for ConfigModel."""

    # ================================================================
    # Loading tests
    # ================================================================

    def test_load_reads_fields(self):
        """Test load parses known fields."""
        config = ConfigModel.load("date_format: RFC3339\nlog_level: debug\n")

        assert config.date_format == "RFC3339"
        assert config.log_level == "debug"

    def test_load_empty_document_uses_defaults(self):
        """Test an empty document yields an empty configuration."""
        config = ConfigModel.load("")

        assert config.date_format == ""
        assert config.log_level == ""

    def test_load_ignores_unknown_keys(self):
        """Test unknown keys are ignored."""
        config = ConfigModel.load("date_format: Unix\nsomething_else: 42\n")

        assert config.date_format == "Unix"
        assert not hasattr(config, "something_else")

    def test_load_null_values_are_unset(self):
        """Test explicit nulls are treated as unset."""
        config = ConfigModel.load("date_format: null\nlog_level: ~\n")

        assert config.date_format == ""
        assert config.log_level == ""

    def test_load_normalizes_log_level(self):
        """Test log level is lowercased."""
        config = ConfigModel.load("log_level: WARN\n")

        assert config.log_level == "warn"

    def test_load_file_records_source_path(self, write_config):
        """Test load_file keeps the path it loaded from."""
        path = write_config("date_format: RFC1123\n")

        config = ConfigModel.load_file(path)

        assert config.date_format == "RFC1123"
        assert config.source_path == path

    # ================================================================
    # Error tests
    # ================================================================

    def test_load_file_missing(self, tmp_path):
        """Test a missing file raises ConfigError."""
        path = str(tmp_path / "missing.yaml")

        with pytest.raises(ConfigError) as exc_info:
            ConfigModel.load_file(path)

        assert exc_info.value.code == "CONFIG_ERROR"
        assert exc_info.value.path == path
        assert f"--config.file={path}" in str(exc_info.value)

    def test_load_malformed_yaml(self):
        """Test malformed YAML raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigModel.load("date_format: [unclosed\n", source_path="bad.yaml")

        assert "parsing YAML" in exc_info.value.reason

    def test_load_non_mapping_document(self):
        """Test a top-level list is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigModel.load("- a\n- b\n")

        assert "mapping" in exc_info.value.reason

    def test_load_invalid_log_level(self):
        """Test an unknown log level is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigModel.load("log_level: loud\n")

        assert "log_level" in exc_info.value.reason

    def test_load_non_string_date_format(self):
        """Test a non-string date format is rejected."""
        with pytest.raises(ConfigError):
            ConfigModel.load("date_format:\n  nested: true\n")

    # ================================================================
    # Serialization tests
    # ================================================================

    def test_to_yaml_round_trips_fields(self):
        """Test YAML output can be loaded back to an equal snapshot."""
        config = ConfigModel.load("date_format: UnixDate\nlog_level: error\n")

        reloaded = ConfigModel.load(config.to_yaml())

        assert reloaded == config

    def test_to_yaml_excludes_source_path(self, write_config):
        """Test the source path is never serialized."""
        config = ConfigModel.load_file(write_config("date_format: Unix\n"))

        assert "source_path" not in config.to_yaml()
        assert str(config) == config.to_yaml()

    def test_snapshot_is_immutable(self):
        """Test snapshots cannot be mutated."""
        config = ConfigModel.load("date_format: Unix\n")

        with pytest.raises(Exception):
            config.date_format = "RFC3339"
