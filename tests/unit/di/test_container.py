"""
Unit tests for the DI container.
"""

from demoapp.di import Container
from demoapp.domain.config_model import ConfigModel
from demoapp.domain.readiness import ReadinessState


class TestContainer:
    """Unit tests for Container."""

    def test_singletons(self, container):
        """Test properties return the same instance every time."""
        assert container.coordinator is container.coordinator
        assert container.gateway is container.gateway
        assert container.readiness_gate is container.readiness_gate
        assert container.status_service is container.status_service
        assert container.reload_ready is not container.quit_latch

    def test_initial_state(self, container):
        """Test a fresh container is not ready and has no snapshot."""
        assert container.readiness_gate.state is ReadinessState.NOT_READY
        assert container.coordinator.current() is None
        assert container.quit_latch.is_released() is False

    def test_register_subscribers_once(self, container):
        """Test subscribers are registered a single time."""
        container.register_subscribers()

        assert container.coordinator.subscriber_count == 2

    def test_reload_updates_status_service(self, container):
        """Test the status service follows reloads."""
        container.coordinator.reload()

        assert container.status_service.config() is container.coordinator.current()

    def test_log_level_subscriber(self, container):
        """Test a configured log level is applied to the reporter."""
        container.apply_log_level(ConfigModel.load("log_level: error\n"))
        assert container.reporter.level_name == "error"

        container.apply_log_level(ConfigModel.load("log_level: ''\n"))
        assert container.reporter.level_name == "error"

    def test_reporter_from_settings(self, settings):
        """Test the reporter is built from settings when not given."""
        container = Container(settings.model_copy(update={"log_level": "warn"}))

        assert container.reporter.level_name == "warning"
        assert container.build_info.version
