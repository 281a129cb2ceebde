"""
Unit tests for domain exceptions.
"""

from demoapp.domain.exceptions import (
    ConfigError,
    DemoappException,
    ReloadUnavailableError,
    RuntimeHandlerError,
    ServiceUnavailableError,
    SubscriberError,
    TransportError,
)


class TestDomainExceptions:
    """Unit tests for the exception hierarchy."""

    def test_all_derive_from_base(self):
        """Test every domain error is a DemoappException."""
        errors = [
            ConfigError("c.yaml", "boom"),
            SubscriberError("sub", 0),
            ReloadUnavailableError(),
            RuntimeHandlerError("bad"),
            ServiceUnavailableError(stopping=False),
            TransportError(":8080", "in use"),
        ]

        for error in errors:
            assert isinstance(error, DemoappException)

    def test_codes(self):
        """Test stable error codes."""
        assert ConfigError("c", "r").code == "CONFIG_ERROR"
        assert SubscriberError("s", 1).code == "SUBSCRIBER_ERROR"
        assert ReloadUnavailableError().code == "RELOAD_UNAVAILABLE"
        assert RuntimeHandlerError("x").code == "RUNTIME_HANDLER_ERROR"
        assert ServiceUnavailableError(True).code == "SERVICE_UNAVAILABLE"
        assert TransportError("a", "r").code == "TRANSPORT_ERROR"

    def test_base_code_defaults_to_class_name(self):
        """Test the base exception falls back to its class name."""
        assert DemoappException("msg").code == "DemoappException"

    def test_subscriber_error_carries_cause(self):
        """Test SubscriberError keeps the failing subscriber and cause."""
        cause = ValueError("nope")

        error = SubscriberError("apply", 2, cause=cause)

        assert error.subscriber == "apply"
        assert error.position == 2
        assert error.cause is cause
        assert "nope" in str(error)

    def test_subscriber_error_without_cause(self):
        """Test a rejected config without exception is described."""
        assert "rejected" in str(SubscriberError("apply", 0))

    def test_service_unavailable_stopping_flag(self):
        """Test the stopping flag is kept."""
        assert ServiceUnavailableError(stopping=True).stopping is True
        assert ServiceUnavailableError(stopping=False).stopping is False
