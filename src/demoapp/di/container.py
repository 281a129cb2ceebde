"""
Dependency Injection container for demoapp.

Manages lifecycle and dependencies of all application components.
"""

from typing import Optional

from demoapp.application.coordinator import ConfigCoordinator
from demoapp.application.status import StatusService
from demoapp.config.settings import Settings
from demoapp.domain.build_info import BuildInfo
from demoapp.domain.config_model import ConfigModel
from demoapp.infrastructure.lifecycle.readiness_gate import ReadinessGate
from demoapp.infrastructure.monitoring.system_reporter import (
    SystemReporter,
    parse_level,
)
from demoapp.infrastructure.reload.gateway import ReloadGateway
from demoapp.infrastructure.sync import Latch


class Container:
    """
    Dependency Injection container.

    Creates and manages all application dependencies.
    Every component is a lazily created singleton.
    """

    def __init__(
        self,
        settings: Settings,
        reporter: Optional[SystemReporter] = None,
        build_info: Optional[BuildInfo] = None,
    ):
        """
        Initialize container with settings.

        Args:
            settings: Process settings
            reporter: Optional pre-built reporter (created from settings otherwise)
            build_info: Optional build metadata (read from the environment otherwise)
        """
        self.settings = settings

        self._reporter = reporter
        self._build_info = build_info
        self._coordinator: Optional[ConfigCoordinator] = None
        self._gateway: Optional[ReloadGateway] = None
        self._readiness_gate: Optional[ReadinessGate] = None
        self._status_service: Optional[StatusService] = None
        self._reload_ready: Optional[Latch] = None
        self._quit_latch: Optional[Latch] = None
        self._subscribers_registered = False

    @property
    def reporter(self) -> SystemReporter:
        """
        Get SystemReporter singleton configured from settings.

        Returns:
            SystemReporter instance
        """
        if self._reporter is None:
            self._reporter = SystemReporter(
                name=self.settings.app_name,
                log_file=self.settings.log_file,
                level=parse_level(self.settings.log_level),
                log_format=self.settings.log_format,
            )
        return self._reporter

    @property
    def build_info(self) -> BuildInfo:
        """Get build metadata."""
        if self._build_info is None:
            self._build_info = BuildInfo.from_environment()
        return self._build_info

    @property
    def coordinator(self) -> ConfigCoordinator:
        """
        Get ConfigCoordinator singleton for the configured file.

        Returns:
            ConfigCoordinator instance
        """
        if self._coordinator is None:
            self._coordinator = ConfigCoordinator(
                config_file=self.settings.config_file,
                reporter=self.reporter,
            )
        return self._coordinator

    @property
    def gateway(self) -> ReloadGateway:
        """Get ReloadGateway singleton."""
        if self._gateway is None:
            self._gateway = ReloadGateway(reporter=self.reporter)
        return self._gateway

    @property
    def readiness_gate(self) -> ReadinessGate:
        """Get ReadinessGate singleton."""
        if self._readiness_gate is None:
            self._readiness_gate = ReadinessGate(reporter=self.reporter)
        return self._readiness_gate

    @property
    def status_service(self) -> StatusService:
        """
        Get StatusService singleton.

        Returns:
            StatusService instance
        """
        if self._status_service is None:
            self._status_service = StatusService(
                build_info=self.build_info,
                flags=self.settings.flags(),
            )
        return self._status_service

    @property
    def reload_ready(self) -> Latch:
        """Latch released once the initial load is done or shutdown begins."""
        if self._reload_ready is None:
            self._reload_ready = Latch("reload-ready")
        return self._reload_ready

    @property
    def quit_latch(self) -> Latch:
        """Latch released by the /-/quit endpoint."""
        if self._quit_latch is None:
            self._quit_latch = Latch("quit")
        return self._quit_latch

    def apply_log_level(self, config: ConfigModel) -> None:
        """
        Apply the configured log level (coordinator subscriber).

        An empty level keeps the level set on the command line.

        Args:
            config: New configuration snapshot
        """
        if not config.log_level:
            return
        if config.log_level != self.reporter.level_name:
            self.reporter.set_level(config.log_level)
            self.reporter.info(
                f"Log level set to {config.log_level}",
                context="Configuration",
            )

    def register_subscribers(self) -> None:
        """
        Subscribe components to configuration reloads.

        Safe to call more than once; subscribers are registered only once.
        """
        if self._subscribers_registered:
            return
        self.coordinator.subscribe(self.apply_log_level)
        self.coordinator.subscribe(self.status_service.apply_config)
        self._subscribers_registered = True
