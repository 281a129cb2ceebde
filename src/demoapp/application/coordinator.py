"""
Configuration coordinator.

Owns the authoritative ConfigModel and applies reloads:

1. Read and parse the configuration file
2. Swap the stored snapshot under the exclusive lock
3. Notify subscribers in registration order, outside the lock

A failed read or parse changes nothing. A failing subscriber stops the
notification chain; subscribers already notified keep the new snapshot
(there is no rollback).
"""

import time
from typing import Callable, List, Optional

from demoapp.domain.config_model import ConfigModel
from demoapp.domain.exceptions import ConfigError, SubscriberError
from demoapp.infrastructure.monitoring import metrics
from demoapp.infrastructure.monitoring.system_reporter import SystemReporter
from demoapp.infrastructure.sync import RWLock

Subscriber = Callable[[ConfigModel], Optional[bool]]


def _subscriber_name(callback: Subscriber) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


class ConfigCoordinator:
    """
    Holds the current configuration and serializes its replacement.

    Readers take the shared lock through ``current()``. ``reload()`` takes
    the exclusive lock only for the swap. Concurrent ``reload()`` calls are
    not expected: the reload loop serves one request at a time.

    Attributes:
        config_file: Path the configuration is always loaded from
    """

    def __init__(self, config_file: str, reporter: SystemReporter):
        """
        Initialize coordinator.

        Args:
            config_file: Path to the YAML configuration file
            reporter: Logger for reload progress and failures
        """
        self.config_file = config_file
        self.reporter = reporter

        self._lock = RWLock()
        self._config: Optional[ConfigModel] = None
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> None:
        """
        Register a callback notified after every successful swap.

        Callbacks are called in registration order. A callback signals
        failure by raising or by returning False. Register subscribers at
        startup, before reload traffic begins.

        Args:
            callback: Function receiving the new ConfigModel
        """
        self._subscribers.append(callback)

    @property
    def subscriber_count(self) -> int:
        """Number of registered subscribers."""
        return len(self._subscribers)

    def current(self) -> Optional[ConfigModel]:
        """
        Get the current configuration snapshot.

        Returns:
            Current ConfigModel, or None before the first successful load
        """
        with self._lock.read():
            return self._config

    def reload(self) -> None:
        """
        Reload the configuration file and notify subscribers.

        Raises:
            ConfigError: If the file cannot be read or parsed; the
                previous snapshot is kept
            SubscriberError: If a subscriber rejects the new snapshot;
                later subscribers are not notified
        """
        start = time.monotonic()
        self.reporter.info(
            f"Loading configuration file {self.config_file}",
            context="Configuration",
        )

        try:
            new_config = ConfigModel.load_file(self.config_file)
        except ConfigError as e:
            metrics.config_last_reload_successful.set(0)
            self.reporter.error(
                f"Error loading configuration file: {e}",
                context="Configuration",
            )
            raise

        with self._lock.write():
            self._config = new_config

        try:
            self._notify(new_config)
        except SubscriberError as e:
            metrics.config_last_reload_successful.set(0)
            self.reporter.error(str(e), context="Configuration")
            raise

        metrics.config_last_reload_successful.set(1)
        metrics.config_last_reload_success_timestamp_seconds.set_to_current_time()

        elapsed_ms = (time.monotonic() - start) * 1000
        self.reporter.info(
            f"Completed loading of configuration file {self.config_file} "
            f"(subscribers={len(self._subscribers)}, took {elapsed_ms:.2f}ms)",
            context="Configuration",
        )

    def _notify(self, config: ConfigModel) -> None:
        """
        Invoke subscribers in order, stopping at the first failure.

        Args:
            config: Newly applied snapshot

        Raises:
            SubscriberError: On the first failing subscriber
        """
        for position, callback in enumerate(list(self._subscribers)):
            try:
                accepted = callback(config)
            except Exception as e:
                raise SubscriberError(
                    _subscriber_name(callback), position, cause=e
                ) from e

            if accepted is False:
                raise SubscriberError(_subscriber_name(callback), position)
