"""
Reload gateway.

Single-consumer request queue that turns reload triggers from several
sources (HTTP handlers, SIGHUP) into one ordered stream. Every request
carries a one-shot future the consumer resolves with the reload outcome.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from demoapp.domain.exceptions import ReloadUnavailableError
from demoapp.infrastructure.monitoring.system_reporter import SystemReporter

SOURCE_HTTP = "http"
SOURCE_SIGNAL = "SIGHUP"


@dataclass
class ReloadRequest:
    """
    A pending "please reload now" request.

    Attributes:
        source: Trigger that created the request
        future: Resolved with None on success or with the reload error
    """

    source: str
    future: asyncio.Future

    def resolve(self, error: Optional[BaseException] = None) -> bool:
        """
        Deliver the reload outcome.

        Args:
            error: Reload error, or None on success

        Returns:
            False if the caller had already gone away
        """
        if self.future.done():
            return False
        if error is None:
            self.future.set_result(None)
        else:
            self.future.set_exception(error)
        return True


class ReloadGateway:
    """
    Serializes reload requests for exactly one consumer loop.

    Requests submitted before the consumer starts wait in the queue, in
    submission order; none is dropped.
    """

    def __init__(self, reporter: SystemReporter):
        """
        Initialize gateway.

        Args:
            reporter: Logger for signal-triggered reload outcomes
        """
        self.reporter = reporter
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed: Optional[BaseException] = None
        self._signal_pending = False

    @property
    def pending(self) -> int:
        """Number of requests waiting for the consumer."""
        return self._queue.qsize()

    @property
    def closed(self) -> bool:
        """True once the consumer has stopped."""
        return self._closed is not None

    def _submit(self, source: str) -> ReloadRequest:
        future = asyncio.get_running_loop().create_future()
        request = ReloadRequest(source=source, future=future)

        if self._closed is not None:
            request.resolve(self._closed)
        else:
            self._queue.put_nowait(request)

        return request

    async def request(self, source: str = SOURCE_HTTP) -> None:
        """
        Ask for a reload and wait for its outcome.

        Args:
            source: Trigger label used in logs and metrics

        Raises:
            ConfigError: If the configuration file could not be loaded
            SubscriberError: If a subscriber rejected the configuration
            ReloadUnavailableError: If the reload loop has stopped
        """
        request = self._submit(source)
        await request.future

    def submit_nowait(self, source: str = SOURCE_SIGNAL) -> bool:
        """
        Queue a reload without waiting for it (signal handlers).

        Signal-triggered requests are coalesced: while one is still
        queued, further ones are ignored. The outcome is only logged.

        Args:
            source: Trigger label used in logs and metrics

        Returns:
            True if a new request was queued
        """
        if self._signal_pending or self._closed is not None:
            return False

        self._signal_pending = True
        request = self._submit(source)
        request.future.add_done_callback(
            lambda future: self._log_signal_outcome(source, future)
        )
        return True

    def _log_signal_outcome(self, source: str, future: asyncio.Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self.reporter.warning(
                f"Reload triggered by {source} failed: {error}",
                context="Reload",
            )

    async def next_request(self) -> ReloadRequest:
        """
        Wait for the next request (consumer side).

        Returns:
            Oldest queued request
        """
        request = await self._queue.get()
        if request.source == SOURCE_SIGNAL:
            self._signal_pending = False
        return request

    def close(self, error: Optional[BaseException] = None) -> int:
        """
        Stop accepting requests and answer every queued one.

        Args:
            error: Error delivered to queued and future requests

        Returns:
            Number of queued requests that were answered
        """
        self._closed = error or ReloadUnavailableError()

        answered = 0
        while True:
            try:
                request = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            if request.resolve(self._closed):
                answered += 1

        self._signal_pending = False
        return answered
