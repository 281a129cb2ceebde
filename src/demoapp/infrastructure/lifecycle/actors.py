"""
Lifecycle actors supervised by the run group.

- SignalActor: SIGINT/SIGTERM or quit request starts shutdown
- ReloadActor: serves reload requests once startup has loaded the config
- ServerActor: runs the HTTP server until interrupted
- InitialLoadActor: loads the configuration once at startup
"""

import asyncio
import signal
import socket
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

import uvicorn

from demoapp.application.coordinator import ConfigCoordinator
from demoapp.domain.exceptions import TransportError
from demoapp.infrastructure.lifecycle.readiness_gate import ReadinessGate
from demoapp.infrastructure.lifecycle.run_group import Actor
from demoapp.infrastructure.monitoring import metrics
from demoapp.infrastructure.monitoring.system_reporter import SystemReporter
from demoapp.infrastructure.reload.gateway import (
    SOURCE_SIGNAL,
    ReloadGateway,
    ReloadRequest,
)
from demoapp.infrastructure.sync import Latch

TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)
RELOAD_SIGNAL: Optional[signal.Signals] = getattr(signal, "SIGHUP", None)


def install_signal_handlers(
    signals: Iterable[signal.Signals],
    callback: Callable[[signal.Signals], None],
    reporter: SystemReporter,
) -> List[signal.Signals]:
    """
    Route OS signals to ``callback`` on the running event loop.

    Signal handlers only work in the main thread of a Unix process;
    elsewhere the signals are skipped with a warning.

    Args:
        signals: Signals to handle
        callback: Called with the received signal
        reporter: Logger

    Returns:
        Signals that were actually installed
    """
    loop = asyncio.get_running_loop()
    installed = []
    for sig in signals:
        try:
            loop.add_signal_handler(sig, callback, sig)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            reporter.warning(
                f"Cannot handle {sig.name}: {e}",
                context="Lifecycle",
            )
            continue
        installed.append(sig)
    return installed


def remove_signal_handlers(signals: Iterable[signal.Signals]) -> None:
    """Undo ``install_signal_handlers``."""
    loop = asyncio.get_running_loop()
    for sig in signals:
        loop.remove_signal_handler(sig)


async def wait_first(**awaitables: Awaitable) -> str:
    """
    Wait until the first of several awaitables completes.

    The others are cancelled before returning, also when the caller
    itself is cancelled.

    Args:
        **awaitables: Awaitables keyed by name

    Returns:
        Name of the awaitable that completed first
    """
    tasks: Dict[asyncio.Task, str] = {
        asyncio.ensure_future(aw): name for name, aw in awaitables.items()
    }
    try:
        done, _ = await asyncio.wait(tasks.keys(), return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    for task, name in tasks.items():
        if task in done:
            return name
    raise RuntimeError("no awaitable completed")


class SignalActor(Actor):
    """
    Termination handler.

    Returns when SIGINT/SIGTERM arrives, the quit latch is released, or the
    actor is interrupted. Every path moves readiness to STOPPING and
    releases the reload-ready latch so the reload actor can exit.
    """

    name = "signal"

    def __init__(
        self,
        readiness_gate: ReadinessGate,
        reload_ready: Latch,
        quit_latch: Latch,
        reporter: SystemReporter,
        signals: Iterable[signal.Signals] = TERMINATION_SIGNALS,
    ):
        """
        Initialize signal actor.

        Args:
            readiness_gate: Gate moved to STOPPING on shutdown
            reload_ready: Latch released on shutdown
            quit_latch: Released by the /-/quit endpoint
            reporter: Logger
            signals: Termination signals to handle
        """
        self.readiness_gate = readiness_gate
        self.reload_ready = reload_ready
        self.quit_latch = quit_latch
        self.reporter = reporter
        self.signals = tuple(signals)

        self.received: Optional[signal.Signals] = None
        self._term = asyncio.Event()
        self._cancel = asyncio.Event()

    def _on_signal(self, sig: signal.Signals) -> None:
        if self.received is None:
            self.received = sig
        self._term.set()

    async def execute(self) -> None:
        installed = install_signal_handlers(self.signals, self._on_signal, self.reporter)
        try:
            first = await wait_first(
                signal=self._term.wait(),
                quit=self.quit_latch.wait(),
                cancel=self._cancel.wait(),
            )
        finally:
            remove_signal_handlers(installed)

        if first == "signal":
            self.reporter.warning(
                f"Received an OS signal, exiting gracefully... "
                f"(signal={self.received.name})",
                context="Lifecycle",
            )
        elif first == "quit":
            self.reporter.warning(
                "Received termination request via web service, "
                "exiting gracefully...",
                context="Lifecycle",
            )

        self._begin_shutdown()

    def _begin_shutdown(self) -> None:
        self.readiness_gate.set_stopping()
        self.reload_ready.release()

    def interrupt(self, error: Optional[BaseException]) -> None:
        self._cancel.set()
        self.readiness_gate.set_stopping()


class ReloadActor(Actor):
    """
    Reload loop.

    Waits for the reload-ready latch, then serves gateway requests one at
    a time until interrupted. SIGHUP queues a request through the same
    gateway. A reload that has started always runs to completion and its
    caller always gets an answer; requests still queued on exit receive
    ``ReloadUnavailableError``.
    """

    name = "reload"

    def __init__(
        self,
        gateway: ReloadGateway,
        coordinator: ConfigCoordinator,
        reload_ready: Latch,
        reporter: SystemReporter,
        reload_signal: Optional[signal.Signals] = RELOAD_SIGNAL,
    ):
        """
        Initialize reload actor.

        Args:
            gateway: Source of reload requests
            coordinator: Performs the reloads
            reload_ready: Latch released once startup loading is done
            reporter: Logger
            reload_signal: Signal that triggers a reload (None disables)
        """
        self.gateway = gateway
        self.coordinator = coordinator
        self.reload_ready = reload_ready
        self.reporter = reporter
        self.reload_signal = reload_signal

        self.served = 0
        self._cancel = asyncio.Event()

    def _on_signal(self, sig: signal.Signals) -> None:
        self.reporter.info(
            f"Received {sig.name}, queueing configuration reload",
            context="Reload",
        )
        self.gateway.submit_nowait(SOURCE_SIGNAL)

    async def execute(self) -> None:
        signals = [self.reload_signal] if self.reload_signal else []
        installed = install_signal_handlers(signals, self._on_signal, self.reporter)
        try:
            first = await wait_first(
                ready=self.reload_ready.wait(),
                cancel=self._cancel.wait(),
            )
            if first == "cancel":
                return

            while not self._cancel.is_set():
                request = await self._next_request()
                if request is None:
                    break
                await self._serve(request)
        finally:
            remove_signal_handlers(installed)
            answered = self.gateway.close()
            if answered:
                self.reporter.warning(
                    f"Rejected {answered} queued reload request(s) on shutdown",
                    context="Reload",
                )

    async def _next_request(self) -> Optional[ReloadRequest]:
        get_task = asyncio.ensure_future(self.gateway.next_request())
        try:
            first = await wait_first(
                request=asyncio.shield(get_task),
                cancel=self._cancel.wait(),
            )
        except asyncio.CancelledError:
            get_task.cancel()
            raise
        if first == "request":
            return get_task.result()

        get_task.cancel()
        await asyncio.gather(get_task, return_exceptions=True)
        # The request may have been dequeued before the cancel landed
        if not get_task.cancelled() and get_task.exception() is None:
            return get_task.result()
        return None

    async def _serve(self, request: ReloadRequest) -> None:
        task = asyncio.ensure_future(self._reload(request))
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            await task
            raise

    async def _reload(self, request: ReloadRequest) -> None:
        error: Optional[BaseException] = None
        try:
            await asyncio.to_thread(self.coordinator.reload)
        except Exception as e:
            error = e

        self.served += 1
        metrics.reload_requests_total.labels(
            source=request.source,
            result="success" if error is None else "failure",
        ).inc()
        request.resolve(error)

    def interrupt(self, error: Optional[BaseException]) -> None:
        self._cancel.set()


class ServerActor(Actor):
    """
    HTTP server.

    Serves on pre-bound sockets until interrupted, then lets uvicorn drain
    in-flight requests for at most its graceful shutdown timeout.
    """

    name = "server"

    def __init__(
        self,
        server: uvicorn.Server,
        sockets: List[socket.socket],
        reporter: SystemReporter,
    ):
        """
        Initialize server actor.

        Args:
            server: Configured uvicorn server
            sockets: Listening sockets
            reporter: Logger
        """
        self.server = server
        self.sockets = sockets
        self.reporter = reporter
        self._interrupted = False

    @property
    def addresses(self) -> str:
        names = []
        for sock in self.sockets:
            try:
                host, port = sock.getsockname()[:2]
            except OSError:
                continue
            names.append(f"{host}:{port}")
        return ",".join(names) or "<no listener>"

    async def execute(self) -> None:
        try:
            await self.server.serve(sockets=self.sockets)
        except OSError as e:
            raise TransportError(self.addresses, str(e)) from e
        except SystemExit as e:
            # uvicorn exits the process when it cannot start serving
            raise TransportError(self.addresses, f"server exited ({e.code})") from e

        if not self._interrupted and not self.server.started:
            raise TransportError(self.addresses, "server stopped before starting")

    def interrupt(self, error: Optional[BaseException]) -> None:
        self._interrupted = True
        self.server.should_exit = True


class InitialLoadActor(Actor):
    """
    Startup configuration load.

    Performs exactly one reload. On success releases the reload-ready
    latch, marks readiness READY and idles until interrupted. A failure is
    returned to the group and stops the process.
    """

    name = "initial-load"

    def __init__(
        self,
        coordinator: ConfigCoordinator,
        readiness_gate: ReadinessGate,
        reload_ready: Latch,
        reporter: SystemReporter,
    ):
        """
        Initialize initial load actor.

        Args:
            coordinator: Performs the load
            readiness_gate: Moved to READY on success
            reload_ready: Released on success or interruption
            reporter: Logger
        """
        self.coordinator = coordinator
        self.readiness_gate = readiness_gate
        self.reload_ready = reload_ready
        self.reporter = reporter
        self._cancel = asyncio.Event()

    async def execute(self) -> None:
        if self._cancel.is_set():
            self.reload_ready.release()
            return

        await asyncio.to_thread(self.coordinator.reload)

        self.reload_ready.release()
        if self.readiness_gate.set_ready():
            self.reporter.info(
                "Server is ready to receive web requests.",
                context="Lifecycle",
            )

        await self._cancel.wait()

    def interrupt(self, error: Optional[BaseException]) -> None:
        self._cancel.set()
        self.reload_ready.release()
