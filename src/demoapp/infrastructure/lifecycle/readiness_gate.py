"""
Readiness gate.

Three-state flag checked by every gated HTTP handler before it runs.
Only lifecycle actors write it.
"""

import threading
from typing import Optional

from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from demoapp.domain.exceptions import ServiceUnavailableError
from demoapp.domain.readiness import ReadinessState
from demoapp.infrastructure.monitoring import metrics
from demoapp.infrastructure.monitoring.system_reporter import SystemReporter

STOPPING_HEADER = "X-App-Stopping"


def unavailable_response(error: ServiceUnavailableError) -> PlainTextResponse:
    """
    Build the 503 response for a readiness refusal.

    Args:
        error: Refusal raised by ``ReadinessGate.check``

    Returns:
        503 response carrying the stopping marker header
    """
    return PlainTextResponse(
        "Service Unavailable",
        status_code=503,
        headers={STOPPING_HEADER: "true" if error.stopping else "false"},
    )


class ReadinessGate:
    """
    Lifecycle phase flag: NOT_READY, READY or STOPPING.

    Reads are a single attribute load. Transitions are validated under a
    lock so a late READY can never overwrite STOPPING.
    """

    def __init__(self, reporter: Optional[SystemReporter] = None):
        """
        Initialize gate in the NOT_READY state.

        Args:
            reporter: Optional logger for transitions
        """
        self.reporter = reporter
        self._state = ReadinessState.NOT_READY
        self._write_lock = threading.Lock()
        metrics.ready_status.set(0)

    @property
    def state(self) -> ReadinessState:
        """Current readiness state."""
        return self._state

    def is_ready(self) -> bool:
        """Check if gated operations may run."""
        return self._state is ReadinessState.READY

    def is_stopping(self) -> bool:
        """Check if shutdown has begun."""
        return self._state is ReadinessState.STOPPING

    def transition(self, target: ReadinessState) -> bool:
        """
        Move to ``target`` if the transition is valid.

        Args:
            target: Requested state

        Returns:
            True if the state changed, False if the transition was
            refused or the gate was already in ``target``
        """
        with self._write_lock:
            current = self._state
            if current is target:
                return False
            if not current.can_transition_to(target):
                if self.reporter:
                    self.reporter.warning(
                        f"Refusing readiness transition "
                        f"{current.name} -> {target.name}",
                        context="Readiness",
                    )
                return False
            self._state = target

        metrics.ready_status.set(1 if target is ReadinessState.READY else 0)
        if self.reporter:
            self.reporter.info(
                f"Readiness {current.name} -> {target.name}",
                context="Readiness",
            )
        return True

    def set_ready(self) -> bool:
        """Mark startup as complete."""
        return self.transition(ReadinessState.READY)

    def set_stopping(self) -> bool:
        """Mark shutdown as begun."""
        return self.transition(ReadinessState.STOPPING)

    def check(self) -> None:
        """
        Verify gated operations may run.

        Raises:
            ServiceUnavailableError: If not READY; ``stopping`` tells
                "never became ready" apart from "draining"
        """
        state = self._state
        if state is ReadinessState.READY:
            return
        raise ServiceUnavailableError(stopping=state is ReadinessState.STOPPING)

    def gate(self, app: ASGIApp) -> ASGIApp:
        """
        Wrap an ASGI application so it only serves while READY.

        Args:
            app: Application or handler to protect

        Returns:
            ASGI application answering 503 unless READY
        """

        async def gated(scope: Scope, receive: Receive, send: Send) -> None:
            if scope["type"] == "http":
                try:
                    self.check()
                except ServiceUnavailableError as e:
                    await unavailable_response(e)(scope, receive, send)
                    return
            await app(scope, receive, send)

        return gated
