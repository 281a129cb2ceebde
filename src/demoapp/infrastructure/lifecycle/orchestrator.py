"""
Lifecycle orchestrator.

Wires the four lifecycle actors into a run group and turns the group's
outcome into a process exit code.
"""

import asyncio
import socket
from typing import List, Optional

import uvicorn

from demoapp.application.coordinator import ConfigCoordinator
from demoapp.infrastructure.lifecycle.actors import (
    InitialLoadActor,
    ReloadActor,
    ServerActor,
    SignalActor,
)
from demoapp.infrastructure.lifecycle.readiness_gate import ReadinessGate
from demoapp.infrastructure.lifecycle.run_group import RunGroup
from demoapp.infrastructure.monitoring.system_reporter import SystemReporter
from demoapp.infrastructure.reload.gateway import ReloadGateway
from demoapp.infrastructure.sync import Latch


class LifecycleOrchestrator:
    """
    Supervises signal handling, reload serving, HTTP serving and the
    initial configuration load.

    The first actor to finish interrupts the others. A clean finish
    (signal or quit request) exits with 0; any actor error, including a
    failed initial load or a dead server, exits with 1.
    """

    def __init__(
        self,
        coordinator: ConfigCoordinator,
        gateway: ReloadGateway,
        readiness_gate: ReadinessGate,
        reload_ready: Latch,
        quit_latch: Latch,
        server: uvicorn.Server,
        sockets: List[socket.socket],
        reporter: SystemReporter,
    ):
        self.coordinator = coordinator
        self.gateway = gateway
        self.readiness_gate = readiness_gate
        self.reload_ready = reload_ready
        self.quit_latch = quit_latch
        self.server = server
        self.sockets = sockets
        self.reporter = reporter

        self.group: Optional[RunGroup] = None

    def build_group(self) -> RunGroup:
        """
        Create the run group with all lifecycle actors.

        Returns:
            RunGroup ready to run
        """
        group = RunGroup()
        group.add(
            SignalActor(
                readiness_gate=self.readiness_gate,
                reload_ready=self.reload_ready,
                quit_latch=self.quit_latch,
                reporter=self.reporter,
            )
        )
        group.add(
            ReloadActor(
                gateway=self.gateway,
                coordinator=self.coordinator,
                reload_ready=self.reload_ready,
                reporter=self.reporter,
            )
        )
        group.add(
            ServerActor(
                server=self.server,
                sockets=self.sockets,
                reporter=self.reporter,
            )
        )
        group.add(
            InitialLoadActor(
                coordinator=self.coordinator,
                readiness_gate=self.readiness_gate,
                reload_ready=self.reload_ready,
                reporter=self.reporter,
            )
        )
        return group

    async def run(self) -> int:
        """
        Run until the first actor exits.

        Returns:
            Process exit code
        """
        self.group = self.build_group()
        error = await self.group.run()

        if error is not None:
            if isinstance(error, asyncio.CancelledError):
                error = RuntimeError("actor cancelled")
            self.reporter.error(f"Fatal error: {error}", context="Lifecycle")
            return 1

        self.reporter.info("See you next time!", context="Lifecycle")
        return 0
