"""
Service lifecycle: readiness gate, supervised actors and orchestration.
"""

from demoapp.infrastructure.lifecycle.actors import (
    InitialLoadActor,
    ReloadActor,
    ServerActor,
    SignalActor,
)
from demoapp.infrastructure.lifecycle.orchestrator import LifecycleOrchestrator
from demoapp.infrastructure.lifecycle.readiness_gate import (
    STOPPING_HEADER,
    ReadinessGate,
    unavailable_response,
)
from demoapp.infrastructure.lifecycle.run_group import Actor, RunGroup

__all__ = [
    "Actor",
    "InitialLoadActor",
    "LifecycleOrchestrator",
    "ReadinessGate",
    "ReloadActor",
    "RunGroup",
    "STOPPING_HEADER",
    "ServerActor",
    "SignalActor",
    "unavailable_response",
]
