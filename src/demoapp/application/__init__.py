"""
Application layer: configuration coordination and status read model.
"""

from demoapp.application.coordinator import ConfigCoordinator, Subscriber
from demoapp.application.status import StatusService

__all__ = ["ConfigCoordinator", "StatusService", "Subscriber"]
