"""
FastAPI dependencies for demoapp API.

Provides dependency injection for routes.
"""

from fastapi import Depends, Request

from demoapp.di import Container


def get_container(request: Request) -> Container:
    """
    Get DI container instance attached to the application.

    Args:
        request: Current request

    Returns:
        Container instance

    Raises:
        RuntimeError: If container not initialized
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Container not initialized")
    return container


def require_ready(container: Container = Depends(get_container)) -> None:
    """
    Refuse the request unless the service is READY.

    Raises:
        ServiceUnavailableError: If not ready (answered with 503)
    """
    container.readiness_gate.check()
