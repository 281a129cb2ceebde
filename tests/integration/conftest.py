"""
Fixtures for in-process API tests.
"""

import asyncio

import httpx
import pytest

from demoapp.infrastructure.lifecycle import ReloadActor
from demoapp.presentation.app import create_app


@pytest.fixture
def app(container):
    """FastAPI application bound to the test container."""
    return create_app(container)


@pytest.fixture
async def client(app):
    """HTTP client talking to the application in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
async def reload_loop(container):
    """Run the reload actor so /-/reload requests are served."""
    actor = ReloadActor(
        gateway=container.gateway,
        coordinator=container.coordinator,
        reload_ready=container.reload_ready,
        reporter=container.reporter,
        reload_signal=None,
    )
    container.reload_ready.release()
    task = asyncio.create_task(actor.execute())
    yield actor
    actor.interrupt(None)
    await asyncio.wait_for(task, timeout=5.0)


@pytest.fixture
async def ready_container(container):
    """Container after a successful initial load."""
    await asyncio.to_thread(container.coordinator.reload)
    container.readiness_gate.set_ready()
    return container
