"""
Lifecycle API routes.

Health and readiness probes, plus configuration reload and termination
requests when the lifecycle API is enabled.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from demoapp.di import Container
from demoapp.infrastructure.reload.gateway import SOURCE_HTTP
from demoapp.presentation.api.dependencies import get_container, require_ready

router = APIRouter(tags=["lifecycle"])

LIFECYCLE_DISABLED = "Lifecycle API is not enabled."
METHOD_NOT_ALLOWED = "Only POST or PUT requests allowed"


def _lifecycle_disabled() -> PlainTextResponse:
    return PlainTextResponse(LIFECYCLE_DISABLED, status_code=status.HTTP_403_FORBIDDEN)


@router.get("/-/reload", response_class=PlainTextResponse)
@router.get("/-/quit", response_class=PlainTextResponse)
async def lifecycle_get_not_allowed() -> PlainTextResponse:
    """Lifecycle actions change state and are never triggered by GET."""
    return PlainTextResponse(
        METHOD_NOT_ALLOWED,
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
    )


@router.api_route(
    "/-/healthy",
    methods=["GET", "HEAD"],
    response_class=PlainTextResponse,
)
async def healthy(container: Container = Depends(get_container)) -> str:
    """
    Liveness probe.

    Always answers 200 while the process serves HTTP.
    """
    return f"{container.settings.app_name} is Healthy.\n"


@router.api_route(
    "/-/ready",
    methods=["GET", "HEAD"],
    response_class=PlainTextResponse,
    dependencies=[Depends(require_ready)],
)
async def ready(container: Container = Depends(get_container)) -> str:
    """
    Readiness probe.

    200 once the initial configuration load succeeded; 503 before that
    and after shutdown began (see the X-App-Stopping header).
    """
    return f"{container.settings.app_name} is Ready.\n"


@router.api_route(
    "/-/reload",
    methods=["POST", "PUT"],
    response_class=PlainTextResponse,
)
async def reload_config(container: Container = Depends(get_container)):
    """
    Reload the configuration file.

    Waits until the reload loop has served the request. Requests are
    served one at a time in arrival order.
    """
    if not container.settings.enable_lifecycle:
        return _lifecycle_disabled()

    try:
        await container.gateway.request(SOURCE_HTTP)
    except Exception as e:
        return PlainTextResponse(
            f"failed to reload config: {e}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return "OK"


@router.api_route(
    "/-/quit",
    methods=["POST", "PUT"],
    response_class=PlainTextResponse,
)
async def quit_request(container: Container = Depends(get_container)):
    """Request graceful termination. Only the first request triggers it."""
    if not container.settings.enable_lifecycle:
        return _lifecycle_disabled()

    if container.quit_latch.release():
        return "Requesting termination... Goodbye!"
    return "Termination already in progress."
