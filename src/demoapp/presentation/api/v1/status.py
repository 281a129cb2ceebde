"""
Status API routes.

Read-only views of configuration, flags, runtime and build information.
Mounted behind the readiness gate.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from demoapp.di import Container
from demoapp.presentation.api.dependencies import get_container
from demoapp.presentation.api.v1.responses import ERROR_INTERNAL, respond, respond_error
from demoapp.presentation.schemas import ConfigData

router = APIRouter(prefix="/status", tags=["status"])


@router.get("/config")
async def serve_config(
    request: Request,
    container: Container = Depends(get_container),
) -> Response:
    """Current configuration as YAML."""
    data = ConfigData(yaml=container.status_service.config_yaml())
    return respond(data.model_dump(), container.reporter, str(request.url))


@router.get("/date")
async def serve_date(
    request: Request,
    container: Container = Depends(get_container),
) -> Response:
    """
    Current time in the configured date format.

    Formats: RFC3339, RFC3339Nano, RFC1123, UnixDate, Unix. Anything else
    falls back to ``YYYY-MM-DD HH:MM:SS``.
    """
    return respond(container.status_service.date(), container.reporter, str(request.url))


@router.get("/flags")
async def serve_flags(
    request: Request,
    container: Container = Depends(get_container),
) -> Response:
    """Effective command-line flags."""
    return respond(container.status_service.flags, container.reporter, str(request.url))


@router.get("/runtimeinfo")
async def serve_runtime_info(
    request: Request,
    container: Container = Depends(get_container),
) -> Response:
    """Process runtime information."""
    try:
        info = container.status_service.runtime_info()
    except OSError as e:
        return respond_error(ERROR_INTERNAL, e, container.reporter, url=str(request.url))
    return respond(info, container.reporter, str(request.url))


@router.get("/buildinfo")
async def serve_build_info(
    request: Request,
    container: Container = Depends(get_container),
) -> Response:
    """Build information."""
    return respond(
        container.status_service.build_info.to_dict(),
        container.reporter,
        str(request.url),
    )
