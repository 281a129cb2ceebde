"""
Informational web routes: landing page, version, metrics and logger check.
"""

import socket

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from demoapp.di import Container
from demoapp.presentation.api.dependencies import get_container

router = APIRouter(tags=["web"])


@router.get("/", response_class=PlainTextResponse)
async def root(container: Container = Depends(get_container)) -> str:
    """Application name, host and version."""
    return " | ".join(
        [
            container.settings.app_name,
            socket.gethostname(),
            container.build_info.version,
        ]
    )


@router.get("/version")
async def version(container: Container = Depends(get_container)) -> JSONResponse:
    """Build information."""
    return JSONResponse(container.build_info.to_dict())


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/logger", response_class=PlainTextResponse)
async def logger(
    request: Request,
    container: Container = Depends(get_container),
) -> str:
    """
    Emit one log line per level and report the active level.

    Lines below the active level are dropped, which makes the effect of a
    ``log_level`` reload visible in the logs.
    """
    reporter = container.reporter
    line = f"logger method={request.method} path={request.url.path}"
    reporter.debug(line, context="Logger", verbose_level=0)
    reporter.info(line, context="Logger", verbose_level=0)
    reporter.warning(line, context="Logger", verbose_level=0)
    reporter.error(line, context="Logger", verbose_level=0)
    return reporter.level_name
