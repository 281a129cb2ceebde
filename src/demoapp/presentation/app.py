"""
FastAPI application factory.
"""

from fastapi import FastAPI

from demoapp.di import Container
from demoapp.domain.exceptions import DemoappException, ServiceUnavailableError
from demoapp.presentation.api.middleware import (
    RequestLoggerMiddleware,
    StackTracerMiddleware,
    demoapp_exception_handler,
    service_unavailable_handler,
)
from demoapp.presentation.api.routes import lifecycle_router, web_router
from demoapp.presentation.api.v1 import status_router

API_V1_PREFIX = "/api/v1"


def _register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceUnavailableError, service_unavailable_handler)
    app.add_exception_handler(DemoappException, demoapp_exception_handler)


def create_api_v1(container: Container) -> FastAPI:
    """
    Create the versioned API application.

    Args:
        container: DI container

    Returns:
        FastAPI application serving /status routes
    """
    api = FastAPI(
        title="demoapp API v1",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    api.state.container = container
    _register_exception_handlers(api)
    api.include_router(status_router)
    return api


def create_app(container: Container) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    The versioned API is mounted behind the readiness gate; the lifecycle
    and informational routes are always reachable.

    Args:
        container: DI container

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="demoapp",
        description="Demo service with hot configuration reload",
        version=container.build_info.version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.container = container

    # Middleware chain: the last added runs first
    app.add_middleware(StackTracerMiddleware, reporter=container.reporter)
    app.add_middleware(RequestLoggerMiddleware, reporter=container.reporter)

    _register_exception_handlers(app)

    app.include_router(web_router)
    app.include_router(lifecycle_router)

    api_v1 = create_api_v1(container)
    app.mount(API_V1_PREFIX, container.readiness_gate.gate(api_v1))

    return app
