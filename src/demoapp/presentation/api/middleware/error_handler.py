"""
Global error handling.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response

from demoapp.domain.exceptions import DemoappException, ServiceUnavailableError
from demoapp.infrastructure.lifecycle.readiness_gate import unavailable_response


async def demoapp_exception_handler(
    request: Request, exc: DemoappException
) -> JSONResponse:
    """
    Handle demoapp domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code_map = {
        "CONFIG_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "SUBSCRIBER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "RELOAD_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
        "RUNTIME_HANDLER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "TRANSPORT_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    status_code = status_code_map.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
        },
    )


async def service_unavailable_handler(
    request: Request, exc: ServiceUnavailableError
) -> Response:
    """Answer readiness refusals with 503 and the X-App-Stopping header."""
    return unavailable_response(exc)
