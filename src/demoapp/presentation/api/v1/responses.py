"""
Response helpers for the v1 status API.

Every response is an ``ApiResponse`` envelope. Errors carry an error type
that decides the HTTP status code.
"""

from typing import Any, Dict, Optional

from fastapi import status
from fastapi.responses import PlainTextResponse, Response

from demoapp.domain.exceptions import RuntimeHandlerError
from demoapp.infrastructure.monitoring.system_reporter import SystemReporter
from demoapp.presentation.schemas import STATUS_ERROR, STATUS_SUCCESS, ApiResponse

ERROR_TIMEOUT = "timeout"
ERROR_CANCELED = "canceled"
ERROR_EXEC = "execution"
ERROR_BAD_DATA = "bad_data"
ERROR_INTERNAL = "internal"
ERROR_UNAVAILABLE = "unavailable"
ERROR_NOT_FOUND = "not_found"
ERROR_NOT_ACCEPTABLE = "not_acceptable"

# nginx's "client closed request"
STATUS_CLIENT_CLOSED_CONNECTION = 499

ERROR_STATUS_CODES: Dict[str, int] = {
    ERROR_BAD_DATA: status.HTTP_400_BAD_REQUEST,
    ERROR_EXEC: 422,
    ERROR_CANCELED: STATUS_CLIENT_CLOSED_CONNECTION,
    ERROR_TIMEOUT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ERROR_INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ERROR_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ERROR_NOT_ACCEPTABLE: status.HTTP_406_NOT_ACCEPTABLE,
}


def _encode(envelope: ApiResponse, reporter: SystemReporter, url: str) -> Optional[str]:
    try:
        return envelope.to_json()
    except (TypeError, ValueError) as e:
        error = RuntimeHandlerError(str(e))
        reporter.error(f"{error.message} (url={url})", context="API")
        return None


def respond(data: Any, reporter: SystemReporter, url: str = "") -> Response:
    """
    Build a success response.

    Args:
        data: JSON-serializable payload
        reporter: Logger for encoding failures
        url: Request URL for logs

    Returns:
        200 JSON response, or 500 if the payload cannot be encoded
    """
    body = _encode(ApiResponse(status=STATUS_SUCCESS, data=data), reporter, url)
    if body is None:
        return PlainTextResponse(
            "error encoding JSON response",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return Response(body, media_type="application/json")


def respond_error(
    error_type: str,
    error: BaseException,
    reporter: SystemReporter,
    data: Any = None,
    url: str = "",
) -> Response:
    """
    Build an error response.

    Args:
        error_type: One of the ``ERROR_*`` types
        error: Error reported to the client
        reporter: Logger for encoding failures
        data: Optional payload sent along with the error
        url: Request URL for logs

    Returns:
        JSON response with the status code mapped from ``error_type``
    """
    envelope = ApiResponse(
        status=STATUS_ERROR,
        error_type=error_type,
        error=str(error),
        data=data,
    )
    body = _encode(envelope, reporter, url)
    if body is None:
        return PlainTextResponse(
            "error encoding JSON response",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = ERROR_STATUS_CODES.get(error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(body, status_code=code, media_type="application/json")
