"""
Response Envelope

Every JSON response leaves the API in the same shape:

    {"success": true, "data": ...}
    {"success": false, "error": "Club not found"}

respond() is the single translator from service results to HTTP responses.
error_response() is shared with the application-level exception handlers.
"""

from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from bookclub.results import Err, Result
from bookclub.schemas.common import ApiResponse


def success_response(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Wrap a payload in a success envelope (camelCase keys, None fields dropped)."""
    envelope = ApiResponse(
        success=True,
        data=jsonable_encoder(data, by_alias=True, exclude_none=True),
    )
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_none=True),
    )


def error_response(
    status_code: int,
    message: str,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Wrap an error message in a failure envelope."""
    envelope = ApiResponse(success=False, error=message)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_none=True),
        headers=headers,
    )


def respond(result: Result, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Translate a service result into an enveloped JSON response."""
    if isinstance(result, Err):
        return error_response(result.status_code, result.message)
    return success_response(result.value, status_code=success_status)
