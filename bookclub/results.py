"""
Service Results

Services never raise for expected failures. Each operation returns either
Ok(value) or Err(kind, message), and the routers hand the result to
bookclub.responses.respond(), which builds the response envelope.

ErrorKind carries the HTTP status used for each failure class:

    BAD_REQUEST    400  missing/blank required field or path parameter
    UNAUTHORIZED   401  login failure, missing or invalid bearer token
    FORBIDDEN      403  actor does not own the resource
    NOT_FOUND      404  referenced club/thread/comment absent
    UNPROCESSABLE  422  account creation rejected by the identity provider
    INTERNAL       500  store or collaborator failure
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from fastapi import status

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure classes surfaced by the services."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNPROCESSABLE = "unprocessable"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNPROCESSABLE: 422,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the response payload."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the failure class and a user-facing message."""

    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return self.kind.status_code


Result = Union[Ok[T], Err]
