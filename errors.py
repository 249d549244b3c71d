"""
Error taxonomy for the Foodie API.

Every failure a route reports is an ApiError carrying one ErrorKind.
The kind decides the HTTP status; the body is always
{"message": ..., "kind": ...} plus an optional "error" with diagnostics.
"""

from enum import Enum
from typing import Any, Optional

from fastapi import HTTPException


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    SERVICE_UNAVAILABLE = "service_unavailable"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.SERVER_ERROR: 500,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
}


class ApiError(HTTPException):
    def __init__(self, kind: ErrorKind, message: str, error: Optional[Any] = None):
        super().__init__(status_code=kind.status_code, detail=message)
        self.kind = kind
        self.message = message
        self.error = error

    def to_dict(self) -> dict:
        body = {"message": self.message, "kind": self.kind.value}
        if self.error is not None:
            body["error"] = self.error
        return body


def bad_request(message: str) -> ApiError:
    return ApiError(ErrorKind.BAD_REQUEST, message)


def not_found(what: str) -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, f"{what} not found")
