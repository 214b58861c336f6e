"""
Standardized error handling for the Apps Script tools.

Tools never raise to their caller: every failure is converted into the
error envelope built by `error_envelope`. The exception classes here are
only used inside a tool invocation to carry the failure to that boundary.
"""
import json
import traceback
from enum import Enum
from typing import Any

import httpx
from google.auth.exceptions import GoogleAuthError

from lib.common import now_iso
from lib.types import ErrorEnvelope


class ErrorCode(str, Enum):
    """Standardized error codes carried in the envelope details."""
    BAD_REQUEST = "BAD_REQUEST"
    API_ERROR = "API_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    INVALID_JSON = "INVALID_JSON"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ToolError(Exception):
    """Base class for failures raised inside a tool invocation."""
    code: ErrorCode = ErrorCode.INTERNAL_ERROR


class ValidationError(ToolError):
    """A required argument is missing or malformed."""
    code = ErrorCode.BAD_REQUEST


class AuthError(ToolError):
    """OAuth credentials could not be obtained."""
    code = ErrorCode.AUTH_ERROR


class ApiError(ToolError):
    """The Apps Script API answered with a non-2xx status."""
    code = ErrorCode.API_ERROR

    def __init__(
        self,
        message: str,
        status: int | None = None,
        reason: str | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason
        self.body = body


def decode_error_body(text: str) -> Any:
    """
    Decode a remote error body.

    Google answers with {"error": {"code", "message", "status"}}; anything
    that is not JSON is wrapped as {"message": text}.
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return {"message": text}


def remote_error_message(body: Any) -> str:
    """Pick the human-readable message out of a decoded error body."""
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if body.get("message"):
            return str(body["message"])
    return "Unknown error"


def classify(exc: BaseException) -> ErrorCode:
    """Map an exception to an ErrorCode."""
    if isinstance(exc, ToolError):
        return exc.code
    if isinstance(exc, GoogleAuthError):
        return ErrorCode.AUTH_ERROR
    if isinstance(exc, httpx.HTTPError):
        return ErrorCode.TRANSPORT_ERROR
    if isinstance(exc, json.JSONDecodeError):
        return ErrorCode.INVALID_JSON
    return ErrorCode.INTERNAL_ERROR


def exc_message(exc: BaseException) -> str:
    """str(exc), or the exception type name when that is empty (httpx timeouts)."""
    return str(exc) or type(exc).__name__


def error_details(
    exc: BaseException,
    script_id: str | None,
    duration_ms: int | None = None,
) -> dict[str, Any]:
    """Build the `details` section of the envelope (also used for logging)."""
    details: dict[str, Any] = {
        "message": exc_message(exc),
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        "scriptId": script_id,
    }
    if duration_ms is not None:
        details["duration"] = duration_ms
    details["timestamp"] = now_iso()
    details["errorType"] = type(exc).__name__ or "Unknown"
    details["code"] = classify(exc).value
    if isinstance(exc, ApiError) and exc.status is not None:
        details["status"] = exc.status
    return details


def error_envelope(exc: BaseException, details: dict[str, Any]) -> ErrorEnvelope:
    """Create the normalized error result returned to the caller."""
    return {
        "error": True,
        "message": exc_message(exc),
        "details": details,
        "rawError": {
            "name": type(exc).__name__,
            "stack": details.get("stack", ""),
        },
    }
