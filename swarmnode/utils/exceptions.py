from __future__ import annotations

import json
from enum import Enum
from typing import Any, Mapping


class SwarmNodeError(Exception):
    """Base exception for all SwarmNode errors."""


class ErrorKind(str, Enum):
    """Closed set of API failure categories."""

    BAD_REQUEST = "bad_request"
    AUTHENTICATION = "authentication"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    RATE_LIMIT = "rate_limit"
    INTERNAL_SERVER = "internal_server"
    CONNECTION = "connection"
    GENERIC = "generic"


_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.PERMISSION_DENIED,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    422: ErrorKind.UNPROCESSABLE_ENTITY,
    429: ErrorKind.RATE_LIMIT,
}


def error_kind_for_status(status: int | None) -> ErrorKind:
    """Map an HTTP status code to its ErrorKind.

    Args:
        status: HTTP status code, or None when no response was received

    Returns:
        The matching ErrorKind
    """
    if status is None:
        return ErrorKind.CONNECTION
    if status in _STATUS_KINDS:
        return _STATUS_KINDS[status]
    if status >= 500:
        return ErrorKind.INTERNAL_SERVER
    return ErrorKind.GENERIC


class APIError(SwarmNodeError):
    """Raised when the API answers with a non-2xx response."""

    def __init__(
        self,
        status: int | None,
        body: Any = None,
        message: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(self._make_message(status, body, message))
        self.kind = error_kind_for_status(status)
        self.status = status
        self.body = body
        self.headers = dict(headers) if headers is not None else None

    @staticmethod
    def _make_message(status: int | None, body: Any, message: str | None) -> str:
        if isinstance(body, dict) and body.get("message"):
            detail = body["message"]
            msg = detail if isinstance(detail, str) else json.dumps(detail)
        elif body:
            msg = json.dumps(body)
        else:
            msg = message

        if status and msg:
            return f"{status} {msg}"
        if status:
            return f"{status} status code (no body)"
        if msg:
            return msg
        return "(no status code or body)"

    @classmethod
    def generate(
        cls,
        status: int | None,
        body: Any,
        message: str | None,
        headers: Mapping[str, str] | None,
    ) -> APIError:
        """Build the error for a failed response.

        Without a status code or headers there was no usable response,
        so the failure is reported as a connection error.
        """
        if not status or headers is None:
            return APIConnectionError(message=message, cause=cast_to_error(body))
        return cls(status, body, message, headers)


class APIConnectionError(APIError):
    """Raised when no response could be obtained from the API."""

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(None, None, message or "Connection error.", None)
        if cause is not None:
            self.__cause__ = cause


class APIConnectionTimeoutError(APIConnectionError):
    """Raised when a request exceeds its timeout."""

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message or "Request timed out.", cause)


class APIUserAbortError(APIConnectionError):
    """Raised when the caller's cancellation signal aborts a request."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Request was aborted.")


class WebSocketError(SwarmNodeError):
    """Raised when a listen or stream connection fails."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class BuildFailedError(SwarmNodeError):
    """Raised when an agent build finishes with a failure status."""


class BuildTimeoutError(SwarmNodeError):
    """Raised when an agent build does not finish before the deadline."""


def cast_to_error(value: Any) -> BaseException | None:
    """Coerce an arbitrary error payload into an exception instance."""
    if value is None:
        return None
    if isinstance(value, BaseException):
        return value
    if isinstance(value, (dict, list)):
        try:
            return Exception(json.dumps(value))
        except (TypeError, ValueError):
            pass
    return Exception(str(value))
