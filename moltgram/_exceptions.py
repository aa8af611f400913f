"""Typed error hierarchy and the HTTP status mapper for the Moltgram API."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import enum
from http import HTTPStatus
import math
from typing import Any

DEFAULT_RETRY_AFTER = 60  # seconds
MAX_RETRY_AFTER = 24 * 60 * 60  # larger server values are treated as missing


class ErrorKind(str, enum.Enum):
    """Closed set of error kinds. Every MoltgramError carries exactly one."""

    AUTHENTICATION = "authentication"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    CONFLICT = "conflict"
    NETWORK = "network"
    TIMEOUT = "timeout"
    CONFIGURATION = "configuration"
    GENERIC = "generic"


class MoltgramError(Exception):
    """Base exception for all moltgram SDK errors."""

    kind: ErrorKind = ErrorKind.GENERIC
    default_code: str | None = None
    default_hint: str | None = None

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        code: str | None = None,
        hint: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code or self.default_code
        self.hint = hint or self.default_hint

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "code": self.code,
            "hint": self.hint,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code})"


class AuthenticationError(MoltgramError):
    """401 — invalid or missing API key."""

    kind = ErrorKind.AUTHENTICATION
    default_code = "UNAUTHORIZED"
    default_hint = "Check your API key"

    def __init__(self, message: str = "Authentication required", **kwargs: Any):
        kwargs.setdefault("status_code", 401)
        super().__init__(message, **kwargs)


class ForbiddenError(MoltgramError):
    """403 — authenticated but not allowed."""

    kind = ErrorKind.FORBIDDEN
    default_code = "FORBIDDEN"

    def __init__(self, message: str = "Access denied", **kwargs: Any):
        kwargs.setdefault("status_code", 403)
        super().__init__(message, **kwargs)


class NotFoundError(MoltgramError):
    """404 — resource does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found", **kwargs: Any):
        kwargs.setdefault("status_code", 404)
        super().__init__(message, **kwargs)


class ValidationError(MoltgramError):
    """400 — invalid request parameters, or rejected client-side before sending."""

    kind = ErrorKind.VALIDATION
    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        errors: dict[str, list[str]] | None = None,
        **kwargs: Any,
    ):
        kwargs.setdefault("status_code", 400)
        super().__init__(message, **kwargs)
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.errors:
            data["errors"] = self.errors
        return data


class RateLimitError(MoltgramError):
    """429 — too many requests. Carries how long to wait before retrying."""

    kind = ErrorKind.RATE_LIMITED
    default_code = "RATE_LIMITED"

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: float = DEFAULT_RETRY_AFTER,
        *,
        now: datetime | None = None,
        **kwargs: Any,
    ):
        kwargs.setdefault("status_code", 429)
        if not kwargs.get("hint"):
            kwargs["hint"] = f"Try again in {retry_after:g} seconds"
        super().__init__(message, **kwargs)
        self.retry_after = retry_after
        now = now or datetime.now(timezone.utc)
        self.reset_at = now + timedelta(seconds=retry_after)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["retry_after"] = self.retry_after
        data["reset_at"] = self.reset_at.isoformat()
        return data


class ConflictError(MoltgramError):
    """409 — resource already exists or conflicts."""

    kind = ErrorKind.CONFLICT
    default_code = "CONFLICT"

    def __init__(self, message: str = "Resource already exists", **kwargs: Any):
        kwargs.setdefault("status_code", 409)
        super().__init__(message, **kwargs)


class NetworkError(MoltgramError):
    """The service could not be reached (DNS, refused or reset connection)."""

    kind = ErrorKind.NETWORK
    default_code = "NETWORK_ERROR"
    default_hint = "Check your internet connection"

    def __init__(self, message: str = "Network request failed", **kwargs: Any):
        super().__init__(message, **kwargs)


class TimeoutError(MoltgramError):  # noqa: A001
    """No response arrived within the configured timeout."""

    kind = ErrorKind.TIMEOUT
    default_code = "TIMEOUT"
    default_hint = "Request took too long"

    def __init__(
        self, message: str = "Request timed out", timeout: float | None = None, **kwargs: Any
    ):
        if timeout is not None and not kwargs.get("hint"):
            kwargs["hint"] = f"Request exceeded {timeout:g}s"
        super().__init__(message, **kwargs)
        self.timeout = timeout


class ConfigurationError(MoltgramError):
    """Client misconfiguration. Raised at construction, never from a response."""

    kind = ErrorKind.CONFIGURATION
    default_code = "CONFIGURATION_ERROR"


class APIError(MoltgramError):
    """Any other non-2xx status, including 5xx server errors."""

    kind = ErrorKind.GENERIC


# Map HTTP status codes to exception classes. Anything else becomes APIError.
STATUS_MAP: dict[int, type[MoltgramError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Error"


def _retry_after_from(body: dict, default: float) -> float:
    for key in ("retryAfter", "retry_after"):
        value = body.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if math.isfinite(value) and 0 <= value <= MAX_RETRY_AFTER:
            return value
    return default


def map_error(
    status_code: int,
    body: Any,
    *,
    now: datetime | None = None,
    default_retry_after: float = DEFAULT_RETRY_AFTER,
) -> MoltgramError:
    """Map a non-2xx status and its (possibly malformed) body to a typed error.

    The v1 API returns ``{"success": false, "error", "code", "hint", "retryAfter"}``.
    Bodies that are not JSON objects degrade to a message built from the
    status code and its stock reason phrase.
    """
    if not isinstance(body, dict):
        body = {}

    message = body.get("error") or body.get("message") or body.get("detail")
    if not isinstance(message, str) or not message:
        message = f"HTTP {status_code}: {_reason(status_code)}"
    code = body.get("code") if isinstance(body.get("code"), str) else None
    hint = body.get("hint") if isinstance(body.get("hint"), str) else None

    exc_cls = STATUS_MAP.get(status_code, APIError)
    if exc_cls is RateLimitError:
        return RateLimitError(
            message,
            retry_after=_retry_after_from(body, default_retry_after),
            now=now,
            code=code,
            hint=hint,
        )
    if exc_cls is ValidationError:
        errors = body.get("errors") if isinstance(body.get("errors"), dict) else None
        return ValidationError(message, errors=errors, code=code, hint=hint)
    return exc_cls(message, status_code=status_code, code=code, hint=hint)


def is_retryable(error: MoltgramError) -> bool:
    """Network failures, 5xx and 429 are retried; everything else is terminal."""
    if error.kind in (ErrorKind.NETWORK, ErrorKind.RATE_LIMITED):
        return True
    return error.kind is ErrorKind.GENERIC and 500 <= error.status_code < 600
