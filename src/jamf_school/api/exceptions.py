#!/usr/bin/env python3
"""Exception Hierarchy for the Jamf School API client.

Design Principles:
    - All exceptions inherit from JamfError
    - Exceptions preserve context (original error, timestamps, details)
    - Exceptions are categorized by recoverability
    - Input and contract violations are never recoverable

Exception Hierarchy:
    JamfError (base)
    ├── ConfigurationError (unrecoverable - fix config)
    ├── ValidationError (unrecoverable - bad input, no request was sent)
    ├── SchemaError (unrecoverable - response broke its route contract)
    ├── DataError (unrecoverable - corrupt data inside a valid response)
    ├── APIError (remote failure, non-2xx)
    │   ├── AuthError (401)
    │   └── PermissionError (405)
    └── NetworkError (remote failure below HTTP)
        ├── ConnectionError
        └── TimeoutError

Only APIError and NetworkError (see RECOVERABLE_ERRORS) are treated as
remote conditions by best-effort lookups. Everything else signals a
programming or contract defect and always propagates.
"""
from datetime import datetime, timezone
from typing import Any, Optional

# ============================================
# Base Exception
# ============================================

class JamfError(Exception):
    """Base exception for all Jamf School client errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "SCHEMA_ERROR")
        details: Additional context as a dictionary
        timestamp: When the error occurred
        cause: The original exception that caused this error
        recoverable: Whether the failure is a remote condition worth retrying
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)
        self.cause = cause
        self.recoverable = recoverable

        if cause:
            self.__cause__ = cause

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.insert(0, f"[{self.code}]")
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "recoverable": self.recoverable,
            "cause": str(self.cause) if self.cause else None,
        }


# ============================================
# Local Errors (Unrecoverable)
# ============================================

class ConfigurationError(JamfError):
    """Raised when credentials or the server URL are missing."""

    def __init__(
        self,
        message: str,
        missing_keys: Optional[list[str]] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if missing_keys:
            details["missing_keys"] = missing_keys
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details=details,
            recoverable=False,
            **kwargs,
        )
        self.missing_keys = missing_keys or []


class ValidationError(JamfError):
    """Raised when a caller passes input that can never be valid.

    Always raised before any request is made.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)[:100]
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details=details,
            recoverable=False,
            **kwargs,
        )
        self.field = field
        self.value = value


class SchemaError(JamfError):
    """Raised when a response does not match the schema of its route.

    Attributes:
        route: Route key, e.g. "GET /devices/:udid"
        errors: Structured validation errors (pydantic error dicts)
    """

    def __init__(
        self,
        route: str,
        errors: Optional[list[dict[str, Any]]] = None,
        **kwargs,
    ):
        errors = errors or []
        details = kwargs.pop("details", {})
        details["route"] = route
        details["error_count"] = len(errors)
        if errors:
            details["first_error"] = _describe_error(errors[0])
        super().__init__(
            f"Response for {route} does not match its schema",
            code="SCHEMA_ERROR",
            details=details,
            recoverable=False,
            **kwargs,
        )
        self.route = route
        self.errors = errors


def _describe_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
    return f"{location}: {error.get('msg', 'invalid')}"


class DataError(JamfError):
    """Raised when a schema-valid response holds data that cannot be used.

    Examples: a region coordinate string in an unknown format, or a lookup
    by serial number that returned more than one device.
    """

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            code="DATA_ERROR",
            recoverable=False,
            **kwargs,
        )


# ============================================
# API Errors
# ============================================

class APIError(JamfError):
    """Raised when the service answers with a non-2xx status.

    The service is inconsistent about error bodies, so `body` holds the
    parsed JSON when the response was JSON and the raw text otherwise.

    Attributes:
        status_code: HTTP status code
        endpoint: Path that was requested
        method: HTTP method
        body: Parsed JSON body or text
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        endpoint: Optional[str] = None,
        body: Any = None,
        method: str = "GET",
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        details["status_code"] = status_code
        if endpoint:
            details["endpoint"] = endpoint
        if method:
            details["method"] = method
        if body:
            text = body if isinstance(body, str) else repr(body)
            details["body"] = text[:500] if len(text) > 500 else text

        kwargs.setdefault("recoverable", status_code in (429, 500, 502, 503, 504))
        kwargs.setdefault("code", f"API_ERROR_{status_code}")

        super().__init__(
            message,
            details=details,
            **kwargs,
        )
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body
        self.method = method

    @property
    def route(self) -> str:
        """The originating request as "METHOD /path"."""
        return f"{self.method} {self.endpoint}"


class AuthError(APIError):
    """Raised when the service rejects the credentials (HTTP 401)."""

    def __init__(
        self,
        message: str = "Invalid credentials",
        **kwargs,
    ):
        kwargs.setdefault("status_code", 401)
        super().__init__(
            message,
            code="AUTH_ERROR",
            recoverable=False,
            **kwargs,
        )


class PermissionError(APIError):
    """Raised when the caller may not use a method on a path (HTTP 405)."""

    def __init__(
        self,
        method: str,
        endpoint: str,
        **kwargs,
    ):
        kwargs.setdefault("status_code", 405)
        super().__init__(
            f"Not permitted to {method} {endpoint}",
            endpoint=endpoint,
            method=method,
            code="PERMISSION_ERROR",
            recoverable=False,
            **kwargs,
        )


# ============================================
# Network Errors
# ============================================

class NetworkError(JamfError):
    """Base class for failures below HTTP (connection, timeout)."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("recoverable", True)
        super().__init__(message, **kwargs)


class ConnectionError(NetworkError):
    """Raised when connection to the server fails."""

    def __init__(
        self,
        message: str = "Failed to connect to server",
        host: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if host:
            details["host"] = host
        super().__init__(
            message,
            code="CONNECTION_ERROR",
            details=details,
            **kwargs,
        )


class TimeoutError(NetworkError):
    """Raised when a request times out."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout_seconds: Optional[float] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if timeout_seconds:
            details["timeout_seconds"] = timeout_seconds
        super().__init__(
            message,
            code="TIMEOUT_ERROR",
            details=details,
            **kwargs,
        )


# Remote failures that best-effort lookups may swallow.
RECOVERABLE_ERRORS: tuple[type[JamfError], ...] = (APIError, NetworkError)


__all__ = [
    "JamfError",
    "ConfigurationError",
    "ValidationError",
    "SchemaError",
    "DataError",
    "APIError",
    "AuthError",
    "PermissionError",
    "NetworkError",
    "ConnectionError",
    "TimeoutError",
    "RECOVERABLE_ERRORS",
]
