"""Jamf School API modules.

This package provides the transport and route layer of the client.

Classes:
    HTTPClient: aiohttp transport with Basic auth and status classification
    JamfAPI: One coroutine per remote route, with response validation

Exceptions:
    JamfError: Base exception for all client errors
    ConfigurationError: Missing credentials or URL
    ValidationError: Invalid input, raised before any request
    SchemaError: Response does not match its route's schema
    DataError: Unusable data inside a valid response
    APIError: Non-2xx response
    AuthError: Invalid credentials (401)
    PermissionError: Method not permitted (405)
    NetworkError: Connection or timeout failures
"""
from .client import DEFAULT_RESPONSE_HOOKS, HTTPClient, Response, to_query
from .endpoints import JamfAPI, RawRecord
from .exceptions import (
    RECOVERABLE_ERRORS,
    APIError,
    AuthError,
    ConfigurationError,
    ConnectionError,
    DataError,
    JamfError,
    NetworkError,
    PermissionError,
    SchemaError,
    TimeoutError,
    ValidationError,
)
from .resilience import chunked, gather_with_errors, try_or_default
from .validation import (
    assert_valid_id,
    assert_valid_udid,
    is_valid_id,
    is_valid_udid,
)

__all__ = [
    # Transport
    "HTTPClient",
    "Response",
    "DEFAULT_RESPONSE_HOOKS",
    "to_query",
    # Routes
    "JamfAPI",
    "RawRecord",
    # Exceptions
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
    # Validation
    "is_valid_udid",
    "is_valid_id",
    "assert_valid_udid",
    "assert_valid_id",
    # Resilience
    "try_or_default",
    "gather_with_errors",
    "chunked",
]
