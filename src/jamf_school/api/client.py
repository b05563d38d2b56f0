#!/usr/bin/env python3
"""HTTP transport for the Jamf School API.

This module provides the low-level client every API call goes through. It
handles the common concerns of talking to a Jamf School instance:

    - Basic authentication from a network ID and API token
    - The protocol version header required on every request
    - Query string encoding (booleans as 0/1, None values dropped)
    - Status classification into typed exceptions via response hooks
    - Connection pooling via a shared aiohttp session

Design Philosophy:
    This client knows HOW to talk to Jamf School, but not WHAT to fetch.
    It has no knowledge of devices or users, and it does not validate
    response bodies. That belongs to JamfAPI, which composes this client.

    The service is inconsistent about error responses (404 can mean
    "not found", "no such endpoint" or "wrong protocol version", and the
    body may be JSON or plain text), so nothing is retried and every
    non-2xx response is turned into an exception for the caller to handle.

Usage:
    async with HTTPClient(id="1097109", token="...", url="https://x.jamfcloud.com/api") as http:
        data = await http.request("GET", "devices", query={"includeApps": True})
"""
import asyncio
import base64
import json
import logging
from typing import Any, Awaitable, Callable, Optional

import aiohttp

from .exceptions import (
    APIError,
    AuthError,
    ConnectionError,
    NetworkError,
    PermissionError,
    TimeoutError,
)

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "3"

# ============================================
# Query Encoding
# ============================================

def to_query(data: dict[str, Any]) -> Optional[dict[str, str]]:
    """Convert a mapping to query parameters.

    None values are skipped and booleans become "0"/"1". If nothing is left
    after filtering, None is returned so no query string is sent at all.
    """
    params = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = int(value)
        params[key] = str(value)
    return params or None


# ============================================
# Response Hooks
# ============================================

class Response:
    """The parts of an HTTP response the hooks and callers need."""

    def __init__(self, method: str, path: str, status: int, body: Any):
        self.method = method
        self.path = path
        self.status = status
        self.body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


ResponseHook = Callable[[Response], Awaitable[None]]


async def handle_permission_error(response: Response) -> None:
    """Raise PermissionError if the method is not allowed (405)."""
    if response.status == 405:
        raise PermissionError(method=response.method, endpoint=response.path)


async def handle_auth_error(response: Response) -> None:
    """Raise AuthError if the credentials were rejected (401)."""
    if response.status == 401:
        raise AuthError(endpoint=response.path, method=response.method)


async def handle_not_ok(response: Response) -> None:
    """Raise APIError for any other non-2xx response."""
    if not response.ok:
        raise APIError(
            f"{response.method} {response.path} failed with status {response.status}",
            status_code=response.status,
            endpoint=response.path,
            method=response.method,
            body=response.body,
        )


# Order matters: the specific statuses are classified before the catch-all.
DEFAULT_RESPONSE_HOOKS: tuple[ResponseHook, ...] = (
    handle_permission_error,
    handle_auth_error,
    handle_not_ok,
)


# ============================================
# The Client
# ============================================

class HTTPClient:
    """Async HTTP client for a Jamf School instance.

    The aiohttp session is created on the first request (or on entering the
    async context) and closed by close() or on leaving the context.

    Attributes:
        url: Base URL of the API (e.g. "https://school.jamfcloud.com/api")
        headers: Headers sent with every request
        timeout: Total request timeout in seconds
    """

    def __init__(
        self,
        id: str,
        token: str,
        url: str,
        timeout: float = 60.0,
        hooks: Optional[tuple[ResponseHook, ...]] = None,
    ):
        """Initialize the HTTPClient.

        Args:
            id: Jamf School network ID
            token: API token
            url: Base URL of the API
            timeout: Total request timeout in seconds
            hooks: Response hooks run in order after every response
        """
        credentials = base64.b64encode(f"{id}:{token}".encode()).decode()
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Basic {credentials}",
            "X-Server-Protocol-Version": PROTOCOL_VERSION,
        }
        self.hooks = hooks if hooks is not None else DEFAULT_RESPONSE_HOOKS

        self._session: Optional[aiohttp.ClientSession] = None

    def __repr__(self) -> str:
        return f"HTTPClient(url={self.url!r})"

    # ----------------------------------------
    # Session Lifecycle
    # ----------------------------------------

    async def __aenter__(self) -> "HTTPClient":
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                connector=aiohttp.TCPConnector(limit=10, limit_per_host=10),
                timeout=aiohttp.ClientTimeout(total=self.timeout, connect=10),
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    # ----------------------------------------
    # Requests
    # ----------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        query: Optional[dict[str, str]] = None,
        json_body: Any = None,
    ) -> Any:
        """Make a single HTTP request (no retry).

        Args:
            method: HTTP method (GET, POST, PUT)
            path: Path relative to the base URL (e.g. "devices/groups")
            query: Encoded query parameters, see to_query()
            json_body: JSON request body

        Returns:
            Parsed JSON response body

        Raises:
            AuthError: On 401
            PermissionError: On 405
            APIError: On any other non-2xx status
            ConnectionError: If the server cannot be reached
            TimeoutError: If the request times out
            NetworkError: On any other transport failure
        """
        path = "/" + path.lstrip("/")
        url = f"{self.url}{path}"
        session = self._get_session()

        logger.debug(f"{method} {path} params={query}")

        try:
            async with session.request(
                method=method,
                url=url,
                params=query,
                json=json_body,
            ) as raw:
                text = await raw.text()
                response = Response(method, path, raw.status, _parse_body(text))

        except asyncio.TimeoutError as e:
            raise TimeoutError(
                f"Request to {path} timed out",
                timeout_seconds=self.timeout,
                cause=e,
            )

        except aiohttp.ClientConnectionError as e:
            raise ConnectionError(
                f"Failed to connect to {self.url}",
                host=self.url,
                cause=e,
            )

        except aiohttp.ClientError as e:
            raise NetworkError(
                f"Network error during {method} {path}: {e}",
                cause=e,
            )

        for hook in self.hooks:
            await hook(response)

        return response.body


def _parse_body(text: str) -> Any:
    """Parse a body as JSON, falling back to the raw text."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


__all__ = [
    "DEFAULT_RESPONSE_HOOKS",
    "HTTPClient",
    "PROTOCOL_VERSION",
    "Response",
    "ResponseHook",
    "handle_auth_error",
    "handle_not_ok",
    "handle_permission_error",
    "to_query",
]
