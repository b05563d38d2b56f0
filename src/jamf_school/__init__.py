"""Typed async client for the Jamf School API.

    import jamf_school

    async with jamf_school.create_client() as client:  # reads JAMF_SCHOOL_* env vars
        for device in await client.get_devices(is_managed=True):
            print(device.name, device.os)

Two layers are available:

    JamfAPI: one coroutine per route, returning validated raw records
    Client:  domain objects (Device, User, ...) built on top of JamfAPI
"""
from typing import Optional

from .api import (
    APIError,
    AuthError,
    ConfigurationError,
    DataError,
    HTTPClient,
    JamfAPI,
    JamfError,
    NetworkError,
    PermissionError,
    SchemaError,
    ValidationError,
    is_valid_id,
    is_valid_udid,
)
from .client import Client
from .config import Credentials
from .domain import (
    App,
    Device,
    DeviceGroup,
    Enrollment,
    Location,
    Profile,
    ProfileSchedule,
    Region,
    User,
    UserGroup,
)

__version__ = "0.1.0"


def create_api(
    id: Optional[str] = None,
    token: Optional[str] = None,
    url: Optional[str] = None,
) -> JamfAPI:
    """Create a route-level API object.

    Missing arguments are read from JAMF_SCHOOL_ID, JAMF_SCHOOL_TOKEN and
    JAMF_SCHOOL_URL.

    Raises:
        ConfigurationError: If a credential is missing
    """
    credentials = Credentials.resolve(id=id, token=token, url=url)
    http = HTTPClient(id=credentials.id, token=credentials.token, url=credentials.url)
    return JamfAPI(http)


def create_client(
    api: Optional[JamfAPI] = None,
    *,
    id: Optional[str] = None,
    token: Optional[str] = None,
    url: Optional[str] = None,
) -> Client:
    """Create a high level client, from an existing API or from credentials."""
    if api is None:
        api = create_api(id=id, token=token, url=url)
    return Client(api)


__all__ = [
    "create_api",
    "create_client",
    "Client",
    "Credentials",
    "HTTPClient",
    "JamfAPI",
    # Domain
    "App",
    "Device",
    "DeviceGroup",
    "Enrollment",
    "Location",
    "Profile",
    "ProfileSchedule",
    "Region",
    "User",
    "UserGroup",
    # Errors
    "JamfError",
    "ConfigurationError",
    "ValidationError",
    "SchemaError",
    "DataError",
    "APIError",
    "AuthError",
    "PermissionError",
    "NetworkError",
    # Validation
    "is_valid_id",
    "is_valid_udid",
]
