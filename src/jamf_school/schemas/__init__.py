"""Schema Registry: one compiled response validator per route.

Routes are keyed by "METHOD /path" using the service's path patterns,
e.g. "GET /devices/:udid". Validators are built once, when this module is
imported, from the pydantic models in the sibling modules.

Usage:
    from jamf_school import schemas

    schemas.assert_valid("GET /devices", data)   # raises SchemaError

    validator = schemas.compile("GET /users/:id")
    if not validator.check(data):
        print(validator.errors)
"""
import logging
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..api.exceptions import SchemaError
from .apps import AppRecord, AppsResponse
from .base import CodeMessageResponse, StrictModel
from .devices import (
    DeviceGroupResponse,
    DeviceGroupsResponse,
    DeviceResponse,
    DevicesResponse,
    RestartDeviceResponse,
    WipeDeviceResponse,
)
from .locations import LocationRecord, LocationsResponse
from .profiles import ProfileRecord, ProfilesResponse
from .users import (
    UserGroupResponse,
    UserGroupsResponse,
    UserResponse,
    UsersResponse,
)

logger = logging.getLogger(__name__)


class Validator:
    """A compiled validator for one route.

    `check()` returns a bool and records the structured errors of that call
    in `errors` (empty after a successful check).
    """

    def __init__(self, route: str, model: type[StrictModel]):
        self.route = route
        self.model = model
        self._adapter = TypeAdapter(model)
        self.errors: list[dict[str, Any]] = []

    def check(self, candidate: Any) -> bool:
        try:
            self._adapter.validate_python(candidate)
        except PydanticValidationError as e:
            self.errors = e.errors(include_url=False)
            return False
        self.errors = []
        return True

    def __repr__(self) -> str:
        return f"Validator(route={self.route!r}, model={self.model.__name__})"


_ROUTE_MODELS: dict[str, type[StrictModel]] = {
    # Users
    "GET /users": UsersResponse,
    "GET /users/:id": UserResponse,
    "PUT /users/:id": CodeMessageResponse,
    "PUT /users/:id/migrate": CodeMessageResponse,
    "GET /users/groups": UserGroupsResponse,
    "GET /users/groups/:id": UserGroupResponse,
    "PUT /users/groups/:id": CodeMessageResponse,
    # Devices
    "GET /devices": DevicesResponse,
    "GET /devices/:udid": DeviceResponse,
    "POST /devices/:udid/restart": RestartDeviceResponse,
    "POST /devices/:udid/wipe": WipeDeviceResponse,
    "POST /devices/:udid/details": CodeMessageResponse,
    "PUT /devices/:udid/owner": CodeMessageResponse,
    "PUT /devices/:udid/migrate": CodeMessageResponse,
    "PUT /devices/migrate": CodeMessageResponse,
    "GET /devices/groups": DeviceGroupsResponse,
    "GET /devices/groups/:id": DeviceGroupResponse,
    "PUT /devices/groups/:id": CodeMessageResponse,
    # Apps, locations, profiles
    "GET /apps": AppsResponse,
    "GET /apps/:id": AppRecord,
    "GET /locations": LocationsResponse,
    "GET /locations/:id": LocationRecord,
    "GET /profiles": ProfilesResponse,
    "GET /profiles/:id": ProfileRecord,
}

_VALIDATORS: dict[str, Validator] = {
    route: Validator(route, model) for route, model in _ROUTE_MODELS.items()
}

ROUTES: tuple[str, ...] = tuple(_ROUTE_MODELS)


def compile(route: str) -> Validator:
    """Return the validator for a route.

    Raises:
        KeyError: If no schema is registered for the route
    """
    try:
        return _VALIDATORS[route]
    except KeyError:
        raise KeyError(f"No schema registered for route {route!r}") from None


def is_valid(route: str, candidate: Any) -> bool:
    """Check a candidate against a route's schema without raising."""
    return compile(route).check(candidate)


def assert_valid(route: str, candidate: Any) -> None:
    """Validate a full response body against its route's schema.

    Raises:
        SchemaError: If the candidate does not match (carries route and errors)
        KeyError: If no schema is registered for the route
    """
    validator = compile(route)
    if not validator.check(candidate):
        errors = list(validator.errors)
        logger.error(f"Schema validation failed for {route}: {len(errors)} error(s)")
        raise SchemaError(route, errors)


__all__ = [
    "ROUTES",
    "Validator",
    "assert_valid",
    "compile",
    "is_valid",
]
