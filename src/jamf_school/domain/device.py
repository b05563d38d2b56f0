"""Device domain object."""
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Optional, Union

from ..api.exceptions import DataError, SchemaError, ValidationError
from ..api.resilience import try_or_default
from .base import DomainObject, id_of, unchanged

if TYPE_CHECKING:
    from .app import App
    from .device_group import DeviceGroup
    from .location import Location
    from .user import User

logger = logging.getLogger(__name__)

# Matches the service's region coordinate format, e.g. "-33.87,151.21".
COORDINATES_PATTERN = re.compile(
    r"^([+-]?\d{1,3}(?:\.\d{1,15})?),([+-]?\d{1,3}(?:\.\d{1,15})?)$"
)


@dataclass(frozen=True)
class Enrollment:
    """How a device was enrolled, and whether enrollment is still pending."""

    type: Literal["manual", "ac2", "dep"]
    pending: bool


ENROLLMENTS: dict[str, Enrollment] = {
    "manual": Enrollment("manual", pending=False),
    "ac2": Enrollment("ac2", pending=False),
    "ac2Pending": Enrollment("ac2", pending=True),
    "dep": Enrollment("dep", pending=False),
    "depPending": Enrollment("dep", pending=True),
}


@dataclass(frozen=True)
class Region:
    """A named region with its coordinates."""

    name: str
    latitude: float
    longitude: float


def parse_region(region: dict[str, Any]) -> Optional[Region]:
    """Parse the raw region object of a device.

    An empty name means the device has no region. A name with coordinates
    in any other format than "lat,long" is corrupt data.

    Raises:
        DataError: If the coordinates cannot be parsed
    """
    name = region["string"]
    if name == "":
        return None

    coordinates = region.get("coordinates")
    match = COORDINATES_PATTERN.match(coordinates) if coordinates is not None else None
    if match is None:
        raise DataError(
            f"Unexpected coordinate format: {coordinates!r}",
            details={"region": name},
        )

    return Region(
        name=name,
        latitude=float(match.group(1)),
        longitude=float(match.group(2)),
    )


class Device(DomainObject):
    """A single managed device.

    Records come from GET /devices. update() fetches by serial number, so
    the record always has that route's shape.
    """

    type = "Device"

    def _identity(self) -> tuple[str, Any]:
        return "udid", self.udid

    # ----------------------------------------
    # Properties
    # ----------------------------------------

    @property
    def udid(self) -> str:
        return self._data["UDID"]

    @property
    def serial_number(self) -> str:
        return self._data["serialNumber"]

    @property
    def name(self) -> str:
        return self._data["name"]

    @property
    def is_managed(self) -> bool:
        return self._data["isManaged"]

    @property
    def is_supervised(self) -> bool:
        return self._data["isSupervised"]

    @property
    def device_class(self) -> str:
        return self._data["class"]

    @property
    def asset_tag(self) -> str:
        return self._data["assetTag"]

    @property
    def notes(self) -> str:
        return self._data["notes"]

    @property
    def os(self) -> str:
        """OS name and version, e.g. "iOS 15.1"."""
        return f"{self.os_prefix} {self.os_version}"

    @property
    def os_prefix(self) -> str:
        return self._data["os"]["prefix"]

    @property
    def os_version(self) -> str:
        return self._data["os"]["version"]

    @property
    def model_name(self) -> str:
        return self._data["model"]["name"]

    @property
    def model_identifier(self) -> str:
        return self._data["model"]["identifier"]

    @property
    def model_type(self) -> str:
        return self._data["model"]["type"]

    @property
    def battery_percentage(self) -> float:
        return self._data["batteryLevel"]

    @property
    def storage_total(self) -> float:
        return self._data["totalCapacity"]

    @property
    def storage_remaining(self) -> float:
        return self._data["availableCapacity"]

    @property
    def enrollment(self) -> Enrollment:
        return ENROLLMENTS[self._data["enrollType"]]

    @property
    def location_id(self) -> int:
        return self._data["locationId"]

    @property
    def owner_id(self) -> int:
        """ID of the owning user, 0 when the device has no owner."""
        return self._data["owner"]["id"]

    @property
    def owner_name(self) -> str:
        return self._data["owner"]["name"]

    @property
    def group_names(self) -> list[str]:
        return list(self._data["groups"])

    @property
    def last_checkin(self) -> str:
        return self._data["lastCheckin"]

    def get_region(self) -> Optional[Region]:
        """Return the device's region, or None if it has none.

        Raises:
            DataError: If the coordinates are not in "lat,long" format
        """
        return parse_region(self._data["region"])

    # ----------------------------------------
    # Refresh
    # ----------------------------------------

    async def update(self) -> None:
        """Fetch this device again and replace its record."""
        devices = await self._api.get_devices(serial_number=self.serial_number)

        if len(devices) != 1:
            raise DataError(
                f"Expected 1 device, got {len(devices)}",
                details={"serial_number": self.serial_number},
            )
        if devices[0]["UDID"] != self.udid:
            raise DataError(
                "Serial number lookup returned a different device",
                details={"udid": self.udid, "returned": devices[0]["UDID"]},
            )

        self._replace(devices[0])

    # ----------------------------------------
    # Relationships (best effort)
    # ----------------------------------------

    async def get_owner(self) -> Optional["User"]:
        """Return the owning user, or None if unowned or unavailable."""
        if self.owner_id == 0:
            return None
        return await self._fetch_owner()

    @try_or_default(None)
    async def _fetch_owner(self) -> Optional["User"]:
        data = await self._api.get_user(self.owner_id)
        return self._client.create_user(data)

    @try_or_default([])
    async def get_groups(self) -> list["DeviceGroup"]:
        """Return the device groups this device is in."""
        all_groups = await self._api.get_device_groups()
        names = set(self._data["groups"])
        return [
            self._client.create_device_group(group)
            for group in all_groups
            if group["name"] in names
        ]

    @try_or_default([])
    async def get_apps(self) -> list["App"]:
        """Return the apps installed on this device.

        Raises:
            SchemaError: If the device record came back without its apps
        """
        all_apps, data = await asyncio.gather(
            self._api.get_apps(),
            self._api.get_device(self.udid, include_apps=True),
        )

        if data.get("apps") is None:
            raise SchemaError("GET /devices/:udid", [{
                "loc": ("device", "apps"),
                "msg": "Field required when includeApps is set",
                "type": "missing",
            }])

        identifiers = {app["identifier"] for app in data["apps"]}
        return [
            self._client.create_app(app)
            for app in all_apps
            if app["bundleId"] in identifiers
        ]

    @try_or_default(None)
    async def get_location(self) -> Optional["Location"]:
        """Return the location this device belongs to."""
        data = await self._api.get_location(self.location_id)
        return self._client.create_location(data)

    # ----------------------------------------
    # Writes (the record is not refreshed)
    # ----------------------------------------

    async def set_owner(self, user: Union[int, "User", Any]) -> None:
        """Assign this device to a user.

        Raises:
            ValidationError: If the user ID is 0, which would remove the
                owner (use remove_owner() for that)
        """
        user_id = id_of(user)
        if user_id == 0:
            raise ValidationError(
                "Using ID 0 would remove the owner. "
                "If this is intentional, use Device.remove_owner()",
                field="user",
                value=user_id,
            )
        if not unchanged(self.owner_id, user_id):
            await self._api.set_device_owner(self.udid, user_id)

    async def remove_owner(self) -> None:
        """Unassign this device from its owner."""
        if not unchanged(self.owner_id, 0):
            await self._api.set_device_owner(self.udid, 0)

    async def set_location(self, location: Union[int, "Location", Any]) -> None:
        """Move this device (and, by default, its owner) to a location."""
        location_id = id_of(location)
        if not unchanged(self.location_id, location_id):
            await self._api.move_device(self.udid, location_id)

    async def set_asset_tag(self, text: str) -> None:
        if not unchanged(self.asset_tag, text):
            await self._api.update_device(self.udid, {"assetTag": text})

    async def set_notes(self, text: str) -> None:
        if not unchanged(self.notes, text):
            await self._api.update_device(self.udid, {"notes": text})

    # ----------------------------------------
    # Commands
    # ----------------------------------------

    async def restart(self, clear_passcode: bool = False) -> None:
        options = {"clearPasscode": True} if clear_passcode else None
        await self._api.restart_device(self.udid, options)

    async def wipe(self, clear_activation_lock: bool = False) -> None:
        """Erase this device. This cannot be undone."""
        options = {"clearActivationLock": True} if clear_activation_lock else None
        await self._api.wipe_device(self.udid, options)
