"""Location domain object."""
import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from ..api.endpoints import JamfAPI
from ..api.resilience import chunked, gather_with_errors, try_or_default
from .base import MAX_CONCURRENT_REQUESTS, DomainObject, id_of, udid_of

if TYPE_CHECKING:
    from .app import App
    from .device import Device
    from .device_group import DeviceGroup
    from .profile import Profile
    from .user import User
    from .user_group import UserGroup

logger = logging.getLogger(__name__)


class Location(DomainObject):
    """A physical site. Every record in Jamf School belongs to a location.

    Only the name is required when a location is created, so the address
    properties may be None.
    """

    type = "Location"

    @property
    def id(self) -> int:
        """The ID of this location, starting from zero."""
        return self._data["id"]

    @property
    def name(self) -> str:
        return self._data["name"]

    @property
    def is_district(self) -> bool:
        return self._data["isDistrict"]

    @property
    def street_name(self) -> Optional[str]:
        return self._data["streetName"]

    @property
    def street_number(self) -> Optional[str]:
        return self._data["streetNumber"]

    @property
    def postal_code(self) -> Optional[str]:
        return self._data["postalCode"]

    @property
    def city(self) -> Optional[str]:
        return self._data["city"]

    @property
    def asm_identifier(self) -> Optional[str]:
        """The ID assigned to this location in Apple School Manager."""
        return self._data["asmIdentifier"]

    @property
    def school_number(self) -> Optional[str]:
        """Arbitrary school number; not necessarily numeric."""
        return self._data["schoolNumber"]

    async def update(self) -> None:
        self._replace(await self._api.get_location(self.id))

    # ----------------------------------------
    # Relationships (best effort)
    # ----------------------------------------

    @try_or_default([])
    async def get_devices(self) -> list["Device"]:
        devices = await self._api.get_devices(location_id=self.id)
        return [self._client.create_device(device) for device in devices]

    @try_or_default([])
    async def get_device_groups(self) -> list["DeviceGroup"]:
        groups = await self._api.get_device_groups()
        return [self._client.create_device_group(g) for g in self._here(groups)]

    @try_or_default([])
    async def get_users(self) -> list["User"]:
        users = await self._api.get_users()
        return [self._client.create_user(u) for u in self._here(users)]

    @try_or_default([])
    async def get_user_groups(self) -> list["UserGroup"]:
        groups = await self._api.get_user_groups()
        return [self._client.create_user_group(g) for g in self._here(groups)]

    @try_or_default([])
    async def get_apps(self) -> list["App"]:
        apps = await self._api.get_apps()
        return [self._client.create_app(a) for a in self._here(apps)]

    @try_or_default([])
    async def get_profiles(self) -> list["Profile"]:
        profiles = await self._api.get_profiles()
        return [self._client.create_profile(p) for p in self._here(profiles)]

    def _here(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [record for record in records if record["locationId"] == self.id]

    # ----------------------------------------
    # Bulk operations (individual failures are logged, not raised)
    # ----------------------------------------

    async def move_devices(self, devices: Iterable[Union[str, "Device", Any]]) -> None:
        """Move devices here, along with their owners and the owners' other
        devices.

        Devices already in this location are skipped. Accepts UDIDs or
        objects with a `udid` attribute.
        """
        udids = [
            udid_of(device)
            for device in devices
            if getattr(device, "location_id", None) != self.id
        ]
        if not udids:
            return

        batches = chunked(udids, JamfAPI.MAX_DEVICES_PER_MOVE)
        _, errors = await gather_with_errors(
            *(self._api.move_devices(batch, self.id) for batch in batches),
            max_concurrent=MAX_CONCURRENT_REQUESTS,
        )
        if errors:
            logger.warning(f"Failed to move {len(errors)} of {len(batches)} batch(es) to location {self.id}")

    async def move_users(self, users: Iterable[Union[int, "User", Any]]) -> None:
        """Move users and their devices here.

        Users already in this location are skipped. Accepts user IDs or
        objects with an `id` attribute.
        """
        ids = [
            id_of(user)
            for user in users
            if getattr(user, "location_id", None) != self.id
        ]
        _, errors = await gather_with_errors(
            *(self._api.move_user(user_id, self.id) for user_id in ids),
            max_concurrent=MAX_CONCURRENT_REQUESTS,
        )
        if errors:
            logger.warning(f"Failed to move {len(errors)} of {len(ids)} user(s) to location {self.id}")

    async def restart_devices(self) -> None:
        """Restart every device in this location.

        Failing to restart a device does not raise.
        """
        devices = await self.get_devices()
        _, errors = await gather_with_errors(
            *(device.restart() for device in devices),
            max_concurrent=MAX_CONCURRENT_REQUESTS,
        )
        if errors:
            logger.warning(f"Failed to restart {len(errors)} of {len(devices)} device(s) in location {self.id}")
