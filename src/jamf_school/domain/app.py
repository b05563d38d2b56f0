"""App domain object."""
from typing import TYPE_CHECKING, Optional

from ..api.exceptions import DataError
from ..api.resilience import try_or_default
from .base import DomainObject

if TYPE_CHECKING:
    from .device import Device
    from .location import Location


class App(DomainObject):
    """An app (or book) known to Jamf School."""

    type = "App"

    @property
    def id(self) -> int:
        return self._data["id"]

    @property
    def app_id(self) -> Optional[int]:
        """The store ID ("Adam ID"). None for in-house and enterprise apps."""
        return self._data.get("adamId")

    @property
    def bundle_id(self) -> str:
        return self._data["bundleId"]

    @property
    def icon(self) -> str:
        return self._data["icon"]

    @property
    def is_book(self) -> bool:
        return self._data["isBook"]

    @property
    def is_trashed(self) -> bool:
        return self._data.get("isDeleted") or False

    @property
    def name(self) -> str:
        return self._data["name"]

    @property
    def price(self) -> float:
        return self._data.get("price") or 0

    @property
    def version(self) -> str:
        """Version string; not necessarily SemVer."""
        return self._data["version"]

    @property
    def platform(self) -> str:
        return self._data["platform"]

    @property
    def location_id(self) -> int:
        return self._data["locationId"]

    async def update(self) -> None:
        self._replace(await self._api.get_app(self.id))

    @try_or_default([])
    async def get_devices(self) -> list["Device"]:
        """Return the devices this app is installed on.

        Device records don't carry app IDs, only bundle IDs, so devices are
        matched on this app's bundle ID.

        Raises:
            DataError: If a device came back without its app list
        """
        devices = await self._api.get_devices(include_apps=True)

        found = []
        for device in devices:
            apps = device.get("apps")
            if not isinstance(apps, list):
                raise DataError(
                    "Expected an array of apps",
                    details={"udid": device["UDID"]},
                )
            if any(app["identifier"] == self.bundle_id for app in apps):
                found.append(device)

        return [self._client.create_device(device) for device in found]

    @try_or_default(None)
    async def get_location(self) -> Optional["Location"]:
        data = await self._api.get_location(self.location_id)
        return self._client.create_location(data)
