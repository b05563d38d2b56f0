"""Device group domain object."""
import logging
from typing import TYPE_CHECKING, Optional

from ..api.resilience import gather_with_errors, try_or_default
from .base import MAX_CONCURRENT_REQUESTS, DomainObject, unchanged

if TYPE_CHECKING:
    from .device import Device
    from .location import Location

logger = logging.getLogger(__name__)


class DeviceGroup(DomainObject):
    """A named collection of devices."""

    type = "DeviceGroup"

    @property
    def id(self) -> int:
        return self._data["id"]

    @property
    def name(self) -> str:
        return self._data["name"]

    @property
    def description(self) -> str:
        return self._data["description"]

    @property
    def information(self) -> str:
        return self._data["information"]

    @property
    def image_url(self) -> Optional[str]:
        """URL of the group image, or None if not set."""
        return self._data["imageUrl"] or None

    @property
    def is_smart(self) -> bool:
        """Smart groups get their members from criteria set in the web UI."""
        return self._data["isSmartGroup"]

    @property
    def is_shared(self) -> bool:
        """Whether the group is shared with all locations."""
        return self._data["isShared"]

    @property
    def is_class(self) -> bool:
        return self._data["type"] == "class"

    @property
    def location_id(self) -> int:
        return self._data["locationId"]

    @property
    def count(self) -> int:
        return self._data["members"]

    async def update(self) -> None:
        self._replace(await self._api.get_device_group(self.id))

    @try_or_default([])
    async def get_devices(self) -> list["Device"]:
        devices = await self._api.get_devices(group_ids=[self.id])
        return [self._client.create_device(device) for device in devices]

    @try_or_default(None)
    async def get_location(self) -> Optional["Location"]:
        data = await self._api.get_location(self.location_id)
        return self._client.create_location(data)

    async def set_name(self, name: str) -> None:
        if not unchanged(self.name, name):
            await self._api.update_device_group(self.id, {"name": name})

    async def set_description(self, text: str) -> None:
        if not unchanged(self.description, text):
            await self._api.update_device_group(self.id, {"description": text})

    async def restart_devices(self) -> None:
        """Restart every device in this group.

        Failing to restart a device does not raise.
        """
        devices = await self.get_devices()
        _, errors = await gather_with_errors(
            *(device.restart() for device in devices),
            max_concurrent=MAX_CONCURRENT_REQUESTS,
        )
        if errors:
            logger.warning(f"Failed to restart {len(errors)} of {len(devices)} device(s) in group {self.name!r}")
