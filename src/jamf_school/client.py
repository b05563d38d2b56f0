#!/usr/bin/env python3
"""High level client for Jamf School.

Client is the single place domain objects are created. Every object it
creates shares the same JamfAPI and holds a reference back to the Client,
so traversals (device -> owner -> groups) always wire dependencies the
same way.

Usage:
    client = create_client(id="1097109", token="...", url="https://school.jamfcloud.com/api")

    group = await client.get_device_group_by_name("IT Devices")
    if group:
        await group.restart_devices()
"""
import logging
from typing import Any, Iterable, Optional, Union

from .api.endpoints import JamfAPI, RawRecord
from .api.exceptions import DataError
from .domain import (
    App,
    Device,
    DeviceGroup,
    Location,
    Profile,
    User,
    UserGroup,
)
from .domain.base import id_of

logger = logging.getLogger(__name__)


class Client:
    """Factory and entry point for domain objects.

    Lookups on the client are direct, so their errors propagate. Only the
    relationship traversals on domain objects are best effort.

    Attributes:
        api: The JamfAPI shared by every object this client creates
    """

    type = "Client"

    def __init__(self, api: JamfAPI):
        self.api = api

    def __repr__(self) -> str:
        return f"Client(api={self.api!r})"

    async def __aenter__(self) -> "Client":
        await self.api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.api.close()

    # ----------------------------------------
    # Factory
    # ----------------------------------------

    def create_device(self, data: RawRecord) -> Device:
        return Device(self.api, self, data)

    def create_user(self, data: RawRecord) -> User:
        return User(self.api, self, data)

    def create_device_group(self, data: RawRecord) -> DeviceGroup:
        return DeviceGroup(self.api, self, data)

    def create_user_group(self, data: RawRecord) -> UserGroup:
        return UserGroup(self.api, self, data)

    def create_location(self, data: RawRecord) -> Location:
        return Location(self.api, self, data)

    def create_app(self, data: RawRecord) -> App:
        return App(self.api, self, data)

    def create_profile(self, data: RawRecord) -> Profile:
        return Profile(self.api, self, data)

    # ----------------------------------------
    # Devices
    # ----------------------------------------

    async def get_device(self, udid: str) -> Device:
        return self.create_device(await self.api.get_device(udid))

    async def get_device_by_serial_number(self, serial_number: str) -> Optional[Device]:
        """Return the device with a serial number, or None if there is none.

        Raises:
            DataError: If more than one device has the serial number
        """
        devices = await self.api.get_devices(serial_number=serial_number)
        if len(devices) > 1:
            raise DataError(
                f"Expected at most 1 device, got {len(devices)}",
                details={"serial_number": serial_number},
            )
        return self.create_device(devices[0]) if devices else None

    async def get_devices(self, **filters: Any) -> list[Device]:
        """List devices. Accepts the filters of JamfAPI.get_devices()."""
        devices = await self.api.get_devices(**filters)
        return [self.create_device(device) for device in devices]

    async def get_devices_in_groups(
        self,
        groups: Iterable[Union[int, DeviceGroup, Any]],
    ) -> list[Device]:
        """List devices that are in any of the given device groups."""
        ids = [id_of(group) for group in groups]
        if not ids:
            return []
        return await self.get_devices(group_ids=ids)

    async def get_device_group(self, id: int) -> DeviceGroup:
        return self.create_device_group(await self.api.get_device_group(id))

    async def get_device_groups(self) -> list[DeviceGroup]:
        groups = await self.api.get_device_groups()
        return [self.create_device_group(group) for group in groups]

    async def get_device_group_by_name(self, name: str) -> Optional[DeviceGroup]:
        """Return the first device group with this exact name, or None."""
        for group in await self.api.get_device_groups():
            if group["name"] == name:
                return self.create_device_group(group)
        return None

    # ----------------------------------------
    # Users
    # ----------------------------------------

    async def get_user(self, id: int) -> User:
        return self.create_user(await self.api.get_user(id))

    async def get_users(self) -> list[User]:
        return [self.create_user(user) for user in await self.api.get_users()]

    async def get_user_group(self, id: int) -> UserGroup:
        return self.create_user_group(await self.api.get_user_group(id))

    async def get_user_groups(self) -> list[UserGroup]:
        groups = await self.api.get_user_groups()
        return [self.create_user_group(group) for group in groups]

    # ----------------------------------------
    # Locations, Apps, Profiles
    # ----------------------------------------

    async def get_location(self, id: int) -> Location:
        return self.create_location(await self.api.get_location(id))

    async def get_locations(self) -> list[Location]:
        locations = await self.api.get_locations()
        return [self.create_location(location) for location in locations]

    async def get_app(self, id: int) -> App:
        return self.create_app(await self.api.get_app(id))

    async def get_apps(self) -> list[App]:
        return [self.create_app(app) for app in await self.api.get_apps()]

    async def get_profile(self, id: int) -> Profile:
        return self.create_profile(await self.api.get_profile(id))

    async def get_profiles(self) -> list[Profile]:
        profiles = await self.api.get_profiles()
        return [self.create_profile(profile) for profile in profiles]
