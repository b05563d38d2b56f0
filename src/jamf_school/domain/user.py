"""User domain object."""
import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from ..api.resilience import gather_with_errors, try_or_default
from .base import MAX_CONCURRENT_REQUESTS, DomainObject, id_of, unchanged

if TYPE_CHECKING:
    from .device import Device
    from .location import Location
    from .user_group import UserGroup

logger = logging.getLogger(__name__)


class User(DomainObject):
    """A single user (student, teacher, parent or staff)."""

    type = "User"

    @property
    def id(self) -> int:
        return self._data["id"]

    @property
    def email(self) -> str:
        return self._data["email"]

    @property
    def username(self) -> str:
        return self._data["username"]

    @property
    def domain(self) -> str:
        """The LDAP domain the user was imported from, or ""."""
        return self._data["domain"]

    @property
    def name(self) -> str:
        return self._data["name"]

    @property
    def first_name(self) -> str:
        return self._data["firstName"]

    @property
    def last_name(self) -> str:
        return self._data["lastName"]

    @property
    def notes(self) -> str:
        return self._data["notes"]

    @property
    def is_trashed(self) -> bool:
        return self._data.get("inTrash") or False

    @property
    def is_excluded_from_restrictions(self) -> bool:
        """Whether teacher restrictions do not apply to this user."""
        return self._data["exclude"]

    @property
    def location_id(self) -> int:
        return self._data["locationId"]

    @property
    def device_count(self) -> int:
        return self._data["deviceCount"]

    @property
    def group_ids(self) -> list[int]:
        return list(self._data["groupIds"])

    @property
    def class_ids(self) -> list[int]:
        """IDs of the groups this user teaches."""
        return list(self._data["teacherGroups"])

    @property
    def child_ids(self) -> list[int]:
        return list(self._data["children"])

    async def update(self) -> None:
        """Fetch this user again and replace its record."""
        self._replace(await self._api.get_user(self.id))

    # ----------------------------------------
    # Relationships (best effort)
    # ----------------------------------------

    @try_or_default([])
    async def get_devices(self) -> list["Device"]:
        """Return the devices owned by this user."""
        devices = await self._api.get_devices(owner_id=self.id)
        return [self._client.create_device(device) for device in devices]

    @try_or_default([])
    async def get_groups(self) -> list["UserGroup"]:
        """Return the groups this user is a member of."""
        return await self._groups_with_ids(self._data["groupIds"])

    @try_or_default([])
    async def get_classes(self) -> list["UserGroup"]:
        """Return the groups this user teaches."""
        return await self._groups_with_ids(self._data["teacherGroups"])

    async def _groups_with_ids(self, ids: Iterable[int]) -> list["UserGroup"]:
        wanted = set(ids)
        groups = await self._api.get_user_groups()
        return [
            self._client.create_user_group(group)
            for group in groups
            if group["id"] in wanted
        ]

    @try_or_default(None)
    async def get_location(self) -> Optional["Location"]:
        data = await self._api.get_location(self.location_id)
        return self._client.create_location(data)

    # ----------------------------------------
    # Writes (the record is not refreshed)
    # ----------------------------------------

    async def _set_field(self, key: str, value: Any) -> None:
        if not unchanged(self._data[key], value):
            await self._api.update_user(self.id, {key: value})

    async def set_username(self, username: str) -> None:
        await self._set_field("username", username)

    async def set_email(self, email: str) -> None:
        await self._set_field("email", email)

    async def set_domain(self, domain: str) -> None:
        await self._set_field("domain", domain)

    async def set_first_name(self, first_name: str) -> None:
        await self._set_field("firstName", first_name)

    async def set_last_name(self, last_name: str) -> None:
        await self._set_field("lastName", last_name)

    async def set_password(self, password: str) -> None:
        """Set the user's login password. Always sent."""
        await self._api.update_user(self.id, {"password": password})

    async def set_groups(self, groups: Iterable[Union[int, "UserGroup", Any]]) -> None:
        """Replace the groups this user is a member of."""
        ids = [id_of(group) for group in groups]
        if not unchanged(set(self._data["groupIds"]), set(ids)):
            await self._api.update_user(self.id, {"memberOf": ids})

    async def set_classes(self, groups: Iterable[Union[int, "UserGroup", Any]]) -> None:
        """Replace the groups this user teaches."""
        ids = [id_of(group) for group in groups]
        if not unchanged(set(self._data["teacherGroups"]), set(ids)):
            await self._api.update_user(self.id, {"teacher": ids})

    async def set_children(self, children: Iterable[Union[int, "User", Any]]) -> None:
        """Replace this user's children."""
        ids = [id_of(child) for child in children]
        if not unchanged(set(self._data["children"]), set(ids)):
            await self._api.update_user(self.id, {"children": ids})

    async def set_location(self, location: Union[int, "Location", Any]) -> None:
        """Move this user, and the devices they own, to a location."""
        location_id = id_of(location)
        if not unchanged(self.location_id, location_id):
            await self._api.move_user(self.id, location_id)

    # ----------------------------------------
    # Commands
    # ----------------------------------------

    async def restart_devices(self) -> None:
        """Restart every device this user owns.

        Failing to restart a device does not raise.
        """
        devices = await self.get_devices()
        _, errors = await gather_with_errors(
            *(device.restart() for device in devices),
            max_concurrent=MAX_CONCURRENT_REQUESTS,
        )
        if errors:
            logger.warning(f"Failed to restart {len(errors)} of {len(devices)} device(s) of user {self.id}")
