"""User group domain object."""
from typing import TYPE_CHECKING, Optional

from ..api.resilience import try_or_default
from .base import DomainObject, unchanged

if TYPE_CHECKING:
    from .location import Location
    from .user import User


class UserGroup(DomainObject):
    """A named group of users. Classes are user groups with teachers."""

    type = "UserGroup"

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
    def location_id(self) -> int:
        return self._data["locationId"]

    @property
    def count(self) -> int:
        return self._data["userCount"]

    async def update(self) -> None:
        self._replace(await self._api.get_user_group(self.id))

    @try_or_default([])
    async def get_users(self) -> list["User"]:
        """Return the members of this group."""
        users = await self._api.get_users()
        return [
            self._client.create_user(user)
            for user in users
            if self.id in user["groupIds"]
        ]

    @try_or_default(None)
    async def get_location(self) -> Optional["Location"]:
        data = await self._api.get_location(self.location_id)
        return self._client.create_location(data)

    async def set_name(self, name: str) -> None:
        if not unchanged(self.name, name):
            await self._api.update_user_group(self.id, {"name": name})

    async def set_description(self, text: str) -> None:
        if not unchanged(self.description, text):
            await self._api.update_user_group(self.id, {"description": text})
