"""Profile domain object."""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..api.resilience import try_or_default
from .base import DomainObject

if TYPE_CHECKING:
    from .location import Location


@dataclass(frozen=True)
class ProfileSchedule:
    """When a restricted profile is active."""

    days_of_the_week: tuple[str, ...]
    start_time: str
    end_time: str
    use_holidays: bool


class Profile(DomainObject):
    """A configuration profile."""

    type = "Profile"

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
    def identifier(self) -> str:
        return self._data["identifier"]

    @property
    def platform(self) -> str:
        return self._data["platform"]

    @property
    def profile_type(self) -> str:
        return self._data["type"]

    @property
    def status(self) -> str:
        return self._data["status"]

    @property
    def is_template(self) -> bool:
        return self._data["isTemplate"]

    @property
    def location_id(self) -> int:
        return self._data["locationId"]

    @property
    def schedule(self) -> Optional[ProfileSchedule]:
        """The active schedule, or None if the profile always applies."""
        if not self._data["restrictedSchedule"]:
            return None
        return ProfileSchedule(
            days_of_the_week=tuple(self._data["daysOfTheWeek"]),
            start_time=self._data["startTime"],
            end_time=self._data["endTime"],
            use_holidays=self._data["useHolidays"],
        )

    async def update(self) -> None:
        self._replace(await self._api.get_profile(self.id))

    @try_or_default(None)
    async def get_location(self) -> Optional["Location"]:
        data = await self._api.get_location(self.location_id)
        return self._client.create_location(data)
