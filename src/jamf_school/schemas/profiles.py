"""Schemas for the /profiles routes."""
from .base import Int32, StrictModel


class ProfileRecord(StrictModel):
    """One profile. GET /profiles/:id returns this at the top level."""

    id: Int32
    locationId: Int32
    type: str
    status: str
    identifier: str
    name: str
    description: str
    platform: str
    daysOfTheWeek: list[str]
    isTemplate: bool
    useHolidays: bool
    restrictedSchedule: bool
    startTime: str
    endTime: str


class ProfilesResponse(StrictModel):
    code: Int32
    count: Int32
    profiles: list[ProfileRecord]
