"""Schemas for the /locations routes."""
from typing import Optional

from .base import Int32, StrictModel


class LocationRecord(StrictModel):
    """One location. GET /locations/:id returns this at the top level.

    Only the name is mandatory when a location is created, so the address
    fields are present but nullable.
    """

    id: Int32
    name: str
    isDistrict: bool
    streetName: Optional[str]
    streetNumber: Optional[str]
    postalCode: Optional[str]
    city: Optional[str]
    asmIdentifier: Optional[str]
    schoolNumber: Optional[str]
    source: Optional[str] = None


class LocationsResponse(StrictModel):
    code: Int32
    count: Int32
    locations: list[LocationRecord]
