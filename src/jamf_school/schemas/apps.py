"""Schemas for the /apps routes."""
from typing import Optional

from .base import Int32, StrictModel


class AppRecord(StrictModel):
    """One app. GET /apps/:id returns this at the top level."""

    id: Int32
    locationId: Int32
    isBook: bool
    bundleId: str
    icon: str
    name: str
    version: str
    platform: str
    # Store ID; absent for in-house and enterprise apps.
    adamId: Optional[int] = None
    shortVersion: Optional[str] = None
    vendor: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    isDeleted: Optional[bool] = None


class AppsResponse(StrictModel):
    code: Int32
    count: Int32
    apps: list[AppRecord]
