"""Domain objects wrapping validated API records.

All objects are created by jamf_school.client.Client. Each one is tagged
with a `type` discriminator ("Device", "User", ...).
"""
from .app import App
from .base import DomainObject
from .device import ENROLLMENTS, Device, Enrollment, Region, parse_region
from .device_group import DeviceGroup
from .location import Location
from .profile import Profile, ProfileSchedule
from .user import User
from .user_group import UserGroup

__all__ = [
    "App",
    "Device",
    "DeviceGroup",
    "DomainObject",
    "ENROLLMENTS",
    "Enrollment",
    "Location",
    "Profile",
    "ProfileSchedule",
    "Region",
    "User",
    "UserGroup",
    "parse_region",
]
