"""Shared fixtures and sample records for the test suite.

Every make_* builder returns a fresh record that is valid for its route's
schema. Pass keyword overrides to change top-level fields.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from jamf_school.api.client import HTTPClient
from jamf_school.api.endpoints import JamfAPI
from jamf_school.client import Client

UDID = "00008030-001a2b3c4d5e6f70"
OTHER_UDID = "c0ffee00-0000-0000-0000-00000000beef"


# ============================================
# Sample Records
# ============================================

def make_device(**overrides):
    record = {
        "UDID": UDID,
        "locationId": 0,
        "serialNumber": "DMPXK0AAAAAA",
        "name": "IT iPad 1",
        "isManaged": True,
        "isSupervised": True,
        "class": "ipad",
        "assetTag": "IT-0001",
        "os": {"prefix": "iOS", "version": "15.1"},
        "model": {
            "name": "iPad (8th generation)",
            "identifier": "iPad11,6",
            "type": "iPad",
        },
        "owner": {
            "id": 12,
            "locationId": 0,
            "name": "Jane Doe",
            "vpp": [{"status": "assigned"}],
            "username": "jdoe",
        },
        "groups": ["IT Devices", "Library"],
        "enrollType": "dep",
        "batteryLevel": 0.87,
        "totalCapacity": 32.0,
        "availableCapacity": 20.5,
        "iCloudBackupEnabled": False,
        "iCloudBackupLatest": "",
        "iTunesStoreLoggedIn": False,
        "modified": "2021-11-01 10:00:00",
        "lastCheckin": "2021-11-01 09:58:12",
        "depProfile": "Default",
        "notes": "",
        "region": {"string": "Sydney", "coordinates": "-33.87,151.21"},
        "networkInformation": {
            "IPAddress": "10.0.0.12",
            "isNetworkTethered": "false",
            "BluetoothMAC": "aa:bb:cc:dd:ee:01",
            "WiFiMAC": "aa:bb:cc:dd:ee:02",
            "VoiceRoamingEnabled": "false",
            "DataRoamingEnabled": "false",
            "PersonalHotspotEnabled": "false",
        },
    }
    record.update(overrides)
    return record


def make_installed_app(identifier="com.example.notes", **overrides):
    record = {
        "name": "Notes",
        "identifier": identifier,
        "version": "1.2",
        "vendor": "Example Pty Ltd",
        "icon": "https://example.com/notes.png",
    }
    record.update(overrides)
    return record


def make_user(**overrides):
    record = {
        "id": 12,
        "locationId": 0,
        "deviceCount": 1,
        "email": "jdoe@example.edu",
        "username": "jdoe",
        "domain": "",
        "firstName": "Jane",
        "lastName": "Doe",
        "name": "Jane Doe",
        "groupIds": [3, 4],
        "groups": ["Year 7", "Staff"],
        "teacherGroups": [5],
        "children": [],
        "vpp": [],
        "notes": "",
        "exclude": False,
        "modified": "2021-11-01 10:00:00",
    }
    record.update(overrides)
    return record


def make_user_group(**overrides):
    record = {
        "id": 3,
        "locationId": 0,
        "name": "Year 7",
        "description": "",
        "userCount": 120,
        "acl": {"teacher": "allow", "parent": "deny"},
    }
    record.update(overrides)
    return record


def make_device_group(**overrides):
    record = {
        "id": 7,
        "locationId": 0,
        "name": "IT Devices",
        "description": "Devices managed by IT",
        "information": "",
        "imageUrl": "",
        "isSmartGroup": False,
        "isShared": False,
        "type": "standard",
        "members": 2,
    }
    record.update(overrides)
    return record


def make_location(**overrides):
    record = {
        "id": 0,
        "name": "Main Campus",
        "isDistrict": False,
        "streetName": "George St",
        "streetNumber": "1",
        "postalCode": "2000",
        "city": "Sydney",
        "asmIdentifier": None,
        "schoolNumber": None,
    }
    record.update(overrides)
    return record


def make_app(**overrides):
    record = {
        "id": 31,
        "locationId": 0,
        "isBook": False,
        "bundleId": "com.example.notes",
        "icon": "https://example.com/notes.png",
        "name": "Notes",
        "version": "1.2",
        "platform": "iOS",
        "adamId": 1234567890,
        "price": 0.0,
    }
    record.update(overrides)
    return record


def make_profile(**overrides):
    record = {
        "id": 44,
        "locationId": 0,
        "type": "device",
        "status": "enabled",
        "identifier": "com.example.wifi",
        "name": "Staff Wi-Fi",
        "description": "",
        "platform": "iOS",
        "daysOfTheWeek": ["1", "2", "3", "4", "5"],
        "isTemplate": False,
        "useHolidays": True,
        "restrictedSchedule": False,
        "startTime": "08:00",
        "endTime": "15:30",
    }
    record.update(overrides)
    return record


def ack(message="ok"):
    """Body returned by most write routes."""
    return {"code": 200, "message": message}


# ============================================
# Fixtures
# ============================================

@pytest.fixture
def mock_http():
    """Create a mock HTTPClient."""
    http = MagicMock(spec=HTTPClient)
    http.url = "https://school.example.com/api"
    http.request = AsyncMock()
    return http


@pytest.fixture
def api(mock_http):
    """A real JamfAPI on top of the mocked HTTPClient."""
    return JamfAPI(mock_http)


@pytest.fixture
def mock_api():
    """Create a mock JamfAPI for domain object tests."""
    return MagicMock(spec=JamfAPI)


@pytest.fixture
def client(mock_api):
    """A real Client using the mocked JamfAPI."""
    return Client(mock_api)
