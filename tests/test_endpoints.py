#!/usr/bin/env python3
"""Unit tests for JamfAPI.

Tests cover:
    - Input validation before any request (UDIDs, IDs, batch limits)
    - Request shape (method, path, query, JSON body)
    - The includeApps encoding difference between GET /devices and
      GET /devices/:udid
    - Full response validation and payload unwrapping

Note: These tests mock HTTPClient rather than making real API calls.
"""
import pytest
from conftest import (
    OTHER_UDID,
    UDID,
    ack,
    make_app,
    make_device,
    make_device_group,
    make_installed_app,
    make_location,
    make_profile,
    make_user,
    make_user_group,
)

from jamf_school.api.endpoints import JamfAPI
from jamf_school.api.exceptions import APIError, SchemaError, ValidationError


def udids(count):
    return [f"{i:08x}-0000-0000-0000-000000000000" for i in range(count)]


class TestJamfAPIInit:
    """Test JamfAPI construction."""

    def test_type_tag(self, api):
        """Should be tagged as the API."""
        assert api.type == "API"

    def test_max_devices_constant(self):
        """Should allow at most 20 devices per bulk move."""
        assert JamfAPI.MAX_DEVICES_PER_MOVE == 20

    @pytest.mark.asyncio
    async def test_close(self, api, mock_http):
        """Should close the HTTP client."""
        await api.close()

        mock_http.close.assert_awaited_once()


# ============================================
# Response Validation Tests
# ============================================


class TestResponseValidation:
    """Test that every response is validated before it is returned."""

    @pytest.mark.asyncio
    async def test_unwraps_payload(self, api, mock_http):
        """Should return the record inside the envelope."""
        user = make_user()
        mock_http.request.return_value = {"code": 200, "user": user}

        result = await api.get_user(12)

        assert result == user
        mock_http.request.assert_awaited_once_with(
            "GET", "users/12", query=None, json_body=None
        )

    @pytest.mark.asyncio
    async def test_invalid_response_raises(self, api, mock_http):
        """Should raise SchemaError when the record is malformed."""
        mock_http.request.return_value = {"code": 200, "user": make_user(email=None)}

        with pytest.raises(SchemaError) as exc_info:
            await api.get_user(12)

        assert exc_info.value.route == "GET /users/:id"

    @pytest.mark.asyncio
    async def test_envelope_is_validated(self, api, mock_http):
        """Should validate the whole body, not only the payload."""
        mock_http.request.return_value = {"devices": [make_device()]}

        with pytest.raises(SchemaError):
            await api.get_devices()

    @pytest.mark.asyncio
    async def test_api_error_propagates(self, api, mock_http):
        """Should let transport errors through unchanged."""
        mock_http.request.side_effect = APIError("boom", status_code=500)

        with pytest.raises(APIError):
            await api.get_users()

    @pytest.mark.asyncio
    async def test_top_level_records(self, api, mock_http):
        """Should return the whole body for routes without an envelope."""
        app, location, profile = make_app(), make_location(), make_profile()
        mock_http.request.side_effect = [app, location, profile]

        assert await api.get_app(31) == app
        assert await api.get_location(0) == location
        assert await api.get_profile(44) == profile

    @pytest.mark.asyncio
    async def test_list_routes(self, api, mock_http):
        """Should unwrap each list route's payload key."""
        mock_http.request.side_effect = [
            {"code": 200, "count": 1, "users": [make_user()]},
            {"code": 200, "count": 1, "groups": [make_user_group()]},
            {"code": 200, "count": 1, "deviceGroups": [make_device_group()]},
            {"code": 200, "count": 1, "apps": [make_app()]},
            {"code": 200, "count": 1, "locations": [make_location()]},
            {"code": 200, "count": 1, "profiles": [make_profile()]},
        ]

        assert (await api.get_users())[0]["id"] == 12
        assert (await api.get_user_groups())[0]["id"] == 3
        assert (await api.get_device_groups())[0]["id"] == 7
        assert (await api.get_apps())[0]["id"] == 31
        assert (await api.get_locations())[0]["id"] == 0
        assert (await api.get_profiles())[0]["id"] == 44

    @pytest.mark.asyncio
    async def test_single_group_routes(self, api, mock_http):
        """Should unwrap single group payloads."""
        mock_http.request.side_effect = [
            {"code": 200, "group": make_user_group()},
            {"code": 200, "deviceGroup": make_device_group()},
        ]

        assert (await api.get_user_group(3))["name"] == "Year 7"
        assert (await api.get_device_group(7))["name"] == "IT Devices"


# ============================================
# Device Tests
# ============================================


class TestGetDevice:
    """Test GET /devices/:udid."""

    @pytest.mark.asyncio
    async def test_without_apps(self, api, mock_http):
        """Should send no query when apps are not requested."""
        mock_http.request.return_value = {"code": 200, "device": make_device()}

        await api.get_device(UDID)

        mock_http.request.assert_awaited_once_with(
            "GET", f"devices/{UDID}", query=None, json_body=None
        )

    @pytest.mark.asyncio
    async def test_include_apps_is_string_true(self, api, mock_http):
        """Should send includeApps=true (not 1) on this route."""
        device = make_device(apps=[make_installed_app()])
        mock_http.request.return_value = {"code": 200, "device": device}

        result = await api.get_device(UDID, include_apps=True)

        assert result["apps"][0]["identifier"] == "com.example.notes"
        assert mock_http.request.call_args.kwargs["query"] == {"includeApps": "true"}

    @pytest.mark.asyncio
    async def test_invalid_udid(self, api, mock_http):
        """Should raise ValidationError without making a request."""
        with pytest.raises(ValidationError):
            await api.get_device("../users")

        mock_http.request.assert_not_called()


class TestGetDevices:
    """Test GET /devices filters."""

    @pytest.fixture(autouse=True)
    def empty_list(self, mock_http):
        mock_http.request.return_value = {"code": 200, "count": 0, "devices": []}

    @pytest.mark.asyncio
    async def test_no_filters(self, api, mock_http):
        """Should send no query at all."""
        assert await api.get_devices() == []

        mock_http.request.assert_awaited_once_with(
            "GET", "devices", query=None, json_body=None
        )

    @pytest.mark.asyncio
    async def test_include_apps_is_one(self, api, mock_http):
        """Should send includeApps=1 on the list route."""
        await api.get_devices(include_apps=True)

        assert mock_http.request.call_args.kwargs["query"] == {"includeApps": "1"}

    @pytest.mark.asyncio
    async def test_filters_encoded(self, api, mock_http):
        """Should map every filter to its query key."""
        await api.get_devices(
            group_ids=[1, 2],
            owner_group_ids=[3],
            is_owned=False,
            owner_id=12,
            owner_name="Jane",
            is_managed=True,
            model_identifier="iPad11,6",
            location_id=0,
            is_supervised=True,
            is_trashed=False,
            asset_tag="IT-0001",
            serial_number="DMPXK0AAAAAA",
            enrollment_type="dep",
        )

        assert mock_http.request.call_args.kwargs["query"] == {
            "groups": "1,2",
            "ownergroups": "3",
            "hasOwner": "0",
            "owner": "12",
            "name": "Jane",
            "managed": "1",
            "model": "iPad11,6",
            "location": "0",
            "supervised": "1",
            "inTrash": "0",
            "assettag": "IT-0001",
            "serialnumber": "DMPXK0AAAAAA",
            "enrollType": "dep",
        }

    @pytest.mark.asyncio
    async def test_invalid_group_id(self, api, mock_http):
        """Should reject bad group IDs before any request."""
        with pytest.raises(ValidationError):
            await api.get_devices(group_ids=[1, -2])

        mock_http.request.assert_not_called()


class TestMoveDevices:
    """Test PUT /devices/migrate."""

    @pytest.mark.asyncio
    async def test_empty_list(self, api, mock_http):
        """Should reject an empty list without a request."""
        with pytest.raises(ValidationError):
            await api.move_devices([], 1)

        mock_http.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_too_many(self, api, mock_http):
        """Should reject more than 20 devices without a request."""
        with pytest.raises(ValidationError) as exc_info:
            await api.move_devices(udids(21), 1)

        assert "20" in exc_info.value.message
        mock_http.request.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [1, 20])
    async def test_bounds_accepted(self, api, mock_http, count):
        """Should accept between 1 and 20 devices."""
        mock_http.request.return_value = ack()

        assert await api.move_devices(udids(count), 1) == ack()
        assert mock_http.request.call_args.kwargs["json_body"]["udids"] == udids(count)

    @pytest.mark.asyncio
    async def test_invalid_udid_in_batch(self, api, mock_http):
        """Should reject the batch if any UDID is invalid."""
        with pytest.raises(ValidationError):
            await api.move_devices([UDID, "nope!"], 1)

        mock_http.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_location(self, api, mock_http):
        """Should reject a bad location ID."""
        with pytest.raises(ValidationError):
            await api.move_devices([UDID], 1.5)

        mock_http.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_payload_without_only_device(self, api, mock_http):
        """Should omit onlyDevice when it is not given."""
        mock_http.request.return_value = ack()

        await api.move_devices([UDID, OTHER_UDID], 3)

        mock_http.request.assert_awaited_once_with(
            "PUT",
            "devices/migrate",
            query=None,
            json_body={"udids": [UDID, OTHER_UDID], "locationId": 3},
        )

    @pytest.mark.asyncio
    async def test_payload_with_only_device(self, api, mock_http):
        """Should include onlyDevice when it is given."""
        mock_http.request.return_value = ack()

        await api.move_devices([UDID], 0, only_device=True)

        assert mock_http.request.call_args.kwargs["json_body"] == {
            "udids": [UDID],
            "locationId": 0,
            "onlyDevice": True,
        }


class TestDeviceWrites:
    """Test single-device write routes."""

    @pytest.fixture(autouse=True)
    def acknowledged(self, mock_http):
        mock_http.request.return_value = ack()

    @pytest.mark.asyncio
    async def test_move_device(self, api, mock_http):
        """Should send the location and optional onlyDevice flag."""
        await api.move_device(UDID, 2)
        await api.move_device(UDID, 2, only_device=True)

        first, second = mock_http.request.call_args_list
        assert first.args == ("PUT", f"devices/{UDID}/migrate")
        assert first.kwargs["json_body"] == {"locationId": 2}
        assert second.kwargs["json_body"] == {"locationId": 2, "onlyDevice": True}

    @pytest.mark.asyncio
    async def test_set_device_owner(self, api, mock_http):
        """Should send the user ID; 0 is allowed to remove the owner."""
        await api.set_device_owner(UDID, 0)

        mock_http.request.assert_awaited_once_with(
            "PUT", f"devices/{UDID}/owner", query=None, json_body={"user": 0}
        )

    @pytest.mark.asyncio
    async def test_update_device(self, api, mock_http):
        """Should POST details."""
        await api.update_device(UDID, {"assetTag": "X"})

        mock_http.request.assert_awaited_once_with(
            "POST", f"devices/{UDID}/details", query=None, json_body={"assetTag": "X"}
        )

    @pytest.mark.asyncio
    async def test_restart_and_wipe(self, api, mock_http):
        """Should validate the command responses."""
        mock_http.request.return_value = {"message": "queued", "device": UDID}

        await api.restart_device(UDID, {"clearPasscode": True})
        await api.wipe_device(UDID)

        restart, wipe = mock_http.request.call_args_list
        assert restart.args == ("POST", f"devices/{UDID}/restart")
        assert restart.kwargs["json_body"] == {"clearPasscode": True}
        assert wipe.args == ("POST", f"devices/{UDID}/wipe")
        assert wipe.kwargs["json_body"] is None

    @pytest.mark.asyncio
    async def test_update_device_group(self, api, mock_http):
        """Should PUT the group changes."""
        await api.update_device_group(7, {"name": "Library"})

        mock_http.request.assert_awaited_once_with(
            "PUT", "devices/groups/7", query=None, json_body={"name": "Library"}
        )


# ============================================
# User Tests
# ============================================


class TestUserWrites:
    """Test user write routes."""

    @pytest.fixture(autouse=True)
    def acknowledged(self, mock_http):
        mock_http.request.return_value = ack()

    @pytest.mark.asyncio
    async def test_move_user(self, api, mock_http):
        """Should omit onlyUser unless given."""
        await api.move_user(12, 1)
        await api.move_user(12, 1, only_user=True)

        first, second = mock_http.request.call_args_list
        assert first.args == ("PUT", "users/12/migrate")
        assert first.kwargs["json_body"] == {"locationId": 1}
        assert second.kwargs["json_body"] == {"locationId": 1, "onlyUser": True}

    @pytest.mark.asyncio
    async def test_update_user(self, api, mock_http):
        """Should PUT the changed fields."""
        await api.update_user(12, {"memberOf": [3, "Staff"], "children": [14]})

        mock_http.request.assert_awaited_once_with(
            "PUT",
            "users/12",
            query=None,
            json_body={"memberOf": [3, "Staff"], "children": [14]},
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [
        {"teacher": [-1]},
        {"children": [True]},
        {"memberOf": [1.5]},
    ])
    async def test_update_user_rejects_bad_ids(self, api, mock_http, data):
        """Should validate nested IDs before any request."""
        with pytest.raises(ValidationError):
            await api.update_user(12, data)

        mock_http.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_user_group(self, api, mock_http):
        """Should PUT the group changes."""
        await api.update_user_group(3, {"description": "2024 intake"})

        mock_http.request.assert_awaited_once_with(
            "PUT", "users/groups/3", query=None, json_body={"description": "2024 intake"}
        )
