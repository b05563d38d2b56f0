#!/usr/bin/env python3
"""Route-level API for Jamf School.

JamfAPI exposes one coroutine per remote route. Every method follows the
same steps:

    1. Validate identifiers (UDIDs, numeric IDs). Bad input raises
       ValidationError and nothing is sent.
    2. Make the request through HTTPClient.
    3. Validate the FULL response body against the route's schema. A
       mismatch raises SchemaError.
    4. Return the relevant payload (e.g. {"device": {...}} -> {...}).

Routes that return the record at the top level (GET /apps/:id,
GET /locations/:id, GET /profiles/:id) return the whole body.

Example:
    api = JamfAPI(HTTPClient(id="1097109", token="...", url="https://school.jamfcloud.com/api"))

    devices = await api.get_devices(location_id=0, include_apps=True)
    await api.move_devices([d["UDID"] for d in devices[:20]], 3, only_device=True)
"""
import logging
from typing import Any, Optional, Union

from .. import schemas
from .client import HTTPClient, to_query
from .exceptions import ValidationError
from .validation import assert_valid_id, assert_valid_udid

logger = logging.getLogger(__name__)

RawRecord = dict[str, Any]


class JamfAPI:
    """One method per Jamf School API route.

    Attributes:
        http: HTTPClient used for every request
    """

    type = "API"
    MAX_DEVICES_PER_MOVE = 20

    def __init__(self, http: HTTPClient):
        self.http = http

    def __repr__(self) -> str:
        return f"JamfAPI(url={self.http.url!r})"

    async def __aenter__(self) -> "JamfAPI":
        await self.http.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http.close()

    async def _call(
        self,
        route: str,
        path: str,
        query: Optional[dict[str, str]] = None,
        json_body: Any = None,
    ) -> Any:
        method = route.split(" ", 1)[0]
        data = await self.http.request(method, path, query=query, json_body=json_body)
        schemas.assert_valid(route, data)
        return data

    # ----------------------------------------
    # Users
    # ----------------------------------------

    async def get_user(self, id: int) -> RawRecord:
        assert_valid_id(id)
        data = await self._call("GET /users/:id", f"users/{id}")
        return data["user"]

    async def get_users(self) -> list[RawRecord]:
        data = await self._call("GET /users", "users")
        return data["users"]

    async def update_user(self, id: int, data: dict[str, Any]) -> dict[str, Any]:
        """Update fields of a user.

        Args:
            id: User ID
            data: Fields to change. Recognised keys include username, email,
                domain, firstName, lastName, password, notes, locationId,
                memberOf (group IDs or names), teacher (group IDs the user
                teaches) and children (user IDs).
        """
        assert_valid_id(id)
        for group_id in data.get("teacher") or ():
            assert_valid_id(group_id, field="teacher")
        for child_id in data.get("children") or ():
            assert_valid_id(child_id, field="children")
        for group in data.get("memberOf") or ():
            # Group names are also accepted, only numbers are checked.
            if not isinstance(group, str):
                assert_valid_id(group, field="memberOf")

        logger.info(f"Updating user {id}: {sorted(k for k in data if k != 'password')}")
        return await self._call("PUT /users/:id", f"users/{id}", json_body=data)

    async def move_user(
        self,
        user_id: int,
        location_id: int,
        only_user: Optional[bool] = None,
    ) -> dict[str, Any]:
        """Move a user to another location.

        By default the service also moves the user's devices. Pass
        only_user=True to move just the user.
        """
        assert_valid_id(user_id)
        assert_valid_id(location_id, field="location_id")
        payload: dict[str, Any] = {"locationId": location_id}
        if only_user is not None:
            payload["onlyUser"] = only_user

        logger.info(f"Moving user {user_id} to location {location_id}")
        return await self._call(
            "PUT /users/:id/migrate", f"users/{user_id}/migrate", json_body=payload
        )

    async def get_user_group(self, id: int) -> RawRecord:
        assert_valid_id(id)
        data = await self._call("GET /users/groups/:id", f"users/groups/{id}")
        return data["group"]

    async def get_user_groups(self) -> list[RawRecord]:
        data = await self._call("GET /users/groups", "users/groups")
        return data["groups"]

    async def update_user_group(self, id: int, data: dict[str, Any]) -> dict[str, Any]:
        assert_valid_id(id)
        logger.info(f"Updating user group {id}: {sorted(data)}")
        return await self._call("PUT /users/groups/:id", f"users/groups/{id}", json_body=data)

    # ----------------------------------------
    # Devices
    # ----------------------------------------

    async def get_device(self, udid: str, include_apps: bool = False) -> RawRecord:
        assert_valid_udid(udid)
        # Unlike every other boolean, this one must be the string "true".
        query = to_query({"includeApps": "true" if include_apps else None})
        data = await self._call("GET /devices/:udid", f"devices/{udid}", query=query)
        return data["device"]

    async def get_devices(
        self,
        *,
        group_ids: Optional[list[int]] = None,
        owner_group_ids: Optional[list[int]] = None,
        is_owned: Optional[bool] = None,
        owner_id: Optional[int] = None,
        owner_name: Optional[str] = None,
        is_managed: Optional[bool] = None,
        model_identifier: Optional[str] = None,
        location_id: Optional[int] = None,
        is_supervised: Optional[bool] = None,
        is_trashed: Optional[bool] = None,
        asset_tag: Optional[str] = None,
        serial_number: Optional[str] = None,
        enrollment_type: Optional[str] = None,
        include_apps: bool = False,
    ) -> list[RawRecord]:
        """List devices, optionally filtered.

        Note:
            The service's handling of `managed` is unreliable: 1 returns a
            subset of managed devices and any other value returns the rest.
            Trashed devices are only included when is_trashed is True.
        """
        for group_id in group_ids or ():
            assert_valid_id(group_id, field="group_ids")
        for group_id in owner_group_ids or ():
            assert_valid_id(group_id, field="owner_group_ids")
        if owner_id is not None:
            assert_valid_id(owner_id, field="owner_id")
        if location_id is not None:
            assert_valid_id(location_id, field="location_id")

        query = to_query({
            "groups": _join(group_ids),
            "ownergroups": _join(owner_group_ids),
            "hasOwner": is_owned,
            "owner": owner_id,
            "name": owner_name,
            "managed": is_managed,
            "model": model_identifier,
            "location": location_id,
            "supervised": is_supervised,
            "inTrash": is_trashed,
            "assettag": asset_tag,
            "serialnumber": serial_number,
            "enrollType": enrollment_type,
            # Any value enables this, so it is sent only when requested.
            "includeApps": include_apps or None,
        })
        data = await self._call("GET /devices", "devices", query=query)
        return data["devices"]

    async def update_device(self, udid: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update device details (e.g. assetTag, notes)."""
        assert_valid_udid(udid)
        logger.info(f"Updating device {udid}: {sorted(data)}")
        return await self._call(
            "POST /devices/:udid/details", f"devices/{udid}/details", json_body=data
        )

    async def restart_device(
        self,
        udid: str,
        options: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Restart a device. options may include clearPasscode."""
        assert_valid_udid(udid)
        logger.info(f"Restarting device {udid}")
        return await self._call(
            "POST /devices/:udid/restart", f"devices/{udid}/restart", json_body=options
        )

    async def wipe_device(
        self,
        udid: str,
        options: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Erase a device. options may include clearActivationLock."""
        assert_valid_udid(udid)
        logger.warning(f"Wiping device {udid}")
        return await self._call(
            "POST /devices/:udid/wipe", f"devices/{udid}/wipe", json_body=options
        )

    async def set_device_owner(self, udid: str, user_id: int) -> dict[str, Any]:
        """Assign a device to a user. User ID 0 removes the owner."""
        assert_valid_udid(udid)
        assert_valid_id(user_id, field="user_id")
        logger.info(f"Setting owner of device {udid} to user {user_id}")
        return await self._call(
            "PUT /devices/:udid/owner", f"devices/{udid}/owner", json_body={"user": user_id}
        )

    async def move_device(
        self,
        udid: str,
        location_id: int,
        only_device: Optional[bool] = None,
    ) -> dict[str, Any]:
        """Move a device to another location.

        By default the service also moves the device's owner and the owner's
        other devices. Pass only_device=True to move just this device.
        """
        assert_valid_udid(udid)
        assert_valid_id(location_id, field="location_id")
        payload: dict[str, Any] = {"locationId": location_id}
        if only_device is not None:
            payload["onlyDevice"] = only_device

        logger.info(f"Moving device {udid} to location {location_id}")
        return await self._call(
            "PUT /devices/:udid/migrate", f"devices/{udid}/migrate", json_body=payload
        )

    async def move_devices(
        self,
        udids: list[str],
        location_id: int,
        only_device: Optional[bool] = None,
    ) -> dict[str, Any]:
        """Move 1 to 20 devices to another location in one request.

        Raises:
            ValidationError: If udids is empty, holds more than 20 entries,
                or contains an invalid UDID
        """
        assert_valid_id(location_id, field="location_id")
        if not udids:
            raise ValidationError("At least one UDID is required", field="udids")
        if len(udids) > self.MAX_DEVICES_PER_MOVE:
            raise ValidationError(
                f"Device count ({len(udids)}) exceeds maximum ({self.MAX_DEVICES_PER_MOVE})",
                field="udids",
            )
        for udid in udids:
            assert_valid_udid(udid)

        payload: dict[str, Any] = {"udids": list(udids), "locationId": location_id}
        if only_device is not None:
            payload["onlyDevice"] = only_device

        logger.info(f"Moving {len(udids)} device(s) to location {location_id}")
        return await self._call("PUT /devices/migrate", "devices/migrate", json_body=payload)

    # ----------------------------------------
    # Device Groups
    # ----------------------------------------

    async def get_device_group(self, id: int) -> RawRecord:
        assert_valid_id(id)
        data = await self._call("GET /devices/groups/:id", f"devices/groups/{id}")
        return data["deviceGroup"]

    async def get_device_groups(self) -> list[RawRecord]:
        data = await self._call("GET /devices/groups", "devices/groups")
        return data["deviceGroups"]

    async def update_device_group(self, id: int, data: dict[str, Any]) -> dict[str, Any]:
        assert_valid_id(id)
        logger.info(f"Updating device group {id}: {sorted(data)}")
        return await self._call(
            "PUT /devices/groups/:id", f"devices/groups/{id}", json_body=data
        )

    # ----------------------------------------
    # Apps, Locations, Profiles
    # ----------------------------------------

    async def get_app(self, id: int) -> RawRecord:
        assert_valid_id(id)
        return await self._call("GET /apps/:id", f"apps/{id}")

    async def get_apps(self) -> list[RawRecord]:
        data = await self._call("GET /apps", "apps")
        return data["apps"]

    async def get_location(self, id: int) -> RawRecord:
        assert_valid_id(id)
        return await self._call("GET /locations/:id", f"locations/{id}")

    async def get_locations(self) -> list[RawRecord]:
        data = await self._call("GET /locations", "locations")
        return data["locations"]

    async def get_profile(self, id: int) -> RawRecord:
        assert_valid_id(id)
        return await self._call("GET /profiles/:id", f"profiles/{id}")

    async def get_profiles(self) -> list[RawRecord]:
        data = await self._call("GET /profiles", "profiles")
        return data["profiles"]


def _join(ids: Optional[list[Union[int, str]]]) -> Optional[str]:
    if ids is None:
        return None
    return ",".join(str(i) for i in ids)


__all__ = ["JamfAPI", "RawRecord"]
