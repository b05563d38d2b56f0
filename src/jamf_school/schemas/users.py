"""Schemas for the /users routes."""
from typing import Optional

from .base import Int32, StrictModel
from .devices import VPPAccount


class UserRecord(StrictModel):
    """One user as returned by GET /users and GET /users/:id."""

    id: Int32
    locationId: Int32
    deviceCount: Int32
    email: str
    username: str
    domain: str
    firstName: str
    lastName: str
    name: str
    groupIds: list[Int32]
    groups: list[str]
    teacherGroups: list[Int32]
    children: list[Int32]
    vpp: list[VPPAccount]
    notes: str
    exclude: bool
    modified: str
    inTrash: Optional[bool] = None


class UsersResponse(StrictModel):
    code: Int32
    count: Int32
    users: list[UserRecord]


class UserResponse(StrictModel):
    code: Int32
    user: UserRecord


class UserGroupACL(StrictModel):
    teacher: str
    parent: str


class UserGroupRecord(StrictModel):
    """One user group as returned by GET /users/groups(/:id)."""

    id: Int32
    locationId: Int32
    name: str
    description: str
    userCount: Int32
    acl: Optional[UserGroupACL] = None
    modified: Optional[str] = None


class UserGroupsResponse(StrictModel):
    code: Int32
    count: Int32
    groups: list[UserGroupRecord]


class UserGroupResponse(StrictModel):
    code: Int32
    group: UserGroupRecord
