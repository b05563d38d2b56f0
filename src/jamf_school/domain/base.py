"""Shared behaviour of all domain objects.

A domain object wraps one raw record (the validated JSON of a single
entity) together with shared references to the JamfAPI and the Client
that created it.

Snapshot Semantics:
    - The record is read-only and is the only source of every property.
    - Setters issue a remote write but never patch the record. The object
      is stale until update() is awaited, which fetches the entity again
      and swaps in the new record as a whole.
    - A setter whose value matches the record skips the request.
"""
import copy
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Union

from ..api.endpoints import JamfAPI, RawRecord
from ..api.validation import assert_valid_id, assert_valid_udid

if TYPE_CHECKING:
    from ..client import Client

# Upper bound on requests a bulk operation keeps in flight.
MAX_CONCURRENT_REQUESTS = 10


def unchanged(current: Any, value: Any) -> bool:
    """True when a setter's value already matches the snapshot."""
    return current == value


def id_of(item: Union[int, Any]) -> int:
    """Accept either a numeric ID or any object with an `id` attribute.

    Raises:
        ValidationError: If a plain value is not a valid ID
    """
    if item is None or isinstance(item, (int, float, str)):
        assert_valid_id(item)
        return item
    return item.id


def udid_of(item: Union[str, Any]) -> str:
    """Accept either a UDID string or any object with a `udid` attribute.

    Raises:
        ValidationError: If a plain value is not a valid UDID
    """
    if item is None or isinstance(item, (int, float, str)):
        assert_valid_udid(item)
        return item
    return item.udid


class DomainObject:
    """Base class for Device, User, DeviceGroup, UserGroup, Location, App
    and Profile. Only the Client creates instances."""

    type: ClassVar[str]

    def __init__(self, api: JamfAPI, client: "Client", data: RawRecord):
        self._api = api
        self._client = client
        self._data: Mapping[str, Any] = MappingProxyType(data)

    def _replace(self, data: RawRecord) -> None:
        self._data = MappingProxyType(data)

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the record this object was built from."""
        return copy.deepcopy(dict(self._data))

    def __str__(self) -> str:
        return str(self._data.get("name", ""))

    def __repr__(self) -> str:
        key, value = self._identity()
        return f"{self.__class__.__name__}({key}={value!r}, name={str(self)!r})"

    def _identity(self) -> tuple[str, Any]:
        return "id", self._data.get("id")
