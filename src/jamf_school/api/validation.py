"""Input validation for identifiers passed to the API.

These checks run before any request is made. A failure raises
ValidationError and nothing is sent.
"""
import re
from typing import Any

from .exceptions import ValidationError

# Not strictly correct, but close enough. Apple uses a few UDID formats,
# and each only consists of hexadecimal characters and sometimes dashes.
UDID_PATTERN = re.compile(r"^[0-9a-f\-]+$", re.IGNORECASE)

MAX_SAFE_INTEGER = 2**53 - 1


def is_valid_udid(udid: Any) -> bool:
    """Check whether a value looks like a device UDID."""
    return isinstance(udid, str) and UDID_PATTERN.fullmatch(udid) is not None


def is_valid_id(id: Any) -> bool:
    """Check whether a value is a usable numeric ID.

    IDs are non-negative integers inside the range a double can represent
    exactly. Booleans, floats (even integral ones), NaN and infinities are
    rejected.
    """
    if isinstance(id, bool) or not isinstance(id, int):
        return False
    return 0 <= id <= MAX_SAFE_INTEGER


def assert_valid_udid(udid: Any) -> None:
    """Raise ValidationError if a value is not a valid UDID."""
    if not is_valid_udid(udid):
        raise ValidationError(f"Invalid UDID: {udid!r}", field="udid", value=udid)


def assert_valid_id(id: Any, field: str = "id") -> None:
    """Raise ValidationError if a value is not a valid ID."""
    if not is_valid_id(id):
        raise ValidationError(
            f"Invalid {field}: must be a non-negative integer",
            field=field,
            value=id,
        )
