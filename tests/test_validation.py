#!/usr/bin/env python3
"""Unit tests for identifier validation."""
import pytest

from jamf_school.api.exceptions import ValidationError
from jamf_school.api.validation import (
    MAX_SAFE_INTEGER,
    assert_valid_id,
    assert_valid_udid,
    is_valid_id,
    is_valid_udid,
)


class TestUdid:
    """Test UDID checks."""

    @pytest.mark.parametrize("udid", [
        "00008030-001a2b3c4d5e6f70",
        "c0ffee00-0000-0000-0000-00000000beef",
        "ABCDEF0123456789ABCDEF0123456789ABCDEF01",
        "-",
    ])
    def test_valid(self, udid):
        """Should accept hexadecimal characters and dashes."""
        assert is_valid_udid(udid)

    @pytest.mark.parametrize("udid", [
        "",
        "xyz",
        "0000 1111",
        "../devices",
        "abc\n",
        None,
        1234,
    ])
    def test_invalid(self, udid):
        """Should reject anything else."""
        assert not is_valid_udid(udid)

    def test_assert_raises(self):
        """Should raise ValidationError with the field name."""
        with pytest.raises(ValidationError) as exc_info:
            assert_valid_udid("not-a-udid!")

        assert exc_info.value.field == "udid"


class TestId:
    """Test numeric ID checks."""

    @pytest.mark.parametrize("value", [0, 1, 42, MAX_SAFE_INTEGER])
    def test_valid(self, value):
        """Should accept non-negative safe integers."""
        assert is_valid_id(value)

    @pytest.mark.parametrize("value", [
        -1,
        MAX_SAFE_INTEGER + 1,
        1.0,
        1.5,
        float("nan"),
        float("inf"),
        "1",
        True,
        False,
        None,
    ])
    def test_invalid(self, value):
        """Should reject negatives, unsafe integers and non-integers."""
        assert not is_valid_id(value)

    def test_assert_uses_field_name(self):
        """Should report the offending field."""
        with pytest.raises(ValidationError) as exc_info:
            assert_valid_id(-5, field="location_id")

        assert exc_info.value.field == "location_id"
        assert exc_info.value.details["field"] == "location_id"

    def test_assert_passes(self):
        """Should not raise for a valid ID."""
        assert assert_valid_id(0) is None
