"""Shared building blocks for route response schemas.

Every schema model is strict: no type coercion ("1" is not an int, 1 is
not a bool), enums are closed Literal sets, and a missing required property
fails. Undocumented extra properties are ignored.

Optional properties may be absent, but when present they must have their
declared type: an explicit null is rejected. Only required fields declared
as Optional[...] without a default (the location address fields) accept
null.
"""
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class StrictModel(BaseModel):
    """Base for all response schemas."""

    model_config = ConfigDict(strict=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _optional_is_not_null(cls, value: Any, info: ValidationInfo) -> Any:
        # Runs only for properties present in the input.
        if value is None and not cls.model_fields[info.field_name].is_required():
            raise ValueError("Optional property may be omitted but must not be null")
        return value


class CodeMessageResponse(StrictModel):
    """Acknowledgement returned by most write routes."""

    code: Int32
    message: str


class DeviceActionResponse(StrictModel):
    """Acknowledgement returned by device command routes (restart, wipe)."""

    message: str
    device: str
