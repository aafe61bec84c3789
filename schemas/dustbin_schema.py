import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from models.dustbin import ADDRESS_MAX_LENGTH, DESCRIPTION_MAX_LENGTH, DustbinStatus

VALID_STATUSES = [s.value for s in DustbinStatus]

LATITUDE = ("Latitude", 90)
LONGITUDE = ("Longitude", 180)


def coordinate_number(value: Any, label: str) -> float:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("coordinate_type", f"{label} must be a valid number")
    try:
        number = float(value)
    except OverflowError:
        # integers beyond float range are out of range, not malformed
        number = math.inf if value > 0 else -math.inf
    if math.isnan(number):
        raise PydanticCustomError("coordinate_type", f"{label} must be a valid number")
    return number


def check_coordinate_range(number: float, label: str, limit: int) -> float:
    if number < -limit or number > limit:
        raise PydanticCustomError("coordinate_range", f"{label} must be between -{limit} and {limit}")
    return number


def check_coordinate(value: Any, label: str, limit: int) -> float:
    return check_coordinate_range(coordinate_number(value, label), label, limit)


def check_max_length(value: Any, label: str, limit: int):
    if value is not None and not isinstance(value, str):
        raise PydanticCustomError("string_type", f"{label} must be a string")
    if value and len(value) > limit:
        raise PydanticCustomError("string_too_long", f"{label} must be less than {limit} characters")
    return value


def check_status(value: Any) -> DustbinStatus:
    if value not in VALID_STATUSES:
        raise PydanticCustomError("status", f"Status must be one of: {', '.join(VALID_STATUSES)}")
    return DustbinStatus(value)


class DustbinFields(BaseModel):
    @field_validator("address", mode="before", check_fields=False)
    @classmethod
    def _address(cls, v):
        return check_max_length(v, "Address", ADDRESS_MAX_LENGTH)

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def _description(cls, v):
        return check_max_length(v, "Description", DESCRIPTION_MAX_LENGTH)


class DustbinCreate(DustbinFields):
    latitude: float
    longitude: float
    address: str | None = None
    description: str | None = None
    reported_by: str | None = Field(default=None, alias="reportedBy")

    model_config = {"populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _coordinates(cls, data: Any):
        """Presence, then both types, then both ranges; latitude before longitude at each step."""
        if not isinstance(data, dict):
            return data
        if "latitude" not in data or "longitude" not in data:
            raise PydanticCustomError("coordinates_missing", "latitude and longitude are required")
        lat = coordinate_number(data["latitude"], LATITUDE[0])
        lon = coordinate_number(data["longitude"], LONGITUDE[0])
        check_coordinate_range(lat, *LATITUDE)
        check_coordinate_range(lon, *LONGITUDE)
        return {**data, "latitude": lat, "longitude": lon}


class DustbinUpdate(DustbinFields):
    """Sparse patch: only keys present in the request body end up in ``model_fields_set``."""

    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None
    description: str | None = None
    status: DustbinStatus | None = None

    @field_validator("latitude", mode="before")
    @classmethod
    def _latitude(cls, v):
        return check_coordinate(v, *LATITUDE)

    @field_validator("longitude", mode="before")
    @classmethod
    def _longitude(cls, v):
        return check_coordinate(v, *LONGITUDE)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v):
        return check_status(v)

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class DustbinResponse(BaseModel):
    id: int
    latitude: float
    longitude: float
    address: str | None = None
    description: str | None = None
    status: DustbinStatus
    reported_by: str | None = Field(default=None, alias="reportedBy")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class DustbinListResponse(BaseModel):
    count: int
    dustbins: list[DustbinResponse]
