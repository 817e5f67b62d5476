from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


def as_utc(value):
    """Times are stored as UTC; SQLite hands them back without an offset."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RoomBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_number: str = Field(alias="roomNumber")
    capacity: int = Field(gt=0, strict=True)
    has_ac: bool = Field(default=False, alias="hasAC")
    has_attached_washroom: bool = Field(default=False, alias="hasAttachedWashroom")


class RoomCreate(RoomBase):
    @field_validator("room_number")
    @classmethod
    def check_room_number(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("Room number is required")
        return value


class RoomResponse(RoomBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def attach_utc(cls, value):
        return as_utc(value)


class RoomOccupancyResponse(RoomResponse):
    occupied: int


class RoomAvailabilityResponse(RoomOccupancyResponse):
    free_beds: int = Field(alias="freeBeds")


class RoomFilter(BaseModel):
    """Options recognised by the room listing; unset options impose nothing."""

    min_capacity: Optional[int] = None
    require_ac: bool = False
    require_washroom: bool = False
