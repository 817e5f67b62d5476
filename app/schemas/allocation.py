from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from app.schemas.room import RoomResponse, as_utc


class AllocationCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_name: str = Field(alias="studentName")
    student_number: str = Field(alias="studentNumber")
    room_id: int = Field(alias="roomId", strict=True)

    @field_validator("student_name")
    @classmethod
    def check_student_name(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("Student name is required")
        return value

    @field_validator("student_number")
    @classmethod
    def check_student_number(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("Student number is required")
        return value


class AllocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    room_id: int = Field(alias="roomId")
    student_name: str = Field(alias="studentName")
    student_number: str = Field(alias="studentNumber")
    students_count: int = Field(alias="studentsCount")
    needs_ac: bool = Field(alias="needsAC")
    needs_washroom: bool = Field(alias="needsWashroom")
    allocated_at: datetime = Field(alias="allocatedAt")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("allocated_at", "created_at", "updated_at")
    @classmethod
    def attach_utc(cls, value):
        return as_utc(value)


class AllocationWithRoomResponse(AllocationResponse):
    room: RoomResponse


class AllocationResult(BaseModel):
    message: str
    allocation: AllocationResponse
    room: RoomResponse
