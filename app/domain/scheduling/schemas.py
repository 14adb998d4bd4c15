"""Scheduling domain schemas - Pydantic models for appointments"""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.pagination import PaginationMeta
from ...shared.validators import parse_time_string

AppointmentStatus = Literal["scheduled", "confirmed", "in_progress", "completed", "cancelled"]


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment"""

    client_id: int
    pet_id: int
    service_id: int
    staff_id: Optional[int] = None
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    status: AppointmentStatus = "scheduled"
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_clock_time(cls, v):
        return parse_time_string(v)


class AppointmentUpdate(BaseModel):
    """Schema for rescheduling or changing the status of an appointment"""

    client_id: Optional[int] = None
    pet_id: Optional[int] = None
    service_id: Optional[int] = None
    staff_id: Optional[int] = None
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_clock_time(cls, v):
        if v is None:
            return v
        return parse_time_string(v)


class AppointmentResponse(BaseModel):
    id: int
    client_id: int
    pet_id: int
    service_id: int
    staff_id: Optional[int] = None
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    status: str
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class AppointmentListResponse(BaseModel):
    items: list[AppointmentResponse]
    pagination: PaginationMeta
