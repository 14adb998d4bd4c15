"""Task domain schemas - Pydantic models for validation"""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.pagination import PaginationMeta
from ...shared.validators import validate_hhmm

TaskPriority = Literal["low", "medium", "high"]
TaskStatus = Literal["pending", "in_progress", "completed", "cancelled"]


class TaskCreate(BaseModel):
    staff_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    date: dt.date
    time: str
    priority: TaskPriority = "medium"
    status: TaskStatus = "pending"

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_hhmm(v)


class TaskUpdate(BaseModel):
    staff_id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    date: Optional[dt.date] = None
    time: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_hhmm(v)


class TaskResponse(BaseModel):
    id: int
    staff_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    date: dt.date
    time: Optional[str] = None
    priority: str
    status: str
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class TaskListResponse(BaseModel):
    items: list[TaskResponse]
    pagination: PaginationMeta
