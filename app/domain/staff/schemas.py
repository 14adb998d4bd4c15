"""Staff domain schemas - Pydantic models for validation"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.pagination import PaginationMeta
from ...shared.validators import validate_money
from ..users.schemas import UserSummary


class StaffCreate(BaseModel):
    """Schema for attaching an employee record to an existing user"""

    user_id: int
    position: str = Field(..., min_length=1, max_length=100)
    salary: Optional[Decimal] = None
    hire_date: Optional[dt.date] = None
    document: Optional[str] = Field(None, max_length=20)
    specialty: Optional[str] = Field(None, max_length=100)

    @field_validator("salary")
    @classmethod
    def validate_salary(cls, v):
        return validate_money(v)


class StaffUpdate(BaseModel):
    position: Optional[str] = Field(None, min_length=1, max_length=100)
    salary: Optional[Decimal] = None
    hire_date: Optional[dt.date] = None
    document: Optional[str] = Field(None, max_length=20)
    specialty: Optional[str] = Field(None, max_length=100)

    @field_validator("salary")
    @classmethod
    def validate_salary(cls, v):
        return validate_money(v)


class StaffResponse(BaseModel):
    id: int
    user_id: int
    position: str
    salary: Optional[Decimal] = None
    hire_date: Optional[dt.date] = None
    document: Optional[str] = None
    specialty: Optional[str] = None
    user: Optional[UserSummary] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class StaffListResponse(BaseModel):
    items: list[StaffResponse]
    pagination: PaginationMeta
