"""Client domain schemas - Pydantic models for validation"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.pagination import PaginationMeta
from ...shared.validators import validate_state
from ..users.schemas import UserSummary


class ClientBase(BaseModel):
    cpf: Optional[str] = Field(None, max_length=14)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = None
    zip_code: Optional[str] = Field(None, max_length=9)
    birth_date: Optional[dt.date] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("cpf", "zip_code")
    @classmethod
    def blank_to_none(cls, v):
        # Blank document numbers would collide on the unique index
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v

    @field_validator("state")
    @classmethod
    def validate_state_code(cls, v):
        return validate_state(v)


class ClientCreate(ClientBase):
    """Schema for attaching a client profile to an existing user"""

    user_id: int


class ClientUpdate(ClientBase):
    """The owning user cannot be changed"""


class ClientResponse(BaseModel):
    id: int
    user_id: int
    cpf: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    birth_date: Optional[dt.date] = None
    notes: Optional[str] = None
    user: Optional[UserSummary] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class ClientListResponse(BaseModel):
    items: list[ClientResponse]
    pagination: PaginationMeta
