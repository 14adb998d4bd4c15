"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.pagination import PaginationMeta
from ...shared.validators import validate_email

UserRole = Literal["client", "staff", "admin"]
UserStatus = Literal["active", "inactive"]


class UserCreate(BaseModel):
    """Schema for creating a new user"""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=100)
    password: str = Field(..., min_length=6, max_length=72)
    phone: Optional[str] = Field(None, max_length=20)
    role: UserRole = "client"
    status: UserStatus = "active"

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)


class UserUpdate(BaseModel):
    """Schema for updating an existing user"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=72)


class UserResponse(BaseModel):
    """Schema for user response"""

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    status: str
    last_access: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    items: list[UserResponse]
    pagination: PaginationMeta


class UserSummary(BaseModel):
    """Embedded in client and staff responses"""

    id: int
    name: str
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True
