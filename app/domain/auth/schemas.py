"""Auth domain schemas"""

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email
from ..users.schemas import UserResponse


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)


class LoginResponse(BaseModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"


class ForgotPasswordRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6, max_length=72)


class MessageResponse(BaseModel):
    message: str
