"""Auth router - login, current user and password recovery"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...config import (
    LOGIN_RATE_LIMIT,
    LOGIN_RATE_WINDOW_SECONDS,
    PASSWORD_RESET_RATE_LIMIT,
    PASSWORD_RESET_RATE_WINDOW_SECONDS,
)
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from ...services.notification_service import notify_password_reset
from ..users.schemas import UserResponse
from .schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ResetPasswordRequest,
)
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

rate_limit_login = create_rate_limiter(
    limit=LOGIN_RATE_LIMIT, window_seconds=LOGIN_RATE_WINDOW_SECONDS, key_prefix="login"
)
rate_limit_password_reset = create_rate_limiter(
    limit=PASSWORD_RESET_RATE_LIMIT,
    window_seconds=PASSWORD_RESET_RATE_WINDOW_SECONDS,
    key_prefix="password_reset",
)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    _: None = Depends(rate_limit_login),
    service: AuthService = Depends(get_auth_service),
):
    user, token = service.login(data.email, data.password)
    return {"user": user, "token": token}


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    data: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    _: None = Depends(rate_limit_password_reset),
    service: AuthService = Depends(get_auth_service),
):
    user, token = service.create_reset_token(data.email)
    notify_password_reset(background_tasks, user, token)
    return {"message": "Password reset instructions sent to your email"}


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    data: ResetPasswordRequest,
    _: None = Depends(rate_limit_password_reset),
    service: AuthService = Depends(get_auth_service),
):
    service.reset_password(data.token, data.password)
    return {"message": "Password reset successfully"}


__all__ = ["router", "rate_limit_login", "rate_limit_password_reset"]
