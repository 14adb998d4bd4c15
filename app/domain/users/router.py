"""User router - FastAPI endpoints for user accounts"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import User
from ...shared.pagination import PaginationParams, pagination_params
from .schemas import (
    PasswordChange,
    UserCreate,
    UserListResponse,
    UserResponse,
    UserRole,
    UserStatus,
    UserUpdate,
)
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("", response_model=UserListResponse)
async def list_users(
    name: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    role: Optional[UserRole] = Query(None),
    status: Optional[UserStatus] = Query(None),
    params: PaginationParams = Depends(pagination_params),
    _: User = Depends(require_roles("admin")),
    service: UserService = Depends(get_user_service),
):
    users, meta = service.list_users(params, name=name, email=email, role=role, status=status)
    return {"items": users, "pagination": meta}


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.get_user(user_id, current_user)


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    _: User = Depends(require_roles("admin")),
    service: UserService = Depends(get_user_service),
):
    return service.create_user(data)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.update_user(user_id, data, current_user)


@router.put("/{user_id}/password", status_code=204)
async def change_password(
    user_id: int,
    data: PasswordChange,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    service.change_password(user_id, data, current_user)
    return Response(status_code=204)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    _: User = Depends(require_roles("admin")),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id)
    return Response(status_code=204)


__all__ = ["router"]
