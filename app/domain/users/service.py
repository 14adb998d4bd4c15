"""User service - Business logic for user accounts"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from ...models import User
from ...security_utils import hash_password_bcrypt, verify_password_bcrypt
from ...shared.pagination import PaginationParams, paginate
from .repository import UserRepository
from .schemas import PasswordChange, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def list_users(
        self,
        params: PaginationParams,
        name: Optional[str] = None,
        email: Optional[str] = None,
        role: Optional[str] = None,
        status: Optional[str] = None,
    ):
        query = self.repo.query_users(self.db, name=name, email=email, role=role, status=status)
        return paginate(query, params)

    def get_user(self, user_id: int, current_user: User) -> User:
        """Admins see everyone, other users only themselves"""
        if current_user.role != "admin" and current_user.id != user_id:
            raise ForbiddenError("Access denied")
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_user(self, data: UserCreate) -> User:
        if self.repo.get_user_by_email(self.db, data.email):
            raise ConflictError("Email already in use")

        logger.info(f"📥 Creating user {data.email} with role {data.role}")
        return self.repo.create_user(
            self.db,
            name=data.name,
            email=data.email,
            password_hash=hash_password_bcrypt(data.password),
            phone=data.phone,
            role=data.role,
            status=data.status,
        )

    def update_user(self, user_id: int, data: UserUpdate, current_user: User) -> User:
        user = self.get_user(user_id, current_user)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)

        if current_user.role != "admin" and ("role" in updates or "status" in updates):
            raise ForbiddenError("Only administrators can change role or status")

        if "email" in updates and updates["email"] != user.email:
            if self.repo.get_user_by_email(self.db, updates["email"]):
                raise ConflictError("Email already in use")

        return self.repo.update_user(self.db, user, **updates)

    def change_password(self, user_id: int, data: PasswordChange, current_user: User) -> None:
        if current_user.id != user_id:
            raise ForbiddenError("Access denied")

        if not verify_password_bcrypt(data.current_password, current_user.password_hash):
            raise InvalidInputError("Current password is incorrect")

        self.repo.update_user(
            self.db, current_user, password_hash=hash_password_bcrypt(data.new_password)
        )
        logger.info(f"🔑 Password changed for user {current_user.id}")

    def delete_user(self, user_id: int) -> None:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.client is not None or user.staff is not None:
            raise InvalidInputError(
                "Cannot delete a user linked to a client or staff record"
            )
        self.repo.delete_user(self.db, user)
        logger.info(f"🗑️ Deleted user {user_id}")
