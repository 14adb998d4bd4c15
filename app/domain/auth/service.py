"""Auth service - login and password recovery"""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from ...config import PASSWORD_RESET_EXPIRES_MINUTES
from ...exceptions import InvalidInputError, NotFoundError, UnauthorizedError
from ...models import PasswordResetToken, User
from ...security_utils import (
    create_access_token,
    generate_secure_token,
    hash_password_bcrypt,
    hash_token,
    verify_password_bcrypt,
)
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository()

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Returns (user, access token); every failure is the same 401"""
        user = self.users.get_user_by_email(self.db, email)
        if not user or not verify_password_bcrypt(password, user.password_hash):
            logger.warning(f"🔒 Failed login attempt for {email}")
            raise UnauthorizedError("Invalid email or password")

        if user.status != "active":
            logger.warning(f"🔒 Login attempt by inactive user {user.id}")
            raise UnauthorizedError("User is inactive")

        user = self.users.update_user(self.db, user, last_access=datetime.utcnow())
        logger.info(f"✅ User {user.id} logged in")
        return user, create_access_token(user.id)

    def create_reset_token(self, email: str) -> tuple[User, str]:
        """
        Issue a single-use reset token for `email`.

        Only the SHA-256 digest is stored; the raw token goes out by email.
        """
        user = self.users.get_user_by_email(self.db, email)
        if not user:
            raise NotFoundError("User not found")

        token = generate_secure_token()
        reset = PasswordResetToken(
            user_id=user.id,
            token=hash_token(token),
            expires_at=datetime.utcnow() + timedelta(minutes=PASSWORD_RESET_EXPIRES_MINUTES),
            used=False,
        )
        self.db.add(reset)
        self.db.commit()
        logger.info(f"🔑 Password reset requested for user {user.id}")
        return user, token

    def reset_password(self, token: str, new_password: str) -> None:
        reset = (
            self.db.query(PasswordResetToken)
            .filter(
                PasswordResetToken.token == hash_token(token),
                PasswordResetToken.used.is_(False),
                PasswordResetToken.expires_at > datetime.utcnow(),
            )
            .with_for_update()
            .first()
        )
        if not reset:
            raise InvalidInputError("Invalid or expired token", code="INVALID_TOKEN")

        reset.user.password_hash = hash_password_bcrypt(new_password)
        reset.used = True
        self.db.commit()
        logger.info(f"✅ Password reset completed for user {reset.user_id}")
