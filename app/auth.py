import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .exceptions import ForbiddenError, UnauthorizedError
from .models import User
from .security_utils import verify_jwt_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401 by us, not 403 by FastAPI
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user"""

    if not credentials:
        logger.warning("❌ No credentials provided")
        raise UnauthorizedError("Token not provided")

    token = credentials.credentials
    if len(token.split(".")) != 3:
        logger.warning(f"⚠️ Malformed token received, length: {len(token)}")
        raise UnauthorizedError("Invalid token format", code="INVALID_TOKEN")

    payload = verify_jwt_token(token)
    if not payload or not payload.get("sub"):
        raise UnauthorizedError("Invalid or expired token", code="INVALID_TOKEN")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise UnauthorizedError("Invalid token claims", code="INVALID_TOKEN") from e

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"⚠️ Token for unknown user_id: {user_id}")
        raise UnauthorizedError("User not found")

    if user.status != "active":
        logger.warning(f"⚠️ Inactive user {user.id} attempted access")
        raise UnauthorizedError("User is inactive")

    user.last_access = datetime.utcnow()
    db.commit()
    db.refresh(user)
    return user


def require_roles(*roles: str):
    """
    Create a dependency that only lets users with one of `roles` through

    Example usage:
        @router.delete("/{product_id}", dependencies=[Depends(require_roles("admin"))])
    """

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            logger.warning(
                f"🚫 User {current_user.id} with role '{current_user.role}' denied, requires {roles}"
            )
            raise ForbiddenError("Access denied")
        return current_user

    return role_checker


def is_client_user(user: User) -> bool:
    return user.role == "client"


def ensure_client_access(user: User, client_id: int) -> None:
    """Client-role users may only touch records that belong to their own client profile"""
    if not is_client_user(user):
        return
    own = user.client
    if own is None or own.id != client_id:
        logger.warning(f"🚫 User {user.id} denied access to client {client_id}")
        raise ForbiddenError("Access denied")
