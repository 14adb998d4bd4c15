"""
Credentials for the back-office API.

Staff, admins and clients sign in with email and password (bcrypt) and carry a
short-lived JWT bearer token. Password reset links carry a random token whose
SHA-256 digest is the only thing persisted.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import JWT_ALGORITHM, JWT_EXPIRES_MINUTES, SECRET_KEY

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORDS
# ============================================================================


def hash_password_bcrypt(password: str) -> str:
    return pwd_context.hash(password)


def verify_password_bcrypt(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password and for a stored hash passlib cannot read"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Unreadable password hash: {e}")
        return False


# ============================================================================
# RESET TOKENS
# ============================================================================


def generate_secure_token(length: int = 32) -> str:
    """URL-safe random token for password reset links"""
    return secrets.token_urlsafe(length)


def hash_token(token: str) -> str:
    """Digest stored in place of a raw password reset token"""
    return hashlib.sha256(token.encode()).hexdigest()


# ============================================================================
# ACCESS TOKENS
# ============================================================================


def create_jwt_token(data: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign `data` with an `exp` claim.

    Args:
        data: Claims to sign; `sub` holds the user id
        expires_delta: Lifetime, JWT_EXPIRES_MINUTES when omitted
    """
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=JWT_EXPIRES_MINUTES)
    claims = {**data, "exp": datetime.utcnow() + lifetime}
    return jose_jwt.encode(claims, SECRET_KEY, algorithm=JWT_ALGORITHM)


def create_access_token(user_id: int) -> str:
    return create_jwt_token({"sub": str(user_id)})


def verify_jwt_token(token: str) -> Optional[dict[str, Any]]:
    """Claims of a valid token, or None when the signature or expiry check fails"""
    try:
        return jose_jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        return None
