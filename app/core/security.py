"""Security utilities: JWT, password hashing, role checks."""

import uuid
from datetime import timedelta
from enum import Enum
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.db.session import get_db
from app.models.user import User
from app.utils.helpers import utcnow

# auto_error=False so a missing header reaches get_current_user and gets our message
security = HTTPBearer(auto_error=False)


class Role(str, Enum):
    """User roles."""

    JOB_SEEKER = "Job Seeker"
    RECRUITER = "Recruiter"
    ADMIN = "Admin"


# Roles a visitor may pick at signup
SIGNUP_ROLES = (Role.JOB_SEEKER, Role.RECRUITER)


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long input
        return False


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token for a user."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user.id),
        "role": user.role,
        "type": "access",
        "exp": utcnow() + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify JWT token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid token")

    if payload.get("type") != "access" or not payload.get("sub"):
        raise AuthenticationError("Invalid token")
    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from Bearer token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    payload = decode_token(credentials.credentials)

    try:
        result = await db.execute(select(User).where(User.id == uuid.UUID(payload["sub"])))
    except ValueError:
        raise AuthenticationError("Invalid token")
    user = result.scalar_one_or_none()

    if user is None:
        raise AuthenticationError("Invalid token")

    if not user.is_active:
        raise AuthorizationError("Account is inactive")

    return user


def require_role(*allowed_roles: Role, message: Optional[str] = None):
    """Dependency to check if user has one of the allowed roles."""

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in {role.value for role in allowed_roles}:
            raise AuthorizationError(
                message or f"Access denied. Required role: {', '.join(r.value for r in allowed_roles)}"
            )
        return current_user

    return role_checker
