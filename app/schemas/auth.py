"""Authentication schemas."""

from __future__ import annotations  # Enable forward references

from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel
from app.schemas.profile import CompanyOut


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(CamelModel):
    """Forgot password request schema."""

    email: EmailStr


class ChangePasswordRequest(CamelModel):
    """Change password request schema."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=72)


class UserSummary(CamelModel):
    """User block returned with a token."""

    id: UUID
    role: str
    full_name: str
    email: str
    profile_picture: Optional[str] = None
    company: Optional[CompanyOut] = None
    is_profile_complete: Optional[bool] = None
    redirect_path: Optional[str] = None
    first_login: Optional[bool] = None


class AuthResponse(CamelModel):
    """Signup and login response schema."""

    message: Optional[str] = None
    token: str
    user: UserSummary
    redirect_path: Optional[str] = None
    is_profile_complete: Optional[bool] = None


class TokenVerification(CamelModel):
    """Identity decoded from a valid token."""

    valid: bool = True
    user: UserSummary


# Rebuild models to resolve forward references
UserSummary.model_rebuild()
AuthResponse.model_rebuild()
TokenVerification.model_rebuild()
