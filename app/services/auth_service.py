"""
Identity and credential store.

Registration, login, password reset and password change. All credential
failures at login share one message so callers cannot probe which emails
exist.
"""

import secrets
import string
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import structlog
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from app.core.security import (
    SIGNUP_ROLES,
    Role,
    create_access_token,
    get_password_hash,
    verify_password,
)
from app.models.company import Company
from app.models.user import User
from app.schemas.auth import AuthResponse, UserSummary
from app.services.email_service import EmailSender, password_reset_email
from app.services.profile_service import ensure_email_available, get_profile_strategy
from app.services.storage_service import save_image
from app.utils.helpers import normalize_email, utcnow
from app.utils.validators import missing_fields, validate_email, validate_phone

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt rejects longer secrets
TEMPORARY_PASSWORD_LENGTH = 8


@dataclass
class SignupForm:
    """Fields of the multipart signup form."""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None


def validate_password(password: str, field: str = "password") -> None:
    """Length rule shared by signup, password change and admin settings."""
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            details={field: "Password is too short"},
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(
            f"Password must be at most {PASSWORD_MAX_BYTES} bytes",
            details={field: "Password is too long"},
        )


def _validate_signup(form: SignupForm) -> None:
    required = {
        "fullName": form.full_name,
        "email": form.email,
        "phoneNumber": form.phone_number,
        "password": form.password,
        "role": form.role,
    }
    missing = missing_fields(required, list(required))
    if missing:
        raise ValidationError.missing(missing)

    if form.role not in {role.value for role in SIGNUP_ROLES}:
        raise ValidationError(
            f"Invalid role. Must be one of: {', '.join(role.value for role in SIGNUP_ROLES)}",
            details={"role": "Invalid role"},
        )
    if not validate_email(form.email.strip()):
        raise ValidationError("Invalid email format", details={"email": "Invalid email format"})
    if not validate_phone(form.phone_number.strip()):
        raise ValidationError("Invalid phone number", details={"phoneNumber": "Invalid phone number"})
    validate_password(form.password)

    if form.role == Role.RECRUITER.value and (
        not (form.company_name or "").strip() or not (form.company_description or "").strip()
    ):
        raise ValidationError(
            "Company name and description are required for recruiters",
            details={
                "companyName": "Company name is required",
                "companyDescription": "Company description is required",
            },
        )


async def build_auth_response(db: AsyncSession, user: User, token: str, message: Optional[str] = None) -> AuthResponse:
    """Token plus the role-aware user summary the client needs for routing."""
    strategy = get_profile_strategy(user.role)
    is_complete = await strategy.is_profile_complete(db, user)
    redirect_path = strategy.complete_path if is_complete else strategy.incomplete_path

    summary = UserSummary(
        id=user.id,
        role=user.role,
        full_name=user.full_name,
        email=user.email,
        profile_picture=user.profile_picture,
        company=await strategy.summary_company(db, user),
        is_profile_complete=is_complete,
        redirect_path=redirect_path,
        first_login=not is_complete,
    )
    return AuthResponse(
        message=message,
        token=token,
        user=summary,
        redirect_path=redirect_path,
        is_profile_complete=is_complete,
    )


async def register_user(
    db: AsyncSession,
    form: SignupForm,
    profile_picture: Optional[UploadFile] = None,
    company_logo: Optional[UploadFile] = None,
) -> AuthResponse:
    """Create a job seeker or recruiter account (and the recruiter's company)."""
    _validate_signup(form)

    email = normalize_email(form.email)
    await ensure_email_available(db, email)

    user = User(
        email=email,
        password_hash=get_password_hash(form.password),
        role=form.role,
        full_name=form.full_name.strip(),
        phone_number=form.phone_number.strip(),
    )
    if profile_picture is not None and profile_picture.filename:
        user.profile_picture = await save_image(profile_picture)
    db.add(user)
    await db.flush()

    if form.role == Role.RECRUITER.value:
        company = Company(
            owner_id=user.id,
            name=form.company_name.strip(),
            description=form.company_description.strip(),
            status="Active",
        )
        if company_logo is not None and company_logo.filename:
            company.logo = await save_image(company_logo)
        db.add(company)
        await db.flush()

    logger.info("user_registered", user_id=str(user.id), role=user.role)
    return await build_auth_response(db, user, create_access_token(user), message="User registered successfully")


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    """Check credentials; every failure is the same AuthenticationError."""
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_failed", email=normalize_email(email))
        raise AuthenticationError(INVALID_CREDENTIALS)

    # A temporary password stops working once its window closes
    if user.reset_password_expiry is not None and utcnow() > user.reset_password_expiry:
        logger.info("login_failed_expired_temporary_password", user_id=str(user.id))
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not user.is_active:
        raise AuthorizationError("Account is inactive")

    return user


async def login(db: AsyncSession, email: str, password: str) -> AuthResponse:
    user = await authenticate(db, email, password)
    logger.info("user_logged_in", user_id=str(user.id), role=user.role)
    return await build_auth_response(db, user, create_access_token(user))


async def admin_login(db: AsyncSession, email: str, password: str) -> AuthResponse:
    """Admin panel login; short-lived token."""
    user = await authenticate(db, email, password)
    if user.role != Role.ADMIN.value:
        raise AuthorizationError("Access denied. Admin role required.")

    token = create_access_token(user, expires_delta=timedelta(minutes=settings.ADMIN_TOKEN_EXPIRE_MINUTES))
    logger.info("admin_logged_in", user_id=str(user.id))
    return await build_auth_response(db, user, token)


def generate_temporary_password(length: int = TEMPORARY_PASSWORD_LENGTH) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


async def request_password_reset(db: AsyncSession, email: str, sender: EmailSender) -> None:
    """
    Replace the password with a short-lived temporary one and email it.

    The email goes out before the request transaction commits, so a delivery
    failure rolls the new hash back and the old password keeps working.
    """
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("No account found with this email address")

    temporary_password = generate_temporary_password()
    user.password_hash = get_password_hash(temporary_password)
    user.reset_password_expiry = utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
    await db.flush()

    subject, body = password_reset_email(temporary_password, settings.PASSWORD_RESET_EXPIRE_MINUTES)
    await sender.send(user.email, subject, body)

    logger.info("password_reset_issued", user_id=str(user.id))


async def change_password(db: AsyncSession, user: User, current_password: str, new_password: str) -> None:
    """Set a new password after checking the current (possibly temporary) one."""
    if not verify_password(current_password, user.password_hash):
        raise ValidationError(
            "Current password is incorrect", details={"currentPassword": "Current password is incorrect"}
        )
    if user.reset_password_expiry is not None and utcnow() > user.reset_password_expiry:
        raise AuthenticationError("Temporary password has expired")
    validate_password(new_password, field="newPassword")

    user.password_hash = get_password_hash(new_password)
    user.reset_password_expiry = None
    await db.flush()

    logger.info("password_changed", user_id=str(user.id))
