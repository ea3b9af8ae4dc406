"""Authentication endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    TokenVerification,
)
from app.schemas.common import MessageResponse
from app.services import auth_service
from app.services.email_service import EmailSender, get_email_sender

router = APIRouter()


@router.post(
    "/signup",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    full_name: Optional[str] = Form(None, alias="fullName"),
    email: Optional[str] = Form(None),
    phone_number: Optional[str] = Form(None, alias="phoneNumber"),
    password: Optional[str] = Form(None),
    role: Optional[str] = Form(None),
    company_name: Optional[str] = Form(None, alias="companyName"),
    company_description: Optional[str] = Form(None, alias="companyDescription"),
    profile_picture: Optional[UploadFile] = File(None, alias="profilePicture"),
    company_logo: Optional[UploadFile] = File(None, alias="companyLogo"),
    db: AsyncSession = Depends(get_db),
):
    """
    Register a job seeker or recruiter (multipart form).

    Recruiters must also send ``companyName`` and ``companyDescription``;
    their company profile is created in the same transaction.
    """
    form = auth_service.SignupForm(
        full_name=full_name,
        email=email,
        phone_number=phone_number,
        password=password,
        role=role,
        company_name=company_name,
        company_description=company_description,
    )
    return await auth_service.register_user(db, form, profile_picture, company_logo)


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login with email and password."""
    return await auth_service.login(db, request.email, request.password)


@router.get("/verify", response_model=TokenVerification, response_model_exclude_none=True)
async def verify_token(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Confirm the bearer token and return who it belongs to."""
    response = await auth_service.build_auth_response(db, current_user, token="")
    return TokenVerification(user=response.user)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender),
):
    """Email a temporary password valid for a few minutes."""
    await auth_service.request_password_reset(db, request.email, sender)
    return MessageResponse(message="A temporary password has been sent to your email")


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Replace the current (or temporary) password."""
    await auth_service.change_password(db, current_user, request.current_password, request.new_password)
    return MessageResponse(message="Password changed successfully")
