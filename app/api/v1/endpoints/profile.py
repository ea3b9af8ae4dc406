"""
Profile API
Role-aware profile read/update and picture uploads for the signed-in user
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.profile import ProfileResponse, ProfileUpdateRequest, UploadResponse
from app.services.profile_service import get_profile_strategy

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse, response_model_exclude_none=True)
async def get_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the current user's profile

    **Auth**: any role (JWT required)

    Job seekers get their resume; recruiters get their company, posted jobs
    and company statistics.
    """
    strategy = get_profile_strategy(current_user.role)
    return ProfileResponse(user=await strategy.load_profile(db, current_user))


@router.put("/profile", response_model=ProfileResponse, response_model_exclude_none=True)
async def update_profile(
    profile_in: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update the current user's profile

    **Auth**: any role (JWT required)

    - Job seeker: `fullName`, `email`, `phoneNumber` required, optional `resume`
    - Recruiter: `company` with required `name` and `description`
    """
    strategy = get_profile_strategy(current_user.role)
    profile = await strategy.update_profile(db, current_user, profile_in)
    return ProfileResponse(message="Profile updated successfully", user=profile)


@router.put("/profile-picture", response_model=UploadResponse, response_model_exclude_none=True)
async def update_profile_picture(
    profile_picture: Optional[UploadFile] = File(None, alias="profilePicture"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Upload a profile picture (recruiters: the company logo)."""
    strategy = get_profile_strategy(current_user.role)
    return await strategy.set_picture(db, current_user, profile_picture)


@router.put("/company-logo", response_model=UploadResponse, response_model_exclude_none=True)
async def update_company_logo(
    company_logo: Optional[UploadFile] = File(None, alias="companyLogo"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Upload the company logo (recruiters only)."""
    strategy = get_profile_strategy(current_user.role)
    return await strategy.set_company_logo(db, current_user, company_logo)
