"""Recruiter endpoints - applicants and public recruiter profiles."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.profile import ApplicantOut, RecruiterPublicProfile
from app.services import application_service, profile_service

router = APIRouter()


@router.get("/job-seekers", response_model=List[ApplicantOut], response_model_exclude_none=True)
async def list_job_seekers(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Job seekers who applied to the recruiter's jobs, with what they applied to."""
    return await application_service.list_applicants(db, current_user)


@router.get("/profile/{recruiter_id}", response_model=RecruiterPublicProfile)
async def get_recruiter_profile(
    recruiter_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Public company view of a recruiter."""
    return await profile_service.get_recruiter_public_profile(db, recruiter_id)
