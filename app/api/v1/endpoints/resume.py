"""
Resume Builder API
Job seekers create and read their resume
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_job_seeker
from app.db.session import get_db
from app.models.user import User
from app.schemas.profile import ResumeRequest, ResumeResponse
from app.services import profile_service

router = APIRouter()


@router.post("", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
async def save_resume(
    resume_in: ResumeRequest,
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db),
):
    """
    Create or replace the resume

    **Auth**: Job Seeker (JWT required)

    Needs a full name, a valid email, and at least one education entry,
    experience entry and skill. Every save replaces the previous resume.
    """
    resume = await profile_service.save_resume(db, current_user, resume_in)
    return ResumeResponse(message="Resume saved successfully", resume=resume)


@router.get("", response_model=ResumeResponse, response_model_exclude_none=True)
async def get_resume(
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db),
):
    """Get the current job seeker's resume"""
    return ResumeResponse(resume=await profile_service.get_resume(db, current_user))
