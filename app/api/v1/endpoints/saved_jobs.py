"""
Saved Jobs API
Users bookmark jobs to come back to later
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.job import SavedJobRequest, SavedJobsResponse
from app.services import saved_job_service

router = APIRouter()


@router.post("/saved-jobs", response_model=SavedJobsResponse)
async def save_job(
    saved_job_in: SavedJobRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Save/bookmark a job

    **Auth**: JWT required

    Saving a job that is already saved is not an error.
    """
    saved_jobs = await saved_job_service.save_job(db, current_user, saved_job_in.job_id)
    return SavedJobsResponse(message="Job saved successfully", saved_jobs=saved_jobs)


@router.get("/saved-jobs", response_model=SavedJobsResponse, response_model_exclude_none=True)
async def list_saved_jobs(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List all saved jobs"""
    return SavedJobsResponse(saved_jobs=await saved_job_service.list_saved_jobs(db, current_user))


@router.delete("/saved-jobs/{job_id}", response_model=SavedJobsResponse)
async def remove_saved_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Remove a job from saved jobs"""
    saved_jobs = await saved_job_service.remove_saved_job(db, current_user, job_id)
    return SavedJobsResponse(message="Job removed from saved jobs", saved_jobs=saved_jobs)
