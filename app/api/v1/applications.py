"""Application endpoints - apply, list and review applications."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    ApplyRequest,
    StatusUpdateRequest,
)
from app.services import application_service

router = APIRouter()


@router.post("/apply/{job_id}", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_for_job(
    job_id: UUID,
    apply_in: Optional[ApplyRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Apply for a job

    **Auth**: Job Seeker (JWT required)

    One application per job; applying again returns 409.
    """
    application = await application_service.apply(
        db, current_user, job_id, cover_letter=apply_in.cover_letter if apply_in else None
    )
    return ApplicationResponse(message="Application submitted successfully", application=application)


@router.get("/my-applications", response_model=ApplicationListResponse)
async def my_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The job seeker's applications, most recently updated first."""
    return ApplicationListResponse(applications=await application_service.list_for_seeker(db, current_user))


@router.get("/recruiter-applications", response_model=ApplicationListResponse)
async def recruiter_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Applications to the recruiter's jobs, most recently updated first."""
    return ApplicationListResponse(applications=await application_service.list_for_recruiter(db, current_user))


@router.patch("/status/{application_id}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: UUID,
    status_in: Optional[StatusUpdateRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update an application's status

    **Auth**: the recruiter who owns the job

    `status` must be one of Pending, Approved, Not Hired, Processing.
    """
    new_status = status_in.status if status_in else None
    application = await application_service.update_status(db, current_user, application_id, new_status)
    return ApplicationResponse(message="Application status updated", application=application)


@router.post("/{application_id}/acknowledge", response_model=ApplicationResponse)
async def acknowledge_status(
    application_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark the latest status change as seen by the applicant."""
    application = await application_service.acknowledge(db, current_user, application_id)
    return ApplicationResponse(message="Status acknowledged", application=application)
