"""Admin panel API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.config import settings
from app.db.session import get_db
from app.models.user import User
from app.schemas.admin import (
    AdminCompanyCreate,
    AdminCompanyListResponse,
    AdminCompanyOut,
    AdminCompanyUpdate,
    AdminJobListResponse,
    AdminSettingsOut,
    AdminSettingsUpdate,
    CandidateListResponse,
    DashboardRecentJob,
    DashboardStats,
)
from app.schemas.auth import AuthResponse, LoginRequest
from app.schemas.common import MessageResponse
from app.schemas.job import JobResponse, JobUpdate
from app.services import admin_service, auth_service, company_service, job_service
from app.utils.constants import SORT_NEWEST

router = APIRouter()


# ============================================================================
# Authentication
# ============================================================================


@router.post("/auth/login", response_model=AuthResponse, response_model_exclude_none=True)
async def admin_login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Admin login; the token expires after ``ADMIN_TOKEN_EXPIRE_MINUTES``."""
    return await auth_service.admin_login(db, request.email, request.password)


# ============================================================================
# Companies
# ============================================================================


@router.get("/companies", response_model=AdminCompanyListResponse)
async def list_companies(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """List all companies with job counts."""
    return AdminCompanyListResponse(companies=await company_service.list_companies(db))


@router.post("/companies", response_model=AdminCompanyOut, status_code=status.HTTP_201_CREATED)
async def create_company(
    company_in: AdminCompanyCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a company (name, industry, location, employees and website are required)."""
    return await company_service.create_company(db, company_in)


@router.put("/companies/{company_id}", response_model=AdminCompanyOut)
async def update_company(
    company_id: UUID,
    company_in: AdminCompanyUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update company details."""
    return await company_service.update_company(db, company_id, company_in)


@router.delete("/companies/{company_id}", response_model=MessageResponse)
async def delete_company(
    company_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a company that has no jobs."""
    await company_service.delete_company(db, company_id)
    return MessageResponse(message="Company deleted successfully")


# ============================================================================
# Jobs
# ============================================================================


@router.get("/jobs", response_model=AdminJobListResponse, response_model_exclude_none=True)
async def list_jobs(
    search: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    job_type: Optional[str] = Query(None, alias="jobType"),
    experience: Optional[str] = Query(None),
    job_status: Optional[str] = Query(None, alias="status"),
    sort: str = Query(SORT_NEWEST),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """All jobs regardless of status, with the same filters as the public search."""
    params = job_service.JobSearchParams(
        search=search,
        location=location,
        job_type=job_type,
        experience=experience,
        status=job_status or None,
        sort=sort,
        page=page,
        limit=min(limit, settings.MAX_PAGE_SIZE),
    )
    result = await job_service.search_jobs(db, params)
    return AdminJobListResponse(jobs=result.jobs, pagination=result.pagination)


@router.put("/jobs/{job_id}", response_model=JobResponse, response_model_exclude_none=True)
async def update_job(
    job_id: UUID,
    job_in: JobUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update any job."""
    job = await job_service.update_job(db, current_user, job_id, job_in, as_admin=True)
    return JobResponse(message="Job updated successfully", job=job)


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a job with its applications and bookmarks."""
    await job_service.delete_job(db, job_id)
    return MessageResponse(message="Job deleted successfully")


# ============================================================================
# Candidates & Dashboard
# ============================================================================


@router.get("/candidates", response_model=CandidateListResponse)
async def list_candidates(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Job seekers with application summaries."""
    return CandidateListResponse(candidates=await admin_service.list_candidates(db))


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Job and application counters for the dashboard."""
    return await admin_service.dashboard_stats(db)


@router.get("/dashboard/recent-jobs", response_model=List[DashboardRecentJob])
async def dashboard_recent_jobs(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Latest 3 jobs with applicant counts."""
    return await admin_service.recent_jobs(db)


# ============================================================================
# Settings
# ============================================================================


@router.get("/settings", response_model=AdminSettingsOut)
async def get_settings(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.get_settings(db, current_user)


@router.put("/settings", response_model=AdminSettingsOut)
async def update_settings(
    settings_in: AdminSettingsUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update admin settings; a password change needs the current password."""
    return await admin_service.update_settings(db, current_user, settings_in)
