"""Job endpoints - Browse, search and post jobs."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_recruiter
from app.config import settings
from app.db.session import get_db
from app.models.user import User
from app.schemas.job import (
    JobCreate,
    JobFiltersResponse,
    JobListResponse,
    JobOut,
    JobResponse,
    JobUpdate,
    TopCompany,
)
from app.services import job_service
from app.utils.constants import JOB_STATUS_ACTIVE, JOB_STATUSES, SORT_NEWEST
from app.utils.salary import parse_salary_filter

router = APIRouter()


@router.get("", response_model=JobListResponse, response_model_exclude_none=True)
async def list_jobs(
    search: Optional[str] = Query(None, description="Matches title, company name or description"),
    job_type: Optional[str] = Query(None, alias="jobType", description="Exact job type, case-insensitive"),
    experience: Optional[str] = Query(None, description="Entry Level, Mid Level, Senior Level, Executive (or Entry/Mid/Senior)"),
    location: Optional[str] = Query(None, description="Partial match, case-insensitive"),
    industry: Optional[str] = Query(None, description="Partial match, case-insensitive"),
    job_status: str = Query(JOB_STATUS_ACTIVE, alias="status", description="Job status (default Active)"),
    recruiter_id: Optional[UUID] = Query(None, alias="recruiterId", description="Only this recruiter's jobs"),
    min_salary: Optional[str] = Query(None, alias="minSalary"),
    max_salary: Optional[str] = Query(None, alias="maxSalary"),
    sort: str = Query(SORT_NEWEST, description="newest, oldest, salary-high-to-low, salary-low-to-high"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, description="Items per page"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get paginated list of jobs with filters

    **Filters** (all combined with AND):
    - `search`: title, company name or description contains the text
    - `jobType`: exact match, case-insensitive
    - `experience`: only applied when it names a known level
    - `location`, `industry`: partial match, case-insensitive
    - `status`: Active or Inactive; anything else falls back to Active
    - `minSalary`, `maxSalary`: compared against the parsed posted salary

    **Pagination:** `pages = ceil(total / limit)`; `hasMore` is true while
    later pages remain.
    """
    params = job_service.JobSearchParams(
        search=search,
        job_type=job_type,
        experience=experience,
        location=location,
        industry=industry,
        status=job_status if job_status in JOB_STATUSES else JOB_STATUS_ACTIVE,
        recruiter_id=recruiter_id,
        min_salary=parse_salary_filter(min_salary),
        max_salary=parse_salary_filter(max_salary),
        sort=sort,
        page=page,
        limit=min(limit, settings.MAX_PAGE_SIZE),
    )
    return await job_service.search_jobs(db, params)


@router.get("/filters", response_model=JobFiltersResponse)
async def get_filter_options(db: AsyncSession = Depends(get_db)):
    """Distinct job types, experience levels and skills for the filter widgets."""
    return await job_service.get_filter_options(db)


@router.get("/top-companies", response_model=List[TopCompany])
async def get_top_companies(db: AsyncSession = Depends(get_db)):
    """Top 5 companies by number of posted jobs."""
    return await job_service.top_companies(db)


@router.get("/recruiter-jobs", response_model=List[JobOut], response_model_exclude_none=True)
async def get_recruiter_jobs(
    current_user: User = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """The signed-in recruiter's jobs, newest first."""
    return await job_service.list_recruiter_jobs(db, current_user)


@router.post("", response_model=JobResponse, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_in: JobCreate,
    current_user: User = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """
    Post a job

    **Auth**: Recruiter (JWT required)

    `companyName` defaults to the recruiter's company; `experience` defaults
    to Entry Level; `applicationDeadline` defaults to 30 days from now.
    """
    job = await job_service.create_job(db, current_user, job_in)
    return JobResponse(message="Job posted successfully", job=job)


@router.get("/{job_id}", response_model=JobOut, response_model_exclude_none=True)
async def get_job(job_id: UUID, db: AsyncSession = Depends(get_db)):
    """Get job details by ID, including recruiter and company."""
    return await job_service.get_job(db, job_id)


@router.put("/{job_id}", response_model=JobResponse, response_model_exclude_none=True)
async def update_job(
    job_id: UUID,
    job_in: JobUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a job (owning recruiter only)."""
    job = await job_service.update_job(db, current_user, job_id, job_in)
    return JobResponse(message="Job updated successfully", job=job)
