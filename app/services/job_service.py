"""
Job listing store: posting, updates, search and filter options.

Search composes SQL filters for everything the database can answer. Salary is
free text, so salary bounds and salary ordering are applied in Python over the
full matching set before the page is cut, which keeps ``total`` exact.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.models.application import Application
from app.models.company import Company
from app.models.job import Job
from app.models.user import User
from app.schemas.common import Pagination
from app.schemas.job import (
    JobCreate,
    JobFiltersResponse,
    JobListResponse,
    JobOut,
    JobUpdate,
    TopCompany,
)
from app.schemas.profile import CompanyOut
from app.services.company_service import get_company_for_owner
from app.utils.constants import (
    EXPERIENCE_LEVELS,
    EXPERIENCE_SHORT_FORMS,
    JOB_STATUS_ACTIVE,
    JOB_STATUSES,
    SALARY_SORTS,
    SORT_NEWEST,
    SORT_OLDEST,
    SORT_SALARY_HIGH_TO_LOW,
    normalize_experience_level,
)
from app.utils.helpers import page_count, title_case_hyphenated, utcnow
from app.utils.salary import salary_matches, salary_sort_key
from app.utils.validators import missing_fields

logger = structlog.get_logger(__name__)

REQUIRED_JOB_FIELDS = [
    "title",
    "industry",
    "jobType",
    "salary",
    "location",
    "description",
    "companyName",
    "requirements",
    "responsibilities",
]


@dataclass
class JobSearchParams:
    """Filters, ordering and page window for a job search."""

    search: Optional[str] = None
    job_type: Optional[str] = None
    experience: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    status: Optional[str] = JOB_STATUS_ACTIVE
    recruiter_id: Optional[UUID] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    sort: str = SORT_NEWEST
    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def needs_salary_pass(self) -> bool:
        return self.min_salary is not None or self.max_salary is not None or self.sort in SALARY_SORTS


def _contains(column, value: str):
    """Case-insensitive substring match with LIKE wildcards escaped."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def build_job_filters(params: JobSearchParams) -> list:
    """SQL clauses for a search; all of them must hold."""
    filters = []

    if params.search and params.search.strip():
        term = params.search.strip()
        filters.append(
            or_(
                _contains(Job.title, term),
                _contains(Company.name, term),
                _contains(Job.description, term),
            )
        )

    if params.job_type and params.job_type.strip():
        filters.append(func.lower(Job.job_type) == params.job_type.strip().lower())

    # Unknown levels are ignored rather than matching nothing
    level = normalize_experience_level(params.experience)
    if level:
        filters.append(Job.experience == level)

    if params.location and params.location.strip():
        filters.append(_contains(Job.location, params.location.strip()))

    if params.industry and params.industry.strip():
        filters.append(_contains(Job.industry, params.industry.strip()))

    if params.status in JOB_STATUSES:
        filters.append(Job.status == params.status)

    if params.recruiter_id:
        filters.append(Job.recruiter_id == params.recruiter_id)

    return filters


def _with_relations(query):
    return query.options(selectinload(Job.company), selectinload(Job.recruiter))


async def application_counts(db: AsyncSession, job_ids: Iterable[UUID]) -> Dict[UUID, int]:
    """Number of applications per job."""
    job_ids = list(job_ids)
    if not job_ids:
        return {}
    result = await db.execute(
        select(Application.job_id, func.count(Application.id))
        .where(Application.job_id.in_(job_ids))
        .group_by(Application.job_id)
    )
    return {job_id: count for job_id, count in result.all()}


def to_job_out(job: Job, application_count: int = 0, include_company: bool = False) -> JobOut:
    """Serialize a job whose company and recruiter are loaded."""
    company = job.company
    recruiter = job.recruiter
    return JobOut.model_validate(job).model_copy(
        update={
            "logo": (company.logo if company else None) or job.logo or settings.DEFAULT_COMPANY_LOGO,
            "recruiter_name": recruiter.full_name if recruiter else "Unknown Recruiter",
            "recruiter_profile_picture": (
                (recruiter.profile_picture if recruiter else None) or settings.DEFAULT_PROFILE_PICTURE
            ),
            "application_count": application_count,
            "company": CompanyOut.model_validate(company) if include_company and company else None,
        }
    )


def parse_deadline(value: str) -> datetime:
    """ISO date or datetime from the client, stored as naive UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        raise ValidationError(
            "Invalid application deadline date format",
            details={"applicationDeadline": "Use an ISO date, e.g. 2025-12-31"},
        )
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _experience_level(value: Optional[str]) -> str:
    if not value or not value.strip():
        return EXPERIENCE_LEVELS[0]
    level = normalize_experience_level(value)
    if level is None:
        raise ValidationError(
            f"Invalid experience level. Must be one of: {', '.join(EXPERIENCE_LEVELS)}",
            details={"experience": "Unknown experience level"},
        )
    return level


def _clean_list(values: Optional[List[str]]) -> List[str]:
    return [value.strip() for value in values or [] if value and value.strip()]


async def _get_job_or_404(db: AsyncSession, job_id: UUID) -> Job:
    result = await db.execute(_with_relations(select(Job).where(Job.id == job_id)))
    job = result.scalar_one_or_none()
    if job is None:
        raise NotFoundError("Job not found")
    return job


async def create_job(db: AsyncSession, recruiter: User, data: JobCreate) -> JobOut:
    """Post a job under the recruiter's company."""
    company = await get_company_for_owner(db, recruiter.id)
    if company is None:
        raise ValidationError("No company associated with this user")

    payload = data.model_dump(by_alias=True)
    if not (payload.get("companyName") or "").strip():
        payload["companyName"] = company.name

    missing = missing_fields(payload, REQUIRED_JOB_FIELDS)
    if missing:
        raise ValidationError.missing(missing)

    deadline = (
        parse_deadline(data.application_deadline)
        if data.application_deadline
        else utcnow() + timedelta(days=settings.JOB_DEFAULT_DEADLINE_DAYS)
    )

    job = Job(
        title=data.title.strip(),
        industry=data.industry.strip(),
        job_type=data.job_type.strip(),
        experience=_experience_level(data.experience),
        salary=data.salary.strip(),
        location=data.location.strip(),
        description=data.description.strip(),
        skills=_clean_list(data.skills),
        requirements=_clean_list(data.requirements),
        responsibilities=_clean_list(data.responsibilities),
        logo=data.logo or company.logo or "",
        status=JOB_STATUS_ACTIVE,
        application_deadline=deadline,
    )
    job.company = company
    job.recruiter = recruiter
    db.add(job)
    await db.flush()

    logger.info("job_created", job_id=str(job.id), recruiter_id=str(recruiter.id), title=job.title)
    return to_job_out(job)


async def update_job(db: AsyncSession, user: User, job_id: UUID, data: JobUpdate, as_admin: bool = False) -> JobOut:
    """Partially update a job; only its recruiter (or an admin) may do so."""
    job = await _get_job_or_404(db, job_id)
    if not as_admin and job.recruiter_id != user.id:
        raise AuthorizationError("Not authorized to update this job")

    updates = data.model_dump(exclude_unset=True)
    # A null optional field leaves the stored value alone
    for field in ("experience", "skills", "logo", "status"):
        if field in updates and updates[field] is None:
            del updates[field]

    blank = [
        field
        for field in ("title", "industry", "job_type", "salary", "location", "description")
        if field in updates and not (updates[field] or "").strip()
    ]
    blank += [
        field
        for field in ("requirements", "responsibilities")
        if field in updates and not _clean_list(updates[field])
    ]
    if blank:
        raise ValidationError.missing(blank)

    if "experience" in updates:
        updates["experience"] = _experience_level(updates["experience"])
    if "application_deadline" in updates:
        if not updates["application_deadline"]:
            raise ValidationError.missing(["applicationDeadline"])
        updates["application_deadline"] = parse_deadline(updates["application_deadline"])
    if "status" in updates and updates["status"] not in JOB_STATUSES:
        raise ValidationError(
            f"Invalid status value. Must be one of: {', '.join(JOB_STATUSES)}",
            details={"status": "Invalid status"},
        )
    for field in ("skills", "requirements", "responsibilities"):
        if field in updates:
            updates[field] = _clean_list(updates[field])

    for field, value in updates.items():
        setattr(job, field, value.strip() if isinstance(value, str) else value)
    await db.flush()

    logger.info("job_updated", job_id=str(job.id), user_id=str(user.id), fields=sorted(updates))
    counts = await application_counts(db, [job.id])
    return to_job_out(job, counts.get(job.id, 0))


async def delete_job(db: AsyncSession, job_id: UUID) -> None:
    """Remove a job together with its applications and bookmarks."""
    job = await _get_job_or_404(db, job_id)

    # applications and saved_by cascade from the relationship
    await db.delete(job)
    await db.flush()

    logger.info("job_deleted", job_id=str(job_id))


async def get_job(db: AsyncSession, job_id: UUID) -> JobOut:
    """A single job with recruiter and company details."""
    job = await _get_job_or_404(db, job_id)
    counts = await application_counts(db, [job.id])
    return to_job_out(job, counts.get(job.id, 0), include_company=True)


async def list_recruiter_jobs(db: AsyncSession, recruiter: User) -> List[JobOut]:
    """The recruiter's own jobs, newest first."""
    result = await db.execute(
        _with_relations(
            select(Job).where(Job.recruiter_id == recruiter.id).order_by(Job.created_at.desc(), Job.id)
        )
    )
    jobs = result.scalars().all()
    counts = await application_counts(db, [job.id for job in jobs])
    return [to_job_out(job, counts.get(job.id, 0)) for job in jobs]


async def search_jobs(db: AsyncSession, params: JobSearchParams) -> JobListResponse:
    """Filtered, ordered, paginated job listing."""
    base = select(Job).outerjoin(Company, Job.company_id == Company.id).where(*build_job_filters(params))

    if params.sort == SORT_OLDEST:
        ordering = (Job.created_at.asc(), Job.id)
    else:
        ordering = (Job.created_at.desc(), Job.id)
    query = _with_relations(base.order_by(*ordering))

    if params.needs_salary_pass:
        jobs = [
            job
            for job in (await db.execute(query)).scalars().all()
            if salary_matches(job.salary, params.min_salary, params.max_salary)
        ]
        if params.sort in SALARY_SORTS:
            jobs.sort(
                key=lambda job: salary_sort_key(job.salary),
                reverse=params.sort == SORT_SALARY_HIGH_TO_LOW,
            )
        total = len(jobs)
        page_jobs = jobs[params.offset:params.offset + params.limit]
    else:
        total = await db.scalar(select(func.count()).select_from(base.subquery())) or 0
        result = await db.execute(query.offset(params.offset).limit(params.limit))
        page_jobs = list(result.scalars().all())

    counts = await application_counts(db, [job.id for job in page_jobs])

    logger.debug(
        "jobs_searched",
        total=total,
        page=params.page,
        limit=params.limit,
        salary_pass=params.needs_salary_pass,
    )

    return JobListResponse(
        jobs=[to_job_out(job, counts.get(job.id, 0)) for job in page_jobs],
        pagination=Pagination(
            total=total,
            page=params.page,
            pages=page_count(total, params.limit),
            has_more=params.offset + len(page_jobs) < total,
        ),
    )


async def get_filter_options(db: AsyncSession) -> JobFiltersResponse:
    """Distinct values for the job search filter widgets."""
    job_types = (await db.execute(select(Job.job_type).distinct())).scalars().all()
    levels = (await db.execute(select(Job.experience).distinct())).scalars().all()
    skill_lists = (await db.execute(select(Job.skills))).scalars().all()

    skills = sorted({skill for skill_list in skill_lists for skill in skill_list or [] if skill})
    formatted_types = sorted({title_case_hyphenated(job_type) for job_type in job_types if job_type})
    formatted_levels = [
        EXPERIENCE_SHORT_FORMS.get(level, level)
        for level in sorted(levels, key=lambda level: _level_rank(level))
        if level
    ]

    return JobFiltersResponse(job_types=formatted_types, experience_levels=formatted_levels, skills=skills)


def _level_rank(level: Optional[str]) -> int:
    return EXPERIENCE_LEVELS.index(level) if level in EXPERIENCE_LEVELS else len(EXPERIENCE_LEVELS)


async def top_companies(db: AsyncSession, limit: int = 5) -> List[TopCompany]:
    """Companies with the most posted jobs."""
    job_count = func.count(Job.id).label("job_count")
    result = await db.execute(
        select(Company, job_count)
        .join(Job, Job.company_id == Company.id)
        .group_by(Company.id)
        .order_by(job_count.desc(), Company.name)
        .limit(limit)
    )
    return [
        TopCompany(id=company.id, name=company.name, logo=company.logo, industry=company.industry, job_count=count)
        for company, count in result.all()
    ]
