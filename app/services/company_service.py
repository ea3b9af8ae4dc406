"""Company records: recruiter ownership lookups and admin management."""

from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.company import Company
from app.models.job import Job
from app.schemas.admin import AdminCompanyCreate, AdminCompanyOut, AdminCompanyUpdate
from app.utils.constants import COMPANY_STATUSES
from app.utils.validators import missing_fields

logger = structlog.get_logger(__name__)

REQUIRED_COMPANY_FIELDS = ["name", "industry", "location", "employees", "website"]


async def get_company_for_owner(db: AsyncSession, owner_id: UUID) -> Optional[Company]:
    """The company a recruiter owns, if any."""
    result = await db.execute(select(Company).where(Company.owner_id == owner_id))
    return result.scalar_one_or_none()


async def _get_company_or_404(db: AsyncSession, company_id: UUID) -> Company:
    company = await db.get(Company, company_id)
    if company is None:
        raise NotFoundError("Company not found")
    return company


async def _jobs_count(db: AsyncSession, company_id: UUID) -> int:
    return await db.scalar(select(func.count(Job.id)).where(Job.company_id == company_id)) or 0


def _check_status(status: Optional[str]) -> None:
    if status is not None and status not in COMPANY_STATUSES:
        raise ValidationError(
            f"Invalid status value. Must be one of: {', '.join(COMPANY_STATUSES)}",
            details={"status": "Invalid status"},
        )


def _to_admin_out(company: Company, jobs_count: int) -> AdminCompanyOut:
    return AdminCompanyOut.model_validate(company).model_copy(update={"jobs_count": jobs_count})


async def list_companies(db: AsyncSession) -> List[AdminCompanyOut]:
    """All companies, newest first, with their job counts."""
    counts = (
        select(Job.company_id, func.count(Job.id).label("jobs_count"))
        .group_by(Job.company_id)
        .subquery()
    )
    result = await db.execute(
        select(Company, func.coalesce(counts.c.jobs_count, 0))
        .outerjoin(counts, counts.c.company_id == Company.id)
        .order_by(Company.created_at.desc())
    )
    return [_to_admin_out(company, jobs_count) for company, jobs_count in result.all()]


async def create_company(db: AsyncSession, data: AdminCompanyCreate) -> AdminCompanyOut:
    """Create an unowned company from the admin panel."""
    missing = missing_fields(data.model_dump(), REQUIRED_COMPANY_FIELDS)
    if missing:
        raise ValidationError.missing(missing)
    _check_status(data.status)

    company = Company(**data.model_dump(exclude_none=True))
    db.add(company)
    await db.flush()

    logger.info("company_created", company_id=str(company.id), name=company.name)
    return _to_admin_out(company, 0)


async def update_company(db: AsyncSession, company_id: UUID, data: AdminCompanyUpdate) -> AdminCompanyOut:
    company = await _get_company_or_404(db, company_id)
    updates = data.model_dump(exclude_unset=True)

    blank = [field for field in ("name",) if field in updates and not (updates[field] or "").strip()]
    if blank:
        raise ValidationError.missing(blank)
    _check_status(updates.get("status"))

    for field, value in updates.items():
        setattr(company, field, value)
    await db.flush()

    logger.info("company_updated", company_id=str(company.id), fields=sorted(updates))
    return _to_admin_out(company, await _jobs_count(db, company.id))


async def delete_company(db: AsyncSession, company_id: UUID) -> None:
    """Delete a company that no job references."""
    company = await _get_company_or_404(db, company_id)

    jobs_count = await _jobs_count(db, company.id)
    if jobs_count:
        raise ConflictError(
            f"Cannot delete company with {jobs_count} job(s) still posted",
            details={"jobsCount": jobs_count},
        )

    await db.delete(company)
    await db.flush()
    logger.info("company_deleted", company_id=str(company_id))
