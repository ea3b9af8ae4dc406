"""Admin panel read models and settings."""

from typing import List

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import ValidationError
from app.core.security import Role, get_password_hash, verify_password
from app.models.admin_settings import AdminSettings
from app.models.application import STATUS_APPROVED, STATUS_PENDING, STATUS_PROCESSING, Application
from app.models.job import Job
from app.models.user import User
from app.schemas.admin import (
    AdminSettingsOut,
    AdminSettingsUpdate,
    CandidateOut,
    DashboardRecentJob,
    DashboardStats,
)
from app.services.auth_service import validate_password
from app.services.job_service import application_counts
from app.services.profile_service import ensure_email_available
from app.utils.helpers import format_relative_date, normalize_email

logger = structlog.get_logger(__name__)

RECENT_JOBS_LIMIT = 3


async def list_candidates(db: AsyncSession) -> List[CandidateOut]:
    """Job seekers with their application totals and most recent application."""
    seekers = (
        await db.execute(
            select(User).where(User.role == Role.JOB_SEEKER.value).order_by(User.created_at.desc(), User.id)
        )
    ).scalars().all()

    applications = (
        await db.execute(
            select(Application)
            .options(selectinload(Application.job))
            .order_by(Application.created_at.desc(), Application.id)
        )
    ).scalars().all()

    by_seeker = {}
    for application in applications:
        by_seeker.setdefault(application.job_seeker_id, []).append(application)

    candidates = []
    for seeker in seekers:
        seeker_applications = by_seeker.get(seeker.id, [])
        latest = seeker_applications[0] if seeker_applications else None
        candidates.append(
            CandidateOut(
                id=seeker.id,
                full_name=seeker.full_name,
                email=seeker.email,
                phone_number=seeker.phone_number,
                profile_picture=seeker.profile_picture,
                applications_count=len(seeker_applications),
                latest_job_title=latest.job.title if latest else None,
                latest_status=latest.status if latest else None,
                applied_date=latest.created_at if latest else None,
            )
        )
    return candidates


async def dashboard_stats(db: AsyncSession) -> DashboardStats:
    async def count_applications(*conditions) -> int:
        return await db.scalar(select(func.count(Application.id)).where(*conditions)) or 0

    return DashboardStats(
        total_jobs=await db.scalar(select(func.count(Job.id))) or 0,
        active_candidates=await count_applications(Application.status.in_([STATUS_PENDING, STATUS_PROCESSING])),
        total_applications=await count_applications(),
        hired_candidates=await count_applications(Application.status == STATUS_APPROVED),
    )


async def recent_jobs(db: AsyncSession) -> List[DashboardRecentJob]:
    """Latest jobs with their real applicant counts."""
    jobs = (
        await db.execute(select(Job).order_by(Job.created_at.desc(), Job.id).limit(RECENT_JOBS_LIMIT))
    ).scalars().all()
    counts = await application_counts(db, [job.id for job in jobs])
    return [
        DashboardRecentJob(
            id=job.id,
            title=job.title,
            applicants=counts.get(job.id, 0),
            status=job.status,
            date=format_relative_date(job.created_at),
        )
        for job in jobs
    ]


async def _settings_row(db: AsyncSession, admin: User) -> AdminSettings:
    result = await db.execute(select(AdminSettings).where(AdminSettings.user_id == admin.id))
    row = result.scalar_one_or_none()
    if row is None:
        row = AdminSettings(user_id=admin.id, company_name="", email_notifications=True)
        db.add(row)
        await db.flush()
    return row


async def get_settings(db: AsyncSession, admin: User) -> AdminSettingsOut:
    row = await _settings_row(db, admin)
    return AdminSettingsOut(
        company_name=row.company_name or "",
        email=admin.email,
        email_notifications=row.email_notifications,
    )


async def update_settings(db: AsyncSession, admin: User, data: AdminSettingsUpdate) -> AdminSettingsOut:
    row = await _settings_row(db, admin)

    if data.new_password:
        if not data.current_password or not verify_password(data.current_password, admin.password_hash):
            raise ValidationError(
                "Current password is incorrect",
                details={"currentPassword": "Current password is incorrect"},
            )
        validate_password(data.new_password, field="newPassword")
        admin.password_hash = get_password_hash(data.new_password)
        admin.reset_password_expiry = None

    if data.company_name is not None:
        row.company_name = data.company_name.strip()
    if data.email:
        email = normalize_email(data.email)
        if email != admin.email:
            await ensure_email_available(db, email, exclude_user_id=admin.id)
            admin.email = email
    if data.email_notifications is not None:
        row.email_notifications = data.email_notifications

    await db.flush()
    logger.info("admin_settings_updated", user_id=str(admin.id), password_changed=bool(data.new_password))
    return await get_settings(db, admin)
