"""Homepage statistics, computed from live data and served through the cache."""

from collections import Counter

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.cache import BaseCache
from app.core.security import Role
from app.models.company import Company
from app.models.job import Job
from app.models.resume import Resume
from app.models.user import User
from app.schemas.stats import (
    CandidateStats,
    Category,
    CompanyStatsSummary,
    FeaturedCompany,
    HomepageStats,
    RecentJob,
    StatsBlock,
)
from app.utils.constants import CATEGORY_ICONS, DEFAULT_CATEGORY_ICON, JOB_STATUS_ACTIVE
from app.utils.helpers import utcnow

logger = structlog.get_logger(__name__)

STATS_CACHE_KEY = "stats:homepage"
FEATURED_COMPANIES_LIMIT = 5
RECENT_JOBS_LIMIT = 3


async def compute_homepage_stats(db: AsyncSession) -> dict:
    """
    Build the homepage snapshot.

    Only available jobs (Active and before their deadline) are counted.
    Returns JSON-ready camelCase data so any cache backend can store it.
    """
    now = utcnow()
    available = (Job.status == JOB_STATUS_ACTIVE, Job.application_deadline > now)

    total_jobs = await db.scalar(select(func.count(Job.id)).where(*available)) or 0

    total_candidates = (
        await db.scalar(select(func.count(User.id)).where(User.role == Role.JOB_SEEKER.value)) or 0
    )
    skill_lists = (
        await db.execute(
            select(Resume.skills).join(User, Resume.user_id == User.id).where(User.role == Role.JOB_SEEKER.value)
        )
    ).scalars().all()
    skills = Counter(skill for skill_list in skill_lists for skill in skill_list or [] if skill)

    companies = (await db.execute(select(Company))).scalars().all()
    industries = sorted({company.industry for company in companies if company.industry})
    locations = sorted({company.location for company in companies if company.location})

    active_jobs_count = func.count(Job.id).label("active_jobs_count")
    featured_rows = await db.execute(
        select(Company, active_jobs_count)
        .join(Job, Job.company_id == Company.id)
        .where(*available)
        .group_by(Company.id)
        .order_by(active_jobs_count.desc(), Company.name)
        .limit(FEATURED_COMPANIES_LIMIT)
    )
    featured_companies = [
        FeaturedCompany(
            id=company.id,
            name=company.name,
            logo=company.logo,
            industry=company.industry,
            description=company.description,
            active_jobs_count=count,
        )
        for company, count in featured_rows.all()
    ]

    recent_rows = await db.execute(
        select(Job)
        .options(selectinload(Job.company))
        .where(*available)
        .order_by(Job.created_at.desc(), Job.id)
        .limit(RECENT_JOBS_LIMIT)
    )
    recent_jobs = [
        RecentJob.model_validate(job).model_copy(
            update={"logo": (job.company.logo if job.company else None) or job.logo}
        )
        for job in recent_rows.scalars().all()
    ]

    industry_count = func.count(Job.id).label("count")
    category_rows = await db.execute(
        select(Job.industry, industry_count)
        .where(*available)
        .group_by(Job.industry)
        .order_by(industry_count.desc(), Job.industry)
    )
    categories = [
        Category(name=industry, icon=CATEGORY_ICONS.get(industry, DEFAULT_CATEGORY_ICON), count=count)
        for industry, count in category_rows.all()
    ]

    snapshot = HomepageStats(
        stats=StatsBlock(
            total_jobs=total_jobs,
            candidates=CandidateStats(total_candidates=total_candidates, skills=dict(skills)),
            companies=CompanyStatsSummary(
                total_companies=len(companies),
                industries=industries,
                locations=locations,
            ),
        ),
        featured_companies=featured_companies,
        recent_jobs=recent_jobs,
        categories=categories,
    )

    logger.info("homepage_stats_computed", total_jobs=total_jobs, total_candidates=total_candidates)
    return snapshot.model_dump(mode="json", by_alias=True)


async def get_homepage_stats(db: AsyncSession, cache: BaseCache) -> dict:
    """Cached snapshot; recomputed once ``CACHE_STATS_TTL`` has elapsed."""
    return await cache.get_or_set(
        STATS_CACHE_KEY,
        lambda: compute_homepage_stats(db),
        ttl=settings.CACHE_STATS_TTL,
    )
