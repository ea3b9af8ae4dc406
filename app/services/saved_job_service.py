"""Saved jobs (bookmarks)."""

from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFoundError, ValidationError
from app.models.job import Job
from app.models.saved_job import SavedJob
from app.models.user import User
from app.schemas.job import SavedJobOut

logger = structlog.get_logger(__name__)


async def _find(db: AsyncSession, user_id: UUID, job_id: UUID) -> Optional[SavedJob]:
    result = await db.execute(select(SavedJob).where(SavedJob.user_id == user_id, SavedJob.job_id == job_id))
    return result.scalar_one_or_none()


async def list_saved_jobs(db: AsyncSession, user: User) -> List[SavedJobOut]:
    """The user's bookmarks, most recently saved first."""
    result = await db.execute(
        select(SavedJob)
        .options(selectinload(SavedJob.job).selectinload(Job.company))
        .where(SavedJob.user_id == user.id)
        .order_by(SavedJob.created_at.desc(), SavedJob.id)
    )
    return [
        SavedJobOut.model_validate(saved.job).model_copy(update={"saved_at": saved.created_at})
        for saved in result.scalars().all()
    ]


async def save_job(db: AsyncSession, user: User, job_id: Optional[UUID]) -> List[SavedJobOut]:
    """Bookmark a job; saving it twice is a no-op."""
    if job_id is None:
        raise ValidationError("Job ID is required", details={"jobId": "Job ID is required"})

    if await db.get(Job, job_id) is None:
        raise NotFoundError("Job not found")

    if await _find(db, user.id, job_id) is None:
        user_id = user.id
        db.add(SavedJob(user_id=user_id, job_id=job_id))
        try:
            await db.flush()
        except IntegrityError:
            # Saved concurrently by another request; the pair exists either way
            await db.rollback()
            user = await db.get(User, user_id)
        else:
            logger.info("job_saved", user_id=str(user_id), job_id=str(job_id))

    return await list_saved_jobs(db, user)


async def remove_saved_job(db: AsyncSession, user: User, job_id: UUID) -> List[SavedJobOut]:
    saved = await _find(db, user.id, job_id)
    if saved is None:
        raise NotFoundError("Job not found in saved jobs")

    await db.delete(saved)
    await db.flush()

    logger.info("job_unsaved", user_id=str(user.id), job_id=str(job_id))
    return await list_saved_jobs(db, user)
