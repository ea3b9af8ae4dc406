"""
Application entity and status workflow.

A job seeker applies once per job. The job's recruiter moves the application
through Pending, Processing, Approved and Not Hired; each move rewrites the
status message and re-arms the seeker notification.
"""

from collections import OrderedDict
from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.core.security import Role
from app.models.application import (
    APPLICATION_STATUSES,
    STATUS_MESSAGES,
    STATUS_PENDING,
    Application,
)
from app.models.job import Job
from app.models.resume import Resume
from app.models.user import User
from app.schemas.application import (
    ApplicationJob,
    ApplicationOut,
    ApplicationPerson,
)
from app.schemas.profile import ApplicantOut, AppliedJob, ResumeOut

logger = structlog.get_logger(__name__)

ALREADY_APPLIED = "You have already applied for this job"


def _with_relations(query):
    return query.options(
        selectinload(Application.job).selectinload(Job.company),
        selectinload(Application.job_seeker),
        selectinload(Application.recruiter),
    )


def to_application_out(application: Application) -> ApplicationOut:
    """Serialize an application whose job, seeker and recruiter are loaded."""
    job = application.job
    return ApplicationOut(
        id=application.id,
        job_id=application.job_id,
        job_seeker_id=application.job_seeker_id,
        recruiter_id=application.recruiter_id,
        status=application.status,
        status_message=application.status_message,
        notification_sent=application.notification_sent,
        cover_letter=application.cover_letter,
        created_at=application.created_at,
        updated_at=application.updated_at,
        job=(
            ApplicationJob.model_validate(job).model_copy(
                update={"logo": (job.company.logo if job.company else None) or job.logo}
            )
            if job
            else None
        ),
        job_seeker=ApplicationPerson.model_validate(application.job_seeker) if application.job_seeker else None,
        recruiter=ApplicationPerson.model_validate(application.recruiter) if application.recruiter else None,
    )


async def _load(db: AsyncSession, application_id: UUID) -> Optional[Application]:
    result = await db.execute(
        _with_relations(select(Application).where(Application.id == application_id)),
        execution_options={"populate_existing": True},
    )
    return result.scalar_one_or_none()


async def _existing_application(db: AsyncSession, job_seeker_id: UUID, job_id: UUID) -> Optional[Application]:
    result = await db.execute(
        select(Application).where(Application.job_seeker_id == job_seeker_id, Application.job_id == job_id)
    )
    return result.scalar_one_or_none()


async def apply(db: AsyncSession, user: User, job_id: UUID, cover_letter: Optional[str] = None) -> ApplicationOut:
    """Create a Pending application for (user, job)."""
    if user.role != Role.JOB_SEEKER.value:
        raise AuthorizationError("Only job seekers can apply for jobs")

    job = await db.get(Job, job_id)
    if job is None:
        raise NotFoundError("Job not found")

    if await _existing_application(db, user.id, job.id) is not None:
        raise ConflictError(ALREADY_APPLIED)

    if not job.is_available:
        raise ValidationError("This job is no longer accepting applications")

    seeker_id = user.id
    application = Application(
        job_seeker_id=seeker_id,
        recruiter_id=job.recruiter_id,
        job_id=job.id,
        status=STATUS_PENDING,
        status_message=STATUS_MESSAGES[STATUS_PENDING],
        notification_sent=False,
        cover_letter=(cover_letter or "").strip() or None,
    )
    db.add(application)
    try:
        await db.flush()
    except IntegrityError:
        # A concurrent apply for the same pair won the unique constraint
        await db.rollback()
        logger.info("duplicate_application_rejected", user_id=str(seeker_id), job_id=str(job_id))
        raise ConflictError(ALREADY_APPLIED)

    logger.info("application_created", application_id=str(application.id), job_id=str(job.id), user_id=str(user.id))
    return to_application_out(await _load(db, application.id))


async def list_for_seeker(db: AsyncSession, user: User) -> List[ApplicationOut]:
    if user.role != Role.JOB_SEEKER.value:
        raise AuthorizationError("Access denied. Job seeker role required.")

    result = await db.execute(
        _with_relations(
            select(Application)
            .where(Application.job_seeker_id == user.id)
            .order_by(Application.updated_at.desc(), Application.id)
        )
    )
    return [to_application_out(application) for application in result.scalars().all()]


async def list_for_recruiter(db: AsyncSession, user: User) -> List[ApplicationOut]:
    """Applications to jobs the recruiter owns."""
    if user.role != Role.RECRUITER.value:
        raise AuthorizationError("Access denied. Recruiter role required.")

    result = await db.execute(
        _with_relations(
            select(Application)
            .join(Job, Application.job_id == Job.id)
            .where(Job.recruiter_id == user.id)
            .order_by(Application.updated_at.desc(), Application.id)
        )
    )
    return [to_application_out(application) for application in result.scalars().all()]


def _check_transition(application: Application, new_status: str) -> None:
    if (
        settings.APPLICATION_FINAL_STATUSES_LOCKED
        and application.is_final
        and new_status != application.status
    ):
        raise ConflictError(
            f"Application is already {application.status} and cannot be changed",
            details={"status": application.status},
        )


async def update_status(db: AsyncSession, user: User, application_id: UUID, new_status: Optional[str]) -> ApplicationOut:
    """Recruiter decision on an application."""
    if not new_status or new_status not in APPLICATION_STATUSES:
        raise ValidationError(
            f"Invalid status value. Must be one of: {', '.join(APPLICATION_STATUSES)}",
            details={"status": "Invalid status"},
        )

    if user.role != Role.RECRUITER.value:
        raise AuthorizationError("Only recruiters can update application status")

    application = await _load(db, application_id)
    if application is None:
        raise NotFoundError("Application not found")

    if application.recruiter_id != user.id:
        raise AuthorizationError("Not authorized to update this application")

    _check_transition(application, new_status)

    previous = application.status
    application.set_status(new_status)
    await db.flush()

    logger.info(
        "application_status_updated",
        application_id=str(application.id),
        from_status=previous,
        to_status=new_status,
        recruiter_id=str(user.id),
    )
    return to_application_out(application)


async def acknowledge(db: AsyncSession, user: User, application_id: UUID) -> ApplicationOut:
    """The applicant has seen the latest status change."""
    application = await _load(db, application_id)
    if application is None:
        raise NotFoundError("Application not found")
    if application.job_seeker_id != user.id:
        raise AuthorizationError("Not authorized to access this application")

    application.notification_sent = True
    await db.flush()
    return to_application_out(application)


async def list_applicants(db: AsyncSession, user: User) -> List[ApplicantOut]:
    """Distinct job seekers who applied to the recruiter's jobs, newest activity first."""
    if user.role != Role.RECRUITER.value:
        raise AuthorizationError("Access denied. Recruiter only.")

    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job), selectinload(Application.job_seeker))
        .join(Job, Application.job_id == Job.id)
        .where(Job.recruiter_id == user.id)
        .order_by(Application.updated_at.desc(), Application.id)
    )
    applications = result.scalars().all()

    grouped: "OrderedDict[UUID, List[Application]]" = OrderedDict()
    for application in applications:
        grouped.setdefault(application.job_seeker_id, []).append(application)

    resumes = {}
    if grouped:
        resume_rows = await db.execute(select(Resume).where(Resume.user_id.in_(list(grouped))))
        resumes = {resume.user_id: resume for resume in resume_rows.scalars().all()}

    applicants = []
    for seeker_id, seeker_applications in grouped.items():
        seeker = seeker_applications[0].job_seeker
        resume = resumes.get(seeker_id)
        applicants.append(
            ApplicantOut(
                id=seeker.id,
                full_name=seeker.full_name,
                email=seeker.email,
                phone_number=seeker.phone_number,
                profile_picture=seeker.profile_picture,
                resume=ResumeOut.model_validate(resume) if resume else None,
                latest_status=seeker_applications[0].status,
                applied_jobs=[
                    AppliedJob(
                        application_id=application.id,
                        job_id=application.job_id,
                        title=application.job.title,
                        status=application.status,
                        applied_at=application.created_at,
                    )
                    for application in seeker_applications
                ],
            )
        )
    return applicants
