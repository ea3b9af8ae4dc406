"""
Role-specific profile behavior.

Each role has one strategy object that knows how to load, update and decorate
that role's profile. Callers look the strategy up with ``get_profile_strategy``
and never branch on role strings themselves.
"""

from typing import Dict, List, Optional
from uuid import UUID

import structlog
from fastapi import UploadFile
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.core.security import Role
from app.models.application import Application
from app.models.company import Company
from app.models.job import Job
from app.models.resume import Resume
from app.models.user import User
from app.schemas.profile import (
    CompanyOut,
    CompanyStats,
    CompanyUpdate,
    PostedJobSummary,
    ProfileOut,
    ProfileUpdateRequest,
    RecruiterPublicProfile,
    ResumeOut,
    ResumeRequest,
    UploadResponse,
)
from app.services.company_service import get_company_for_owner
from app.services.job_service import application_counts
from app.services.storage_service import save_image
from app.utils.constants import JOB_STATUS_ACTIVE
from app.utils.helpers import normalize_email
from app.utils.validators import missing_fields, validate_email, validate_phone

logger = structlog.get_logger(__name__)


async def get_resume_for_user(db: AsyncSession, user_id: UUID) -> Optional[Resume]:
    result = await db.execute(select(Resume).where(Resume.user_id == user_id))
    return result.scalar_one_or_none()


async def ensure_email_available(db: AsyncSession, email: str, exclude_user_id: Optional[UUID] = None) -> None:
    """Raise ConflictError when another account already uses ``email``."""
    query = select(User.id).where(User.email == normalize_email(email))
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    if (await db.execute(query)).first() is not None:
        raise ConflictError("Email already exists", details={"email": "Email already exists"})


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _education_entries(request: ResumeRequest) -> List[dict]:
    return [
        {"degree": _clean(entry.degree), "institution": _clean(entry.institution), "year": _clean(entry.year)}
        for entry in request.education
        if _clean(entry.degree) and _clean(entry.institution)
    ]


def _experience_entries(request: ResumeRequest) -> List[dict]:
    return [
        {"jobTitle": _clean(entry.job_title), "company": _clean(entry.company), "duration": _clean(entry.duration)}
        for entry in request.experience
        if _clean(entry.job_title) and _clean(entry.company)
    ]


def _skills(request: ResumeRequest) -> List[str]:
    return [skill.strip() for skill in request.skills if skill and skill.strip()]


async def _replace_resume(
    db: AsyncSession,
    user: User,
    full_name: str,
    email: str,
    phone_number: Optional[str],
    education: List[dict],
    experience: List[dict],
    skills: List[str],
) -> Resume:
    """Create or fully overwrite the user's single resume row."""
    resume = await get_resume_for_user(db, user.id)
    if resume is None:
        resume = Resume(user_id=user.id)
        db.add(resume)

    resume.full_name = full_name
    resume.email = email
    resume.phone_number = phone_number
    resume.education = education
    resume.experience = experience
    resume.skills = skills
    await db.flush()
    return resume


def validate_resume(request: ResumeRequest) -> None:
    """Resume builder completeness rules, reported field by field."""
    details: Dict[str, str] = {}

    if not _clean(request.full_name):
        details["fullName"] = "Full name is required"
    if not validate_email(_clean(request.email)):
        details["email"] = "A valid email is required"
    if request.phone_number and not validate_phone(request.phone_number.strip()):
        details["phoneNumber"] = "Invalid phone number"

    if not request.education:
        details["education"] = "At least one education entry is required"
    elif any(not _clean(e.degree) or not _clean(e.institution) for e in request.education):
        details["education"] = "Each education entry needs a degree and an institution"

    if not request.experience:
        details["experience"] = "At least one experience entry is required"
    elif any(not _clean(e.job_title) or not _clean(e.company) for e in request.experience):
        details["experience"] = "Each experience entry needs a job title and a company"

    if not _skills(request):
        details["skills"] = "At least one skill is required"

    if details:
        raise ValidationError("Please complete all required resume fields", details=details)


async def save_resume(db: AsyncSession, user: User, request: ResumeRequest) -> ResumeOut:
    """Resume builder: validate and replace the job seeker's resume."""
    validate_resume(request)
    resume = await _replace_resume(
        db,
        user,
        full_name=_clean(request.full_name),
        email=normalize_email(request.email),
        phone_number=_clean(request.phone_number) or user.phone_number,
        education=_education_entries(request),
        experience=_experience_entries(request),
        skills=_skills(request),
    )
    logger.info("resume_saved", user_id=str(user.id))
    return ResumeOut.model_validate(resume)


async def get_resume(db: AsyncSession, user: User) -> ResumeOut:
    resume = await get_resume_for_user(db, user.id)
    if resume is None:
        raise NotFoundError("Resume not found")
    return ResumeOut.model_validate(resume)


class ProfileStrategy:
    """Profile behavior shared by all roles; subclasses override what differs."""

    role: Role
    complete_path = "/"
    incomplete_path = "/"

    async def is_profile_complete(self, db: AsyncSession, user: User) -> bool:
        return True

    async def redirect_path(self, db: AsyncSession, user: User) -> str:
        complete = await self.is_profile_complete(db, user)
        return self.complete_path if complete else self.incomplete_path

    async def summary_company(self, db: AsyncSession, user: User) -> Optional[CompanyOut]:
        return None

    def base_profile(self, user: User) -> ProfileOut:
        return ProfileOut(
            id=user.id,
            role=user.role,
            full_name=user.full_name,
            email=user.email,
            phone_number=user.phone_number,
            profile_picture=user.profile_picture,
            created_at=user.created_at,
        )

    async def load_profile(self, db: AsyncSession, user: User) -> ProfileOut:
        return self.base_profile(user)

    async def update_profile(self, db: AsyncSession, user: User, data: ProfileUpdateRequest) -> ProfileOut:
        await self._update_user_fields(db, user, data)
        await db.flush()
        return await self.load_profile(db, user)

    async def set_picture(self, db: AsyncSession, user: User, upload: UploadFile) -> UploadResponse:
        path = await save_image(upload)
        user.profile_picture = path
        await db.flush()
        return UploadResponse(message="Profile picture updated", profile_picture=path)

    async def set_company_logo(self, db: AsyncSession, user: User, upload: UploadFile) -> UploadResponse:
        raise AuthorizationError("Only recruiters can update company logo")

    async def _update_user_fields(self, db: AsyncSession, user: User, data: ProfileUpdateRequest) -> None:
        """Validate and apply name, email and phone (all required)."""
        payload = {
            "fullName": data.full_name,
            "email": data.email,
            "phoneNumber": data.phone_number,
        }
        missing = missing_fields(payload, list(payload))
        if missing:
            raise ValidationError.missing(missing)

        email = normalize_email(data.email)
        if not validate_email(email):
            raise ValidationError("Invalid email format", details={"email": "Invalid email format"})
        if not validate_phone(data.phone_number.strip()):
            raise ValidationError("Invalid phone number", details={"phoneNumber": "Invalid phone number"})
        if email != user.email:
            await ensure_email_available(db, email, exclude_user_id=user.id)

        user.full_name = data.full_name.strip()
        user.email = email
        user.phone_number = data.phone_number.strip()


class JobSeekerProfile(ProfileStrategy):
    role = Role.JOB_SEEKER
    complete_path = "/jobs"
    incomplete_path = "/resume-builder"

    async def is_profile_complete(self, db: AsyncSession, user: User) -> bool:
        return await get_resume_for_user(db, user.id) is not None

    async def load_profile(self, db: AsyncSession, user: User) -> ProfileOut:
        profile = self.base_profile(user)
        resume = await get_resume_for_user(db, user.id)
        if resume is not None:
            profile.resume = ResumeOut.model_validate(resume)
        return profile

    async def update_profile(self, db: AsyncSession, user: User, data: ProfileUpdateRequest) -> ProfileOut:
        await self._update_user_fields(db, user, data)

        if data.resume is not None:
            # Incomplete entries are dropped here; the resume builder rejects them instead
            await _replace_resume(
                db,
                user,
                full_name=user.full_name,
                email=user.email,
                phone_number=user.phone_number,
                education=_education_entries(data.resume),
                experience=_experience_entries(data.resume),
                skills=_skills(data.resume),
            )

        await db.flush()
        logger.info("profile_updated", user_id=str(user.id), role=user.role, resume=data.resume is not None)
        return await self.load_profile(db, user)


class RecruiterProfile(ProfileStrategy):
    role = Role.RECRUITER
    complete_path = "/recruiter-dashboard"
    incomplete_path = "/company-setup"

    async def is_profile_complete(self, db: AsyncSession, user: User) -> bool:
        return await get_company_for_owner(db, user.id) is not None

    async def summary_company(self, db: AsyncSession, user: User) -> Optional[CompanyOut]:
        company = await get_company_for_owner(db, user.id)
        return CompanyOut.model_validate(company) if company else None

    async def load_profile(self, db: AsyncSession, user: User) -> ProfileOut:
        profile = self.base_profile(user)
        company = await get_company_for_owner(db, user.id)
        if company is not None:
            profile.company = CompanyOut.model_validate(company)

        result = await db.execute(
            select(Job).where(Job.recruiter_id == user.id).order_by(Job.created_at.desc(), Job.id)
        )
        jobs = result.scalars().all()
        counts = await application_counts(db, [job.id for job in jobs])

        profile.posted_jobs = [
            PostedJobSummary.model_validate(job).model_copy(update={"application_count": counts.get(job.id, 0)})
            for job in jobs
        ]
        profile.jobs_count = len(jobs)
        profile.company_stats = CompanyStats(
            active_jobs=sum(1 for job in jobs if job.status == JOB_STATUS_ACTIVE),
            total_applications=await db.scalar(
                select(func.count(Application.id)).where(Application.recruiter_id == user.id)
            )
            or 0,
        )
        return profile

    async def update_profile(self, db: AsyncSession, user: User, data: ProfileUpdateRequest) -> ProfileOut:
        company_data = data.company or CompanyUpdate()
        if not _clean(company_data.name):
            raise ValidationError("Company name is required", details={"company.name": "Company name is required"})
        if not _clean(company_data.description):
            raise ValidationError(
                "Company description is required",
                details={"company.description": "Company description is required"},
            )

        company = await get_company_for_owner(db, user.id)
        if company is None:
            company = Company(owner_id=user.id, status="Active")
            db.add(company)

        company.name = company_data.name.strip()
        company.description = company_data.description.strip()
        # Optional fields keep their stored value when omitted or blank
        for field in ("location", "website", "industry", "size"):
            value = _clean(getattr(company_data, field))
            if value:
                setattr(company, field, value)
        if company_data.employees is not None:
            company.employees = company_data.employees

        await db.flush()
        logger.info("company_profile_updated", user_id=str(user.id), company_id=str(company.id))
        return await self.load_profile(db, user)

    async def set_picture(self, db: AsyncSession, user: User, upload: UploadFile) -> UploadResponse:
        # A recruiter's picture is the company logo
        path = await self._set_logo(db, user, upload)
        return UploadResponse(message="Profile picture updated", profile_picture=path)

    async def set_company_logo(self, db: AsyncSession, user: User, upload: UploadFile) -> UploadResponse:
        path = await self._set_logo(db, user, upload)
        return UploadResponse(message="Company logo updated", company_logo=path)

    async def _set_logo(self, db: AsyncSession, user: User, upload: UploadFile) -> str:
        company = await get_company_for_owner(db, user.id)
        if company is None:
            raise ValidationError("No company associated with this user")
        company.logo = await save_image(upload)
        await db.flush()
        return company.logo


class AdminProfile(ProfileStrategy):
    role = Role.ADMIN
    complete_path = "/admin"
    incomplete_path = "/admin"


PROFILE_STRATEGIES: Dict[str, ProfileStrategy] = {
    strategy.role.value: strategy
    for strategy in (JobSeekerProfile(), RecruiterProfile(), AdminProfile())
}


def get_profile_strategy(role: str) -> ProfileStrategy:
    try:
        return PROFILE_STRATEGIES[role]
    except KeyError:
        raise AuthorizationError(f"Unsupported role: {role}")


async def get_recruiter_public_profile(db: AsyncSession, recruiter_id: UUID) -> RecruiterPublicProfile:
    """Company-facing view of a recruiter."""
    user = await db.get(User, recruiter_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.role != Role.RECRUITER.value:
        raise ValidationError("User is not a recruiter")

    company = await get_company_for_owner(db, user.id)
    active_jobs = await db.scalar(
        select(func.count(Job.id)).where(Job.recruiter_id == user.id, Job.status == JOB_STATUS_ACTIVE)
    )
    return RecruiterPublicProfile(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        profile_picture=user.profile_picture,
        company=CompanyOut.model_validate(company) if company else None,
        active_jobs_count=active_jobs or 0,
    )
