"""Profile, resume and company schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.schemas.common import CamelModel


class EducationEntry(CamelModel):
    """One education record."""

    degree: Optional[str] = None
    institution: Optional[str] = None
    year: Optional[str] = None


class ExperienceEntry(CamelModel):
    """One work experience record."""

    job_title: Optional[str] = None
    company: Optional[str] = None
    duration: Optional[str] = None


class ResumeRequest(CamelModel):
    """
    Resume builder payload.

    Everything is optional here; completeness rules are applied by the
    profile service so failures come back with a per-field detail map.
    """

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)


class ResumeOut(CamelModel):
    id: UUID
    user_id: UUID
    full_name: str
    email: str
    phone_number: Optional[str] = None
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None


class CompanyOut(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    employees: Optional[int] = None
    logo: Optional[str] = None
    status: Optional[str] = None


class CompanyUpdate(CamelModel):
    """Recruiter company fields; name and description are required by the service."""

    name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    employees: Optional[int] = Field(None, ge=0)


class ProfileUpdateRequest(CamelModel):
    """PUT /auth/profile body; which part is used depends on the caller's role."""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    resume: Optional[ResumeRequest] = None
    company: Optional[CompanyUpdate] = None


class PostedJobSummary(CamelModel):
    id: UUID
    title: str
    status: str
    location: str
    job_type: str
    application_deadline: datetime
    created_at: datetime
    application_count: int = 0


class CompanyStats(CamelModel):
    active_jobs: int = 0
    total_applications: int = 0


class ProfileOut(CamelModel):
    """Role-shaped profile; fields that do not apply to the role are omitted."""

    id: UUID
    role: str
    full_name: str
    email: str
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: datetime
    resume: Optional[ResumeOut] = None
    company: Optional[CompanyOut] = None
    posted_jobs: Optional[List[PostedJobSummary]] = None
    jobs_count: Optional[int] = None
    company_stats: Optional[CompanyStats] = None


class ProfileResponse(CamelModel):
    message: Optional[str] = None
    user: ProfileOut


class ResumeResponse(CamelModel):
    message: Optional[str] = None
    resume: ResumeOut


class UploadResponse(CamelModel):
    success: bool = True
    message: str
    profile_picture: Optional[str] = None
    company_logo: Optional[str] = None


class AppliedJob(CamelModel):
    application_id: UUID
    job_id: UUID
    title: str
    status: str
    applied_at: datetime


class ApplicantOut(CamelModel):
    """A job seeker who applied to at least one of the recruiter's jobs."""

    id: UUID
    full_name: str
    email: str
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None
    resume: Optional[ResumeOut] = None
    latest_status: str
    applied_jobs: List[AppliedJob] = Field(default_factory=list)


class RecruiterPublicProfile(CamelModel):
    id: UUID
    full_name: str
    email: str
    profile_picture: Optional[str] = None
    company: Optional[CompanyOut] = None
    active_jobs_count: int = 0
