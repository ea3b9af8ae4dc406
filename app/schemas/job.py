"""Job schemas for API requests and responses."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.schemas.common import CamelModel, Pagination
from app.schemas.profile import CompanyOut


class JobCreate(CamelModel):
    """
    Job posting payload.

    Required-field checks happen in the job service so the error names every
    missing field at once.
    """

    title: Optional[str] = None
    company_name: Optional[str] = None
    industry: Optional[str] = None
    job_type: Optional[str] = None
    experience: Optional[str] = None
    salary: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None
    application_deadline: Optional[str] = None
    logo: Optional[str] = None


class JobUpdate(CamelModel):
    """Partial job update; only fields that are sent change."""

    title: Optional[str] = None
    industry: Optional[str] = None
    job_type: Optional[str] = None
    experience: Optional[str] = None
    salary: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    skills: Optional[List[str]] = None
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None
    application_deadline: Optional[str] = None
    logo: Optional[str] = None
    status: Optional[str] = None


class JobOut(CamelModel):
    """Job with display fields resolved from its company and recruiter."""

    id: UUID
    title: str
    company_id: UUID
    company_name: str
    industry: str
    job_type: str
    experience: str
    salary: str
    location: str
    description: str
    skills: List[str] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    logo: str
    status: str
    application_deadline: datetime
    recruiter_id: UUID
    recruiter_name: Optional[str] = None
    recruiter_profile_picture: Optional[str] = None
    application_count: int = 0
    is_available: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    company: Optional[CompanyOut] = None


class JobResponse(CamelModel):
    message: Optional[str] = None
    job: JobOut


class JobListResponse(CamelModel):
    jobs: List[JobOut]
    pagination: Pagination


class JobFiltersResponse(CamelModel):
    job_types: List[str]
    experience_levels: List[str]
    skills: List[str]


class TopCompany(CamelModel):
    id: UUID
    name: str
    logo: Optional[str] = None
    industry: Optional[str] = None
    job_count: int


class SavedJobRequest(CamelModel):
    job_id: Optional[UUID] = None


class SavedJobOut(CamelModel):
    id: UUID
    title: str
    company_name: str
    location: str
    job_type: str
    salary: str
    experience: str
    created_at: datetime
    saved_at: Optional[datetime] = None


class SavedJobsResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    saved_jobs: List[SavedJobOut]
