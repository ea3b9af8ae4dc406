"""Application schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from app.schemas.common import CamelModel


class ApplyRequest(CamelModel):
    cover_letter: Optional[str] = None


class StatusUpdateRequest(CamelModel):
    """Status is checked against the allowed values by the service."""

    status: Optional[str] = None


class ApplicationJob(CamelModel):
    id: UUID
    title: str
    company_name: str
    location: str
    job_type: str
    salary: str
    logo: Optional[str] = None
    status: str


class ApplicationPerson(CamelModel):
    id: UUID
    full_name: str
    email: str
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None


class ApplicationOut(CamelModel):
    id: UUID
    job_id: UUID
    job_seeker_id: UUID
    recruiter_id: UUID
    status: str
    status_message: str
    notification_sent: bool
    cover_letter: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    job: Optional[ApplicationJob] = None
    job_seeker: Optional[ApplicationPerson] = None
    recruiter: Optional[ApplicationPerson] = None


class ApplicationResponse(CamelModel):
    message: Optional[str] = None
    application: ApplicationOut


class ApplicationListResponse(CamelModel):
    applications: List[ApplicationOut]
