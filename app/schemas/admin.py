"""Admin panel schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel, Pagination
from app.schemas.job import JobOut
from app.schemas.profile import CompanyOut


# Company Schemas
class AdminCompanyBase(CamelModel):
    description: Optional[str] = None
    size: Optional[str] = None
    logo: Optional[str] = None
    status: Optional[str] = None


class AdminCompanyCreate(AdminCompanyBase):
    """Required-field checks are done by the admin service."""

    name: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    employees: Optional[int] = Field(None, ge=0)
    website: Optional[str] = None


class AdminCompanyUpdate(AdminCompanyBase):
    name: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    employees: Optional[int] = Field(None, ge=0)
    website: Optional[str] = None


class AdminCompanyOut(CompanyOut):
    owner_id: Optional[UUID] = None
    jobs_count: int = 0
    created_at: datetime


class AdminCompanyListResponse(CamelModel):
    companies: List[AdminCompanyOut]


# Job Schemas
class AdminJobListResponse(CamelModel):
    jobs: List[JobOut]
    pagination: Pagination


# Candidate Schemas
class CandidateOut(CamelModel):
    id: UUID
    full_name: str
    email: str
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None
    applications_count: int = 0
    latest_job_title: Optional[str] = None
    latest_status: Optional[str] = None
    applied_date: Optional[datetime] = None


class CandidateListResponse(CamelModel):
    candidates: List[CandidateOut]


# Dashboard Schemas
class DashboardStats(CamelModel):
    total_jobs: int
    active_candidates: int
    total_applications: int
    hired_candidates: int


class DashboardRecentJob(CamelModel):
    id: UUID
    title: str
    applicants: int
    status: str
    date: str


# Settings Schemas
class AdminSettingsOut(CamelModel):
    company_name: str = ""
    email: str
    email_notifications: bool = True


class AdminSettingsUpdate(CamelModel):
    company_name: Optional[str] = None
    email: Optional[EmailStr] = None
    email_notifications: Optional[bool] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = Field(None, min_length=6, max_length=72)
