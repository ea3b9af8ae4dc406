"""Homepage statistics schemas."""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from app.schemas.common import CamelModel


class CandidateStats(CamelModel):
    total_candidates: int = 0
    skills: Dict[str, int] = {}


class CompanyStatsSummary(CamelModel):
    total_companies: int = 0
    industries: List[str] = []
    locations: List[str] = []


class StatsBlock(CamelModel):
    total_jobs: int = 0
    candidates: CandidateStats
    companies: CompanyStatsSummary


class FeaturedCompany(CamelModel):
    id: UUID
    name: str
    logo: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    active_jobs_count: int


class RecentJob(CamelModel):
    id: UUID
    title: str
    company_name: str
    location: str
    job_type: str
    salary: str
    logo: Optional[str] = None
    created_at: datetime


class Category(CamelModel):
    name: str
    icon: str
    count: int


class HomepageStats(CamelModel):
    stats: StatsBlock
    featured_companies: List[FeaturedCompany]
    recent_jobs: List[RecentJob]
    categories: List[Category]
