"""Job model."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.utils.constants import DEFAULT_EXPERIENCE_LEVEL, JOB_STATUS_ACTIVE
from app.utils.helpers import utcnow


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    title = Column(String(500), nullable=False, index=True)
    company_id = Column(Uuid(as_uuid=True), ForeignKey("companies.id"), nullable=False, index=True)
    recruiter_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)

    # Job details
    industry = Column(String(100), nullable=False)
    job_type = Column(String(50), nullable=False)  # full-time, part-time, contract, internship
    experience = Column(String(50), nullable=False, default=DEFAULT_EXPERIENCE_LEVEL)
    salary = Column(String(100), nullable=False)  # free text, e.g. "$40,000 - $50,000"
    location = Column(String(255), nullable=False)
    skills = Column(JSON, default=list)  # ["Python", "FastAPI", ...]
    requirements = Column(JSON, default=list)
    responsibilities = Column(JSON, default=list)
    logo = Column(String(500), default="")

    # Status
    status = Column(String(20), default=JOB_STATUS_ACTIVE, nullable=False, index=True)
    application_deadline = Column(DateTime, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="jobs")
    recruiter = relationship("User", back_populates="posted_jobs", foreign_keys=[recruiter_id])
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
    saved_by = relationship("SavedJob", back_populates="job", cascade="all, delete-orphan")

    @property
    def company_name(self) -> str:
        return self.company.name if self.company else "Unknown"

    @property
    def is_available(self) -> bool:
        """Open for applications: active and before the deadline."""
        return self.status == JOB_STATUS_ACTIVE and utcnow() < self.application_deadline

    def __repr__(self):
        return f"<Job {self.title} at {self.company_id}>"
