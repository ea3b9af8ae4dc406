"""Company model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.config import settings
from app.db.base import Base


class Company(Base):
    """Company profile; the single source of company display data for jobs."""

    __tablename__ = "companies"

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    location = Column(String(255))
    website = Column(String(500))
    industry = Column(String(100))
    size = Column(String(50))  # startup, small, medium, large, enterprise
    employees = Column(Integer)
    logo = Column(String(500), default=settings.DEFAULT_COMPANY_LOGO)
    status = Column(String(20), default="Active")  # Active, Inactive

    # Recruiter that owns this company; admin-created companies have none
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), unique=True, nullable=True)

    # Relationships
    owner = relationship("User", back_populates="company")
    jobs = relationship("Job", back_populates="company")

    def __repr__(self):
        return f"<Company {self.name}>"
