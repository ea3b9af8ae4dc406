"""User model."""

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from app.config import settings
from app.db.base import Base


class User(Base):
    """User model for authentication (job seekers, recruiters and admins)."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)  # Job Seeker, Recruiter, Admin
    full_name = Column(String(255), nullable=False)
    phone_number = Column(String(20), nullable=True)
    profile_picture = Column(String(500), default=settings.DEFAULT_PROFILE_PICTURE)
    is_active = Column(Boolean, default=True, nullable=False)

    # Set when a temporary password is issued; cleared on password change
    reset_password_expiry = Column(DateTime, nullable=True)

    # Relationships
    resume = relationship("Resume", back_populates="user", uselist=False, cascade="all, delete-orphan")
    company = relationship("Company", back_populates="owner", uselist=False)
    posted_jobs = relationship("Job", back_populates="recruiter", foreign_keys="Job.recruiter_id")
    saved_jobs = relationship("SavedJob", back_populates="user", cascade="all, delete-orphan")
    admin_settings = relationship(
        "AdminSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
