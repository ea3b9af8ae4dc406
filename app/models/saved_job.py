"""
Saved job model
Jobs bookmarked by users
"""

from sqlalchemy import Column, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base


class SavedJob(Base):
    """
    Jobs saved/bookmarked by users
    Many-to-one relation with users and jobs; a pair is saved at most once
    """
    __tablename__ = "saved_jobs"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    user = relationship("User", back_populates="saved_jobs")
    job = relationship("Job", back_populates="saved_by")

    # Indexes
    __table_args__ = (
        Index("idx_saved_jobs_user", "user_id"),
        Index("idx_saved_jobs_job", "job_id"),
        Index("idx_saved_jobs_user_job", "user_id", "job_id", unique=True),  # Prevent duplicates
    )

    def __repr__(self):
        return f"<SavedJob(user_id={self.user_id}, job_id={self.job_id})>"
