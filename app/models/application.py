"""Application model."""

from sqlalchemy import Boolean, Column, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.utils.helpers import utcnow

STATUS_PENDING = "Pending"
STATUS_PROCESSING = "Processing"
STATUS_APPROVED = "Approved"
STATUS_NOT_HIRED = "Not Hired"

# Order matters: it is the order listed in the invalid-status error message
APPLICATION_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_NOT_HIRED, STATUS_PROCESSING)
FINAL_STATUSES = frozenset({STATUS_APPROVED, STATUS_NOT_HIRED})

STATUS_MESSAGES = {
    STATUS_PENDING: "Your application is being reviewed.",
    STATUS_APPROVED: "Congratulations! Your application has been approved.",
    STATUS_NOT_HIRED: (
        "Thank you for your interest. Unfortunately, we have decided to move forward "
        "with other candidates."
    ),
    STATUS_PROCESSING: "Your application is currently being processed. We will update you soon.",
}


class Application(Base):
    """Job application model."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_seeker_id", "job_id", name="unique_job_seeker_job_application"),
    )

    job_seeker_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    recruiter_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)

    # Status tracking
    status = Column(String(20), default=STATUS_PENDING, nullable=False)
    status_message = Column(String(255), default=STATUS_MESSAGES[STATUS_PENDING], nullable=False)
    notification_sent = Column(Boolean, default=False, nullable=False)

    # Additional data
    cover_letter = Column(Text)

    # Relationships
    job_seeker = relationship("User", foreign_keys=[job_seeker_id])
    recruiter = relationship("User", foreign_keys=[recruiter_id])
    job = relationship("Job", back_populates="applications")

    def set_status(self, status: str) -> None:
        """Move to ``status`` and re-arm the seeker notification."""
        self.status = status
        self.status_message = STATUS_MESSAGES[status]
        self.notification_sent = False
        self.updated_at = utcnow()

    @property
    def is_final(self) -> bool:
        return self.status in FINAL_STATUSES

    def __repr__(self):
        return f"<Application {self.job_seeker_id} -> {self.job_id} ({self.status})>"
