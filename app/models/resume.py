"""Resume model."""

from sqlalchemy import JSON, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base


class Resume(Base):
    """
    Job seeker resume, one per user.

    This table is the only copy; profile views read it through ``User.resume``.
    Every save replaces all list fields.
    """

    __tablename__ = "resumes"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone_number = Column(String(20))

    # JSON fields
    education = Column(JSON, default=list)  # [{"degree": "B.Sc", "institution": "X", "year": "2020"}, ...]
    experience = Column(JSON, default=list)  # [{"jobTitle": "Dev", "company": "Y", "duration": "2 years"}, ...]
    skills = Column(JSON, default=list)  # ["Python", "React", ...]

    # Relationships
    user = relationship("User", back_populates="resume")

    def __repr__(self):
        return f"<Resume {self.full_name}>"
