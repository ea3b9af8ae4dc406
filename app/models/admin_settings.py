"""Admin panel settings model."""

from sqlalchemy import Boolean, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base


class AdminSettings(Base):
    """Per-admin preferences shown on the admin settings page."""

    __tablename__ = "admin_settings"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    company_name = Column(String(255), default="")
    email_notifications = Column(Boolean, default=True, nullable=False)

    user = relationship("User", back_populates="admin_settings")

    def __repr__(self):
        return f"<AdminSettings {self.user_id}>"
