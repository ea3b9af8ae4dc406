"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization

# Base models (no foreign keys)
from app.models.user import User

# Models with foreign keys to users
from app.models.company import Company
from app.models.resume import Resume
from app.models.admin_settings import AdminSettings

# Models with foreign keys to other models
from app.models.job import Job
from app.models.application import Application
from app.models.saved_job import SavedJob

# Export all models
__all__ = [
    "User",
    "Company",
    "Resume",
    "AdminSettings",
    "Job",
    "Application",
    "SavedJob",
]
