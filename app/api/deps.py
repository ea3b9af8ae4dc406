"""
API Dependencies
Common dependencies for API endpoints (authentication, authorization, etc.)
"""

from app.core.security import Role, get_current_user, require_role

__all__ = [
    "get_current_user",
    "require_admin",
    "require_recruiter",
    "require_job_seeker",
]

# Role-based access control dependencies
require_admin = require_role(Role.ADMIN, message="Access denied. Admin role required.")
require_recruiter = require_role(Role.RECRUITER, message="Access denied. Recruiter role required.")
require_job_seeker = require_role(Role.JOB_SEEKER, message="Access denied. Job seeker role required.")
