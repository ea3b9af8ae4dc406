"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admin, applications, auth, jobs, recruiters, stats
from app.api.v1.endpoints import profile, resume, saved_jobs

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(profile.router, prefix="/auth", tags=["Profile"])
api_router.include_router(saved_jobs.router, prefix="/auth", tags=["Saved Jobs"])
api_router.include_router(resume.router, prefix="/resume", tags=["Resume"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
api_router.include_router(applications.router, prefix="/applications", tags=["Applications"])
api_router.include_router(recruiters.router, prefix="/recruiters", tags=["Recruiters"])
api_router.include_router(stats.router, prefix="/stats", tags=["Statistics"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
