"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1 import api_router
from app.config import settings
from app.core.cache import RedisCache, build_cache, get_cache, set_cache
from app.core.exceptions import AppException, StorageError
from app.core.logging import setup_logging
from app.core.startup_checks import run_all_startup_checks
from app.db.session import engine, init_db
from app.services.storage_service import ensure_upload_dirs

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking (only if DSN is properly configured)
if settings.SENTRY_DSN and settings.SENTRY_DSN.startswith("https://"):
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=None,  # Capture all logs
                event_level="ERROR",  # Only send ERROR and above as events
            ),
        ],
        release=settings.APP_VERSION,
        attach_stacktrace=True,
        send_default_pii=False,  # Don't send personally identifiable info
    )
else:
    logger.info("Sentry DSN not configured - error tracking disabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    await init_db()
    cache = build_cache(settings)
    set_cache(cache)
    await run_all_startup_checks()
    yield
    # Shutdown
    if isinstance(cache, RedisCache):
        cache.disconnect()  # Close Redis connection
    set_cache(None)
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Job portal API: job seekers, recruiters and the admin panel",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    swagger_ui_parameters={
        "persistAuthorization": True,  # Persist authorization after page refresh
    },
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGIN,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

# Uploaded profile pictures and company logos
ensure_upload_dirs()
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint."""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "operational",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint with cache status."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "cache": await run_in_threadpool(get_cache().get_stats),
    }


def _field_name(loc) -> str:
    # ("body", "company", "name") -> "company.name"; ("query", "page") -> "page"
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Render application errors as ``{"success": false, "message", "details"}``."""
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed requests are 400 with a field -> message map."""
    details = {}
    for error in exc.errors():
        details.setdefault(_field_name(error.get("loc", ())), error.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Validation failed", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    error = StorageError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": str(exc) if settings.DEBUG else "Internal server error",
        },
    )
