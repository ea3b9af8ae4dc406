"""Startup validation checks for the application."""

import logging as log_module
import os
from pathlib import Path

from app.config import settings
from app.utils.constants import PROFILE_UPLOAD_SUBDIR

logger = log_module.getLogger(__name__)

DEFAULT_SECRET_KEY = "change-this-secret-key-in-production"


async def check_database() -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if database is ready, False otherwise
    """
    from sqlalchemy.exc import SQLAlchemyError

    from app.db.session import ping_db

    try:
        logger.info("Checking database connection...")
        await ping_db()
        logger.info("Database check passed")
        return True

    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database check failed: {e}", exc_info=True)
        return False


def check_storage() -> bool:
    """
    Check that the upload directory exists and is writable.

    Returns:
        bool: True if storage is ready, False otherwise
    """
    try:
        logger.info("Checking upload storage...")

        upload_dir = Path(settings.UPLOAD_DIR) / PROFILE_UPLOAD_SUBDIR
        if not upload_dir.exists():
            upload_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created upload directory: {upload_dir}")

        if not os.access(upload_dir, os.W_OK):
            logger.error(f"Upload directory is not writable: {upload_dir}")
            return False

        logger.info(f"Storage configured: {upload_dir}")
        return True

    except OSError as e:
        logger.error(f"Storage check failed: {e}", exc_info=True)
        return False


def check_email() -> bool:
    """
    Check that SMTP delivery is configured.

    Password reset is the only feature that needs it, so a missing
    configuration is reported but does not fail startup.
    """
    logger.info("Checking email configuration...")

    if not settings.SMTP_USER or not settings.SMTP_PASSWORD:
        logger.warning("SMTP credentials not set; password reset emails will fail")
        return True

    logger.info(f"Email configured via {settings.SMTP_HOST}:{settings.SMTP_PORT}")
    return True


def check_environment() -> bool:
    """
    Check if required configuration is set.

    Returns:
        bool: True if environment is configured, False otherwise
    """
    logger.info("Checking environment configuration...")

    if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        if settings.ENVIRONMENT == "production":
            logger.error("SECRET_KEY must be set in production")
            return False
        logger.warning("Using the default SECRET_KEY; set one before deploying")

    if not settings.SENTRY_DSN:
        logger.warning("Optional variable not set: SENTRY_DSN (error tracking)")

    logger.info("Environment configuration checked")
    return True


async def run_all_startup_checks() -> bool:
    """
    Run all startup validation checks.

    Returns:
        bool: True if all checks pass, False otherwise
    """
    logger.info("Running startup validation checks...")

    results = {
        "Environment": check_environment(),
        "Database": await check_database(),
        "Storage": check_storage(),
        "Email": check_email(),
    }

    logger.info("Startup checks complete:")
    for name, passed in results.items():
        logger.info(f"  {name}: {'PASS' if passed else 'FAIL'}")

    all_passed = all(results.values())
    if not all_passed:
        logger.error("Some startup checks failed. Please fix issues before proceeding.")
    else:
        logger.info("All startup checks passed! System ready.")

    return all_passed
