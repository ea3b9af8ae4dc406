"""Local storage for uploaded profile pictures and company logos."""

from pathlib import Path
from uuid import uuid4

import structlog
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.core.exceptions import StorageError, ValidationError
from app.utils.constants import PROFILE_UPLOAD_SUBDIR
from app.utils.helpers import sanitize_filename
from app.utils.validators import validate_file_extension

logger = structlog.get_logger(__name__)


def profile_upload_dir() -> Path:
    return Path(settings.UPLOAD_DIR) / PROFILE_UPLOAD_SUBDIR


def ensure_upload_dirs() -> None:
    profile_upload_dir().mkdir(parents=True, exist_ok=True)


async def save_image(upload: UploadFile) -> str:
    """
    Validate and store an uploaded image.

    Returns the public path (``/uploads/profiles/<name>``) that is stored on
    the user or company row.
    """
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded")

    allowed = settings.ALLOWED_IMAGE_EXTENSIONS
    if not validate_file_extension(upload.filename, allowed):
        raise ValidationError(
            f"Only image files are allowed ({', '.join(allowed)})",
            details={"file": "Unsupported file type"},
        )

    content = await upload.read()
    if len(content) > settings.MAX_IMAGE_SIZE:
        raise ValidationError(
            "File too large",
            details={"file": f"Maximum size is {settings.MAX_IMAGE_SIZE // (1024 * 1024)}MB"},
        )

    filename = f"{uuid4().hex}-{sanitize_filename(upload.filename)}"
    target = profile_upload_dir() / filename

    try:
        await run_in_threadpool(_write_file, target, content)
    except OSError as e:
        logger.error("upload_write_failed", path=str(target), error=str(e))
        raise StorageError("Could not store uploaded file")

    logger.info("upload_stored", path=str(target), size=len(content))
    return f"/uploads/{PROFILE_UPLOAD_SUBDIR}/{filename}"


def _write_file(target: Path, content: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)
