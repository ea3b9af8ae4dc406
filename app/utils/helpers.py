"""Helper utilities."""

import re
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the storage convention for all columns)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively; store them trimmed and lower-cased."""
    return email.strip().lower()


def title_case_hyphenated(value: Optional[str]) -> Optional[str]:
    """Capitalize each hyphen-separated segment: 'full-time' -> 'Full-Time'."""
    if not value:
        return value
    return "-".join(segment[:1].upper() + segment[1:].lower() for segment in value.split("-"))


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for storage."""
    # Remove special characters
    sanitized = re.sub(r'[^\w\s.-]', '', filename)
    # Replace spaces with underscores
    sanitized = re.sub(r'\s+', '_', sanitized)
    return sanitized[:255]  # Limit length


def format_relative_date(value: datetime, now: Optional[datetime] = None) -> str:
    """Human readable age of a timestamp, in days then weeks."""
    now = now or utcnow()
    diff_days = (now - value).days

    if diff_days <= 0:
        return "Today"
    if diff_days == 1:
        return "1 day ago"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 14:
        return "1 week ago"
    return f"{diff_days // 7} weeks ago"


def page_count(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items ``limit`` at a time."""
    return (total + limit - 1) // limit if total > 0 else 0
