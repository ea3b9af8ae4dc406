"""Validators."""

import re
from typing import List

PHONE_PATTERN = r'^\+?[\d\s-]{7,15}$'


def validate_phone(phone: str) -> bool:
    """Validate phone number."""
    return bool(re.match(PHONE_PATTERN, phone or ""))


def validate_email(email: str) -> bool:
    """Validate email format."""
    pattern = r'^[^\s@]+@[^\s@]+\.[^\s@]+$'
    return bool(re.match(pattern, email or ""))


def validate_file_extension(filename: str, allowed_extensions: List[str]) -> bool:
    """Validate file extension."""
    if not filename or "." not in filename:
        return False

    extension = filename.rsplit('.', 1)[-1].lower()
    return extension in [ext.lower() for ext in allowed_extensions]


def missing_fields(data: dict, required: List[str]) -> List[str]:
    """Names of required keys whose value is absent, blank, or an empty list."""
    missing = []
    for field in required:
        value = data.get(field)
        if value is None:
            missing.append(field)
        elif isinstance(value, str) and not value.strip():
            missing.append(field)
        elif isinstance(value, (list, tuple)) and not [v for v in value if str(v).strip()]:
            missing.append(field)
    return missing
