"""
Application exception hierarchy.

Services raise these; the handlers registered in ``app.main`` turn them into
``{"success": false, "message": ..., "details": ...}`` JSON responses with the matching status.
"""

from typing import Any, Dict, Iterable, Optional

from fastapi import status


class AppException(Exception):
    """Base exception for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An error occurred"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppException):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    @classmethod
    def missing(cls, fields: Iterable[str]) -> "ValidationError":
        fields = list(fields)
        return cls(
            f"Please provide all required fields: {', '.join(fields)}",
            details={field: f"{field} is required" for field in fields},
        )


class AuthenticationError(AppException):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class AuthorizationError(AppException):
    """Authenticated caller is not allowed to perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFoundError(AppException):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppException):
    """Operation conflicts with existing state (duplicates, locked records)."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class StorageError(AppException):
    """Database operation failed."""

    default_message = "A storage error occurred"


class UpstreamError(AppException):
    """An external collaborator (email delivery) failed."""

    default_message = "An upstream service failed"
