"""Shared schema helpers."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python, ORM-readable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement."""

    success: bool = True
    message: str


class Pagination(CamelModel):
    """Pagination block returned with list endpoints."""

    total: int
    page: int
    pages: int
    has_more: bool


class ErrorResponse(CamelModel):
    """Error envelope rendered by the exception handlers."""

    success: bool = False
    message: str
    details: Optional[dict] = None
