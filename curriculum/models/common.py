"""
Shared response schemas.

Pagination wrapper for course search and the body carried in the
`detail` field of every domain error response.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Domain error payload: exception type, message and context."""

    error: str = Field(description="Exception type, e.g. PublishPrecondition")
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results plus the unpaginated total."""

    items: list[T]
    total: int
    page: int = Field(1, ge=1)
    page_size: int = Field(..., ge=1)
    has_more: bool = False
