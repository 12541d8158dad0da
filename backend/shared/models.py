"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Generic, Protocol, TypeVar, runtime_checkable
from pydantic import BaseModel, Field


T = TypeVar("T")

DEFAULT_PAGE_LIMIT = 25
MAX_PAGE_LIMIT = 100


@runtime_checkable
class QueryParams(Protocol):
    """
    Pagination capability accepted by repository list queries.

    Anything exposing integer ``limit`` and ``offset`` attributes qualifies.
    """

    @property
    def limit(self) -> int:
        ...

    @property
    def offset(self) -> int:
        ...


class PageParams(BaseModel):
    """Concrete pagination parameters, validated at construction."""

    limit: int = Field(
        default=DEFAULT_PAGE_LIMIT,
        ge=1,
        le=MAX_PAGE_LIMIT,
        description="Maximum number of items to return",
    )
    offset: int = Field(default=0, ge=0, description="Number of items to skip")

    model_config = {"frozen": True}


class ResultPaging(BaseModel, Generic[T]):
    """
    A page of results.

    ``total`` counts every matching row regardless of limit/offset;
    ``items`` holds the requested slice.
    """

    total: int = Field(..., ge=0, description="Total matching rows")
    items: list[T] = Field(default_factory=list, description="Rows in this page")
