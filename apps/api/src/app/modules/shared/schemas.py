"""
Shared Schemas

Response envelopes and pagination used by every router.
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class DataResponse(BaseModel, Generic[T]):
    """``{"data": ...}``"""

    data: T


class MessageResponse(BaseModel, Generic[T]):
    """``{"message": ..., "data": ...}`` returned by mutations."""

    message: str
    data: T | None = None


class StatusMessage(BaseModel):
    """``{"message": ...}`` returned by deletes."""

    message: str


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


class PaginatedResponse(BaseModel, Generic[T]):
    """``{"data": [...], "pagination": {...}}``"""

    data: list[T]
    pagination: PaginationMeta


@dataclass
class Pagination:
    """Validated page/limit pair."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def pagination_params(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
) -> Pagination:
    """FastAPI dependency for ``?page=&limit=``."""
    return Pagination(page=page, limit=limit)


def build_pagination(page: int, limit: int, total: int) -> PaginationMeta:
    """Compute pagination metadata for a result page."""
    total_pages = math.ceil(total / limit) if limit else 0
    return PaginationMeta(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_more=page < total_pages,
    )
