"""
Shared module - ORM base model and common response schemas.
"""

from app.modules.shared.models import BaseModel, enum_values, new_uuid, utcnow
from app.modules.shared.schemas import (
    DataResponse,
    MessageResponse,
    PaginatedResponse,
    Pagination,
    PaginationMeta,
    StatusMessage,
    build_pagination,
    pagination_params,
)

__all__ = [
    "BaseModel",
    "enum_values",
    "new_uuid",
    "utcnow",
    "DataResponse",
    "MessageResponse",
    "PaginatedResponse",
    "Pagination",
    "PaginationMeta",
    "StatusMessage",
    "build_pagination",
    "pagination_params",
]
