"""
Student Schemas

Request bodies for student management and the dashboard read models.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.modules.badges.schemas import RarityCounts
from app.modules.users.models import LearningStyle


def _strip(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


class StudentCreate(BaseModel):
    """Request body for POST /students and each bulk import row."""

    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    middle_name: str | None = Field(None, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    password: str | None = Field(None, min_length=6, max_length=128)
    grade_level: str | None = Field(None, max_length=50)
    learning_style: LearningStyle | None = None
    learning_type: str | None = Field(None, max_length=50)
    preferred_modules: list[Any] = Field(default_factory=list)
    onboarding_completed: bool = False

    @field_validator("first_name", "middle_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, value: Any) -> Any:
        return _strip(value)


class StudentUpdate(BaseModel):
    """Partial update; profile fields create the profile when missing."""

    email: EmailStr | None = None
    first_name: str | None = Field(None, min_length=1, max_length=100)
    middle_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    grade_level: str | None = Field(None, max_length=50)
    learning_style: LearningStyle | None = None
    learning_type: str | None = Field(None, max_length=50)
    preferred_modules: list[Any] | None = None
    onboarding_completed: bool | None = None

    @field_validator("first_name", "middle_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, value: Any) -> Any:
        return _strip(value)


class BulkImportError(BaseModel):
    index: int
    email: str
    error: str


class BulkImportResult(BaseModel):
    success: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[BulkImportError] = []


class StudentStats(BaseModel):
    """Completion totals merged with badge counts."""

    total_completions: int = 0
    average_score: float = 0
    total_time_spent: int = 0
    perfect_sections: int = 0
    total_badges: int = 0
    by_rarity: RarityCounts = Field(default_factory=RarityCounts)


class DashboardStats(BaseModel):
    modules_completed: int = 0
    modules_in_progress: int = 0
    average_score: int = 0
    total_time_spent: int = 0
    perfect_sections: int = 0
    total_modules_available: int = 0


class RecentActivity(BaseModel):
    id: str
    type: str
    module_id: str
    title: str
    status: str
    timestamp: datetime | None = None
    score: float | None = None
    progress: int | None = None
