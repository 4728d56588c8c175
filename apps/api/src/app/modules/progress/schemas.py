"""Progress request and response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.modules.progress.models import ProgressStatus


class ProgressCreate(BaseModel):
    student_id: str
    module_id: str
    status: ProgressStatus = ProgressStatus.NOT_STARTED
    progress_percentage: int = Field(0, ge=0, le=100)
    current_section_id: str | None = Field(None, max_length=100)
    time_spent_minutes: int = Field(0, ge=0)
    completed_sections: list[str] = Field(default_factory=list)
    assessment_scores: dict[str, Any] = Field(default_factory=dict)


class ProgressUpdate(BaseModel):
    """
    Partial update of a progress row.

    ``student_id`` and ``module_id`` are accepted only so that sending them
    can be rejected with a clear message.
    """

    student_id: str | None = None
    module_id: str | None = None
    status: ProgressStatus | None = None
    progress_percentage: int | None = Field(None, ge=0, le=100)
    current_section_id: str | None = Field(None, max_length=100)
    time_spent_minutes: int | None = Field(None, ge=0)
    completed_sections: list[str] | None = None
    assessment_scores: dict[str, Any] | None = None


class ProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    student_name: str | None = None
    module_id: str
    module_title: str | None = None
    status: ProgressStatus
    progress_percentage: int
    current_section_id: str | None = None
    time_spent_minutes: int
    completed_sections: list[str] = []
    assessment_scores: dict[str, Any] = {}
    started_at: datetime | None = None
    completed_at: datetime | None = None
    last_accessed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class StudentProgressStats(BaseModel):
    total_modules: int = 0
    completed_modules: int = 0
    in_progress_modules: int = 0
    not_started_modules: int = 0
    average_progress: float = 0
    total_time_spent: int = 0


class ModuleProgressStats(BaseModel):
    total_students: int = 0
    completed_students: int = 0
    in_progress_students: int = 0
    not_started_students: int = 0
    average_progress: float = 0
    average_time_spent: float = 0
