"""Completion request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.modules.vark_modules.models import DifficultyLevel


class CompletionCreate(BaseModel):
    """Request body for POST /completions (insert or overwrite)."""

    student_id: str
    module_id: str
    final_score: float = Field(0, ge=0)
    time_spent_minutes: int = Field(0, ge=0)
    pre_test_score: float | None = Field(None, ge=0)
    post_test_score: float | None = Field(None, ge=0)
    sections_completed: int = Field(0, ge=0)
    perfect_sections: int = Field(0, ge=0)


class CompletionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    module_id: str
    module_title: str | None = None
    difficulty_level: DifficultyLevel | None = None
    completion_date: datetime
    final_score: float
    time_spent_minutes: int
    pre_test_score: float | None = None
    post_test_score: float | None = None
    sections_completed: int
    perfect_sections: int
    created_at: datetime
    updated_at: datetime


class CompletionStats(BaseModel):
    total_completions: int = 0
    average_score: float = 0
    total_time_spent: int = 0
    perfect_sections: int = 0
