"""
VARK Module Schemas

Pydantic schemas for module requests and responses.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.modules.users.models import LearningStyle
from app.modules.vark_modules.models import DifficultyLevel, default_content_structure

MAX_DURATION_MINUTES = 10000


class ModuleCreate(BaseModel):
    """Request body for POST /modules."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category_id: str | None = None

    learning_objectives: list[Any] = Field(default_factory=list)
    content_structure: dict[str, Any] = Field(default_factory=default_content_structure)
    prerequisites: list[Any] = Field(default_factory=list)
    multimedia_content: dict[str, Any] = Field(default_factory=dict)
    interactive_elements: list[Any] = Field(default_factory=list)
    assessment_questions: list[Any] = Field(default_factory=list)
    module_metadata: dict[str, Any] = Field(default_factory=dict)
    content_summary: list[Any] = Field(default_factory=list)
    target_learning_styles: list[LearningStyle] = Field(default_factory=list)

    difficulty_level: DifficultyLevel = DifficultyLevel.BEGINNER
    estimated_duration_minutes: int | None = Field(None, ge=0, le=MAX_DURATION_MINUTES)
    json_backup_url: str | None = None
    json_content_url: str | None = None
    target_class_id: str | None = None
    prerequisite_module_id: str | None = None
    is_published: bool = False


class ModuleUpdate(BaseModel):
    """Request body for PUT /modules/{id}. Only sent fields are applied."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category_id: str | None = None

    learning_objectives: list[Any] | None = None
    content_structure: dict[str, Any] | None = None
    prerequisites: list[Any] | None = None
    multimedia_content: dict[str, Any] | None = None
    interactive_elements: list[Any] | None = None
    assessment_questions: list[Any] | None = None
    module_metadata: dict[str, Any] | None = None
    content_summary: list[Any] | None = None
    target_learning_styles: list[LearningStyle] | None = None

    difficulty_level: DifficultyLevel | None = None
    estimated_duration_minutes: int | None = Field(None, ge=0, le=MAX_DURATION_MINUTES)
    json_backup_url: str | None = None
    json_content_url: str | None = None
    target_class_id: str | None = None
    prerequisite_module_id: str | None = None
    is_published: bool | None = None


class ModuleImport(ModuleUpdate):
    """
    A module document exported from another system.

    Unknown keys are ignored; the imported module always starts unpublished.
    """

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", mode="before")
    @classmethod
    def blank_title_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ModuleResponse(BaseModel):
    """A module with its joined creator and category names."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    category_id: str | None = None
    category_name: str | None = None

    learning_objectives: list[Any] = []
    content_structure: dict[str, Any] = Field(default_factory=default_content_structure)
    prerequisites: list[Any] = []
    multimedia_content: dict[str, Any] = {}
    interactive_elements: list[Any] = []
    assessment_questions: list[Any] = []
    module_metadata: dict[str, Any] = {}
    content_summary: list[Any] = []
    target_learning_styles: list[str] = []

    difficulty_level: DifficultyLevel
    estimated_duration_minutes: int | None = None
    json_backup_url: str | None = None
    json_content_url: str | None = None
    target_class_id: str | None = None
    prerequisite_module_id: str | None = None
    is_published: bool
    section_count: int = 0

    created_by: str
    creator_name: str | None = None
    created_at: datetime
    updated_at: datetime


class ModuleSubmissionStats(BaseModel):
    total_students: int
    submitted_count: int
    average_score: float
    completion_rate: float


class CompletionProfile(BaseModel):
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    email: str | None = None


class ModuleCompletionEntry(BaseModel):
    """A completion of the module with the student's profile nested."""

    id: str
    student_id: str
    module_id: str
    completion_date: datetime
    final_score: float
    time_spent_minutes: int
    sections_completed: int
    perfect_sections: int
    created_at: datetime
    updated_at: datetime
    profiles: CompletionProfile
