"""Learning path response schemas."""

from datetime import datetime

from pydantic import BaseModel

from app.modules.progress.models import ProgressStatus
from app.modules.vark_modules.models import DifficultyLevel


class LearningPathItem(BaseModel):
    """A published module with the student's reconciled standing in it."""

    id: str
    title: str
    description: str | None = None
    category_name: str | None = None
    difficulty_level: DifficultyLevel
    estimated_duration_minutes: int | None = None
    target_learning_styles: list[str] = []
    section_count: int = 0

    status: ProgressStatus
    progress_percentage: int = 0
    is_locked: bool = False
    prerequisite_module_id: str | None = None
    completed_at: datetime | None = None
    last_accessed_at: datetime | None = None
