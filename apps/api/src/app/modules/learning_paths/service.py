"""
Learning Path Service

Builds a student's view over all published modules from their progress
rows and completion records.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.completions import repository as completions_repository
from app.modules.learning_paths.helpers import (
    LearningPathView,
    completion_entry,
    filter_learning_path,
    get_module_status,
    is_module_locked,
    merge_progress_with_completions,
    progress_entry,
)
from app.modules.learning_paths.schemas import LearningPathItem
from app.modules.progress import repository as progress_repository
from app.modules.progress.models import ProgressStatus
from app.modules.users.repository import ProfileRepository
from app.modules.vark_modules import repository as modules_repository

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 10


async def load_student_entries(db: AsyncSession, student_id: str) -> dict[str, dict[str, Any]]:
    """Reconciled progress entries of a student, keyed by module id."""
    progress, _ = await progress_repository.list_by_student(db, student_id)
    completions = await completions_repository.list_by_student(db, student_id)
    return merge_progress_with_completions(
        [progress_entry(p) for p in progress],
        [completion_entry(c) for c in completions],
    )


async def _student_learning_style(db: AsyncSession, student_id: str) -> str | None:
    profile = await ProfileRepository.get_by_user_id(db, student_id)
    if profile is None or profile.learning_style is None:
        return None
    return profile.learning_style.value


async def _build_items(db: AsyncSession, student_id: str) -> list[dict[str, Any]]:
    entries = await load_student_entries(db, student_id)
    modules = await modules_repository.list_published(db)

    items = []
    for module in modules:
        entry = entries.get(str(module.id))
        items.append(
            {
                "module": module,
                "status": get_module_status(entry),
                "progress_percentage": (entry or {}).get("progress_percentage") or 0,
                "is_locked": is_module_locked(module, entries),
                "completed_at": (entry or {}).get("completed_at"),
                "last_accessed_at": (entry or {}).get("last_accessed_at"),
            }
        )
    return items


def _to_response(item: dict[str, Any]) -> LearningPathItem:
    module = item["module"]
    return LearningPathItem(
        id=module.id,
        title=module.title,
        description=module.description,
        category_name=module.category_name,
        difficulty_level=module.difficulty_level,
        estimated_duration_minutes=module.estimated_duration_minutes,
        target_learning_styles=module.target_learning_styles or [],
        section_count=module.section_count,
        status=item["status"],
        progress_percentage=item["progress_percentage"],
        is_locked=item["is_locked"],
        prerequisite_module_id=module.prerequisite_module_id,
        completed_at=item["completed_at"],
        last_accessed_at=item["last_accessed_at"],
    )


async def get_learning_path(
    db: AsyncSession,
    student_id: str,
    view: LearningPathView = LearningPathView.ALL,
) -> list[LearningPathItem]:
    """Published modules, newest first, narrowed to ``view``."""
    items = await _build_items(db, student_id)
    learning_style = await _student_learning_style(db, student_id)
    return [_to_response(item) for item in filter_learning_path(items, view, learning_style)]


async def get_recommended_modules(db: AsyncSession, student_id: str) -> list[LearningPathItem]:
    """
    Modules worth doing next: unfinished, matching the student's learning
    style, with untouched modules ahead of ones already started.
    """
    items = await _build_items(db, student_id)
    learning_style = await _student_learning_style(db, student_id)

    candidates = filter_learning_path(items, LearningPathView.RECOMMENDED, learning_style)
    candidates.sort(key=lambda item: item["status"] != ProgressStatus.NOT_STARTED)

    logger.debug(f"{len(candidates)} recommendation candidates for student {student_id}")
    return [_to_response(item) for item in candidates[:MAX_RECOMMENDATIONS]]
