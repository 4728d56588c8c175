"""
Progress Service Layer

Every write stamps the status timestamps (see ``status_timestamps``).
Section completion only ever moves a student forward.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DuplicateEntryError, NotFoundError, ValidationError
from app.modules.learning_paths import helpers as learning_path_helpers
from app.modules.progress import repository
from app.modules.progress.helpers import status_timestamps
from app.modules.progress.models import ModuleProgress, ProgressStatus
from app.modules.progress.schemas import (
    ModuleProgressStats,
    ProgressCreate,
    ProgressResponse,
    ProgressUpdate,
    StudentProgressStats,
)
from app.modules.shared import Pagination, PaginatedResponse, build_pagination
from app.modules.vark_modules import repository as modules_repository

logger = logging.getLogger(__name__)

SECTION_FIELDS = (
    "completed_sections",
    "current_section_id",
    "progress_percentage",
    "status",
    "started_at",
    "completed_at",
    "last_accessed_at",
)


async def get_progress_or_404(db: AsyncSession, progress_id: str) -> ModuleProgress:
    progress = await repository.get_by_id(db, progress_id)
    if progress is None:
        raise NotFoundError("Progress not found")
    return progress


async def get_progress_by_pair_or_404(
    db: AsyncSession, student_id: str, module_id: str
) -> ModuleProgress:
    progress = await repository.get_by_pair(db, student_id, module_id)
    if progress is None:
        raise NotFoundError("Progress not found")
    return progress


def _page(
    rows: list[ModuleProgress], total: int, pagination: Pagination
) -> PaginatedResponse[ProgressResponse]:
    return PaginatedResponse[ProgressResponse](
        data=[ProgressResponse.model_validate(row) for row in rows],
        pagination=build_pagination(pagination.page, pagination.limit, total),
    )


async def list_student_progress(
    db: AsyncSession,
    student_id: str,
    pagination: Pagination,
    status: ProgressStatus | None = None,
) -> PaginatedResponse[ProgressResponse]:
    rows, total = await repository.list_by_student(
        db, student_id, status=status, limit=pagination.limit, offset=pagination.offset
    )
    return _page(rows, total, pagination)


async def list_module_progress(
    db: AsyncSession, module_id: str, pagination: Pagination
) -> PaginatedResponse[ProgressResponse]:
    rows, total = await repository.list_by_module(
        db, module_id, limit=pagination.limit, offset=pagination.offset
    )
    return _page(rows, total, pagination)


async def get_student_stats(db: AsyncSession, student_id: str) -> StudentProgressStats:
    stats = await repository.get_student_stats(db, student_id)
    stats["average_progress"] = round(stats["average_progress"], 2)
    return StudentProgressStats(**stats)


async def get_module_stats(db: AsyncSession, module_id: str) -> ModuleProgressStats:
    stats = await repository.get_module_stats(db, module_id)
    stats["average_progress"] = round(stats["average_progress"], 2)
    stats["average_time_spent"] = round(stats["average_time_spent"], 2)
    return ModuleProgressStats(**stats)


async def create_progress(db: AsyncSession, data: ProgressCreate) -> ProgressResponse:
    """
    Start tracking a student's progress through a module.

    Raises:
        DuplicateEntryError: A row already exists for the pair
    """
    if await repository.get_by_pair(db, data.student_id, data.module_id) is not None:
        raise DuplicateEntryError("Progress already exists for this student and module")

    fields = data.model_dump()
    fields.update(status_timestamps(data.status))

    progress = await repository.create(db, fields)
    await db.commit()

    logger.info(
        f"Progress created: student {data.student_id} module {data.module_id} "
        f"({data.status.value})"
    )
    return ProgressResponse.model_validate(progress)


async def _apply_update(
    db: AsyncSession, progress: ModuleProgress, data: ProgressUpdate
) -> ProgressResponse:
    fields: dict[str, Any] = data.model_dump(exclude_unset=True)
    if "student_id" in fields or "module_id" in fields:
        raise ValidationError("Cannot update student ID or module ID")
    # Only current_section_id may be cleared
    fields = {
        key: value
        for key, value in fields.items()
        if value is not None or key == "current_section_id"
    }

    fields.update(
        status_timestamps(
            fields.get("status", progress.status),
            started_at=progress.started_at,
            completed_at=progress.completed_at,
        )
    )

    progress = await repository.update(db, progress, fields)
    await db.commit()
    return ProgressResponse.model_validate(progress)


async def update_progress(
    db: AsyncSession, progress_id: str, data: ProgressUpdate
) -> ProgressResponse:
    progress = await get_progress_or_404(db, progress_id)
    return await _apply_update(db, progress, data)


async def update_progress_by_pair(
    db: AsyncSession, student_id: str, module_id: str, data: ProgressUpdate
) -> ProgressResponse:
    progress = await get_progress_by_pair_or_404(db, student_id, module_id)
    return await _apply_update(db, progress, data)


async def delete_progress(db: AsyncSession, progress_id: str) -> None:
    progress = await get_progress_or_404(db, progress_id)
    await repository.delete(db, progress)
    await db.commit()
    logger.info(f"Progress deleted: {progress_id}")


async def complete_section(
    db: AsyncSession, student_id: str, module_id: str, section_id: str
) -> ProgressResponse:
    """
    Record a finished section, creating the progress row on first use.

    Raises:
        NotFoundError: Unknown module
        ValidationError: Section is not part of the module
    """
    module = await modules_repository.get_by_id(db, module_id)
    if module is None:
        raise NotFoundError("Module not found")
    if section_id not in module.section_ids:
        raise ValidationError(
            "Section does not belong to this module",
            details={"section_id": section_id, "module_id": module_id},
        )

    progress = await repository.get_by_pair(db, student_id, module_id)
    if progress is None:
        entry: dict[str, Any] = {
            "module_id": module_id,
            "status": ProgressStatus.NOT_STARTED,
            "progress_percentage": 0,
            "completed_sections": [],
            "started_at": None,
            "completed_at": None,
        }
    else:
        entry = learning_path_helpers.progress_entry(progress)

    updated = learning_path_helpers.apply_section_completion(entry, section_id, len(module.section_ids))
    fields = {key: updated[key] for key in SECTION_FIELDS if key in updated}

    if progress is None:
        fields.update(student_id=student_id, module_id=module_id)
        progress = await repository.create(db, fields)
    else:
        progress = await repository.update(db, progress, fields)
    await db.commit()

    logger.info(
        f"Section {section_id} completed: student {student_id} module {module_id} "
        f"now {progress.progress_percentage}%"
    )
    return ProgressResponse.model_validate(progress)
