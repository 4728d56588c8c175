"""
Completion Service Layer

A completion is upserted on (student, module): re-completing a module
overwrites its scores and keeps the original completion date.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.modules.completions import repository
from app.modules.completions.schemas import (
    CompletionCreate,
    CompletionResponse,
    CompletionStats,
)
from app.modules.shared import utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "final_score",
    "time_spent_minutes",
    "pre_test_score",
    "post_test_score",
    "sections_completed",
    "perfect_sections",
)


async def record_completion(db: AsyncSession, data: CompletionCreate) -> CompletionResponse:
    fields = data.model_dump()
    existing = await repository.get_by_pair(db, data.student_id, data.module_id)

    if existing is not None:
        completion = await repository.update(
            db, existing, {key: fields[key] for key in UPDATABLE_FIELDS}
        )
        logger.info(f"Completion updated: student {data.student_id} module {data.module_id}")
    else:
        fields["completion_date"] = utcnow()
        completion = await repository.create(db, fields)
        logger.info(f"Completion recorded: student {data.student_id} module {data.module_id}")

    await db.commit()
    return CompletionResponse.model_validate(completion)


async def list_student_completions(
    db: AsyncSession, student_id: str
) -> list[CompletionResponse]:
    completions = await repository.list_by_student(db, student_id)
    return [CompletionResponse.model_validate(c) for c in completions]


async def get_student_stats(db: AsyncSession, student_id: str) -> CompletionStats:
    stats = await repository.get_student_stats(db, student_id)
    stats["average_score"] = round(stats["average_score"], 2)
    return CompletionStats(**stats)


async def get_completion(db: AsyncSession, student_id: str, module_id: str) -> CompletionResponse:
    completion = await repository.get_by_pair(db, student_id, module_id)
    if completion is None:
        raise NotFoundError("Completion not found")
    return CompletionResponse.model_validate(completion)
