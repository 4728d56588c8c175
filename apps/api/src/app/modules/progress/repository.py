"""
Progress Repository

Database operations for module progress rows.
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import ModuleProgress, ProgressStatus


async def get_by_id(db: AsyncSession, progress_id: str) -> ModuleProgress | None:
    result = await db.execute(select(ModuleProgress).where(ModuleProgress.id == str(progress_id)))
    return result.scalar_one_or_none()


async def get_by_pair(
    db: AsyncSession, student_id: str, module_id: str
) -> ModuleProgress | None:
    result = await db.execute(
        select(ModuleProgress).where(
            ModuleProgress.student_id == str(student_id),
            ModuleProgress.module_id == str(module_id),
        )
    )
    return result.scalar_one_or_none()


async def list_by_student(
    db: AsyncSession,
    student_id: str,
    *,
    status: ProgressStatus | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> tuple[list[ModuleProgress], int]:
    """A student's progress rows, most recently accessed first."""
    conditions = [ModuleProgress.student_id == str(student_id)]
    if status is not None:
        conditions.append(ModuleProgress.status == status)

    total_result = await db.execute(select(func.count(ModuleProgress.id)).where(*conditions))
    total = total_result.scalar() or 0

    query = (
        select(ModuleProgress)
        .where(*conditions)
        .order_by(ModuleProgress.last_accessed_at.desc().nulls_last())
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all()), total


async def list_by_module(
    db: AsyncSession,
    module_id: str,
    *,
    limit: int | None = None,
    offset: int = 0,
) -> tuple[list[ModuleProgress], int]:
    condition = ModuleProgress.module_id == str(module_id)

    total_result = await db.execute(select(func.count(ModuleProgress.id)).where(condition))
    total = total_result.scalar() or 0

    query = (
        select(ModuleProgress)
        .where(condition)
        .order_by(ModuleProgress.last_accessed_at.desc().nulls_last())
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all()), total


async def create(db: AsyncSession, fields: dict[str, Any]) -> ModuleProgress:
    progress = ModuleProgress(**fields)
    db.add(progress)
    await db.flush()
    await db.refresh(progress)
    return progress


async def update(
    db: AsyncSession, progress: ModuleProgress, fields: dict[str, Any]
) -> ModuleProgress:
    for key, value in fields.items():
        setattr(progress, key, value)
    await db.flush()
    await db.refresh(progress)
    return progress


async def delete(db: AsyncSession, progress: ModuleProgress) -> None:
    await db.delete(progress)
    await db.flush()


def _status_count(status: ProgressStatus):
    return func.count(ModuleProgress.id).filter(ModuleProgress.status == status)


async def get_student_stats(db: AsyncSession, student_id: str) -> dict[str, Any]:
    result = await db.execute(
        select(
            func.count(ModuleProgress.id),
            _status_count(ProgressStatus.COMPLETED),
            _status_count(ProgressStatus.IN_PROGRESS),
            _status_count(ProgressStatus.NOT_STARTED),
            func.avg(ModuleProgress.progress_percentage),
            func.coalesce(func.sum(ModuleProgress.time_spent_minutes), 0),
        ).where(ModuleProgress.student_id == str(student_id))
    )
    total, completed, in_progress, not_started, average, time_spent = result.one()
    return {
        "total_modules": int(total or 0),
        "completed_modules": int(completed or 0),
        "in_progress_modules": int(in_progress or 0),
        "not_started_modules": int(not_started or 0),
        "average_progress": float(average or 0),
        "total_time_spent": int(time_spent or 0),
    }


async def get_module_stats(db: AsyncSession, module_id: str) -> dict[str, Any]:
    result = await db.execute(
        select(
            func.count(ModuleProgress.id),
            _status_count(ProgressStatus.COMPLETED),
            _status_count(ProgressStatus.IN_PROGRESS),
            _status_count(ProgressStatus.NOT_STARTED),
            func.avg(ModuleProgress.progress_percentage),
            func.avg(ModuleProgress.time_spent_minutes),
        ).where(ModuleProgress.module_id == str(module_id))
    )
    total, completed, in_progress, not_started, average, average_time = result.one()
    return {
        "total_students": int(total or 0),
        "completed_students": int(completed or 0),
        "in_progress_students": int(in_progress or 0),
        "not_started_students": int(not_started or 0),
        "average_progress": float(average or 0),
        "average_time_spent": float(average_time or 0),
    }
