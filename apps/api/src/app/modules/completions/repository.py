"""
Completion Repository

Database operations for module completions.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.vark_modules.models import VarkModule

from .models import ModuleCompletion


async def get_by_pair(
    db: AsyncSession, student_id: str, module_id: str
) -> ModuleCompletion | None:
    result = await db.execute(
        select(ModuleCompletion).where(
            ModuleCompletion.student_id == str(student_id),
            ModuleCompletion.module_id == str(module_id),
        )
    )
    return result.scalar_one_or_none()


async def create(db: AsyncSession, fields: dict[str, Any]) -> ModuleCompletion:
    completion = ModuleCompletion(**fields)
    db.add(completion)
    await db.flush()
    await db.refresh(completion)
    return completion


async def update(
    db: AsyncSession, completion: ModuleCompletion, fields: dict[str, Any]
) -> ModuleCompletion:
    for key, value in fields.items():
        setattr(completion, key, value)
    await db.flush()
    await db.refresh(completion)
    return completion


async def list_by_student(
    db: AsyncSession, student_id: str, limit: int | None = None
) -> list[ModuleCompletion]:
    """A student's completions, newest first."""
    query = (
        select(ModuleCompletion)
        .where(ModuleCompletion.student_id == str(student_id))
        .order_by(ModuleCompletion.completion_date.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_by_module(db: AsyncSession, module_id: str) -> list[ModuleCompletion]:
    result = await db.execute(
        select(ModuleCompletion)
        .where(ModuleCompletion.module_id == str(module_id))
        .order_by(ModuleCompletion.completion_date.desc())
    )
    return list(result.scalars().all())


async def list_by_creator(
    db: AsyncSession, creator_id: str, limit: int | None = None
) -> list[ModuleCompletion]:
    """Completions of modules created by a teacher, newest first."""
    query = (
        select(ModuleCompletion)
        .join(VarkModule, VarkModule.id == ModuleCompletion.module_id)
        .where(VarkModule.created_by == str(creator_id))
        .order_by(ModuleCompletion.completion_date.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def count_by_creator(db: AsyncSession, creator_id: str) -> int:
    result = await db.execute(
        select(func.count(ModuleCompletion.id))
        .join(VarkModule, VarkModule.id == ModuleCompletion.module_id)
        .where(VarkModule.created_by == str(creator_id))
    )
    return result.scalar() or 0


async def count_since(db: AsyncSession, since: datetime) -> int:
    result = await db.execute(
        select(func.count(ModuleCompletion.id)).where(ModuleCompletion.completion_date >= since)
    )
    return result.scalar() or 0


async def get_student_stats(db: AsyncSession, student_id: str) -> dict[str, Any]:
    """Aggregate completion numbers for one student."""
    result = await db.execute(
        select(
            func.count(ModuleCompletion.id),
            func.avg(ModuleCompletion.final_score),
            func.coalesce(func.sum(ModuleCompletion.time_spent_minutes), 0),
            func.coalesce(func.sum(ModuleCompletion.perfect_sections), 0),
        ).where(ModuleCompletion.student_id == str(student_id))
    )
    total, average, time_spent, perfect = result.one()
    return {
        "total_completions": int(total or 0),
        "average_score": float(average or 0),
        "total_time_spent": int(time_spent or 0),
        "perfect_sections": int(perfect or 0),
    }
