"""
VARK Module Repository

Database operations for learning modules.
"""

from typing import Any

from sqlalchemy import and_, distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.completions.models import ModuleCompletion
from app.modules.users.models import User, UserRole

from .models import DifficultyLevel, VarkModule


async def create(db: AsyncSession, fields: dict[str, Any]) -> VarkModule:
    """Insert a module."""
    module = VarkModule(**fields)
    db.add(module)
    await db.flush()
    await db.refresh(module)
    return module


async def get_by_id(db: AsyncSession, module_id: str) -> VarkModule | None:
    result = await db.execute(select(VarkModule).where(VarkModule.id == str(module_id)))
    return result.scalar_one_or_none()


async def exists(db: AsyncSession, module_id: str) -> bool:
    result = await db.execute(select(VarkModule.id).where(VarkModule.id == str(module_id)))
    return result.scalar_one_or_none() is not None


async def list_modules(
    db: AsyncSession,
    *,
    category_id: str | None = None,
    difficulty_level: DifficultyLevel | None = None,
    is_published: bool | None = None,
    created_by: str | None = None,
    search: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> tuple[list[VarkModule], int]:
    """
    List modules newest first with optional filters.

    Returns:
        Tuple of (page of modules, total matching count)
    """
    conditions = []
    if category_id:
        conditions.append(VarkModule.category_id == category_id)
    if difficulty_level:
        conditions.append(VarkModule.difficulty_level == difficulty_level)
    if is_published is not None:
        conditions.append(VarkModule.is_published.is_(is_published))
    if created_by:
        conditions.append(VarkModule.created_by == created_by)
    if search:
        pattern = f"%{search}%"
        conditions.append(
            or_(VarkModule.title.ilike(pattern), VarkModule.description.ilike(pattern))
        )

    total_result = await db.execute(select(func.count(VarkModule.id)).where(*conditions))
    total = total_result.scalar() or 0

    query = (
        select(VarkModule)
        .where(*conditions)
        .order_by(VarkModule.created_at.desc())
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all()), total


async def list_published(db: AsyncSession) -> list[VarkModule]:
    """All published modules, newest first."""
    modules, _ = await list_modules(db, is_published=True)
    return modules


async def update(db: AsyncSession, module: VarkModule, fields: dict[str, Any]) -> VarkModule:
    for key, value in fields.items():
        setattr(module, key, value)
    await db.flush()
    await db.refresh(module)
    return module


async def delete(db: AsyncSession, module: VarkModule) -> None:
    await db.delete(module)
    await db.flush()


async def count_modules(
    db: AsyncSession,
    *,
    created_by: str | None = None,
    is_published: bool | None = None,
) -> int:
    query = select(func.count(VarkModule.id))
    if created_by:
        query = query.where(VarkModule.created_by == created_by)
    if is_published is not None:
        query = query.where(VarkModule.is_published.is_(is_published))
    result = await db.execute(query)
    return result.scalar() or 0


async def count_with_assessments(db: AsyncSession) -> int:
    """Modules carrying at least one assessment question (quizzes)."""
    result = await db.execute(
        select(func.count(VarkModule.id)).where(
            func.jsonb_array_length(VarkModule.assessment_questions) > 0
        )
    )
    return result.scalar() or 0


async def get_submission_stats(db: AsyncSession, module_id: str) -> dict[str, float]:
    """
    Completion coverage of a module over all student accounts.

    Returns:
        total_students, submitted_count, average_score
    """
    result = await db.execute(
        select(
            func.count(distinct(User.id)),
            func.count(distinct(ModuleCompletion.student_id)),
            func.coalesce(func.avg(ModuleCompletion.final_score), 0),
        )
        .select_from(User)
        .outerjoin(
            ModuleCompletion,
            and_(
                ModuleCompletion.student_id == User.id,
                ModuleCompletion.module_id == str(module_id),
            ),
        )
        .where(User.role == UserRole.STUDENT)
    )
    total_students, submitted_count, average_score = result.one()
    return {
        "total_students": int(total_students or 0),
        "submitted_count": int(submitted_count or 0),
        "average_score": float(average_score or 0),
    }
