"""
Badge Repository

Database operations for student badges.
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import BadgeRarity, StudentBadge


async def find_existing(
    db: AsyncSession, student_id: str, badge_type: str, module_id: str
) -> StudentBadge | None:
    """The badge already awarded for this (student, type, module), if any."""
    result = await db.execute(
        select(StudentBadge)
        .where(
            StudentBadge.student_id == str(student_id),
            StudentBadge.badge_type == badge_type,
            StudentBadge.module_id == str(module_id),
        )
        .limit(1)
    )
    return result.scalar_one_or_none()


async def create(db: AsyncSession, fields: dict[str, Any]) -> StudentBadge:
    badge = StudentBadge(**fields)
    db.add(badge)
    await db.flush()
    await db.refresh(badge)
    return badge


async def list_by_student(db: AsyncSession, student_id: str) -> list[StudentBadge]:
    result = await db.execute(
        select(StudentBadge)
        .where(StudentBadge.student_id == str(student_id))
        .order_by(StudentBadge.earned_date.desc())
    )
    return list(result.scalars().all())


async def count_by_rarity(db: AsyncSession, student_id: str) -> dict[BadgeRarity, int]:
    result = await db.execute(
        select(StudentBadge.badge_rarity, func.count(StudentBadge.id))
        .where(StudentBadge.student_id == str(student_id))
        .group_by(StudentBadge.badge_rarity)
    )
    return {rarity: count for rarity, count in result.all()}
