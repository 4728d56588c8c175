"""
Submission Repository

Database operations for section submissions.
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Submission


async def get_by_id(db: AsyncSession, submission_id: str) -> Submission | None:
    result = await db.execute(select(Submission).where(Submission.id == str(submission_id)))
    return result.scalar_one_or_none()


async def get_by_section(
    db: AsyncSession, student_id: str, module_id: str, section_id: str
) -> Submission | None:
    result = await db.execute(
        select(Submission).where(
            Submission.student_id == str(student_id),
            Submission.module_id == str(module_id),
            Submission.section_id == section_id,
        )
    )
    return result.scalar_one_or_none()


async def list_for_student_module(
    db: AsyncSession, student_id: str, module_id: str
) -> list[Submission]:
    result = await db.execute(
        select(Submission)
        .where(
            Submission.student_id == str(student_id),
            Submission.module_id == str(module_id),
        )
        .order_by(Submission.created_at.desc())
    )
    return list(result.scalars().all())


async def list_by_module(db: AsyncSession, module_id: str) -> list[Submission]:
    result = await db.execute(
        select(Submission)
        .where(Submission.module_id == str(module_id))
        .order_by(Submission.created_at.desc())
    )
    return list(result.scalars().all())


async def create(db: AsyncSession, fields: dict[str, Any]) -> Submission:
    submission = Submission(**fields)
    db.add(submission)
    await db.flush()
    await db.refresh(submission)
    return submission


async def update(db: AsyncSession, submission: Submission, fields: dict[str, Any]) -> Submission:
    for key, value in fields.items():
        setattr(submission, key, value)
    await db.flush()
    await db.refresh(submission)
    return submission


async def count_all(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Submission.id)))
    return result.scalar() or 0
