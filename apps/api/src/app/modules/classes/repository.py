"""
Class Repository

Database operations for classes and their enrollments.
"""

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.users.models import Profile, User

from .models import ClassStudent, SchoolClass


async def get_by_id(db: AsyncSession, class_id: str) -> SchoolClass | None:
    result = await db.execute(select(SchoolClass).where(SchoolClass.id == str(class_id)))
    return result.scalar_one_or_none()


async def list_classes(
    db: AsyncSession,
    *,
    subject: str | None = None,
    grade_level: str | None = None,
    created_by: str | None = None,
    search: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> tuple[list[SchoolClass], int]:
    """List classes newest first with optional filters."""
    conditions = []
    if subject:
        conditions.append(SchoolClass.subject == subject)
    if grade_level:
        conditions.append(SchoolClass.grade_level == grade_level)
    if created_by:
        conditions.append(SchoolClass.created_by == created_by)
    if search:
        pattern = f"%{search}%"
        conditions.append(
            or_(SchoolClass.name.ilike(pattern), SchoolClass.description.ilike(pattern))
        )

    total_result = await db.execute(select(func.count(SchoolClass.id)).where(*conditions))
    total = total_result.scalar() or 0

    query = (
        select(SchoolClass)
        .where(*conditions)
        .order_by(SchoolClass.created_at.desc())
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all()), total


async def list_by_student(db: AsyncSession, student_id: str) -> list[SchoolClass]:
    """Classes a student is enrolled in, most recently joined first."""
    result = await db.execute(
        select(SchoolClass)
        .join(ClassStudent, ClassStudent.class_id == SchoolClass.id)
        .where(ClassStudent.student_id == str(student_id))
        .order_by(ClassStudent.joined_at.desc())
    )
    return list(result.scalars().all())


async def create(db: AsyncSession, fields: dict[str, Any]) -> SchoolClass:
    school_class = SchoolClass(**fields)
    db.add(school_class)
    await db.flush()
    await db.refresh(school_class)
    return school_class


async def update(
    db: AsyncSession, school_class: SchoolClass, fields: dict[str, Any]
) -> SchoolClass:
    for key, value in fields.items():
        setattr(school_class, key, value)
    await db.flush()
    await db.refresh(school_class)
    return school_class


async def delete(db: AsyncSession, school_class: SchoolClass) -> None:
    await db.delete(school_class)
    await db.flush()


async def count_all(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(SchoolClass.id)))
    return result.scalar() or 0


# Enrollments


async def get_enrollment(
    db: AsyncSession, class_id: str, student_id: str
) -> ClassStudent | None:
    result = await db.execute(
        select(ClassStudent).where(
            ClassStudent.class_id == str(class_id),
            ClassStudent.student_id == str(student_id),
        )
    )
    return result.scalar_one_or_none()


async def add_student(db: AsyncSession, class_id: str, student_id: str) -> ClassStudent:
    enrollment = ClassStudent(class_id=str(class_id), student_id=str(student_id))
    db.add(enrollment)
    await db.flush()
    await db.refresh(enrollment)
    return enrollment


async def remove_enrollment(db: AsyncSession, enrollment: ClassStudent) -> None:
    await db.delete(enrollment)
    await db.flush()


async def list_enrollments(db: AsyncSession, class_id: str) -> list[ClassStudent]:
    """Enrollments of a class ordered by student last name, then first name."""
    result = await db.execute(
        select(ClassStudent)
        .join(User, User.id == ClassStudent.student_id)
        .outerjoin(Profile, Profile.user_id == User.id)
        .where(ClassStudent.class_id == str(class_id))
        .order_by(Profile.last_name.asc().nulls_last(), Profile.first_name.asc().nulls_last())
    )
    return list(result.scalars().all())


async def list_teacher_enrollments(db: AsyncSession, teacher_id: str) -> list[ClassStudent]:
    """Enrollments across every class a teacher created, most recent first."""
    result = await db.execute(
        select(ClassStudent)
        .join(SchoolClass, SchoolClass.id == ClassStudent.class_id)
        .where(SchoolClass.created_by == str(teacher_id))
        .order_by(ClassStudent.joined_at.desc())
    )
    return list(result.scalars().all())

