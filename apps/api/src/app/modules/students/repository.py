"""
Student Repository

Queries over student accounts joined with their profiles.
"""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.users.models import LearningStyle, Profile, User, UserRole


async def get_student(db: AsyncSession, student_id: str) -> User | None:
    """A user by id, only if they are a student."""
    result = await db.execute(
        select(User).where(User.id == str(student_id), User.role == UserRole.STUDENT)
    )
    return result.scalar_one_or_none()


async def list_students(
    db: AsyncSession,
    *,
    grade_level: str | None = None,
    learning_style: LearningStyle | None = None,
    search: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> tuple[list[User], int]:
    """
    List students ordered by last name, then first name.

    ``search`` matches name parts or email, case-insensitively.
    """
    conditions = [User.role == UserRole.STUDENT]
    if grade_level:
        conditions.append(Profile.grade_level == grade_level)
    if learning_style:
        conditions.append(Profile.learning_style == learning_style)
    if search:
        pattern = f"%{search}%"
        conditions.append(
            or_(
                Profile.first_name.ilike(pattern),
                Profile.last_name.ilike(pattern),
                Profile.full_name.ilike(pattern),
                User.email.ilike(pattern),
            )
        )

    total_result = await db.execute(
        select(func.count(User.id))
        .select_from(User)
        .outerjoin(Profile, Profile.user_id == User.id)
        .where(*conditions)
    )
    total = total_result.scalar() or 0

    query = (
        select(User)
        .outerjoin(Profile, Profile.user_id == User.id)
        .where(*conditions)
        .order_by(
            Profile.last_name.asc().nulls_last(),
            Profile.first_name.asc().nulls_last(),
            User.email.asc(),
        )
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all()), total
