"""
Stats Service

Platform-wide counters for the public homepage and a database-backed
health probe.
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DatabaseError
from app.modules.classes import repository as classes_repository
from app.modules.completions import repository as completions_repository
from app.modules.shared import utcnow
from app.modules.stats.schemas import HomepageStats, RecentActivityCounts, SystemHealth
from app.modules.submissions import repository as submissions_repository
from app.modules.users.models import UserRole
from app.modules.users.repository import ProfileRepository, UserRepository
from app.modules.vark_modules import repository as modules_repository

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_DAYS = 30


def success_rate(onboarded: int, students: int) -> int:
    """Percentage of students who finished onboarding."""
    if students <= 0:
        return 0
    return round(onboarded / students * 100)


async def get_homepage_stats(db: AsyncSession) -> HomepageStats:
    since = utcnow() - timedelta(days=RECENT_ACTIVITY_DAYS)

    total_students = await UserRepository.count_by_role(db, UserRole.STUDENT)
    onboarded = await ProfileRepository.count_onboarded_students(db)

    return HomepageStats(
        total_students=total_students,
        total_teachers=await UserRepository.count_by_role(db, UserRole.TEACHER),
        total_modules=await modules_repository.count_modules(db, is_published=True),
        total_classes=await classes_repository.count_all(db),
        total_quizzes=await modules_repository.count_with_assessments(db),
        total_activities=await submissions_repository.count_all(db),
        success_rate=success_rate(onboarded, total_students),
        recent_activity=RecentActivityCounts(
            new_students=await UserRepository.count_by_role(db, UserRole.STUDENT, since=since),
            new_teachers=await UserRepository.count_by_role(db, UserRole.TEACHER, since=since),
            completed_modules=await completions_repository.count_since(db, since),
        ),
    )


async def get_system_health(db: AsyncSession) -> SystemHealth:
    """
    Probe the database by counting users.

    Raises:
        DatabaseError: 503 DB_CONNECTION_ERROR when the probe fails
    """
    try:
        total_users = await UserRepository.count_all(db)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Health probe failed: {e}")
        raise DatabaseError(
            message="Database connection failed",
            error_code="DB_CONNECTION_ERROR",
            status_code=503,
        ) from e

    return SystemHealth(database_connected=True, last_update=utcnow(), total_users=total_users)
