"""
Teacher Dashboard Service

Read-only aggregates for a teacher's dashboard.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.classes import repository as classes_repository
from app.modules.completions import repository as completions_repository
from app.modules.teachers.schemas import (
    LearningStyleDistribution,
    LearningTypeDistribution,
    RecentCompletion,
    TeacherStats,
    TeacherStudent,
)
from app.modules.users.helpers import build_full_name
from app.modules.users.models import LearningType, UserRole
from app.modules.users.repository import ProfileRepository, UserRepository
from app.modules.vark_modules import repository as modules_repository

UNKNOWN_MODULE = "Unknown Module"
UNKNOWN_STUDENT = "Unknown Student"
DEFAULT_RECENT_COMPLETIONS = 10


async def get_teacher_stats(db: AsyncSession, teacher_id: str) -> TeacherStats:
    return TeacherStats(
        total_students=await UserRepository.count_by_role(db, UserRole.STUDENT),
        published_modules=await modules_repository.count_modules(
            db, created_by=teacher_id, is_published=True
        ),
        total_modules=await modules_repository.count_modules(db, created_by=teacher_id),
        completed_modules=await completions_repository.count_by_creator(db, teacher_id),
    )


async def get_learning_style_distribution(db: AsyncSession) -> LearningStyleDistribution:
    counts = await ProfileRepository.count_students_by_learning_style(db)
    return LearningStyleDistribution(**{style.value: count for style, count in counts.items()})


def bucket_learning_types(counts: dict[str | None, int]) -> LearningTypeDistribution:
    """Fold raw learning_type values into the known buckets, case-insensitively."""
    known = {learning_type.value for learning_type in LearningType}
    buckets = dict.fromkeys(known, 0)
    not_set = 0

    for raw, count in counts.items():
        key = raw.strip().lower() if raw else None
        if key in known:
            buckets[key] += count
        else:
            not_set += count

    return LearningTypeDistribution(**buckets, not_set=not_set)


async def get_learning_type_distribution(db: AsyncSession) -> LearningTypeDistribution:
    counts = await ProfileRepository.count_students_by_learning_type(db)
    return bucket_learning_types(counts)


async def get_recent_completions(
    db: AsyncSession, teacher_id: str, limit: int = DEFAULT_RECENT_COMPLETIONS
) -> list[RecentCompletion]:
    """Completions of the teacher's modules, newest first."""
    completions = await completions_repository.list_by_creator(db, teacher_id, limit=limit)

    recent = []
    for completion in completions:
        profile = completion.student.profile if completion.student else None
        student_name = None
        if profile is not None:
            student_name = profile.full_name or build_full_name(
                profile.first_name, None, profile.last_name
            )
        recent.append(
            RecentCompletion(
                id=completion.id,
                module_title=completion.module_title or UNKNOWN_MODULE,
                student_name=student_name or UNKNOWN_STUDENT,
                completion_date=completion.completion_date,
                final_score=completion.final_score or 0,
                time_spent_minutes=completion.time_spent_minutes or 0,
                perfect_sections=completion.perfect_sections or 0,
            )
        )
    return recent


async def get_teacher_students(db: AsyncSession, teacher_id: str) -> list[TeacherStudent]:
    """Students in the teacher's classes, one entry per enrollment."""
    enrollments = await classes_repository.list_teacher_enrollments(db, teacher_id)

    students = []
    for enrollment in enrollments:
        student = enrollment.student
        profile = student.profile
        name = ""
        if profile is not None:
            name = profile.full_name or build_full_name(profile.first_name, None, profile.last_name)
        students.append(
            TeacherStudent(
                id=student.id,
                name=name,
                email=student.email,
                grade_level=profile.grade_level if profile else None,
                learning_style=profile.learning_style if profile else None,
                class_name=enrollment.school_class.name,
                subject=enrollment.school_class.subject,
                joined_at=enrollment.joined_at,
                onboarding_completed=profile.onboarding_completed if profile else False,
            )
        )
    return students
