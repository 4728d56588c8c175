"""
Student Service Layer

Student account management plus the per-student dashboard reads that
combine progress, completions, badges and the learning path.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import DuplicateEntryError, NotFoundError, ValidationError
from app.core.security import hash_password
from app.modules.badges import service as badges_service
from app.modules.completions import repository as completions_repository
from app.modules.completions import service as completions_service
from app.modules.completions.schemas import CompletionResponse
from app.modules.progress import repository as progress_repository
from app.modules.progress.models import ProgressStatus
from app.modules.shared import Pagination, PaginatedResponse, build_pagination
from app.modules.students import repository
from app.modules.students.schemas import (
    BulkImportError,
    BulkImportResult,
    DashboardStats,
    RecentActivity,
    StudentCreate,
    StudentStats,
    StudentUpdate,
)
from app.modules.users.helpers import build_full_name
from app.modules.users.models import LearningStyle, User, UserRole
from app.modules.users.repository import ProfileRepository, UserRepository
from app.modules.users.schemas import UserResponse
from app.modules.vark_modules import repository as modules_repository

logger = logging.getLogger(__name__)

NAME_FIELDS = ("first_name", "middle_name", "last_name")
PROFILE_FIELDS = (
    *NAME_FIELDS,
    "grade_level",
    "learning_style",
    "learning_type",
    "preferred_modules",
    "onboarding_completed",
)
REQUIRED_IMPORT_FIELDS = ("first_name", "last_name", "email")

RECENT_COMPLETIONS = 3
RECENT_PROGRESS = 3
MAX_RECENT_ACTIVITIES = 5
UNKNOWN_MODULE = "Unknown Module"


async def get_student_or_404(db: AsyncSession, student_id: str) -> User:
    student = await repository.get_student(db, student_id)
    if student is None:
        raise NotFoundError("Student not found", error_code="NOT_FOUND")
    return student


async def list_students(
    db: AsyncSession,
    pagination: Pagination,
    *,
    grade_level: str | None = None,
    learning_style: LearningStyle | None = None,
    search: str | None = None,
) -> PaginatedResponse[UserResponse]:
    students, total = await repository.list_students(
        db,
        grade_level=grade_level,
        learning_style=learning_style,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return PaginatedResponse[UserResponse](
        data=[UserResponse.model_validate(s) for s in students],
        pagination=build_pagination(pagination.page, pagination.limit, total),
    )


async def create_student(db: AsyncSession, data: StudentCreate) -> UserResponse:
    """
    Create a student account and profile in one transaction.

    Raises:
        DuplicateEntryError: Email already registered
    """
    if await UserRepository.email_exists(db, data.email):
        raise DuplicateEntryError("A user with this email already exists")

    learning_style = data.learning_style or LearningStyle(settings.default_learning_style)
    user = await UserRepository.create(
        db,
        email=data.email.lower(),
        password_hash=hash_password(data.password or settings.default_student_password),
        role=UserRole.STUDENT,
        email_verified=True,
        profile={
            "first_name": data.first_name,
            "middle_name": data.middle_name or None,
            "last_name": data.last_name,
            "full_name": build_full_name(data.first_name, data.middle_name, data.last_name),
            "grade_level": data.grade_level or settings.default_grade_level,
            "learning_style": learning_style,
            "learning_type": data.learning_type,
            "preferred_modules": data.preferred_modules,
            "onboarding_completed": data.onboarding_completed,
        },
    )
    await db.commit()

    logger.info(f"Student created: {user.id}")
    return UserResponse.model_validate(user)


def _import_row_error(exc: PydanticValidationError, row: dict[str, Any]) -> str:
    if any(not row.get(field) for field in REQUIRED_IMPORT_FIELDS):
        return "Missing required fields (first_name, last_name, email)"
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid row")


async def bulk_import_students(db: AsyncSession, rows: list[Any]) -> BulkImportResult:
    """
    Create many students; each row succeeds or fails on its own.

    Rows whose email is already registered are skipped, not failed.
    """
    result = BulkImportResult()
    logger.info(f"Starting bulk import of {len(rows)} students")

    for index, row in enumerate(rows):
        row = row if isinstance(row, dict) else {}
        email = str(row.get("email") or "unknown")

        try:
            data = StudentCreate.model_validate(row)
        except PydanticValidationError as exc:
            result.failed += 1
            result.errors.append(
                BulkImportError(index=index, email=email, error=_import_row_error(exc, row))
            )
            continue

        try:
            await create_student(db, data)
        except DuplicateEntryError:
            result.skipped += 1
            logger.info(f"Bulk import skipped existing email at row {index}")
            continue
        except SQLAlchemyError as exc:
            await db.rollback()
            result.failed += 1
            error = str(getattr(exc, "orig", None) or exc)
            result.errors.append(BulkImportError(index=index, email=email, error=error))
            logger.error(f"Bulk import failed at row {index}: {exc}")
            continue

        result.success += 1

    logger.info(
        f"Bulk import complete: {result.success} success, {result.failed} failed, "
        f"{result.skipped} skipped"
    )
    return result


async def update_student(db: AsyncSession, student_id: str, data: StudentUpdate) -> UserResponse:
    """
    Apply a partial update to the account and its profile.

    ``full_name`` is rebuilt whenever a name part changes, using the stored
    parts for any that were not sent.
    """
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationError("No fields to update")

    student = await get_student_or_404(db, student_id)

    email = fields.pop("email", None)
    if email and email.lower() != student.email.lower():
        if await UserRepository.email_exists(db, email):
            raise DuplicateEntryError("A user with this email already exists")
        await UserRepository.update(db, student, {"email": email.lower()})

    profile_fields = {key: fields[key] for key in PROFILE_FIELDS if key in fields}
    for key in ("first_name", "last_name", "preferred_modules", "onboarding_completed"):
        if key in profile_fields and profile_fields[key] is None:
            del profile_fields[key]

    if profile_fields:
        profile = student.profile
        names = {
            key: profile_fields.get(key, getattr(profile, key) if profile else None)
            for key in NAME_FIELDS
        }
        if any(key in profile_fields for key in NAME_FIELDS) or profile is None:
            profile_fields["full_name"] = build_full_name(
                names["first_name"], names["middle_name"], names["last_name"]
            )

        if profile is None:
            profile_fields.update(
                first_name=names["first_name"] or "",
                last_name=names["last_name"] or "",
            )
            await ProfileRepository.create(db, student, **profile_fields)
        else:
            await ProfileRepository.update(db, profile, profile_fields)

    await db.commit()

    logger.info(f"Student updated: {student_id} ({', '.join(sorted(fields))})")
    return UserResponse.model_validate(student)


async def delete_student(db: AsyncSession, student_id: str) -> None:
    """Delete a student; their learning records go with them."""
    student = await get_student_or_404(db, student_id)
    await UserRepository.delete(db, student)
    await db.commit()
    logger.info(f"Student deleted: {student_id}")


async def get_student_stats(db: AsyncSession, student_id: str) -> StudentStats:
    completion_stats = await completions_service.get_student_stats(db, student_id)
    badge_stats = await badges_service.get_badge_stats(db, student_id)
    return StudentStats(
        **completion_stats.model_dump(),
        total_badges=badge_stats.total_badges,
        by_rarity=badge_stats.by_rarity,
    )


async def get_module_completion(
    db: AsyncSession, student_id: str, module_id: str
) -> CompletionResponse:
    completion = await completions_repository.get_by_pair(db, student_id, module_id)
    if completion is None:
        raise NotFoundError("Completion not found", error_code="NOT_FOUND")
    return CompletionResponse.model_validate(completion)


async def get_dashboard_stats(db: AsyncSession, student_id: str) -> DashboardStats:
    await get_student_or_404(db, student_id)

    completion_stats = await completions_repository.get_student_stats(db, student_id)
    progress_stats = await progress_repository.get_student_stats(db, student_id)
    available = await modules_repository.count_modules(db, is_published=True)

    return DashboardStats(
        modules_completed=completion_stats["total_completions"],
        modules_in_progress=progress_stats["in_progress_modules"],
        average_score=round(completion_stats["average_score"]),
        total_time_spent=completion_stats["total_time_spent"],
        perfect_sections=completion_stats["perfect_sections"],
        total_modules_available=available,
    )


async def get_recent_activities(db: AsyncSession, student_id: str) -> list[RecentActivity]:
    """Latest completions and in-progress modules, newest first."""
    await get_student_or_404(db, student_id)

    completions = await completions_repository.list_by_student(
        db, student_id, limit=RECENT_COMPLETIONS
    )
    progress, _ = await progress_repository.list_by_student(
        db, student_id, status=ProgressStatus.IN_PROGRESS, limit=RECENT_PROGRESS
    )

    activities = [
        RecentActivity(
            id=c.id,
            type="module_completion",
            module_id=c.module_id,
            title=c.module_title or UNKNOWN_MODULE,
            status=ProgressStatus.COMPLETED.value,
            timestamp=c.completion_date,
            score=c.final_score,
        )
        for c in completions
    ]
    activities.extend(
        RecentActivity(
            id=p.id,
            type="module_progress",
            module_id=p.module_id,
            title=p.module_title or UNKNOWN_MODULE,
            status=ProgressStatus.IN_PROGRESS.value,
            timestamp=p.last_accessed_at,
            progress=p.progress_percentage,
        )
        for p in progress
    )

    activities.sort(
        key=lambda a: a.timestamp.timestamp() if a.timestamp else float("-inf"),
        reverse=True,
    )
    return activities[:MAX_RECENT_ACTIVITIES]
