"""
Class Service Layer

Classes belong to the teacher who created them; only that teacher or an
admin may change a class or its roster.
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, ensure_owner
from app.core.errors import DuplicateEntryError, NotFoundError, ValidationError
from app.modules.classes import repository
from app.modules.classes.models import SchoolClass
from app.modules.classes.schemas import (
    ClassCreate,
    ClassResponse,
    ClassUpdate,
    EnrolledStudent,
)
from app.modules.shared import Pagination, PaginatedResponse, build_pagination
from app.modules.users.models import User, UserRole
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


async def get_class_or_404(db: AsyncSession, class_id: str) -> SchoolClass:
    school_class = await repository.get_by_id(db, class_id)
    if school_class is None:
        raise NotFoundError("Class not found")
    return school_class


def _enrolled_student(student: User, joined_at: datetime) -> EnrolledStudent:
    profile = student.profile
    return EnrolledStudent(
        id=student.id,
        email=student.email,
        first_name=profile.first_name if profile else None,
        middle_name=profile.middle_name if profile else None,
        last_name=profile.last_name if profile else None,
        full_name=profile.full_name if profile else None,
        grade_level=profile.grade_level if profile else None,
        learning_style=profile.learning_style if profile else None,
        joined_at=joined_at,
    )


async def list_classes(
    db: AsyncSession,
    pagination: Pagination,
    *,
    subject: str | None = None,
    grade_level: str | None = None,
    created_by: str | None = None,
    search: str | None = None,
) -> PaginatedResponse[ClassResponse]:
    classes, total = await repository.list_classes(
        db,
        subject=subject,
        grade_level=grade_level,
        created_by=created_by,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return PaginatedResponse[ClassResponse](
        data=[ClassResponse.model_validate(c) for c in classes],
        pagination=build_pagination(pagination.page, pagination.limit, total),
    )


async def list_student_classes(db: AsyncSession, student_id: str) -> list[ClassResponse]:
    classes = await repository.list_by_student(db, student_id)
    return [ClassResponse.model_validate(c) for c in classes]


async def create_class(db: AsyncSession, user: CurrentUser, data: ClassCreate) -> ClassResponse:
    fields = data.model_dump()
    fields["created_by"] = user.id

    school_class = await repository.create(db, fields)
    await db.commit()

    logger.info(f"Class created: {school_class.id} '{school_class.name}' by {user.id}")
    return ClassResponse.model_validate(school_class)


async def update_class(
    db: AsyncSession, user: CurrentUser, class_id: str, data: ClassUpdate
) -> ClassResponse:
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationError("No fields to update")
    if "name" in fields and fields["name"] is None:
        raise ValidationError("Class name cannot be empty")

    school_class = await get_class_or_404(db, class_id)
    ensure_owner(user, school_class.created_by)

    school_class = await repository.update(db, school_class, fields)
    await db.commit()
    return ClassResponse.model_validate(school_class)


async def delete_class(db: AsyncSession, user: CurrentUser, class_id: str) -> None:
    school_class = await get_class_or_404(db, class_id)
    ensure_owner(user, school_class.created_by)

    await repository.delete(db, school_class)
    await db.commit()

    logger.info(f"Class deleted: {class_id} by {user.id}")


async def list_class_students(db: AsyncSession, class_id: str) -> list[EnrolledStudent]:
    await get_class_or_404(db, class_id)
    enrollments = await repository.list_enrollments(db, class_id)
    return [_enrolled_student(e.student, e.joined_at) for e in enrollments]


async def enroll_student(
    db: AsyncSession, user: CurrentUser, class_id: str, student_id: str
) -> EnrolledStudent:
    """
    Add a student to a class roster.

    Raises:
        NotFoundError: Unknown class, or the user is missing or not a student
        ForbiddenError: Caller does not own the class
        DuplicateEntryError: Student already enrolled
    """
    school_class = await get_class_or_404(db, class_id)
    ensure_owner(user, school_class.created_by)

    student = await UserRepository.get_by_id(db, student_id)
    if student is None or student.role != UserRole.STUDENT:
        raise NotFoundError("Student not found", error_code="NOT_FOUND")

    if await repository.get_enrollment(db, class_id, student_id) is not None:
        raise DuplicateEntryError("Student already enrolled in this class")

    enrollment = await repository.add_student(db, class_id, student_id)
    await db.commit()

    logger.info(f"Student {student_id} enrolled in class {class_id} by {user.id}")
    return _enrolled_student(student, enrollment.joined_at)


async def remove_student(
    db: AsyncSession, user: CurrentUser, class_id: str, student_id: str
) -> None:
    school_class = await get_class_or_404(db, class_id)
    ensure_owner(user, school_class.created_by)

    enrollment = await repository.get_enrollment(db, class_id, student_id)
    if enrollment is None:
        raise NotFoundError("Student is not enrolled in this class")

    await repository.remove_enrollment(db, enrollment)
    await db.commit()

    logger.info(f"Student {student_id} removed from class {class_id} by {user.id}")
