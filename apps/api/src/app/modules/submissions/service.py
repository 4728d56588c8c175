"""
Submission Service Layer

Section submissions are upserted on (student, module, section). Grading
marks a submission reviewed and records who graded it.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, ensure_student_access
from app.core.errors import NotFoundError, ValidationError
from app.modules.shared import utcnow
from app.modules.submissions import repository
from app.modules.submissions.models import Submission, SubmissionStatus
from app.modules.submissions.schemas import (
    SubmissionCreate,
    SubmissionGrade,
    SubmissionResponse,
    SubmissionUpdate,
)

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ("student_id", "module_id", "section_id")


async def get_submission_or_404(db: AsyncSession, submission_id: str) -> Submission:
    submission = await repository.get_by_id(db, submission_id)
    if submission is None:
        raise NotFoundError("Submission not found")
    return submission


async def get_section_submission(
    db: AsyncSession, student_id: str, module_id: str, section_id: str
) -> SubmissionResponse:
    submission = await repository.get_by_section(db, student_id, module_id, section_id)
    if submission is None:
        raise NotFoundError("Submission not found")
    return SubmissionResponse.model_validate(submission)


async def list_student_module_submissions(
    db: AsyncSession, student_id: str, module_id: str
) -> list[SubmissionResponse]:
    submissions = await repository.list_for_student_module(db, student_id, module_id)
    return [SubmissionResponse.model_validate(s) for s in submissions]


async def list_module_submissions(db: AsyncSession, module_id: str) -> list[SubmissionResponse]:
    submissions = await repository.list_by_module(db, module_id)
    return [SubmissionResponse.model_validate(s) for s in submissions]


async def save_submission(db: AsyncSession, data: SubmissionCreate) -> SubmissionResponse:
    """Create the section's submission or overwrite the existing one."""
    fields = data.model_dump()
    existing = await repository.get_by_section(
        db, data.student_id, data.module_id, data.section_id
    )

    if existing is not None:
        changes = {key: value for key, value in fields.items() if key not in IDENTITY_FIELDS}
        submission = await repository.update(db, existing, changes)
    else:
        submission = await repository.create(db, fields)

    await db.commit()
    logger.info(
        f"Submission saved: student {data.student_id} module {data.module_id} "
        f"section {data.section_id} ({submission.submission_status.value})"
    )
    return SubmissionResponse.model_validate(submission)


async def update_submission(
    db: AsyncSession, user: CurrentUser, submission_id: str, data: SubmissionUpdate
) -> SubmissionResponse:
    """
    Apply a partial update.

    Raises:
        NotFoundError: Unknown submission
        ValidationError: An identifying id differs from the stored one
        ForbiddenError: A student updating another student's submission
    """
    submission = await get_submission_or_404(db, submission_id)
    ensure_student_access(user, submission.student_id)

    fields = data.model_dump(exclude_unset=True)
    for key in IDENTITY_FIELDS:
        value = fields.pop(key, None)
        if value is not None and str(value) != str(getattr(submission, key)):
            raise ValidationError("Cannot change student ID, module ID or section ID")

    for key in ("submission_data", "time_spent_seconds", "submission_status"):
        if key in fields and fields[key] is None:
            del fields[key]
    if not fields:
        raise ValidationError("No fields to update")

    submission = await repository.update(db, submission, fields)
    await db.commit()
    return SubmissionResponse.model_validate(submission)


async def grade_submission(
    db: AsyncSession, user: CurrentUser, submission_id: str, data: SubmissionGrade
) -> SubmissionResponse:
    submission = await get_submission_or_404(db, submission_id)

    submission = await repository.update(
        db,
        submission,
        {
            "teacher_score": data.teacher_score,
            "teacher_feedback": data.teacher_feedback,
            "submission_status": SubmissionStatus.REVIEWED,
            "graded_by": user.id,
            "graded_at": utcnow(),
        },
    )
    await db.commit()

    logger.info(f"Submission graded: {submission_id} score {data.teacher_score} by {user.id}")
    return SubmissionResponse.model_validate(submission)
