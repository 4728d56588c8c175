"""
Submissions Router

Endpoints:
- GET /submissions?student_id=&module_id=[&section_id=] - Look up submissions
- GET /submissions/student/{s}/module/{m}/section/{sec} - One section submission
- GET /submissions/module/{module_id} - All submissions of a module
- POST /submissions - Save (upsert) a section submission
- PUT /submissions/{id} - Update a submission
- PUT /submissions/{id}/grade - Grade a submission
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import (
    CurrentUser,
    ensure_student_access,
    get_current_user,
    require_teacher,
)
from app.core.database import get_db
from app.core.errors import ValidationError
from app.modules.shared import DataResponse, MessageResponse
from app.modules.submissions import service
from app.modules.submissions.schemas import (
    SubmissionCreate,
    SubmissionGrade,
    SubmissionResponse,
    SubmissionUpdate,
)

router = APIRouter()


@router.get(
    "",
    response_model=DataResponse[SubmissionResponse | list[SubmissionResponse]],
    summary="Find Submissions",
    description="With `section_id` returns the single section submission, "
    "otherwise all of the student's submissions for the module.",
)
async def find_submissions(
    student_id: str | None = Query(None),
    module_id: str | None = Query(None),
    section_id: str | None = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[SubmissionResponse | list[SubmissionResponse]]:
    if not student_id or not module_id:
        raise ValidationError("student_id and module_id are required")
    ensure_student_access(user, student_id)

    if section_id:
        submission = await service.get_section_submission(db, student_id, module_id, section_id)
        return DataResponse(data=submission)
    return DataResponse(
        data=await service.list_student_module_submissions(db, student_id, module_id)
    )


@router.get(
    "/student/{student_id}/module/{module_id}/section/{section_id}",
    response_model=DataResponse[SubmissionResponse],
    summary="Get Section Submission",
)
async def get_section_submission(
    student_id: str,
    module_id: str,
    section_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[SubmissionResponse]:
    ensure_student_access(user, student_id)
    return DataResponse(
        data=await service.get_section_submission(db, student_id, module_id, section_id)
    )


@router.get(
    "/module/{module_id}",
    response_model=DataResponse[list[SubmissionResponse]],
    summary="List Module Submissions",
)
async def list_module_submissions(
    module_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[SubmissionResponse]]:
    return DataResponse(data=await service.list_module_submissions(db, module_id))


@router.post(
    "",
    response_model=MessageResponse[SubmissionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Save Submission",
)
async def save_submission(
    data: SubmissionCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[SubmissionResponse]:
    ensure_student_access(user, data.student_id)
    submission = await service.save_submission(db, data)
    return MessageResponse(message="Submission saved successfully", data=submission)


@router.put(
    "/{submission_id}",
    response_model=MessageResponse[SubmissionResponse],
    summary="Update Submission",
)
async def update_submission(
    submission_id: str,
    data: SubmissionUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[SubmissionResponse]:
    submission = await service.update_submission(db, user, submission_id, data)
    return MessageResponse(message="Submission updated successfully", data=submission)


@router.put(
    "/{submission_id}/grade",
    response_model=MessageResponse[SubmissionResponse],
    summary="Grade Submission",
)
async def grade_submission(
    submission_id: str,
    data: SubmissionGrade,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[SubmissionResponse]:
    submission = await service.grade_submission(db, user, submission_id, data)
    return MessageResponse(message="Submission graded successfully", data=submission)
