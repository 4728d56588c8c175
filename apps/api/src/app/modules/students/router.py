"""
Students Router

Endpoints:
- GET /students - List students
- POST /students - Create a student
- POST /students/bulk-import - Create many students
- GET /students/{id} - Get a student
- PUT /students/{id} - Update a student
- DELETE /students/{id} - Delete a student
- GET /students/{id}/stats - Completion and badge totals
- GET /students/{id}/modules/{module_id}/completion - One completion
- GET /students/{id}/dashboard-stats - Dashboard counters
- GET /students/{id}/recent-activities - Latest learning activity
- GET /students/{id}/recommended-modules - Modules to do next
- GET /students/{id}/learning-path - Published modules with status
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import (
    CurrentUser,
    ensure_student_access,
    get_current_user,
    require_teacher,
)
from app.core.database import get_db
from app.modules.completions.schemas import CompletionResponse
from app.modules.learning_paths import service as learning_paths_service
from app.modules.learning_paths.helpers import LearningPathView
from app.modules.learning_paths.schemas import LearningPathItem
from app.modules.shared import (
    DataResponse,
    MessageResponse,
    PaginatedResponse,
    Pagination,
    StatusMessage,
    pagination_params,
)
from app.modules.students import service
from app.modules.students.schemas import (
    BulkImportResult,
    DashboardStats,
    RecentActivity,
    StudentCreate,
    StudentStats,
    StudentUpdate,
)
from app.modules.users.models import LearningStyle
from app.modules.users.schemas import UserResponse

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[UserResponse],
    summary="List Students",
)
async def list_students(
    grade_level: str | None = Query(None),
    learning_style: LearningStyle | None = Query(None),
    search: str | None = Query(None, max_length=255),
    pagination: Pagination = Depends(pagination_params),
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[UserResponse]:
    return await service.list_students(
        db,
        pagination,
        grade_level=grade_level,
        learning_style=learning_style,
        search=search,
    )


@router.post(
    "",
    response_model=MessageResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Student",
)
async def create_student(
    data: StudentCreate,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[UserResponse]:
    student = await service.create_student(db, data)
    return MessageResponse(message="Student created successfully", data=student)


@router.post(
    "/bulk-import",
    response_model=BulkImportResult,
    summary="Bulk Import Students",
    description="Each row is created independently. Rows with an already "
    "registered email are skipped; invalid rows are reported in `errors`.",
)
async def bulk_import_students(
    rows: list[Any] = Body(...),
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> BulkImportResult:
    return await service.bulk_import_students(db, rows)


@router.get(
    "/{student_id}",
    response_model=DataResponse[UserResponse],
    summary="Get Student",
)
async def get_student(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[UserResponse]:
    ensure_student_access(user, student_id)
    student = await service.get_student_or_404(db, student_id)
    return DataResponse(data=UserResponse.model_validate(student))


@router.put(
    "/{student_id}",
    response_model=MessageResponse[UserResponse],
    summary="Update Student",
)
async def update_student(
    student_id: str,
    data: StudentUpdate,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[UserResponse]:
    student = await service.update_student(db, student_id, data)
    return MessageResponse(message="Student updated successfully", data=student)


@router.delete(
    "/{student_id}",
    response_model=StatusMessage,
    summary="Delete Student",
)
async def delete_student(
    student_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> StatusMessage:
    await service.delete_student(db, student_id)
    return StatusMessage(message="Student deleted successfully")


@router.get(
    "/{student_id}/stats",
    response_model=DataResponse[StudentStats],
    summary="Student Stats",
)
async def get_student_stats(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[StudentStats]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.get_student_stats(db, student_id))


@router.get(
    "/{student_id}/modules/{module_id}/completion",
    response_model=DataResponse[CompletionResponse],
    summary="Get Module Completion",
)
async def get_module_completion(
    student_id: str,
    module_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[CompletionResponse]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.get_module_completion(db, student_id, module_id))


@router.get(
    "/{student_id}/dashboard-stats",
    response_model=DataResponse[DashboardStats],
    summary="Student Dashboard Stats",
)
async def get_dashboard_stats(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[DashboardStats]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.get_dashboard_stats(db, student_id))


@router.get(
    "/{student_id}/recent-activities",
    response_model=DataResponse[list[RecentActivity]],
    summary="Student Recent Activities",
)
async def get_recent_activities(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[RecentActivity]]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.get_recent_activities(db, student_id))


@router.get(
    "/{student_id}/recommended-modules",
    response_model=DataResponse[list[LearningPathItem]],
    summary="Recommended Modules",
)
async def get_recommended_modules(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[LearningPathItem]]:
    ensure_student_access(user, student_id)
    await service.get_student_or_404(db, student_id)
    return DataResponse(
        data=await learning_paths_service.get_recommended_modules(db, student_id)
    )


@router.get(
    "/{student_id}/learning-path",
    response_model=DataResponse[list[LearningPathItem]],
    summary="Student Learning Path",
)
async def get_learning_path(
    student_id: str,
    view: LearningPathView = Query(LearningPathView.ALL),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[LearningPathItem]]:
    ensure_student_access(user, student_id)
    await service.get_student_or_404(db, student_id)
    return DataResponse(data=await learning_paths_service.get_learning_path(db, student_id, view))
