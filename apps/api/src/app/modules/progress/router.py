"""
Progress Router

Endpoints:
- GET /progress/student/{student_id} - A student's progress rows
- GET /progress/student/{student_id}/stats - Student progress totals
- GET /progress/student/{s}/module/{m} - Progress for one module
- PUT /progress/student/{s}/module/{m} - Update progress for one module
- POST /progress/student/{s}/module/{m}/sections/{section_id}/complete - Finish a section
- GET /progress/module/{module_id} - All progress on a module
- GET /progress/module/{module_id}/stats - Module progress totals
- GET /progress/{id} - Get a progress row
- POST /progress - Create a progress row
- PUT /progress/{id} - Update a progress row
- DELETE /progress/{id} - Delete a progress row
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
from app.modules.progress import service
from app.modules.progress.models import ProgressStatus
from app.modules.progress.schemas import (
    ModuleProgressStats,
    ProgressCreate,
    ProgressResponse,
    ProgressUpdate,
    StudentProgressStats,
)
from app.modules.shared import (
    DataResponse,
    MessageResponse,
    PaginatedResponse,
    Pagination,
    StatusMessage,
    pagination_params,
)

router = APIRouter()


@router.get(
    "/student/{student_id}",
    response_model=PaginatedResponse[ProgressResponse],
    summary="List Student Progress",
)
async def list_student_progress(
    student_id: str,
    status_filter: ProgressStatus | None = Query(None, alias="status"),
    pagination: Pagination = Depends(pagination_params),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ProgressResponse]:
    ensure_student_access(user, student_id)
    return await service.list_student_progress(db, student_id, pagination, status_filter)


@router.get(
    "/student/{student_id}/stats",
    response_model=DataResponse[StudentProgressStats],
    summary="Student Progress Stats",
)
async def get_student_stats(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[StudentProgressStats]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.get_student_stats(db, student_id))


@router.get(
    "/student/{student_id}/module/{module_id}",
    response_model=DataResponse[ProgressResponse],
    summary="Get Module Progress",
)
async def get_progress_by_pair(
    student_id: str,
    module_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[ProgressResponse]:
    ensure_student_access(user, student_id)
    progress = await service.get_progress_by_pair_or_404(db, student_id, module_id)
    return DataResponse(data=ProgressResponse.model_validate(progress))


@router.put(
    "/student/{student_id}/module/{module_id}",
    response_model=MessageResponse[ProgressResponse],
    summary="Update Module Progress",
)
async def update_progress_by_pair(
    student_id: str,
    module_id: str,
    data: ProgressUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ProgressResponse]:
    ensure_student_access(user, student_id)
    progress = await service.update_progress_by_pair(db, student_id, module_id, data)
    return MessageResponse(message="Progress updated successfully", data=progress)


@router.post(
    "/student/{student_id}/module/{module_id}/sections/{section_id}/complete",
    response_model=MessageResponse[ProgressResponse],
    summary="Complete Section",
)
async def complete_section(
    student_id: str,
    module_id: str,
    section_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ProgressResponse]:
    ensure_student_access(user, student_id)
    progress = await service.complete_section(db, student_id, module_id, section_id)
    return MessageResponse(message="Section completed", data=progress)


@router.get(
    "/module/{module_id}",
    response_model=PaginatedResponse[ProgressResponse],
    summary="List Module Progress",
)
async def list_module_progress(
    module_id: str,
    pagination: Pagination = Depends(pagination_params),
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ProgressResponse]:
    return await service.list_module_progress(db, module_id, pagination)


@router.get(
    "/module/{module_id}/stats",
    response_model=DataResponse[ModuleProgressStats],
    summary="Module Progress Stats",
)
async def get_module_stats(
    module_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[ModuleProgressStats]:
    return DataResponse(data=await service.get_module_stats(db, module_id))


@router.get(
    "/{progress_id}",
    response_model=DataResponse[ProgressResponse],
    summary="Get Progress",
)
async def get_progress(
    progress_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[ProgressResponse]:
    progress = await service.get_progress_or_404(db, progress_id)
    return DataResponse(data=ProgressResponse.model_validate(progress))


@router.post(
    "",
    response_model=MessageResponse[ProgressResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Progress",
)
async def create_progress(
    data: ProgressCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ProgressResponse]:
    ensure_student_access(user, data.student_id)
    progress = await service.create_progress(db, data)
    return MessageResponse(message="Progress created successfully", data=progress)


@router.put(
    "/{progress_id}",
    response_model=MessageResponse[ProgressResponse],
    summary="Update Progress",
)
async def update_progress(
    progress_id: str,
    data: ProgressUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ProgressResponse]:
    existing = await service.get_progress_or_404(db, progress_id)
    ensure_student_access(user, existing.student_id)
    progress = await service.update_progress(db, progress_id, data)
    return MessageResponse(message="Progress updated successfully", data=progress)


@router.delete(
    "/{progress_id}",
    response_model=StatusMessage,
    summary="Delete Progress",
)
async def delete_progress(
    progress_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> StatusMessage:
    await service.delete_progress(db, progress_id)
    return StatusMessage(message="Progress deleted successfully")
