"""
Completions Router

Endpoints:
- POST /completions - Record (or overwrite) a module completion
- GET /completions/student/{student_id} - A student's completions
- GET /completions/student/{student_id}/stats - Completion totals
- GET /completions/student/{student_id}/module/{module_id} - One completion
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, ensure_student_access, get_current_user
from app.core.database import get_db
from app.modules.completions import service
from app.modules.completions.schemas import (
    CompletionCreate,
    CompletionResponse,
    CompletionStats,
)
from app.modules.shared import DataResponse, MessageResponse

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse[CompletionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Record Module Completion",
)
async def record_completion(
    data: CompletionCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[CompletionResponse]:
    ensure_student_access(user, data.student_id)
    completion = await service.record_completion(db, data)
    return MessageResponse(message="Module completion recorded", data=completion)


@router.get(
    "/student/{student_id}",
    response_model=DataResponse[list[CompletionResponse]],
    summary="List Student Completions",
)
async def list_student_completions(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[CompletionResponse]]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.list_student_completions(db, student_id))


@router.get(
    "/student/{student_id}/stats",
    response_model=DataResponse[CompletionStats],
    summary="Student Completion Stats",
)
async def get_student_stats(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[CompletionStats]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.get_student_stats(db, student_id))


@router.get(
    "/student/{student_id}/module/{module_id}",
    response_model=DataResponse[CompletionResponse],
    summary="Get Module Completion",
)
async def get_completion(
    student_id: str,
    module_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[CompletionResponse]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.get_completion(db, student_id, module_id))
