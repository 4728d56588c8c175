"""
Teachers Router

Dashboard reads for a teacher. A teacher may only query their own id;
admins may query any.

Endpoints:
- GET /teachers/{teacher_id}/stats
- GET /teachers/{teacher_id}/learning-style-distribution
- GET /teachers/{teacher_id}/learning-type-distribution
- GET /teachers/{teacher_id}/recent-completions
- GET /teachers/{teacher_id}/students
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, require_teacher
from app.core.database import get_db
from app.core.errors import ForbiddenError
from app.modules.shared import DataResponse
from app.modules.teachers import service
from app.modules.teachers.schemas import (
    LearningStyleDistribution,
    LearningTypeDistribution,
    RecentCompletion,
    TeacherStats,
    TeacherStudent,
)

router = APIRouter()


async def teacher_scope(
    teacher_id: str,
    user: CurrentUser = Depends(require_teacher),
) -> str:
    """Resolve the path teacher id, refusing other teachers' dashboards."""
    if not user.is_admin and user.id != teacher_id:
        raise ForbiddenError("You can only view your own dashboard")
    return teacher_id


@router.get(
    "/{teacher_id}/stats",
    response_model=DataResponse[TeacherStats],
    summary="Teacher Dashboard Stats",
)
async def get_teacher_stats(
    teacher_id: str = Depends(teacher_scope),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[TeacherStats]:
    return DataResponse(data=await service.get_teacher_stats(db, teacher_id))


@router.get(
    "/{teacher_id}/learning-style-distribution",
    response_model=DataResponse[LearningStyleDistribution],
    summary="Learning Style Distribution",
)
async def get_learning_style_distribution(
    teacher_id: str = Depends(teacher_scope),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[LearningStyleDistribution]:
    return DataResponse(data=await service.get_learning_style_distribution(db))


@router.get(
    "/{teacher_id}/learning-type-distribution",
    response_model=DataResponse[LearningTypeDistribution],
    summary="Learning Type Distribution",
)
async def get_learning_type_distribution(
    teacher_id: str = Depends(teacher_scope),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[LearningTypeDistribution]:
    return DataResponse(data=await service.get_learning_type_distribution(db))


@router.get(
    "/{teacher_id}/recent-completions",
    response_model=DataResponse[list[RecentCompletion]],
    summary="Recent Completions",
)
async def get_recent_completions(
    limit: int = Query(service.DEFAULT_RECENT_COMPLETIONS, ge=1, le=100),
    teacher_id: str = Depends(teacher_scope),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[RecentCompletion]]:
    return DataResponse(data=await service.get_recent_completions(db, teacher_id, limit))


@router.get(
    "/{teacher_id}/students",
    response_model=DataResponse[list[TeacherStudent]],
    summary="Teacher Students",
)
async def get_teacher_students(
    teacher_id: str = Depends(teacher_scope),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[TeacherStudent]]:
    return DataResponse(data=await service.get_teacher_students(db, teacher_id))
