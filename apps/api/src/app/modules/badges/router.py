"""
Badges Router

Endpoints:
- POST /badges - Award a badge (200 when already held, 201 when new)
- GET /badges/student/{student_id} - A student's badges
- GET /badges/student/{student_id}/stats - Badge counts by rarity
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, ensure_student_access, get_current_user
from app.core.database import get_db
from app.modules.badges import service
from app.modules.badges.schemas import BadgeCreate, BadgeResponse, BadgeStats
from app.modules.shared import DataResponse, MessageResponse

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse[BadgeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Award Badge",
    responses={200: {"description": "Badge already awarded; existing badge returned"}},
)
async def award_badge(
    data: BadgeCreate,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[BadgeResponse]:
    ensure_student_access(user, data.student_id)
    badge, created = await service.award_badge(db, data)
    if not created:
        response.status_code = status.HTTP_200_OK
        return MessageResponse(message="Badge already awarded", data=badge)
    return MessageResponse(message="Badge awarded successfully", data=badge)


@router.get(
    "/student/{student_id}",
    response_model=DataResponse[list[BadgeResponse]],
    summary="List Student Badges",
)
async def list_student_badges(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[BadgeResponse]]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.list_student_badges(db, student_id))


@router.get(
    "/student/{student_id}/stats",
    response_model=DataResponse[BadgeStats],
    summary="Student Badge Stats",
)
async def get_badge_stats(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[BadgeStats]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.get_badge_stats(db, student_id))
