"""
Stats Router

Public endpoints (no authentication):
- GET /stats/homepage - Platform counters for the landing page
- GET /stats/health - Database health and user count
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.modules.shared import DataResponse
from app.modules.stats import service
from app.modules.stats.schemas import HomepageStats, SystemHealth

router = APIRouter()


@router.get(
    "/homepage",
    response_model=DataResponse[HomepageStats],
    summary="Homepage Statistics",
)
async def get_homepage_stats(db: AsyncSession = Depends(get_db)) -> DataResponse[HomepageStats]:
    return DataResponse(data=await service.get_homepage_stats(db))


@router.get(
    "/health",
    response_model=DataResponse[SystemHealth],
    summary="System Health",
    responses={503: {"description": "Database unreachable"}},
)
async def get_system_health(db: AsyncSession = Depends(get_db)) -> DataResponse[SystemHealth]:
    return DataResponse(data=await service.get_system_health(db))
