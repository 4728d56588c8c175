"""Badge request and response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.modules.badges.models import BadgeRarity


class BadgeCreate(BaseModel):
    """Request body for POST /badges. ``badge_name`` defaults to the type."""

    student_id: str
    badge_type: str = Field(..., min_length=1, max_length=100)
    module_id: str
    badge_name: str | None = Field(None, max_length=200)
    badge_description: str | None = None
    badge_icon: str | None = Field(None, max_length=255)
    badge_rarity: BadgeRarity = BadgeRarity.BRONZE
    criteria_met: dict[str, Any] = Field(default_factory=dict)


class BadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    badge_type: str
    badge_name: str
    badge_description: str | None = None
    badge_icon: str | None = None
    badge_rarity: BadgeRarity
    module_id: str | None = None
    earned_date: datetime
    criteria_met: dict[str, Any] = {}
    created_at: datetime


class RarityCounts(BaseModel):
    platinum: int = 0
    gold: int = 0
    silver: int = 0
    bronze: int = 0


class BadgeStats(BaseModel):
    total_badges: int = 0
    by_rarity: RarityCounts = Field(default_factory=RarityCounts)
