"""
Badge Service Layer

Awarding is idempotent: the same badge type for the same module is only
ever awarded to a student once.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.badges import repository
from app.modules.badges.models import BadgeRarity
from app.modules.badges.schemas import BadgeCreate, BadgeResponse, BadgeStats, RarityCounts
from app.modules.shared import utcnow

logger = logging.getLogger(__name__)


async def award_badge(db: AsyncSession, data: BadgeCreate) -> tuple[BadgeResponse, bool]:
    """
    Award a badge unless the student already holds it.

    Returns:
        Tuple of (badge, created)
    """
    existing = await repository.find_existing(db, data.student_id, data.badge_type, data.module_id)
    if existing is not None:
        return BadgeResponse.model_validate(existing), False

    fields = data.model_dump()
    fields["badge_name"] = data.badge_name or data.badge_type
    fields["earned_date"] = utcnow()

    badge = await repository.create(db, fields)
    await db.commit()

    logger.info(
        f"Badge awarded: {badge.badge_type} ({badge.badge_rarity.value}) "
        f"to student {data.student_id}"
    )
    return BadgeResponse.model_validate(badge), True


async def list_student_badges(db: AsyncSession, student_id: str) -> list[BadgeResponse]:
    badges = await repository.list_by_student(db, student_id)
    return [BadgeResponse.model_validate(b) for b in badges]


async def get_badge_stats(db: AsyncSession, student_id: str) -> BadgeStats:
    counts = await repository.count_by_rarity(db, student_id)
    by_rarity = RarityCounts(**{rarity.value: counts.get(rarity, 0) for rarity in BadgeRarity})
    return BadgeStats(total_badges=sum(counts.values()), by_rarity=by_rarity)
