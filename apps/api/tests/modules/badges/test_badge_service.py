"""
Unit tests for badge service layer.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from app.modules.badges.models import BadgeRarity, StudentBadge
from app.modules.badges.schemas import BadgeCreate
from app.modules.badges.service import award_badge, get_badge_stats


@pytest.fixture
def sample_badge():
    """A gold badge for a module."""
    now = datetime.now(UTC)
    badge = MagicMock(spec=StudentBadge)
    badge.id = str(uuid4())
    badge.student_id = str(uuid4())
    badge.badge_type = "perfect_score"
    badge.badge_name = "Perfect Score"
    badge.badge_description = None
    badge.badge_icon = None
    badge.badge_rarity = BadgeRarity.GOLD
    badge.module_id = str(uuid4())
    badge.earned_date = now
    badge.criteria_met = {"score": 100}
    badge.created_at = now
    return badge


class TestAwardBadge:
    """Tests for award_badge."""

    @pytest.mark.asyncio
    async def test_new_badge_is_created(self, mock_db, sample_badge):
        with patch("app.modules.badges.service.repository") as mock_repo:
            mock_repo.find_existing = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(return_value=sample_badge)

            data = BadgeCreate(
                student_id=sample_badge.student_id,
                badge_type="perfect_score",
                module_id=sample_badge.module_id,
                badge_rarity=BadgeRarity.GOLD,
            )
            badge, created = await award_badge(mock_db, data)

            assert created is True
            assert badge.id == sample_badge.id
            fields = mock_repo.create.call_args.args[1]
            assert fields["badge_name"] == "perfect_score"
            assert fields["earned_date"] is not None
            mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_existing_badge_is_returned(self, mock_db, sample_badge):
        with patch("app.modules.badges.service.repository") as mock_repo:
            mock_repo.find_existing = AsyncMock(return_value=sample_badge)
            mock_repo.create = AsyncMock()

            data = BadgeCreate(
                student_id=sample_badge.student_id,
                badge_type="perfect_score",
                module_id=sample_badge.module_id,
            )
            badge, created = await award_badge(mock_db, data)

            assert created is False
            assert badge.badge_rarity == BadgeRarity.GOLD
            mock_repo.create.assert_not_called()
            mock_db.commit.assert_not_called()


class TestBadgeStats:
    """Tests for get_badge_stats."""

    @pytest.mark.asyncio
    async def test_counts_every_rarity(self, mock_db):
        with patch("app.modules.badges.service.repository") as mock_repo:
            mock_repo.count_by_rarity = AsyncMock(
                return_value={BadgeRarity.GOLD: 2, BadgeRarity.BRONZE: 3}
            )

            stats = await get_badge_stats(mock_db, "student")

            assert stats.total_badges == 5
            assert stats.by_rarity.gold == 2
            assert stats.by_rarity.bronze == 3
            assert stats.by_rarity.platinum == 0

    @pytest.mark.asyncio
    async def test_no_badges(self, mock_db):
        with patch("app.modules.badges.service.repository") as mock_repo:
            mock_repo.count_by_rarity = AsyncMock(return_value={})

            stats = await get_badge_stats(mock_db, "student")

            assert stats.total_badges == 0
            assert stats.by_rarity.silver == 0
