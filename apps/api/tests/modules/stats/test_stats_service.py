"""
Unit tests for public statistics.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import DatabaseError
from app.modules.stats.service import get_homepage_stats, get_system_health, success_rate
from app.modules.users.models import UserRole


class TestSuccessRate:
    """Tests for success_rate."""

    @pytest.mark.parametrize(
        ("onboarded", "students", "expected"),
        [(0, 0, 0), (1, 3, 33), (2, 3, 67), (5, 5, 100), (3, 0, 0)],
    )
    def test_success_rate(self, onboarded, students, expected):
        assert success_rate(onboarded, students) == expected


class TestHomepageStats:
    """Tests for get_homepage_stats."""

    @pytest.mark.asyncio
    async def test_counts_are_collected(self, mock_db):
        async def count_by_role(_db, role, since=None):
            if role == UserRole.STUDENT:
                return 4 if since is not None else 40
            return 1 if since is not None else 5

        with (
            patch("app.modules.stats.service.UserRepository") as mock_users,
            patch("app.modules.stats.service.ProfileRepository") as mock_profiles,
            patch("app.modules.stats.service.modules_repository") as mock_modules,
            patch("app.modules.stats.service.classes_repository") as mock_classes,
            patch("app.modules.stats.service.submissions_repository") as mock_submissions,
            patch("app.modules.stats.service.completions_repository") as mock_completions,
        ):
            mock_users.count_by_role = AsyncMock(side_effect=count_by_role)
            mock_profiles.count_onboarded_students = AsyncMock(return_value=30)
            mock_modules.count_modules = AsyncMock(return_value=12)
            mock_modules.count_with_assessments = AsyncMock(return_value=8)
            mock_classes.count_all = AsyncMock(return_value=3)
            mock_submissions.count_all = AsyncMock(return_value=250)
            mock_completions.count_since = AsyncMock(return_value=17)

            stats = await get_homepage_stats(mock_db)

        assert stats.total_students == 40
        assert stats.total_teachers == 5
        assert stats.total_modules == 12
        assert stats.total_quizzes == 8
        assert stats.total_activities == 250
        assert stats.success_rate == 75
        assert stats.recent_activity.new_students == 4
        assert stats.recent_activity.new_teachers == 1
        assert stats.recent_activity.completed_modules == 17
        mock_modules.count_modules.assert_called_once_with(mock_db, is_published=True)


class TestSystemHealth:
    """Tests for get_system_health."""

    @pytest.mark.asyncio
    async def test_healthy(self, mock_db):
        with patch("app.modules.stats.service.UserRepository") as mock_users:
            mock_users.count_all = AsyncMock(return_value=42)

            health = await get_system_health(mock_db)

        assert health.database_connected is True
        assert health.total_users == 42

    @pytest.mark.asyncio
    async def test_database_down(self, mock_db):
        with patch("app.modules.stats.service.UserRepository") as mock_users:
            mock_users.count_all = AsyncMock(
                side_effect=OperationalError("SELECT 1", {}, ConnectionRefusedError())
            )

            with pytest.raises(DatabaseError) as exc_info:
                await get_system_health(mock_db)

        assert exc_info.value.status_code == 503
        assert exc_info.value.error_code == "DB_CONNECTION_ERROR"
