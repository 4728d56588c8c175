"""
Unit tests for teacher dashboard service.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from app.modules.classes.models import ClassStudent, SchoolClass
from app.modules.completions.models import ModuleCompletion
from app.modules.teachers.service import (
    bucket_learning_types,
    get_learning_style_distribution,
    get_recent_completions,
    get_teacher_stats,
    get_teacher_students,
)
from app.modules.users.models import LearningStyle, Profile, User


def make_profile(**overrides) -> MagicMock:
    profile = MagicMock(spec=Profile)
    profile.first_name = "Ana"
    profile.last_name = "Cruz"
    profile.full_name = "Ana Cruz"
    profile.grade_level = "Grade 7"
    profile.learning_style = LearningStyle.VISUAL
    profile.onboarding_completed = True
    for key, value in overrides.items():
        setattr(profile, key, value)
    return profile


def make_user(profile) -> MagicMock:
    user = MagicMock(spec=User)
    user.id = str(uuid4())
    user.email = "ana@test.com"
    user.profile = profile
    return user


class TestBucketLearningTypes:
    """Tests for bucket_learning_types."""

    def test_known_types_are_case_insensitive(self):
        result = bucket_learning_types({"Bimodal": 2, "bimodal": 1, " UNIMODAL ": 4})
        assert result.bimodal == 3
        assert result.unimodal == 4
        assert result.not_set == 0

    def test_missing_and_unknown_are_not_set(self):
        result = bucket_learning_types({None: 3, "": 1, "quadmodal": 2, "multimodal": 5})
        assert result.not_set == 6
        assert result.multimodal == 5
        assert result.trimodal == 0


class TestTeacherStats:
    """Tests for teacher aggregate reads."""

    @pytest.mark.asyncio
    async def test_stats(self, mock_db):
        with (
            patch("app.modules.teachers.service.UserRepository") as mock_users,
            patch("app.modules.teachers.service.modules_repository") as mock_modules,
            patch("app.modules.teachers.service.completions_repository") as mock_completions,
        ):
            mock_users.count_by_role = AsyncMock(return_value=25)
            mock_modules.count_modules = AsyncMock(side_effect=[3, 5])
            mock_completions.count_by_creator = AsyncMock(return_value=11)

            stats = await get_teacher_stats(mock_db, "teacher-1")

        assert stats.total_students == 25
        assert stats.published_modules == 3
        assert stats.total_modules == 5
        assert stats.completed_modules == 11

    @pytest.mark.asyncio
    async def test_learning_style_distribution(self, mock_db):
        with patch("app.modules.teachers.service.ProfileRepository") as mock_profiles:
            mock_profiles.count_students_by_learning_style = AsyncMock(
                return_value={LearningStyle.VISUAL: 4, LearningStyle.KINESTHETIC: 1}
            )

            distribution = await get_learning_style_distribution(mock_db)

        assert distribution.visual == 4
        assert distribution.kinesthetic == 1
        assert distribution.auditory == 0


class TestRecentCompletions:
    """Tests for get_recent_completions."""

    @pytest.mark.asyncio
    async def test_fallback_names(self, mock_db):
        completion = MagicMock(spec=ModuleCompletion)
        completion.id = str(uuid4())
        completion.student = None
        completion.module_title = None
        completion.completion_date = datetime.now(UTC)
        completion.final_score = None
        completion.time_spent_minutes = 12
        completion.perfect_sections = None

        with patch("app.modules.teachers.service.completions_repository") as mock_completions:
            mock_completions.list_by_creator = AsyncMock(return_value=[completion])

            recent = await get_recent_completions(mock_db, "teacher-1", limit=5)

        assert recent[0].module_title == "Unknown Module"
        assert recent[0].student_name == "Unknown Student"
        assert recent[0].final_score == 0
        mock_completions.list_by_creator.assert_called_once_with(mock_db, "teacher-1", limit=5)

    @pytest.mark.asyncio
    async def test_name_built_from_parts(self, mock_db):
        completion = MagicMock(spec=ModuleCompletion)
        completion.id = str(uuid4())
        completion.student = make_user(make_profile(full_name=""))
        completion.module_title = "Fractions"
        completion.completion_date = datetime.now(UTC)
        completion.final_score = 70.0
        completion.time_spent_minutes = 12
        completion.perfect_sections = 1

        with patch("app.modules.teachers.service.completions_repository") as mock_completions:
            mock_completions.list_by_creator = AsyncMock(return_value=[completion])

            recent = await get_recent_completions(mock_db, "teacher-1")

        assert recent[0].student_name == "Ana Cruz"


class TestTeacherStudents:
    """Tests for get_teacher_students."""

    @pytest.mark.asyncio
    async def test_one_entry_per_enrollment(self, mock_db):
        school_class = MagicMock(spec=SchoolClass)
        school_class.name = "Grade 7 Science"
        school_class.subject = "Science"

        enrollment = MagicMock(spec=ClassStudent)
        enrollment.student = make_user(make_profile())
        enrollment.school_class = school_class
        enrollment.joined_at = datetime.now(UTC)

        with patch("app.modules.teachers.service.classes_repository") as mock_classes:
            mock_classes.list_teacher_enrollments = AsyncMock(return_value=[enrollment])

            students = await get_teacher_students(mock_db, "teacher-1")

        assert len(students) == 1
        assert students[0].name == "Ana Cruz"
        assert students[0].class_name == "Grade 7 Science"
        assert students[0].learning_style == LearningStyle.VISUAL
        assert students[0].onboarding_completed is True
