"""
Unit tests for learning path service.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from app.modules.completions.models import ModuleCompletion
from app.modules.learning_paths.helpers import LearningPathView
from app.modules.learning_paths.service import get_learning_path, get_recommended_modules
from app.modules.progress.models import ModuleProgress, ProgressStatus
from app.modules.users.models import LearningStyle, Profile
from app.modules.vark_modules.models import DifficultyLevel, VarkModule

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def make_module(title: str, styles=None, prerequisite_module_id=None) -> MagicMock:
    module = MagicMock(spec=VarkModule)
    module.id = str(uuid4())
    module.title = title
    module.description = None
    module.category_name = None
    module.difficulty_level = DifficultyLevel.BEGINNER
    module.estimated_duration_minutes = 20
    module.target_learning_styles = styles or []
    module.section_count = 4
    module.prerequisite_module_id = prerequisite_module_id
    return module


def make_progress(module_id: str, status: ProgressStatus, percentage: int) -> MagicMock:
    progress = MagicMock(spec=ModuleProgress)
    progress.id = str(uuid4())
    progress.module_id = module_id
    progress.status = status
    progress.progress_percentage = percentage
    progress.current_section_id = None
    progress.time_spent_minutes = 5
    progress.completed_sections = []
    progress.started_at = NOW
    progress.completed_at = None
    progress.last_accessed_at = NOW
    return progress


def make_completion(module_id: str) -> MagicMock:
    completion = MagicMock(spec=ModuleCompletion)
    completion.id = str(uuid4())
    completion.module_id = module_id
    completion.completion_date = NOW
    completion.time_spent_minutes = 30
    return completion


@pytest.fixture
def path_modules():
    """Four published modules; ``advanced`` requires ``basics``."""
    basics = make_module("Basics", styles=["visual"])
    started = make_module("Started", styles=["visual"])
    auditory = make_module("Listening", styles=["auditory"])
    advanced = make_module("Advanced", prerequisite_module_id=basics.id)
    return {"basics": basics, "started": started, "auditory": auditory, "advanced": advanced}


def _patch_sources(path_modules, progress, completions, learning_style=LearningStyle.VISUAL):
    profile = MagicMock(spec=Profile)
    profile.learning_style = learning_style

    mocks = {
        "progress": patch("app.modules.learning_paths.service.progress_repository"),
        "completions": patch("app.modules.learning_paths.service.completions_repository"),
        "modules": patch("app.modules.learning_paths.service.modules_repository"),
        "profiles": patch("app.modules.learning_paths.service.ProfileRepository"),
    }
    started = {name: p.start() for name, p in mocks.items()}
    started["progress"].list_by_student = AsyncMock(return_value=(progress, len(progress)))
    started["completions"].list_by_student = AsyncMock(return_value=completions)
    started["modules"].list_published = AsyncMock(return_value=list(path_modules.values()))
    started["profiles"].get_by_user_id = AsyncMock(return_value=profile)
    return mocks


class TestLearningPath:
    """Tests for get_learning_path and get_recommended_modules."""

    @pytest.mark.asyncio
    async def test_completion_unlocks_dependent_module(self, mock_db, path_modules):
        progress = [make_progress(path_modules["basics"].id, ProgressStatus.IN_PROGRESS, 50)]
        completions = [make_completion(path_modules["basics"].id)]
        mocks = _patch_sources(path_modules, progress, completions)
        try:
            items = await get_learning_path(mock_db, "student-1")
        finally:
            for p in mocks.values():
                p.stop()

        by_title = {item.title: item for item in items}
        assert by_title["Basics"].status == ProgressStatus.COMPLETED
        assert by_title["Basics"].progress_percentage == 100
        assert by_title["Advanced"].is_locked is False
        assert by_title["Listening"].status == ProgressStatus.NOT_STARTED

    @pytest.mark.asyncio
    async def test_unfinished_prerequisite_locks(self, mock_db, path_modules):
        mocks = _patch_sources(path_modules, [], [])
        try:
            items = await get_learning_path(mock_db, "student-1")
        finally:
            for p in mocks.values():
                p.stop()

        advanced = next(item for item in items if item.title == "Advanced")
        assert advanced.is_locked is True

    @pytest.mark.asyncio
    async def test_completed_view(self, mock_db, path_modules):
        completions = [make_completion(path_modules["started"].id)]
        mocks = _patch_sources(path_modules, [], completions)
        try:
            items = await get_learning_path(mock_db, "student-1", LearningPathView.COMPLETED)
        finally:
            for p in mocks.values():
                p.stop()

        assert [item.title for item in items] == ["Started"]

    @pytest.mark.asyncio
    async def test_recommendations_prefer_untouched_matching_modules(
        self, mock_db, path_modules
    ):
        progress = [make_progress(path_modules["started"].id, ProgressStatus.IN_PROGRESS, 25)]
        mocks = _patch_sources(path_modules, progress, [])
        try:
            items = await get_recommended_modules(mock_db, "student-1")
        finally:
            for p in mocks.values():
                p.stop()

        titles = [item.title for item in items]
        assert "Listening" not in titles
        assert titles[-1] == "Started"
        assert set(titles) == {"Basics", "Advanced", "Started"}
