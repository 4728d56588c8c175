"""
Fixtures for progress tests.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from app.modules.progress.models import ModuleProgress, ProgressStatus
from app.modules.vark_modules.models import VarkModule


def make_progress(**overrides) -> MagicMock:
    """Build a progress row mock with every response field populated."""
    now = datetime.now(UTC)
    progress = MagicMock(spec=ModuleProgress)
    progress.id = str(uuid4())
    progress.student_id = str(uuid4())
    progress.student_name = "Ana Cruz"
    progress.module_id = str(uuid4())
    progress.module_title = "Photosynthesis"
    progress.status = ProgressStatus.IN_PROGRESS
    progress.progress_percentage = 25
    progress.current_section_id = "s1"
    progress.time_spent_minutes = 10
    progress.completed_sections = ["s1"]
    progress.assessment_scores = {}
    progress.started_at = now
    progress.completed_at = None
    progress.last_accessed_at = now
    progress.created_at = now
    progress.updated_at = now
    for key, value in overrides.items():
        setattr(progress, key, value)
    return progress


@pytest.fixture
def sample_progress():
    """An in-progress row: one of four sections done."""
    return make_progress()


@pytest.fixture
def sample_module():
    """A module with four sections."""
    module = MagicMock(spec=VarkModule)
    module.id = str(uuid4())
    module.title = "Photosynthesis"
    module.section_count = 4
    module.section_ids = ["s1", "s2", "s3", "s4"]
    return module


@pytest.fixture
def progress_factory():
    """Build progress rows with field overrides."""
    return make_progress
