"""
Fixtures for completion tests.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from app.modules.completions.models import ModuleCompletion
from app.modules.vark_modules.models import DifficultyLevel


@pytest.fixture
def sample_completion():
    """A completion recorded yesterday."""
    now = datetime.now(UTC)
    completion = MagicMock(spec=ModuleCompletion)
    completion.id = str(uuid4())
    completion.student_id = str(uuid4())
    completion.module_id = str(uuid4())
    completion.module_title = "Photosynthesis"
    completion.difficulty_level = DifficultyLevel.BEGINNER
    completion.completion_date = now - timedelta(days=1)
    completion.final_score = 80.0
    completion.time_spent_minutes = 45
    completion.pre_test_score = 40.0
    completion.post_test_score = 85.0
    completion.sections_completed = 4
    completion.perfect_sections = 1
    completion.created_at = now - timedelta(days=1)
    completion.updated_at = now
    return completion
