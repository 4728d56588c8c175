"""
Fixtures for module tests.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from app.modules.vark_modules.models import DifficultyLevel, VarkModule, default_content_structure


def make_module(**overrides) -> MagicMock:
    """Build a module row mock with every response field populated."""
    now = datetime.now(UTC)
    module = MagicMock(spec=VarkModule)
    module.id = str(uuid4())
    module.title = "Photosynthesis"
    module.description = "How plants make food"
    module.category_id = None
    module.category_name = None
    module.learning_objectives = []
    module.content_structure = default_content_structure()
    module.prerequisites = []
    module.multimedia_content = {}
    module.interactive_elements = []
    module.assessment_questions = []
    module.module_metadata = {}
    module.content_summary = []
    module.target_learning_styles = ["visual"]
    module.difficulty_level = DifficultyLevel.BEGINNER
    module.estimated_duration_minutes = 30
    module.json_backup_url = None
    module.json_content_url = None
    module.target_class_id = None
    module.prerequisite_module_id = None
    module.is_published = True
    module.section_count = 0
    module.created_by = str(uuid4())
    module.creator_name = "Teacher Tess"
    module.created_at = now
    module.updated_at = now
    for key, value in overrides.items():
        setattr(module, key, value)
    return module


@pytest.fixture
def module_factory():
    """Build module rows with field overrides."""
    return make_module


@pytest.fixture
def sample_module():
    """A published module."""
    return make_module()
