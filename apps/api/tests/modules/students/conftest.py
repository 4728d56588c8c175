"""
Fixtures for student tests.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from app.modules.users.models import LearningStyle, Profile, User, UserRole


def make_student(**profile_overrides) -> MagicMock:
    """Build a student user mock with a populated profile."""
    now = datetime.now(UTC)
    profile = MagicMock(spec=Profile)
    profile.first_name = "Ana"
    profile.middle_name = None
    profile.last_name = "Cruz"
    profile.full_name = "Ana Cruz"
    profile.grade_level = "Grade 7"
    profile.learning_style = LearningStyle.READING_WRITING
    profile.preferred_modules = []
    profile.learning_type = None
    profile.onboarding_completed = False
    for key, value in profile_overrides.items():
        setattr(profile, key, value)

    student = MagicMock(spec=User)
    student.id = str(uuid4())
    student.email = "ana@test.com"
    student.role = UserRole.STUDENT
    student.email_verified = True
    student.last_login = None
    student.created_at = now
    student.updated_at = now
    student.profile = profile
    return student


@pytest.fixture
def sample_student():
    """A student with a profile."""
    return make_student()


@pytest.fixture
def student_factory():
    """Build students with profile overrides."""
    return make_student
