"""
Shared fixtures for API tests.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.core.auth import CurrentUser


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.flush = AsyncMock()
    db.delete = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def admin_user():
    """An authenticated admin."""
    return CurrentUser(id=str(uuid4()), email="admin@test.com", role="admin")


@pytest.fixture
def teacher_user():
    """An authenticated teacher."""
    return CurrentUser(id=str(uuid4()), email="teacher@test.com", role="teacher")


@pytest.fixture
def student_user():
    """An authenticated student."""
    return CurrentUser(id=str(uuid4()), email="student@test.com", role="student")
