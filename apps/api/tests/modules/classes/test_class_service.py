"""
Unit tests for class service layer.

These tests cover:
- Class ownership on update and delete
- Enrolling and removing students
- Roster listing
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from app.core.errors import DuplicateEntryError, ForbiddenError, NotFoundError, ValidationError
from app.modules.classes.models import ClassStudent, SchoolClass
from app.modules.classes.schemas import ClassCreate, ClassUpdate
from app.modules.classes.service import (
    create_class,
    delete_class,
    enroll_student,
    list_class_students,
    remove_student,
    update_class,
)
from app.modules.users.models import LearningStyle, Profile, User, UserRole


def make_class(created_by: str) -> MagicMock:
    now = datetime.now(UTC)
    school_class = MagicMock(spec=SchoolClass)
    school_class.id = str(uuid4())
    school_class.name = "Grade 7 Science"
    school_class.description = None
    school_class.subject = "Science"
    school_class.grade_level = "Grade 7"
    school_class.created_by = created_by
    school_class.creator_name = "Teacher Tess"
    school_class.student_count = 0
    school_class.created_at = now
    school_class.updated_at = now
    return school_class


def make_student(role: UserRole = UserRole.STUDENT) -> MagicMock:
    profile = MagicMock(spec=Profile)
    profile.first_name = "Ana"
    profile.middle_name = None
    profile.last_name = "Cruz"
    profile.full_name = "Ana Cruz"
    profile.grade_level = "Grade 7"
    profile.learning_style = LearningStyle.VISUAL

    student = MagicMock(spec=User)
    student.id = str(uuid4())
    student.email = "ana@test.com"
    student.role = role
    student.profile = profile
    return student


@pytest.fixture
def owned_class(teacher_user):
    """A class created by ``teacher_user``."""
    return make_class(teacher_user.id)


class TestClassCrud:
    """Tests for class create, update and delete."""

    @pytest.mark.asyncio
    async def test_create_sets_owner(self, mock_db, teacher_user, owned_class):
        with patch("app.modules.classes.service.repository") as mock_repo:
            mock_repo.create = AsyncMock(return_value=owned_class)

            result = await create_class(mock_db, teacher_user, ClassCreate(name="Grade 7 Science"))

            assert mock_repo.create.call_args.args[1]["created_by"] == teacher_user.id
            assert result.name == "Grade 7 Science"

    @pytest.mark.asyncio
    async def test_update_requires_fields(self, mock_db, teacher_user):
        with pytest.raises(ValidationError):
            await update_class(mock_db, teacher_user, str(uuid4()), ClassUpdate())

    @pytest.mark.asyncio
    async def test_update_rejects_null_name(self, mock_db, teacher_user):
        with pytest.raises(ValidationError) as exc_info:
            await update_class(mock_db, teacher_user, str(uuid4()), ClassUpdate(name=None))
        assert exc_info.value.message == "Class name cannot be empty"

    @pytest.mark.asyncio
    async def test_other_teacher_cannot_update(self, mock_db, teacher_user):
        with patch("app.modules.classes.service.repository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=make_class(str(uuid4())))
            mock_repo.update = AsyncMock()

            with pytest.raises(ForbiddenError):
                await update_class(mock_db, teacher_user, str(uuid4()), ClassUpdate(subject="Math"))

            mock_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_missing_class(self, mock_db, admin_user):
        with patch("app.modules.classes.service.repository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError):
                await delete_class(mock_db, admin_user, str(uuid4()))


class TestEnrollment:
    """Tests for roster changes."""

    @pytest.mark.asyncio
    async def test_enroll_student(self, mock_db, teacher_user, owned_class):
        student = make_student()
        enrollment = MagicMock(spec=ClassStudent)
        enrollment.joined_at = datetime.now(UTC)
        with (
            patch("app.modules.classes.service.repository") as mock_repo,
            patch("app.modules.classes.service.UserRepository") as mock_users,
        ):
            mock_repo.get_by_id = AsyncMock(return_value=owned_class)
            mock_users.get_by_id = AsyncMock(return_value=student)
            mock_repo.get_enrollment = AsyncMock(return_value=None)
            mock_repo.add_student = AsyncMock(return_value=enrollment)

            result = await enroll_student(mock_db, teacher_user, owned_class.id, student.id)

            assert result.id == student.id
            assert result.full_name == "Ana Cruz"
            assert result.joined_at == enrollment.joined_at
            mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_enroll_non_student(self, mock_db, teacher_user, owned_class):
        with (
            patch("app.modules.classes.service.repository") as mock_repo,
            patch("app.modules.classes.service.UserRepository") as mock_users,
        ):
            mock_repo.get_by_id = AsyncMock(return_value=owned_class)
            mock_users.get_by_id = AsyncMock(return_value=make_student(UserRole.TEACHER))

            with pytest.raises(NotFoundError) as exc_info:
                await enroll_student(mock_db, teacher_user, owned_class.id, str(uuid4()))

            assert exc_info.value.error_code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_enroll_twice(self, mock_db, teacher_user, owned_class):
        with (
            patch("app.modules.classes.service.repository") as mock_repo,
            patch("app.modules.classes.service.UserRepository") as mock_users,
        ):
            mock_repo.get_by_id = AsyncMock(return_value=owned_class)
            mock_users.get_by_id = AsyncMock(return_value=make_student())
            mock_repo.get_enrollment = AsyncMock(return_value=MagicMock(spec=ClassStudent))
            mock_repo.add_student = AsyncMock()

            with pytest.raises(DuplicateEntryError):
                await enroll_student(mock_db, teacher_user, owned_class.id, str(uuid4()))

            mock_repo.add_student.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_unenrolled_student(self, mock_db, teacher_user, owned_class):
        with patch("app.modules.classes.service.repository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=owned_class)
            mock_repo.get_enrollment = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError) as exc_info:
                await remove_student(mock_db, teacher_user, owned_class.id, str(uuid4()))

            assert exc_info.value.message == "Student is not enrolled in this class"

    @pytest.mark.asyncio
    async def test_list_roster(self, mock_db, owned_class):
        enrollment = MagicMock(spec=ClassStudent)
        enrollment.student = make_student()
        enrollment.joined_at = datetime.now(UTC)
        with patch("app.modules.classes.service.repository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=owned_class)
            mock_repo.list_enrollments = AsyncMock(return_value=[enrollment])

            roster = await list_class_students(mock_db, owned_class.id)

            assert [s.email for s in roster] == ["ana@test.com"]
            assert roster[0].learning_style == LearningStyle.VISUAL
