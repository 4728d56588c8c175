"""
Unit tests for completion service layer.
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.core.errors import NotFoundError
from app.modules.completions.schemas import CompletionCreate
from app.modules.completions.service import (
    get_completion,
    get_student_stats,
    list_student_completions,
    record_completion,
)


class TestRecordCompletion:
    """Tests for record_completion upsert."""

    @pytest.mark.asyncio
    async def test_first_completion_is_created(self, mock_db, sample_completion):
        with patch("app.modules.completions.service.repository") as mock_repo:
            mock_repo.get_by_pair = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(return_value=sample_completion)

            data = CompletionCreate(
                student_id=sample_completion.student_id,
                module_id=sample_completion.module_id,
                final_score=80,
                time_spent_minutes=45,
            )
            result = await record_completion(mock_db, data)

            fields = mock_repo.create.call_args.args[1]
            assert fields["completion_date"] is not None
            assert fields["student_id"] == sample_completion.student_id
            assert result.module_title == "Photosynthesis"
            mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_repeat_completion_overwrites_scores(self, mock_db, sample_completion):
        with patch("app.modules.completions.service.repository") as mock_repo:
            mock_repo.get_by_pair = AsyncMock(return_value=sample_completion)
            mock_repo.update = AsyncMock(return_value=sample_completion)
            mock_repo.create = AsyncMock()

            data = CompletionCreate(
                student_id=sample_completion.student_id,
                module_id=sample_completion.module_id,
                final_score=95,
                sections_completed=4,
            )
            await record_completion(mock_db, data)

            changes = mock_repo.update.call_args.args[2]
            assert changes["final_score"] == 95
            # Identity and the original completion date are kept
            assert "student_id" not in changes
            assert "completion_date" not in changes
            mock_repo.create.assert_not_called()


class TestCompletionReads:
    """Tests for completion reads."""

    @pytest.mark.asyncio
    async def test_list_student_completions(self, mock_db, sample_completion):
        with patch("app.modules.completions.service.repository") as mock_repo:
            mock_repo.list_by_student = AsyncMock(return_value=[sample_completion])

            result = await list_student_completions(mock_db, sample_completion.student_id)

            assert [c.id for c in result] == [sample_completion.id]

    @pytest.mark.asyncio
    async def test_missing_completion(self, mock_db):
        with patch("app.modules.completions.service.repository") as mock_repo:
            mock_repo.get_by_pair = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError) as exc_info:
                await get_completion(mock_db, "student", "module")

            assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_stats_average_rounded(self, mock_db):
        with patch("app.modules.completions.service.repository") as mock_repo:
            mock_repo.get_student_stats = AsyncMock(
                return_value={
                    "total_completions": 3,
                    "average_score": 88.88888,
                    "total_time_spent": 120,
                    "perfect_sections": 5,
                }
            )

            stats = await get_student_stats(mock_db, "student")

            assert stats.total_completions == 3
            assert stats.average_score == 88.89
