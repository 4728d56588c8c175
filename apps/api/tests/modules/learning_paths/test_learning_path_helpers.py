"""
Unit tests for learning path reconciliation rules.

These tests cover:
- Merging progress rows with completion records
- Effective module status and prerequisite locking
- Section-based progress (monotonic, completes at 100 %)
- Learning path views
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from app.modules.learning_paths.helpers import (
    LearningPathView,
    apply_section_completion,
    compute_section_progress,
    filter_learning_path,
    get_module_status,
    is_module_locked,
    matches_learning_style,
    merge_progress_with_completions,
)
from app.modules.progress.models import ProgressStatus
from app.modules.vark_modules.models import VarkModule

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _entry(module_id: str, status: ProgressStatus, percentage: int, **extra) -> dict:
    entry = {
        "id": f"progress-{module_id}",
        "module_id": module_id,
        "status": status,
        "progress_percentage": percentage,
        "current_section_id": None,
        "time_spent_minutes": 0,
        "completed_sections": [],
        "started_at": None,
        "completed_at": None,
        "last_accessed_at": None,
    }
    entry.update(extra)
    return entry


def _module(prerequisite_module_id=None, target_learning_styles=None) -> MagicMock:
    module = MagicMock(spec=VarkModule)
    module.prerequisite_module_id = prerequisite_module_id
    module.target_learning_styles = target_learning_styles or []
    return module


class TestMergeProgressWithCompletions:
    """Tests for merge_progress_with_completions."""

    def test_completion_overrides_lagging_progress(self):
        progress = [_entry("m1", ProgressStatus.IN_PROGRESS, 40)]
        completions = [{"id": "c1", "module_id": "m1", "completion_date": NOW}]

        merged = merge_progress_with_completions(progress, completions)

        assert merged["m1"]["status"] == ProgressStatus.COMPLETED
        assert merged["m1"]["progress_percentage"] == 100
        assert merged["m1"]["completed_at"] == NOW
        assert merged["m1"]["id"] == "progress-m1"

    def test_completion_without_progress_creates_entry(self):
        completions = [
            {"id": "c1", "module_id": "m2", "completion_date": NOW, "time_spent_minutes": 30}
        ]

        merged = merge_progress_with_completions([], completions)

        assert merged["m2"]["status"] == ProgressStatus.COMPLETED
        assert merged["m2"]["progress_percentage"] == 100
        assert merged["m2"]["time_spent_minutes"] == 30
        assert merged["m2"]["last_accessed_at"] == NOW

    def test_progress_without_completion_is_untouched(self):
        progress = [_entry("m1", ProgressStatus.IN_PROGRESS, 40)]

        merged = merge_progress_with_completions(progress, [])

        assert merged["m1"]["status"] == ProgressStatus.IN_PROGRESS
        assert merged["m1"]["progress_percentage"] == 40

    def test_inputs_are_not_mutated(self):
        progress = [_entry("m1", ProgressStatus.IN_PROGRESS, 40)]
        merge_progress_with_completions(
            progress, [{"id": "c1", "module_id": "m1", "completion_date": NOW}]
        )
        assert progress[0]["progress_percentage"] == 40


class TestGetModuleStatus:
    """Tests for get_module_status."""

    def test_no_entry_is_not_started(self):
        assert get_module_status(None) == ProgressStatus.NOT_STARTED

    def test_full_percentage_is_completed(self):
        entry = _entry("m1", ProgressStatus.IN_PROGRESS, 100)
        assert get_module_status(entry) == ProgressStatus.COMPLETED

    def test_completed_status_wins(self):
        entry = _entry("m1", ProgressStatus.COMPLETED, 80)
        assert get_module_status(entry) == ProgressStatus.COMPLETED

    def test_partial_is_in_progress(self):
        entry = _entry("m1", ProgressStatus.PAUSED, 20)
        assert get_module_status(entry) == ProgressStatus.IN_PROGRESS

    def test_zero_percentage_is_not_started(self):
        entry = _entry("m1", ProgressStatus.PAUSED, 0)
        assert get_module_status(entry) == ProgressStatus.NOT_STARTED


class TestIsModuleLocked:
    """Tests for prerequisite locking."""

    def test_module_without_prerequisite(self):
        assert not is_module_locked(_module(), {})

    def test_prerequisite_never_started(self):
        assert is_module_locked(_module("m0"), {})

    def test_prerequisite_in_progress(self):
        entries = {"m0": _entry("m0", ProgressStatus.IN_PROGRESS, 50)}
        assert is_module_locked(_module("m0"), entries)

    def test_prerequisite_completed(self):
        entries = {"m0": _entry("m0", ProgressStatus.COMPLETED, 100)}
        assert not is_module_locked(_module("m0"), entries)


class TestSectionProgress:
    """Tests for section-based progress."""

    @pytest.mark.parametrize(
        ("sections", "total", "expected"),
        [
            ([], 4, 0),
            (["s1"], 4, 25),
            (["s1", "s2", "s3"], 3, 100),
            (["s1", "s1"], 4, 25),
            (["s1"], 0, 0),
            (["s1", "s2"], 1, 100),
        ],
    )
    def test_compute_section_progress(self, sections, total, expected):
        assert compute_section_progress(sections, total) == expected

    def test_first_section_starts_module(self):
        entry = _entry("m1", ProgressStatus.NOT_STARTED, 0)

        updated = apply_section_completion(entry, "s1", total_sections=4, now=NOW)

        assert updated["completed_sections"] == ["s1"]
        assert updated["current_section_id"] == "s1"
        assert updated["progress_percentage"] == 25
        assert updated["status"] == ProgressStatus.IN_PROGRESS
        assert updated["started_at"] == NOW
        assert updated["last_accessed_at"] == NOW
        assert "completed_at" not in updated or updated["completed_at"] is None

    def test_last_section_completes_module(self):
        started = NOW - timedelta(days=1)
        entry = _entry(
            "m1",
            ProgressStatus.IN_PROGRESS,
            50,
            completed_sections=["s1"],
            started_at=started,
        )

        updated = apply_section_completion(entry, "s2", total_sections=2, now=NOW)

        assert updated["progress_percentage"] == 100
        assert updated["status"] == ProgressStatus.COMPLETED
        assert updated["completed_at"] == NOW
        assert updated["started_at"] == started

    def test_repeat_section_is_idempotent(self):
        entry = _entry("m1", ProgressStatus.IN_PROGRESS, 25, completed_sections=["s1"])

        updated = apply_section_completion(entry, "s1", total_sections=4, now=NOW)

        assert updated["completed_sections"] == ["s1"]
        assert updated["progress_percentage"] == 25

    def test_percentage_never_decreases(self):
        entry = _entry("m1", ProgressStatus.IN_PROGRESS, 80, completed_sections=[])

        updated = apply_section_completion(entry, "s1", total_sections=10, now=NOW)

        assert updated["progress_percentage"] == 80

    def test_completed_module_stays_completed(self):
        entry = _entry(
            "m1",
            ProgressStatus.COMPLETED,
            100,
            completed_sections=["s1", "s2"],
            completed_at=NOW - timedelta(hours=1),
        )

        updated = apply_section_completion(entry, "s3", total_sections=5, now=NOW)

        assert updated["status"] == ProgressStatus.COMPLETED
        assert updated["completed_at"] == NOW - timedelta(hours=1)


class TestLearningPathViews:
    """Tests for learning style matching and view filtering."""

    def test_untargeted_module_matches_everyone(self):
        assert matches_learning_style(_module(), "visual")

    def test_student_without_style_matches_everything(self):
        assert matches_learning_style(_module(target_learning_styles=["auditory"]), None)

    def test_style_mismatch(self):
        assert not matches_learning_style(_module(target_learning_styles=["auditory"]), "visual")

    def test_filter_views(self):
        visual = _module(target_learning_styles=["visual"])
        auditory = _module(target_learning_styles=["auditory"])
        items = [
            {"module": visual, "status": ProgressStatus.NOT_STARTED},
            {"module": auditory, "status": ProgressStatus.NOT_STARTED},
            {"module": visual, "status": ProgressStatus.IN_PROGRESS},
            {"module": visual, "status": ProgressStatus.COMPLETED},
        ]

        assert len(filter_learning_path(items, LearningPathView.ALL)) == 4
        assert filter_learning_path(items, LearningPathView.IN_PROGRESS) == [items[2]]
        assert filter_learning_path(items, LearningPathView.COMPLETED) == [items[3]]
        assert filter_learning_path(items, LearningPathView.RECOMMENDED, "visual") == [
            items[0],
            items[2],
        ]
