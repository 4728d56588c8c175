"""
Learning Path Helpers

Pure rules reconciling a student's progress rows with their completion
records. A completion record always wins over whatever the progress row
says.

Progress and completion entries are plain dicts (see ``progress_entry``
and ``completion_entry``); modules are anything with the ``VarkModule``
attributes.
"""

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Any

from app.modules.progress.helpers import status_timestamps
from app.modules.progress.models import ModuleProgress, ProgressStatus


class LearningPathView(str, Enum):
    """Filters for the learning path endpoint."""

    ALL = "all"
    RECOMMENDED = "recommended"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


def progress_entry(progress: ModuleProgress) -> dict[str, Any]:
    """Snapshot of a progress row as a plain dict."""
    return {
        "id": progress.id,
        "module_id": progress.module_id,
        "status": progress.status,
        "progress_percentage": progress.progress_percentage,
        "current_section_id": progress.current_section_id,
        "time_spent_minutes": progress.time_spent_minutes,
        "completed_sections": list(progress.completed_sections or []),
        "started_at": progress.started_at,
        "completed_at": progress.completed_at,
        "last_accessed_at": progress.last_accessed_at,
    }


def completion_entry(completion: Any) -> dict[str, Any]:
    return {
        "id": completion.id,
        "module_id": completion.module_id,
        "completion_date": completion.completion_date,
        "time_spent_minutes": completion.time_spent_minutes,
    }


def merge_progress_with_completions(
    progress: Iterable[dict[str, Any]],
    completions: Iterable[dict[str, Any]],
) -> dict[str, dict[str, Any]]:
    """
    Merge progress entries with completion records, keyed by module id.

    A completed module shows as completed at 100 % even when its progress
    row lags behind or was never written.
    """
    merged = {str(entry["module_id"]): dict(entry) for entry in progress}

    for completion in completions:
        module_id = str(completion["module_id"])
        entry = merged.get(module_id)
        if entry is not None:
            entry["status"] = ProgressStatus.COMPLETED
            entry["progress_percentage"] = 100
            entry["completed_at"] = completion["completion_date"]
        else:
            merged[module_id] = {
                "id": completion["id"],
                "module_id": module_id,
                "status": ProgressStatus.COMPLETED,
                "progress_percentage": 100,
                "current_section_id": None,
                "time_spent_minutes": completion.get("time_spent_minutes") or 0,
                "completed_sections": [],
                "started_at": None,
                "completed_at": completion["completion_date"],
                "last_accessed_at": completion["completion_date"],
            }

    return merged


def get_module_status(entry: dict[str, Any] | None) -> ProgressStatus:
    """Effective status; a paused module with no progress counts as not started."""
    if entry is None:
        return ProgressStatus.NOT_STARTED

    percentage = entry.get("progress_percentage") or 0
    if entry.get("status") == ProgressStatus.COMPLETED or percentage >= 100:
        return ProgressStatus.COMPLETED
    if percentage > 0:
        return ProgressStatus.IN_PROGRESS
    return ProgressStatus.NOT_STARTED


def is_module_locked(module: Any, entries_by_module: dict[str, dict[str, Any]]) -> bool:
    """A module is locked until its prerequisite module is finished."""
    prerequisite_id = getattr(module, "prerequisite_module_id", None)
    if not prerequisite_id:
        return False

    entry = entries_by_module.get(str(prerequisite_id))
    if entry is None:
        return True
    finished = (
        entry.get("status") == ProgressStatus.COMPLETED
        or (entry.get("progress_percentage") or 0) >= 100
    )
    return not finished


def compute_section_progress(completed_sections: Iterable[str], total_sections: int) -> int:
    if total_sections <= 0:
        return 0
    percentage = round(len(set(completed_sections)) / total_sections * 100)
    return max(0, min(100, percentage))


def apply_section_completion(
    entry: dict[str, Any],
    section_id: str,
    total_sections: int,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Record ``section_id`` as finished and return the updated entry.

    The percentage never goes down; reaching 100 % completes the module.
    """
    updated = dict(entry)

    completed_sections = list(entry.get("completed_sections") or [])
    if section_id not in completed_sections:
        completed_sections.append(section_id)
    updated["completed_sections"] = completed_sections
    updated["current_section_id"] = section_id

    percentage = max(
        entry.get("progress_percentage") or 0,
        compute_section_progress(completed_sections, total_sections),
    )
    updated["progress_percentage"] = percentage

    if percentage >= 100 or entry.get("status") == ProgressStatus.COMPLETED:
        updated["status"] = ProgressStatus.COMPLETED
    else:
        updated["status"] = ProgressStatus.IN_PROGRESS

    updated.update(
        status_timestamps(
            updated["status"],
            started_at=entry.get("started_at"),
            completed_at=entry.get("completed_at"),
            now=now,
        )
    )
    return updated


def matches_learning_style(module: Any, learning_style: str | None) -> bool:
    """Modules without target styles suit everyone, as do students without a style."""
    targets = getattr(module, "target_learning_styles", None) or []
    if not targets or not learning_style:
        return True
    style = getattr(learning_style, "value", learning_style)
    return style in targets


def filter_learning_path(
    items: list[dict[str, Any]],
    view: LearningPathView,
    learning_style: str | None = None,
) -> list[dict[str, Any]]:
    """Narrow learning path items (dicts with ``status`` and ``module``) to a view."""
    if view == LearningPathView.RECOMMENDED:
        return [
            item
            for item in items
            if item["status"] != ProgressStatus.COMPLETED
            and matches_learning_style(item["module"], learning_style)
        ]
    if view == LearningPathView.IN_PROGRESS:
        return [item for item in items if item["status"] == ProgressStatus.IN_PROGRESS]
    if view == LearningPathView.COMPLETED:
        return [item for item in items if item["status"] == ProgressStatus.COMPLETED]
    return list(items)
