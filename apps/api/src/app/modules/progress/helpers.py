"""
Progress Helpers

Status timestamp rules shared by every write to a progress row.
"""

from datetime import datetime
from typing import Any

from app.modules.progress.models import ProgressStatus
from app.modules.shared import utcnow


def status_timestamps(
    status: ProgressStatus,
    *,
    started_at: datetime | None = None,
    completed_at: datetime | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Timestamp changes implied by writing a progress row with ``status``.

    ``started_at`` is set once, when the status first leaves not_started.
    ``completed_at`` is set once, when the status first becomes completed.
    ``last_accessed_at`` moves on every write.

    Args:
        status: Status the row will have after the write
        started_at: Current start time (None for a new row)
        completed_at: Current completion time (None for a new row)
        now: Clock override for tests

    Returns:
        Dict of timestamp columns to set
    """
    now = now or utcnow()
    changes: dict[str, Any] = {"last_accessed_at": now}

    if status != ProgressStatus.NOT_STARTED and started_at is None:
        changes["started_at"] = now
    if status == ProgressStatus.COMPLETED and completed_at is None:
        changes["completed_at"] = now

    return changes
