"""
Progress Models

Per-student, per-module progress (``vark_module_progress``).
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import ENUM, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.modules.shared import BaseModel, enum_values

if TYPE_CHECKING:
    from app.modules.users.models import User
    from app.modules.vark_modules.models import VarkModule


class ProgressStatus(str, Enum):
    """Where a student is in a module."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    PAUSED = "paused"


class ModuleProgress(BaseModel):
    """
    Progress of one student through one module.

    At most one row exists per (student, module).
    """

    __tablename__ = "vark_module_progress"
    __table_args__ = (
        UniqueConstraint("student_id", "module_id", name="uq_vark_module_progress_student_module"),
        CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="ck_vark_module_progress_percentage",
        ),
        CheckConstraint("time_spent_minutes >= 0", name="ck_vark_module_progress_time_spent"),
    )

    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    module_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("vark_modules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[ProgressStatus] = mapped_column(
        ENUM(
            ProgressStatus,
            name="progress_status",
            create_type=True,
            values_callable=enum_values,
        ),
        nullable=False,
        default=ProgressStatus.NOT_STARTED,
    )
    progress_percentage: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    current_section_id: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    time_spent_minutes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    completed_sections: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
    )
    assessment_scores: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
    )

    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_accessed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    student: Mapped["User"] = relationship("User", lazy="selectin")
    module: Mapped["VarkModule"] = relationship("VarkModule", lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<ModuleProgress(student_id={self.student_id}, module_id={self.module_id}, "
            f"status={self.status.value}, progress={self.progress_percentage})>"
        )

    @property
    def student_name(self) -> str | None:
        return self.student.full_name if self.student else None

    @property
    def module_title(self) -> str | None:
        return self.module.title if self.module else None
