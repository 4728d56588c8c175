"""
Submission Models

Per-section answers a student submits inside a module
(``student_module_submissions``).
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import ENUM, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.modules.shared import BaseModel, enum_values

if TYPE_CHECKING:
    from app.modules.users.models import User


class SubmissionStatus(str, Enum):
    """Lifecycle of a section submission."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"


class Submission(BaseModel):
    """One student's answers for one section of a module."""

    __tablename__ = "student_module_submissions"
    __table_args__ = (
        UniqueConstraint(
            "student_id",
            "module_id",
            "section_id",
            name="uq_submissions_student_module_section",
        ),
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
    section_id: Mapped[str] = mapped_column(String(100), nullable=False)
    section_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    section_type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    submission_data: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    assessment_results: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    time_spent_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    submission_status: Mapped[SubmissionStatus] = mapped_column(
        ENUM(
            SubmissionStatus,
            name="submission_status",
            create_type=True,
            values_callable=enum_values,
        ),
        nullable=False,
        default=SubmissionStatus.DRAFT,
    )

    # Grading
    teacher_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    teacher_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    graded_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    graded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    student: Mapped["User"] = relationship("User", foreign_keys=[student_id], lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<Submission(student_id={self.student_id}, module_id={self.module_id}, "
            f"section_id={self.section_id}, status={self.submission_status.value})>"
        )

    @property
    def student_name(self) -> str | None:
        return self.student.full_name if self.student else None
