"""
Completion Models

Terminal completion records (``module_completions``).
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.modules.shared import BaseModel, utcnow

if TYPE_CHECKING:
    from app.modules.users.models import User
    from app.modules.vark_modules.models import DifficultyLevel, VarkModule


class ModuleCompletion(BaseModel):
    """
    A student's finished run of a module with its score.

    At most one row exists per (student, module); re-completing a module
    overwrites the scores.
    """

    __tablename__ = "module_completions"
    __table_args__ = (
        UniqueConstraint("student_id", "module_id", name="uq_module_completions_student_module"),
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
    completion_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    final_score: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    time_spent_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pre_test_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    post_test_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    sections_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    perfect_sections: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    student: Mapped["User"] = relationship("User", lazy="selectin")
    module: Mapped["VarkModule"] = relationship("VarkModule", lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<ModuleCompletion(student_id={self.student_id}, module_id={self.module_id}, "
            f"score={self.final_score})>"
        )

    @property
    def module_title(self) -> str | None:
        return self.module.title if self.module else None

    @property
    def difficulty_level(self) -> "DifficultyLevel | None":
        return self.module.difficulty_level if self.module else None

    @property
    def student_name(self) -> str | None:
        return self.student.full_name if self.student else None
