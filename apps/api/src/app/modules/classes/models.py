"""
Class Models

Teacher-owned classes (``classes``) and student enrollment
(``class_students``).
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.modules.shared import BaseModel, utcnow

if TYPE_CHECKING:
    from app.modules.users.models import User


class SchoolClass(BaseModel):
    """A class created by a teacher that students are enrolled in."""

    __tablename__ = "classes"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    subject: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )
    grade_level: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        index=True,
    )
    created_by: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    creator: Mapped["User"] = relationship(
        "User",
        lazy="selectin",
    )
    enrollments: Mapped[list["ClassStudent"]] = relationship(
        "ClassStudent",
        back_populates="school_class",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<SchoolClass(id={self.id}, name={self.name})>"

    @property
    def creator_name(self) -> str | None:
        return self.creator.full_name if self.creator else None

    @property
    def student_count(self) -> int:
        return len(self.enrollments)


class ClassStudent(BaseModel):
    """Enrollment of one student in one class."""

    __tablename__ = "class_students"
    __table_args__ = (
        UniqueConstraint("class_id", "student_id", name="uq_class_students_class_student"),
    )

    class_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("classes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    school_class: Mapped["SchoolClass"] = relationship(
        "SchoolClass",
        back_populates="enrollments",
        lazy="selectin",
    )
    student: Mapped["User"] = relationship(
        "User",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<ClassStudent(class_id={self.class_id}, student_id={self.student_id})>"
