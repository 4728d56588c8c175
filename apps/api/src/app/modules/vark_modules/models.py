"""
VARK Module Models

Learning modules (``vark_modules``) and the categories that group them.
Lesson content is stored as JSON documents on the module row.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import ENUM, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.modules.shared import BaseModel, enum_values

if TYPE_CHECKING:
    from app.modules.users.models import User


class DifficultyLevel(str, Enum):
    """Module difficulty."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


def default_content_structure() -> dict:
    """Empty lesson outline used when a module has no content yet."""
    return {
        "sections": [],
        "learning_path": [],
        "prerequisites_checklist": [],
        "completion_criteria": [],
    }


class ModuleCategory(BaseModel):
    """Subject grouping for modules."""

    __tablename__ = "vark_module_categories"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        unique=True,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    subject: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<ModuleCategory(id={self.id}, name={self.name})>"


class VarkModule(BaseModel):
    """
    A learning module tagged with the VARK styles it targets.

    ``content_structure["sections"]`` holds the ordered lesson sections;
    its length is the denominator for section-based progress.
    """

    __tablename__ = "vark_modules"

    # ON DELETE SET NULL: modules survive category removal
    category_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("vark_module_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Content documents
    learning_objectives: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    content_structure: Mapped[dict] = mapped_column(
        JSONB,
        default=default_content_structure,
        nullable=False,
    )
    prerequisites: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    multimedia_content: Mapped[dict] = mapped_column(JSONB, default=dict, nullable=False)
    interactive_elements: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    assessment_questions: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    module_metadata: Mapped[dict] = mapped_column(JSONB, default=dict, nullable=False)
    content_summary: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    target_learning_styles: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)

    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        ENUM(
            DifficultyLevel,
            name="difficulty_level",
            create_type=True,
            values_callable=enum_values,
        ),
        nullable=False,
        default=DifficultyLevel.BEGINNER,
    )
    estimated_duration_minutes: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    # Externally stored copies of the content document
    json_backup_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    json_content_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    target_class_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("classes.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # Module that must be completed before this one unlocks
    prerequisite_module_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("vark_modules.id", ondelete="SET NULL"),
        nullable=True,
    )

    is_published: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
    )
    created_by: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    creator: Mapped["User"] = relationship(
        "User",
        lazy="selectin",
    )
    category: Mapped["ModuleCategory | None"] = relationship(
        "ModuleCategory",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<VarkModule(id={self.id}, title={self.title}, published={self.is_published})>"

    @property
    def creator_name(self) -> str | None:
        return self.creator.full_name if self.creator else None

    @property
    def category_name(self) -> str | None:
        return self.category.name if self.category else None

    @property
    def sections(self) -> list:
        structure = self.content_structure or {}
        sections = structure.get("sections") or []
        return sections if isinstance(sections, list) else []

    @property
    def section_count(self) -> int:
        return len(self.sections)

    @property
    def section_ids(self) -> list[str]:
        return [
            str(section["id"])
            for section in self.sections
            if isinstance(section, dict) and section.get("id") is not None
        ]
