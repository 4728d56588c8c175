"""
Badge Models

Achievement awards (``student_badges``).
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import ENUM, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel, enum_values, utcnow


class BadgeRarity(str, Enum):
    """Badge tiers, lowest first."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class StudentBadge(BaseModel):
    """A badge earned by a student, usually for a specific module."""

    __tablename__ = "student_badges"

    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    badge_type: Mapped[str] = mapped_column(String(100), nullable=False)
    badge_name: Mapped[str] = mapped_column(String(200), nullable=False)
    badge_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    badge_icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    badge_rarity: Mapped[BadgeRarity] = mapped_column(
        ENUM(
            BadgeRarity,
            name="badge_rarity",
            create_type=True,
            values_callable=enum_values,
        ),
        nullable=False,
        default=BadgeRarity.BRONZE,
    )
    module_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("vark_modules.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    earned_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    criteria_met: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)

    def __repr__(self) -> str:
        return (
            f"<StudentBadge(student_id={self.student_id}, type={self.badge_type}, "
            f"rarity={self.badge_rarity.value})>"
        )
