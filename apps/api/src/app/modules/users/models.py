"""
User Models

Accounts (``users``) and their one-to-one learner/teacher profiles
(``profiles``).
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import ENUM, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.modules.shared import BaseModel, enum_values


class UserRole(str, Enum):
    """User roles in the system."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class LearningStyle(str, Enum):
    """VARK learning styles."""

    VISUAL = "visual"
    AUDITORY = "auditory"
    READING_WRITING = "reading_writing"
    KINESTHETIC = "kinesthetic"


class LearningType(str, Enum):
    """How many VARK modalities a learner leans on."""

    UNIMODAL = "unimodal"
    BIMODAL = "bimodal"
    TRIMODAL = "trimodal"
    MULTIMODAL = "multimodal"


class User(BaseModel):
    """
    Account used for authentication and authorization.

    Demographic and learning data lives on the linked ``Profile``.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        ENUM(UserRole, name="user_role", create_type=True, values_callable=enum_values),
        nullable=False,
        default=UserRole.STUDENT,
        index=True,
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    profile: Mapped["Profile | None"] = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"

    @property
    def full_name(self) -> str | None:
        """Return the profile's full name, if a profile exists."""
        return self.profile.full_name if self.profile else None


class Profile(BaseModel):
    """Personal and VARK learning data for a user."""

    __tablename__ = "profiles"

    # ON DELETE CASCADE: a profile never outlives its user
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    middle_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    grade_level: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        index=True,
    )
    learning_style: Mapped[LearningStyle | None] = mapped_column(
        ENUM(
            LearningStyle,
            name="learning_style",
            create_type=True,
            values_callable=enum_values,
        ),
        nullable=True,
    )
    preferred_modules: Mapped[list] = mapped_column(
        JSONB,
        default=list,
        nullable=False,
    )
    learning_type: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )
    onboarding_completed: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="profile",
    )

    def __repr__(self) -> str:
        return f"<Profile(user_id={self.user_id}, full_name={self.full_name})>"
