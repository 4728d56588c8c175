"""
User Repository

Database operations for accounts and profiles.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.shared import utcnow
from app.modules.users.models import LearningStyle, Profile, User, UserRole

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        email: str,
        password_hash: str,
        role: UserRole,
        email_verified: bool = False,
        profile: dict[str, Any] | None = None,
    ) -> User:
        """
        Create a new user record, optionally with its profile.

        Both rows are flushed together so they share the caller's transaction.

        Args:
            db: Database session
            email: User's email address (unique)
            password_hash: Hashed password
            role: User's role
            email_verified: Whether email is verified
            profile: Profile column values

        Returns:
            Created User instance
        """
        user = User(
            email=email,
            password_hash=password_hash,
            role=role,
            email_verified=email_verified,
        )
        user.profile = Profile(**profile) if profile is not None else None

        db.add(user)
        await db.flush()

        logger.info(f"Created user: {user.id} - {user.email} ({user.role.value})")
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str) -> User | None:
        """Get a user (with profile) by ID."""
        result = await db.execute(select(User).where(User.id == str(user_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        """Get a user by email address (case-insensitive)."""
        result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def email_exists(db: AsyncSession, email: str) -> bool:
        """Check if an email address is already registered."""
        user = await UserRepository.get_by_email(db, email)
        return user is not None

    @staticmethod
    async def update(db: AsyncSession, user: User, fields: dict[str, Any]) -> User:
        """Apply column updates to a user."""
        for key, value in fields.items():
            setattr(user, key, value)
        await db.flush()
        return user

    @staticmethod
    async def update_password(db: AsyncSession, user: User, password_hash: str) -> User:
        user.password_hash = password_hash
        await db.flush()
        return user

    @staticmethod
    async def update_last_login(db: AsyncSession, user: User) -> User:
        user.last_login = utcnow()
        await db.flush()
        return user

    @staticmethod
    async def delete(db: AsyncSession, user: User) -> None:
        await db.delete(user)
        await db.flush()

    @staticmethod
    async def list_by_role(db: AsyncSession, role: UserRole) -> list[User]:
        """All users of a role, newest first."""
        result = await db.execute(
            select(User).where(User.role == role).order_by(User.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_by_role(
        db: AsyncSession,
        role: UserRole,
        since: datetime | None = None,
    ) -> int:
        """Count users of a role, optionally only those created after ``since``."""
        query = select(func.count(User.id)).where(User.role == role)
        if since is not None:
            query = query.where(User.created_at >= since)
        result = await db.execute(query)
        return result.scalar() or 0

    @staticmethod
    async def count_all(db: AsyncSession) -> int:
        result = await db.execute(select(func.count(User.id)))
        return result.scalar() or 0


class ProfileRepository:
    """Repository for profile database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        user: User,
        *,
        first_name: str,
        last_name: str,
        full_name: str,
        middle_name: str | None = None,
        grade_level: str | None = None,
        learning_style: LearningStyle | None = None,
        preferred_modules: list | None = None,
        learning_type: str | None = None,
        onboarding_completed: bool = False,
    ) -> Profile:
        """Create the missing profile row for an existing user."""
        profile = Profile(
            first_name=first_name,
            middle_name=middle_name,
            last_name=last_name,
            full_name=full_name,
            grade_level=grade_level,
            learning_style=learning_style,
            preferred_modules=preferred_modules or [],
            learning_type=learning_type,
            onboarding_completed=onboarding_completed,
        )
        user.profile = profile
        await db.flush()
        return profile

    @staticmethod
    async def get_by_user_id(db: AsyncSession, user_id: str) -> Profile | None:
        result = await db.execute(select(Profile).where(Profile.user_id == str(user_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def update(db: AsyncSession, profile: Profile, fields: dict[str, Any]) -> Profile:
        for key, value in fields.items():
            setattr(profile, key, value)
        await db.flush()
        return profile

    @staticmethod
    async def count_onboarded_students(db: AsyncSession) -> int:
        """Students whose profile has completed onboarding."""
        result = await db.execute(
            select(func.count(Profile.id))
            .join(User, User.id == Profile.user_id)
            .where(User.role == UserRole.STUDENT, Profile.onboarding_completed.is_(True))
        )
        return result.scalar() or 0

    @staticmethod
    async def count_students_by_learning_style(db: AsyncSession) -> dict[LearningStyle, int]:
        result = await db.execute(
            select(Profile.learning_style, func.count(Profile.id))
            .join(User, User.id == Profile.user_id)
            .where(User.role == UserRole.STUDENT, Profile.learning_style.is_not(None))
            .group_by(Profile.learning_style)
        )
        return {style: count for style, count in result.all()}

    @staticmethod
    async def count_students_by_learning_type(db: AsyncSession) -> dict[str | None, int]:
        """Raw learning_type values as stored, including None."""
        result = await db.execute(
            select(Profile.learning_type, func.count(Profile.id))
            .join(User, User.id == Profile.user_id)
            .where(User.role == UserRole.STUDENT)
            .group_by(Profile.learning_type)
        )
        return {learning_type: count for learning_type, count in result.all()}
