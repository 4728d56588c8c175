"""User and profile response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.modules.users.models import LearningStyle, UserRole


class ProfileResponse(BaseModel):
    """Profile as nested in user responses."""

    model_config = ConfigDict(from_attributes=True)

    first_name: str
    middle_name: str | None = None
    last_name: str
    full_name: str
    grade_level: str | None = None
    learning_style: LearningStyle | None = None
    preferred_modules: list = []
    learning_type: str | None = None
    onboarding_completed: bool = False


class UserResponse(BaseModel):
    """A user with their nested profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: UserRole
    email_verified: bool
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime
    profile: ProfileResponse | None = None
