"""
Users module - Accounts, roles and learner profiles.
"""

from app.modules.users.helpers import build_full_name
from app.modules.users.models import LearningStyle, LearningType, Profile, User, UserRole
from app.modules.users.repository import ProfileRepository, UserRepository

__all__ = [
    "User",
    "UserRole",
    "Profile",
    "LearningStyle",
    "LearningType",
    "UserRepository",
    "ProfileRepository",
    "build_full_name",
]
