"""
Model registry.

Importing this module registers every ORM model on ``Base.metadata`` so
that string relationships resolve and Alembic sees the full schema.
"""

from app.core.database import Base
from app.modules.badges.models import BadgeRarity, StudentBadge
from app.modules.classes.models import ClassStudent, SchoolClass
from app.modules.completions.models import ModuleCompletion
from app.modules.progress.models import ModuleProgress, ProgressStatus
from app.modules.submissions.models import Submission, SubmissionStatus
from app.modules.users.models import LearningStyle, LearningType, Profile, User, UserRole
from app.modules.vark_modules.models import DifficultyLevel, ModuleCategory, VarkModule

__all__ = [
    "Base",
    "BadgeRarity",
    "StudentBadge",
    "ClassStudent",
    "SchoolClass",
    "ModuleCompletion",
    "ModuleProgress",
    "ProgressStatus",
    "Submission",
    "SubmissionStatus",
    "LearningStyle",
    "LearningType",
    "Profile",
    "User",
    "UserRole",
    "DifficultyLevel",
    "ModuleCategory",
    "VarkModule",
]
