"""Teacher dashboard schemas."""

from datetime import datetime

from pydantic import BaseModel

from app.modules.users.models import LearningStyle


class TeacherStats(BaseModel):
    total_students: int = 0
    published_modules: int = 0
    total_modules: int = 0
    completed_modules: int = 0


class LearningStyleDistribution(BaseModel):
    visual: int = 0
    auditory: int = 0
    reading_writing: int = 0
    kinesthetic: int = 0


class LearningTypeDistribution(BaseModel):
    unimodal: int = 0
    bimodal: int = 0
    trimodal: int = 0
    multimodal: int = 0
    not_set: int = 0


class RecentCompletion(BaseModel):
    id: str
    module_title: str
    student_name: str
    completion_date: datetime
    final_score: float = 0
    time_spent_minutes: int = 0
    perfect_sections: int = 0


class TeacherStudent(BaseModel):
    id: str
    name: str
    email: str
    grade_level: str | None = None
    learning_style: LearningStyle | None = None
    class_name: str
    subject: str | None = None
    joined_at: datetime
    onboarding_completed: bool = False
