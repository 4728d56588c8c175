"""Public statistics schemas."""

from datetime import datetime

from pydantic import BaseModel


class RecentActivityCounts(BaseModel):
    new_students: int = 0
    new_teachers: int = 0
    completed_modules: int = 0


class HomepageStats(BaseModel):
    total_students: int = 0
    total_teachers: int = 0
    total_modules: int = 0
    total_classes: int = 0
    total_quizzes: int = 0
    total_activities: int = 0
    success_rate: int = 0
    recent_activity: RecentActivityCounts = RecentActivityCounts()


class SystemHealth(BaseModel):
    database_connected: bool
    last_update: datetime
    total_users: int
