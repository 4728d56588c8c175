"""Class request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.modules.users.models import LearningStyle


class ClassCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    subject: str | None = Field(None, max_length=100)
    grade_level: str | None = Field(None, max_length=50)


class ClassUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    subject: str | None = Field(None, max_length=100)
    grade_level: str | None = Field(None, max_length=50)


class ClassResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    subject: str | None = None
    grade_level: str | None = None
    created_by: str
    creator_name: str | None = None
    student_count: int = 0
    created_at: datetime
    updated_at: datetime


class EnrollStudentRequest(BaseModel):
    student_id: str


class EnrolledStudent(BaseModel):
    """A student as listed inside a class."""

    id: str
    email: str
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    grade_level: str | None = None
    learning_style: LearningStyle | None = None
    joined_at: datetime
