"""Submission request and response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.modules.submissions.models import SubmissionStatus


class SubmissionCreate(BaseModel):
    """Request body for POST /submissions (insert or overwrite the section)."""

    student_id: str
    module_id: str
    section_id: str = Field(..., min_length=1, max_length=100)
    section_title: str | None = Field(None, max_length=255)
    section_type: str | None = Field(None, max_length=50)
    submission_data: dict[str, Any]
    assessment_results: dict[str, Any] | None = None
    time_spent_seconds: int = Field(0, ge=0)
    submission_status: SubmissionStatus = SubmissionStatus.DRAFT


class SubmissionUpdate(BaseModel):
    """
    Partial update of a submission.

    The identifying ids are accepted so a client may echo them back, but
    they must match the stored record.
    """

    student_id: str | None = None
    module_id: str | None = None
    section_id: str | None = None
    section_title: str | None = Field(None, max_length=255)
    section_type: str | None = Field(None, max_length=50)
    submission_data: dict[str, Any] | None = None
    assessment_results: dict[str, Any] | None = None
    time_spent_seconds: int | None = Field(None, ge=0)
    submission_status: SubmissionStatus | None = None


class SubmissionGrade(BaseModel):
    teacher_score: float = Field(..., ge=0, le=100)
    teacher_feedback: str | None = None


class SubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    student_name: str | None = None
    module_id: str
    section_id: str
    section_title: str | None = None
    section_type: str | None = None
    submission_data: dict[str, Any] = {}
    assessment_results: dict[str, Any] | None = None
    time_spent_seconds: int = 0
    submission_status: SubmissionStatus
    teacher_score: float | None = None
    teacher_feedback: str | None = None
    graded_by: str | None = None
    graded_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
