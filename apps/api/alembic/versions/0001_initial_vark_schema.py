"""initial vark schema

Revision ID: 0001a2b3c4d5
Revises:
Create Date: 2026-10-18 09:00:00.000000

This migration creates:
1. Accounts (users) and their learner profiles (profiles)
2. Teacher classes and enrollments (classes, class_students)
3. Module categories and modules (vark_module_categories, vark_modules)
4. Learner tracking tables (vark_module_progress, module_completions,
   student_module_submissions, student_badges)

classes is created before vark_modules because modules may target a class.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001a2b3c4d5"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ENUMS = {
    "user_role": ("student", "teacher", "admin"),
    "learning_style": ("visual", "auditory", "reading_writing", "kinesthetic"),
    "difficulty_level": ("beginner", "intermediate", "advanced"),
    "progress_status": ("not_started", "in_progress", "completed", "paused"),
    "submission_status": ("draft", "submitted", "reviewed"),
    "badge_rarity": ("bronze", "silver", "gold", "platinum"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _base_columns() -> list[sa.Column]:
    """Primary key and timestamps (from BaseModel)."""
    return [
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _jsonb(name: str, default: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        postgresql.JSONB(astext_type=sa.Text()),
        nullable=nullable,
        server_default=sa.text(f"'{default}'::jsonb"),
    )


def _fk(name: str, target: str, ondelete: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=False),
        sa.ForeignKey(target, ondelete=ondelete),
        nullable=nullable,
    )


def upgrade() -> None:
    """Create the full VARK schema."""
    bind = op.get_bind()
    for name in ENUMS:
        _enum(name).create(bind, checkfirst=True)

    # Accounts
    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", _enum("user_role"), nullable=False, server_default="student"),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "profiles",
        *_base_columns(),
        _fk("user_id", "users.id", "CASCADE"),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("grade_level", sa.String(length=50), nullable=True),
        sa.Column("learning_style", _enum("learning_style"), nullable=True),
        _jsonb("preferred_modules", "[]"),
        sa.Column("learning_type", sa.String(length=50), nullable=True),
        sa.Column(
            "onboarding_completed",
            sa.Boolean(),
            nullable=False,
            server_default="false",
        ),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
    )
    op.create_index("ix_profiles_last_name", "profiles", ["last_name"])
    op.create_index("ix_profiles_grade_level", "profiles", ["grade_level"])

    # Classes
    op.create_table(
        "classes",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("subject", sa.String(length=100), nullable=True),
        sa.Column("grade_level", sa.String(length=50), nullable=True),
        _fk("created_by", "users.id", "CASCADE"),
    )
    op.create_index("ix_classes_subject", "classes", ["subject"])
    op.create_index("ix_classes_grade_level", "classes", ["grade_level"])
    op.create_index("ix_classes_created_by", "classes", ["created_by"])

    op.create_table(
        "class_students",
        *_base_columns(),
        _fk("class_id", "classes.id", "CASCADE"),
        _fk("student_id", "users.id", "CASCADE"),
        sa.Column(
            "joined_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.UniqueConstraint("class_id", "student_id", name="uq_class_students_class_student"),
    )
    op.create_index("ix_class_students_class_id", "class_students", ["class_id"])
    op.create_index("ix_class_students_student_id", "class_students", ["student_id"])

    # Modules
    op.create_table(
        "vark_module_categories",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("subject", sa.String(length=100), nullable=True),
        sa.UniqueConstraint("name", name="uq_vark_module_categories_name"),
    )

    op.create_table(
        "vark_modules",
        *_base_columns(),
        _fk("category_id", "vark_module_categories.id", "SET NULL", nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _jsonb("learning_objectives", "[]"),
        _jsonb(
            "content_structure",
            '{"sections": [], "learning_path": [], '
            '"prerequisites_checklist": [], "completion_criteria": []}',
        ),
        _jsonb("prerequisites", "[]"),
        _jsonb("multimedia_content", "{}"),
        _jsonb("interactive_elements", "[]"),
        _jsonb("assessment_questions", "[]"),
        _jsonb("module_metadata", "{}"),
        _jsonb("content_summary", "[]"),
        _jsonb("target_learning_styles", "[]"),
        sa.Column(
            "difficulty_level",
            _enum("difficulty_level"),
            nullable=False,
            server_default="beginner",
        ),
        sa.Column("estimated_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("json_backup_url", sa.Text(), nullable=True),
        sa.Column("json_content_url", sa.Text(), nullable=True),
        _fk("target_class_id", "classes.id", "SET NULL", nullable=True),
        _fk("prerequisite_module_id", "vark_modules.id", "SET NULL", nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default="false"),
        _fk("created_by", "users.id", "CASCADE"),
    )
    op.create_index("ix_vark_modules_category_id", "vark_modules", ["category_id"])
    op.create_index("ix_vark_modules_target_class_id", "vark_modules", ["target_class_id"])
    op.create_index("ix_vark_modules_is_published", "vark_modules", ["is_published"])
    op.create_index("ix_vark_modules_created_by", "vark_modules", ["created_by"])

    # Learner tracking
    op.create_table(
        "vark_module_progress",
        *_base_columns(),
        _fk("student_id", "users.id", "CASCADE"),
        _fk("module_id", "vark_modules.id", "CASCADE"),
        sa.Column(
            "status",
            _enum("progress_status"),
            nullable=False,
            server_default="not_started",
        ),
        sa.Column("progress_percentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("current_section_id", sa.String(length=100), nullable=True),
        sa.Column("time_spent_minutes", sa.Integer(), nullable=False, server_default="0"),
        _jsonb("completed_sections", "[]"),
        _jsonb("assessment_scores", "{}"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_accessed_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "student_id", "module_id", name="uq_vark_module_progress_student_module"
        ),
        sa.CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="ck_vark_module_progress_percentage",
        ),
        sa.CheckConstraint(
            "time_spent_minutes >= 0",
            name="ck_vark_module_progress_time_spent",
        ),
    )
    op.create_index(
        "ix_vark_module_progress_student_id", "vark_module_progress", ["student_id"]
    )
    op.create_index("ix_vark_module_progress_module_id", "vark_module_progress", ["module_id"])
    op.create_index(
        "ix_vark_module_progress_last_accessed_at",
        "vark_module_progress",
        ["last_accessed_at"],
    )

    op.create_table(
        "module_completions",
        *_base_columns(),
        _fk("student_id", "users.id", "CASCADE"),
        _fk("module_id", "vark_modules.id", "CASCADE"),
        sa.Column(
            "completion_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("final_score", sa.Float(), nullable=False, server_default="0"),
        sa.Column("time_spent_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("pre_test_score", sa.Float(), nullable=True),
        sa.Column("post_test_score", sa.Float(), nullable=True),
        sa.Column("sections_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("perfect_sections", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("student_id", "module_id", name="uq_module_completions_student_module"),
    )
    op.create_index("ix_module_completions_student_id", "module_completions", ["student_id"])
    op.create_index("ix_module_completions_module_id", "module_completions", ["module_id"])
    op.create_index(
        "ix_module_completions_completion_date", "module_completions", ["completion_date"]
    )

    op.create_table(
        "student_module_submissions",
        *_base_columns(),
        _fk("student_id", "users.id", "CASCADE"),
        _fk("module_id", "vark_modules.id", "CASCADE"),
        sa.Column("section_id", sa.String(length=100), nullable=False),
        sa.Column("section_title", sa.String(length=255), nullable=True),
        sa.Column("section_type", sa.String(length=50), nullable=True),
        _jsonb("submission_data", "{}"),
        sa.Column("assessment_results", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("time_spent_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "submission_status",
            _enum("submission_status"),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("teacher_score", sa.Float(), nullable=True),
        sa.Column("teacher_feedback", sa.Text(), nullable=True),
        _fk("graded_by", "users.id", "SET NULL", nullable=True),
        sa.Column("graded_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "student_id",
            "module_id",
            "section_id",
            name="uq_submissions_student_module_section",
        ),
    )
    op.create_index(
        "ix_student_module_submissions_student_id",
        "student_module_submissions",
        ["student_id"],
    )
    op.create_index(
        "ix_student_module_submissions_module_id",
        "student_module_submissions",
        ["module_id"],
    )

    op.create_table(
        "student_badges",
        *_base_columns(),
        _fk("student_id", "users.id", "CASCADE"),
        sa.Column("badge_type", sa.String(length=100), nullable=False),
        sa.Column("badge_name", sa.String(length=200), nullable=False),
        sa.Column("badge_description", sa.Text(), nullable=True),
        sa.Column("badge_icon", sa.String(length=255), nullable=True),
        sa.Column(
            "badge_rarity",
            _enum("badge_rarity"),
            nullable=False,
            server_default="bronze",
        ),
        _fk("module_id", "vark_modules.id", "CASCADE", nullable=True),
        sa.Column(
            "earned_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        _jsonb("criteria_met", "{}"),
    )
    op.create_index("ix_student_badges_student_id", "student_badges", ["student_id"])
    op.create_index("ix_student_badges_module_id", "student_badges", ["module_id"])


def downgrade() -> None:
    """Drop every VARK table and enum type."""
    for table in (
        "student_badges",
        "student_module_submissions",
        "module_completions",
        "vark_module_progress",
        "vark_modules",
        "vark_module_categories",
        "class_students",
        "classes",
        "profiles",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        _enum(name).drop(bind, checkfirst=True)
