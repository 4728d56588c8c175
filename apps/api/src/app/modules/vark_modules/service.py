"""
VARK Module Service Layer

Business rules for creating, publishing, importing and reporting on
learning modules.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, ensure_owner
from app.core.errors import NotFoundError, ValidationError
from app.modules.completions import repository as completions_repository
from app.modules.shared import Pagination, PaginatedResponse, build_pagination
from app.modules.vark_modules import repository
from app.modules.vark_modules.models import DifficultyLevel, VarkModule
from app.modules.vark_modules.schemas import (
    CompletionProfile,
    ModuleCompletionEntry,
    ModuleCreate,
    ModuleImport,
    ModuleResponse,
    ModuleSubmissionStats,
    ModuleUpdate,
)

logger = logging.getLogger(__name__)

IMPORTED_MODULE_TITLE = "Imported Module"

NON_NULLABLE_FIELDS = (
    "title",
    "learning_objectives",
    "content_structure",
    "prerequisites",
    "multimedia_content",
    "interactive_elements",
    "assessment_questions",
    "module_metadata",
    "content_summary",
    "target_learning_styles",
    "difficulty_level",
    "is_published",
)


def _module_fields(data: ModuleCreate | ModuleUpdate, *, only_sent: bool) -> dict[str, Any]:
    """Turn a request schema into column values."""
    fields = data.model_dump(exclude_unset=only_sent)
    if fields.get("target_learning_styles") is not None:
        fields["target_learning_styles"] = [
            style.value for style in fields["target_learning_styles"]
        ]
    return fields


async def _validate_prerequisite(
    db: AsyncSession,
    prerequisite_module_id: str | None,
    module_id: str | None = None,
) -> None:
    """
    A prerequisite must exist and must not be the module itself.

    Raises:
        ValidationError: If either rule is broken
    """
    if not prerequisite_module_id:
        return
    if module_id is not None and str(prerequisite_module_id) == str(module_id):
        raise ValidationError("A module cannot be its own prerequisite")
    if not await repository.exists(db, prerequisite_module_id):
        raise ValidationError(f"Prerequisite module {prerequisite_module_id} does not exist")


async def get_module_or_404(db: AsyncSession, module_id: str) -> VarkModule:
    module = await repository.get_by_id(db, module_id)
    if module is None:
        raise NotFoundError("Module not found")
    return module


async def list_modules(
    db: AsyncSession,
    user: CurrentUser,
    pagination: Pagination,
    *,
    category_id: str | None = None,
    difficulty_level: DifficultyLevel | None = None,
    is_published: bool | None = None,
    created_by: str | None = None,
    search: str | None = None,
) -> PaginatedResponse[ModuleResponse]:
    """List modules; students only ever see published ones."""
    if user.is_student:
        is_published = True

    modules, total = await repository.list_modules(
        db,
        category_id=category_id,
        difficulty_level=difficulty_level,
        is_published=is_published,
        created_by=created_by,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return PaginatedResponse[ModuleResponse](
        data=[ModuleResponse.model_validate(m) for m in modules],
        pagination=build_pagination(pagination.page, pagination.limit, total),
    )


async def get_module(db: AsyncSession, user: CurrentUser, module_id: str) -> ModuleResponse:
    module = await get_module_or_404(db, module_id)
    if user.is_student and not module.is_published:
        raise NotFoundError("Module not found")
    return ModuleResponse.model_validate(module)


async def create_module(
    db: AsyncSession, user: CurrentUser, data: ModuleCreate
) -> ModuleResponse:
    """Create a module owned by the caller."""
    await _validate_prerequisite(db, data.prerequisite_module_id)

    fields = _module_fields(data, only_sent=False)
    fields["created_by"] = user.id

    module = await repository.create(db, fields)
    await db.commit()

    logger.info(f"Module created: {module.id} '{module.title}' by {user.id}")
    return ModuleResponse.model_validate(module)


async def update_module(
    db: AsyncSession, user: CurrentUser, module_id: str, data: ModuleUpdate
) -> ModuleResponse:
    """
    Apply a partial update.

    Raises:
        ValidationError: Empty body or invalid prerequisite
        NotFoundError: Unknown module
        ForbiddenError: Caller is neither the creator nor an admin
    """
    fields = _module_fields(data, only_sent=True)
    if not fields:
        raise ValidationError("No fields to update")

    module = await get_module_or_404(db, module_id)
    ensure_owner(user, module.created_by)

    if "prerequisite_module_id" in fields:
        await _validate_prerequisite(db, fields["prerequisite_module_id"], module.id)
    for key in NON_NULLABLE_FIELDS:
        if key in fields and fields[key] is None:
            del fields[key]

    module = await repository.update(db, module, fields)
    await db.commit()

    logger.info(f"Module updated: {module.id} by {user.id} ({', '.join(sorted(fields))})")
    return ModuleResponse.model_validate(module)


async def delete_module(db: AsyncSession, user: CurrentUser, module_id: str) -> None:
    module = await get_module_or_404(db, module_id)
    ensure_owner(user, module.created_by)

    await repository.delete(db, module)
    await db.commit()

    logger.info(f"Module deleted: {module_id} by {user.id}")


async def import_module(
    db: AsyncSession, user: CurrentUser, document: ModuleImport
) -> ModuleResponse:
    """Create an unpublished module from an exported module document."""
    fields = {
        key: value
        for key, value in _module_fields(document, only_sent=True).items()
        if value is not None
    }
    fields.setdefault("title", IMPORTED_MODULE_TITLE)
    fields["is_published"] = False
    fields["created_by"] = user.id

    # Prerequisites from another system rarely resolve here
    prerequisite = fields.get("prerequisite_module_id")
    if prerequisite and not await repository.exists(db, prerequisite):
        logger.warning(f"Dropping unknown prerequisite {prerequisite} from imported module")
        fields.pop("prerequisite_module_id")

    module = await repository.create(db, fields)
    await db.commit()

    logger.info(f"Module imported: {module.id} '{module.title}' by {user.id}")
    return ModuleResponse.model_validate(module)


async def get_submission_stats(db: AsyncSession, module_id: str) -> ModuleSubmissionStats:
    stats = await repository.get_submission_stats(db, module_id)
    total = stats["total_students"]
    completion_rate = stats["submitted_count"] * 100.0 / total if total else 0.0
    return ModuleSubmissionStats(
        total_students=total,
        submitted_count=stats["submitted_count"],
        average_score=round(stats["average_score"], 2),
        completion_rate=round(completion_rate, 2),
    )


async def get_module_completions(
    db: AsyncSession, module_id: str
) -> list[ModuleCompletionEntry]:
    """Completions of a module, newest first, with student profiles."""
    completions = await completions_repository.list_by_module(db, module_id)

    entries = []
    for completion in completions:
        student = completion.student
        profile = student.profile if student else None
        entries.append(
            ModuleCompletionEntry(
                id=completion.id,
                student_id=completion.student_id,
                module_id=completion.module_id,
                completion_date=completion.completion_date,
                final_score=completion.final_score,
                time_spent_minutes=completion.time_spent_minutes,
                sections_completed=completion.sections_completed,
                perfect_sections=completion.perfect_sections,
                created_at=completion.created_at,
                updated_at=completion.updated_at,
                profiles=CompletionProfile(
                    first_name=profile.first_name if profile else None,
                    middle_name=profile.middle_name if profile else None,
                    last_name=profile.last_name if profile else None,
                    full_name=profile.full_name if profile else None,
                    email=student.email if student else None,
                ),
            )
        )
    return entries
