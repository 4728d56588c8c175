"""
VARK Modules Router

Endpoints:
- GET /modules - List modules (students see published only)
- POST /modules - Create a module
- POST /modules/import - Import a module document
- GET /modules/category/{category_id} - Modules in a category
- GET /modules/creator/{creator_id} - Modules by creator
- GET /modules/{id} - Get a module
- PUT /modules/{id} - Update a module (owner or admin)
- DELETE /modules/{id} - Delete a module (owner or admin)
- GET /modules/{id}/submission-stats - Completion coverage
- GET /modules/{id}/completions - Completions with student profiles
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import CurrentUser, get_current_user, require_teacher
from app.core.database import get_db
from app.modules.shared import (
    DataResponse,
    MessageResponse,
    PaginatedResponse,
    Pagination,
    StatusMessage,
    pagination_params,
)
from app.modules.vark_modules import service
from app.modules.vark_modules.models import DifficultyLevel
from app.modules.vark_modules.schemas import (
    ModuleCompletionEntry,
    ModuleCreate,
    ModuleImport,
    ModuleResponse,
    ModuleSubmissionStats,
    ModuleUpdate,
)

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[ModuleResponse],
    summary="List Modules",
)
async def list_modules(
    category_id: str | None = Query(None),
    difficulty_level: DifficultyLevel | None = Query(None),
    is_published: bool | None = Query(None),
    created_by: str | None = Query(None),
    search: str | None = Query(None, max_length=255),
    pagination: Pagination = Depends(pagination_params),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ModuleResponse]:
    return await service.list_modules(
        db,
        user,
        pagination,
        category_id=category_id,
        difficulty_level=difficulty_level,
        is_published=is_published,
        created_by=created_by,
        search=search,
    )


@router.post(
    "",
    response_model=MessageResponse[ModuleResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Module",
)
async def create_module(
    data: ModuleCreate,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ModuleResponse]:
    module = await service.create_module(db, user, data)
    return MessageResponse(message="Module created successfully", data=module)


@router.post(
    "/import",
    response_model=MessageResponse[ModuleResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Import Module",
    description="Create an unpublished module from an exported module JSON document. "
    "Unknown keys are ignored.",
)
async def import_module(
    document: ModuleImport,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ModuleResponse]:
    module = await service.import_module(db, user, document)
    return MessageResponse(message="Module imported successfully", data=module)


@router.get(
    "/category/{category_id}",
    response_model=PaginatedResponse[ModuleResponse],
    summary="List Modules By Category",
)
async def list_modules_by_category(
    category_id: str,
    pagination: Pagination = Depends(pagination_params),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ModuleResponse]:
    return await service.list_modules(db, user, pagination, category_id=category_id)


@router.get(
    "/creator/{creator_id}",
    response_model=PaginatedResponse[ModuleResponse],
    summary="List Modules By Creator",
)
async def list_modules_by_creator(
    creator_id: str,
    pagination: Pagination = Depends(pagination_params),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ModuleResponse]:
    return await service.list_modules(db, user, pagination, created_by=creator_id)


@router.get(
    "/{module_id}/submission-stats",
    response_model=DataResponse[ModuleSubmissionStats],
    summary="Module Submission Stats",
)
async def get_submission_stats(
    module_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[ModuleSubmissionStats]:
    await service.get_module_or_404(db, module_id)
    return DataResponse(data=await service.get_submission_stats(db, module_id))


@router.get(
    "/{module_id}/completions",
    response_model=DataResponse[list[ModuleCompletionEntry]],
    summary="Module Completions",
)
async def get_module_completions(
    module_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[ModuleCompletionEntry]]:
    await service.get_module_or_404(db, module_id)
    return DataResponse(data=await service.get_module_completions(db, module_id))


@router.get(
    "/{module_id}",
    response_model=DataResponse[ModuleResponse],
    summary="Get Module",
)
async def get_module(
    module_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[ModuleResponse]:
    return DataResponse(data=await service.get_module(db, user, module_id))


@router.put(
    "/{module_id}",
    response_model=MessageResponse[ModuleResponse],
    summary="Update Module",
)
async def update_module(
    module_id: str,
    data: ModuleUpdate,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ModuleResponse]:
    module = await service.update_module(db, user, module_id, data)
    return MessageResponse(message="Module updated successfully", data=module)


@router.delete(
    "/{module_id}",
    response_model=StatusMessage,
    summary="Delete Module",
)
async def delete_module(
    module_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> StatusMessage:
    await service.delete_module(db, user, module_id)
    return StatusMessage(message="Module deleted successfully")
