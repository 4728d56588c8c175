"""
Classes Router

Endpoints:
- GET /classes - List classes
- GET /classes/teacher/{teacher_id} - Classes created by a teacher
- GET /classes/student/{student_id} - Classes a student is enrolled in
- GET /classes/{id} - Get a class
- POST /classes - Create a class
- PUT /classes/{id} - Update a class (owner or admin)
- DELETE /classes/{id} - Delete a class (owner or admin)
- GET /classes/{id}/students - Class roster
- POST /classes/{id}/students - Enroll a student
- DELETE /classes/{id}/students/{student_id} - Remove a student
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import (
    CurrentUser,
    ensure_student_access,
    get_current_user,
    require_teacher,
)
from app.core.database import get_db
from app.modules.classes import service
from app.modules.classes.schemas import (
    ClassCreate,
    ClassResponse,
    ClassUpdate,
    EnrolledStudent,
    EnrollStudentRequest,
)
from app.modules.shared import (
    DataResponse,
    MessageResponse,
    PaginatedResponse,
    Pagination,
    StatusMessage,
    pagination_params,
)

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[ClassResponse],
    summary="List Classes",
)
async def list_classes(
    subject: str | None = Query(None),
    grade_level: str | None = Query(None),
    created_by: str | None = Query(None),
    search: str | None = Query(None, max_length=255),
    pagination: Pagination = Depends(pagination_params),
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ClassResponse]:
    return await service.list_classes(
        db,
        pagination,
        subject=subject,
        grade_level=grade_level,
        created_by=created_by,
        search=search,
    )


@router.get(
    "/teacher/{teacher_id}",
    response_model=PaginatedResponse[ClassResponse],
    summary="List Teacher Classes",
)
async def list_teacher_classes(
    teacher_id: str,
    pagination: Pagination = Depends(pagination_params),
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ClassResponse]:
    return await service.list_classes(db, pagination, created_by=teacher_id)


@router.get(
    "/student/{student_id}",
    response_model=DataResponse[list[ClassResponse]],
    summary="List Student Classes",
)
async def list_student_classes(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[ClassResponse]]:
    ensure_student_access(user, student_id)
    return DataResponse(data=await service.list_student_classes(db, student_id))


@router.get(
    "/{class_id}",
    response_model=DataResponse[ClassResponse],
    summary="Get Class",
)
async def get_class(
    class_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[ClassResponse]:
    school_class = await service.get_class_or_404(db, class_id)
    return DataResponse(data=ClassResponse.model_validate(school_class))


@router.post(
    "",
    response_model=MessageResponse[ClassResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Class",
)
async def create_class(
    data: ClassCreate,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ClassResponse]:
    school_class = await service.create_class(db, user, data)
    return MessageResponse(message="Class created successfully", data=school_class)


@router.put(
    "/{class_id}",
    response_model=MessageResponse[ClassResponse],
    summary="Update Class",
)
async def update_class(
    class_id: str,
    data: ClassUpdate,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[ClassResponse]:
    school_class = await service.update_class(db, user, class_id, data)
    return MessageResponse(message="Class updated successfully", data=school_class)


@router.delete(
    "/{class_id}",
    response_model=StatusMessage,
    summary="Delete Class",
)
async def delete_class(
    class_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> StatusMessage:
    await service.delete_class(db, user, class_id)
    return StatusMessage(message="Class deleted successfully")


@router.get(
    "/{class_id}/students",
    response_model=DataResponse[list[EnrolledStudent]],
    summary="List Class Students",
)
async def list_class_students(
    class_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DataResponse[list[EnrolledStudent]]:
    return DataResponse(data=await service.list_class_students(db, class_id))


@router.post(
    "/{class_id}/students",
    response_model=MessageResponse[EnrolledStudent],
    status_code=status.HTTP_201_CREATED,
    summary="Enroll Student",
)
async def enroll_student(
    class_id: str,
    data: EnrollStudentRequest,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[EnrolledStudent]:
    student = await service.enroll_student(db, user, class_id, data.student_id)
    return MessageResponse(message="Student added to class", data=student)


@router.delete(
    "/{class_id}/students/{student_id}",
    response_model=StatusMessage,
    summary="Remove Student",
)
async def remove_student(
    class_id: str,
    student_id: str,
    user: CurrentUser = Depends(require_teacher),
    db: AsyncSession = Depends(get_db),
) -> StatusMessage:
    await service.remove_student(db, user, class_id, student_id)
    return StatusMessage(message="Student removed from class")
