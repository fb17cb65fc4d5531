from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import require_admin
from app.core.exceptions import NotFoundError
from app.core.schemas import DataResponse, ListResponse, WriteResponse
from app.db.session import get_db

from .schemas import TeacherCreate, TeacherResponse, TeacherSummary, TeacherUpdate
from . import service

router = APIRouter(prefix="/api/v1/teachers", tags=["teachers"])


@router.get("", response_model=ListResponse[TeacherSummary])
async def list_teachers(db: AsyncSession = Depends(get_db)):
    teachers = await service.list_teachers(db)
    return ListResponse[TeacherSummary](count=len(teachers), data=teachers)


@router.get(
    "/admin",
    response_model=ListResponse[TeacherResponse],
    dependencies=[Depends(require_admin)],
)
async def list_teachers_admin(db: AsyncSession = Depends(get_db)):
    teachers = await service.list_teachers_admin(db)
    return ListResponse[TeacherResponse](count=len(teachers), data=teachers)


@router.get(
    "/admin/{teacher_id}",
    response_model=DataResponse[TeacherResponse],
    dependencies=[Depends(require_admin)],
)
async def get_teacher_admin(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.get_teacher(db, teacher_id, active_only=False)
    if not obj:
        raise NotFoundError("Teacher")
    return DataResponse[TeacherResponse](data=obj)


@router.get("/{teacher_id}", response_model=DataResponse[TeacherResponse])
async def get_teacher(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.get_teacher(db, teacher_id)
    if not obj:
        raise NotFoundError("Teacher")
    return DataResponse[TeacherResponse](data=obj)


@router.post(
    "",
    response_model=WriteResponse[TeacherResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_teacher(payload: TeacherCreate, db: AsyncSession = Depends(get_db)):
    obj = await service.create_teacher(db, payload)
    return WriteResponse[TeacherResponse](message="Teacher created successfully", data=obj)


@router.put(
    "/{teacher_id}",
    response_model=WriteResponse[TeacherResponse],
    dependencies=[Depends(require_admin)],
)
async def update_teacher(teacher_id: UUID, payload: TeacherUpdate, db: AsyncSession = Depends(get_db)):
    obj = await service.update_teacher(db, teacher_id, payload)
    if not obj:
        raise NotFoundError("Teacher")
    return WriteResponse[TeacherResponse](message="Teacher updated successfully", data=obj)


@router.delete(
    "/{teacher_id}",
    response_model=WriteResponse[TeacherResponse],
    dependencies=[Depends(require_admin)],
)
async def delete_teacher(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.delete_teacher(db, teacher_id)
    if not obj:
        raise NotFoundError("Teacher")
    return WriteResponse[TeacherResponse](message="Teacher deactivated successfully", data=obj)
