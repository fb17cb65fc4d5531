from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import require_admin
from app.core.enums import Weekday
from app.core.exceptions import NotFoundError
from app.core.schemas import DataResponse, ListResponse, WriteResponse
from app.db.session import get_db

from .schemas import ClassCreate, ClassResponse, ClassStats, ClassUpdate, Schedule
from . import service

router = APIRouter(prefix="/api/v1/classes", tags=["classes"])


@router.get("", response_model=ListResponse[ClassResponse])
async def list_classes(
    branch: Optional[UUID] = Query(None, description="Only classes at this branch"),
    day: Optional[Weekday] = Query(None, description="Only classes on this weekday"),
    db: AsyncSession = Depends(get_db),
):
    classes = await service.list_classes(
        db, branch_id=branch, day=day.value if day else None
    )
    return ListResponse[ClassResponse](count=len(classes), data=classes)


@router.get("/schedule", response_model=DataResponse[Schedule])
async def get_schedule(
    branch: Optional[UUID] = Query(None, description="Only classes at this branch"),
    db: AsyncSession = Depends(get_db),
):
    """Active classes grouped by weekday, Sunday first. Every day is present."""
    schedule = await service.get_schedule(db, branch_id=branch)
    return DataResponse[Schedule](data=schedule)


@router.get(
    "/admin",
    response_model=ListResponse[ClassResponse],
    dependencies=[Depends(require_admin)],
)
async def list_classes_admin(db: AsyncSession = Depends(get_db)):
    classes = await service.list_classes_admin(db)
    return ListResponse[ClassResponse](count=len(classes), data=classes)


@router.get(
    "/admin/stats",
    response_model=DataResponse[ClassStats],
    dependencies=[Depends(require_admin)],
)
async def get_stats(db: AsyncSession = Depends(get_db)):
    stats = await service.get_stats(db)
    return DataResponse[ClassStats](data=stats)


@router.get(
    "/admin/{class_id}",
    response_model=DataResponse[ClassResponse],
    dependencies=[Depends(require_admin)],
)
async def get_class_admin(class_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.get_class(db, class_id, active_only=False)
    if not obj:
        raise NotFoundError("Class")
    return DataResponse[ClassResponse](data=obj)


@router.get("/{class_id}", response_model=DataResponse[ClassResponse])
async def get_class(class_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.get_class(db, class_id)
    if not obj:
        raise NotFoundError("Class")
    return DataResponse[ClassResponse](data=obj)


@router.post(
    "",
    response_model=WriteResponse[ClassResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_class(payload: ClassCreate, db: AsyncSession = Depends(get_db)):
    obj = await service.create_class(db, payload)
    return WriteResponse[ClassResponse](message="Class created successfully", data=obj)


@router.put(
    "/{class_id}",
    response_model=WriteResponse[ClassResponse],
    dependencies=[Depends(require_admin)],
)
async def update_class(class_id: UUID, payload: ClassUpdate, db: AsyncSession = Depends(get_db)):
    obj = await service.update_class(db, class_id, payload)
    if not obj:
        raise NotFoundError("Class")
    return WriteResponse[ClassResponse](message="Class updated successfully", data=obj)


@router.delete(
    "/{class_id}",
    response_model=WriteResponse[ClassResponse],
    dependencies=[Depends(require_admin)],
)
async def delete_class(class_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.delete_class(db, class_id)
    if not obj:
        raise NotFoundError("Class")
    return WriteResponse[ClassResponse](message="Class deactivated successfully", data=obj)
