from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import require_admin
from app.core.exceptions import NotFoundError
from app.core.schemas import DataResponse, ListResponse, WriteResponse
from app.db.session import get_db

from .schemas import BranchCreate, BranchResponse, BranchSummary, BranchUpdate
from . import service

router = APIRouter(prefix="/api/v1/branches", tags=["branches"])


@router.get("", response_model=ListResponse[BranchSummary])
async def list_branches(db: AsyncSession = Depends(get_db)):
    branches = await service.list_branches(db)
    return ListResponse[BranchSummary](count=len(branches), data=branches)


@router.get(
    "/admin",
    response_model=ListResponse[BranchResponse],
    dependencies=[Depends(require_admin)],
)
async def list_branches_admin(db: AsyncSession = Depends(get_db)):
    branches = await service.list_branches_admin(db)
    return ListResponse[BranchResponse](count=len(branches), data=branches)


@router.get(
    "/admin/{branch_id}",
    response_model=DataResponse[BranchResponse],
    dependencies=[Depends(require_admin)],
)
async def get_branch_admin(branch_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.get_branch(db, branch_id, active_only=False)
    if not obj:
        raise NotFoundError("Branch")
    return DataResponse[BranchResponse](data=obj)


@router.get("/{branch_id}", response_model=DataResponse[BranchResponse])
async def get_branch(branch_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.get_branch(db, branch_id)
    if not obj:
        raise NotFoundError("Branch")
    return DataResponse[BranchResponse](data=obj)


@router.post(
    "",
    response_model=WriteResponse[BranchResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_branch(payload: BranchCreate, db: AsyncSession = Depends(get_db)):
    obj = await service.create_branch(db, payload)
    return WriteResponse[BranchResponse](message="Branch created successfully", data=obj)


@router.put(
    "/{branch_id}",
    response_model=WriteResponse[BranchResponse],
    dependencies=[Depends(require_admin)],
)
async def update_branch(branch_id: UUID, payload: BranchUpdate, db: AsyncSession = Depends(get_db)):
    obj = await service.update_branch(db, branch_id, payload)
    if not obj:
        raise NotFoundError("Branch")
    return WriteResponse[BranchResponse](message="Branch updated successfully", data=obj)


@router.delete(
    "/{branch_id}",
    response_model=WriteResponse[BranchResponse],
    dependencies=[Depends(require_admin)],
)
async def delete_branch(branch_id: UUID, db: AsyncSession = Depends(get_db)):
    obj = await service.delete_branch(db, branch_id)
    if not obj:
        raise NotFoundError("Branch")
    return WriteResponse[BranchResponse](message="Branch deactivated successfully", data=obj)
