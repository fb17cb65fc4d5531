from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging_config import get_logger
from app.core.models import Branch
from app.core.services import get_by_id, soft_delete, store_guard

from .schemas import BranchCreate, BranchResponse, BranchSummary, BranchUpdate

logger = get_logger(__name__)


def _branch_to_response(b: Branch) -> BranchResponse:
    return BranchResponse.model_validate(b)


async def list_branches(db: AsyncSession) -> List[BranchSummary]:
    """Public listing: active branches only, name and address."""
    async with store_guard(db, "fetching branches"):
        result = await db.execute(
            select(Branch).where(Branch.is_active.is_(True)).order_by(Branch.name)
        )
        return [BranchSummary.model_validate(b) for b in result.scalars().all()]


async def list_branches_admin(db: AsyncSession) -> List[BranchResponse]:
    async with store_guard(db, "fetching branches"):
        result = await db.execute(select(Branch).order_by(Branch.name))
        return [_branch_to_response(b) for b in result.scalars().all()]


async def get_branch(
    db: AsyncSession,
    branch_id: UUID,
    active_only: bool = True,
) -> Optional[BranchResponse]:
    async with store_guard(db, "fetching branch"):
        obj = await get_by_id(db, Branch, branch_id, active_only=active_only)
        return _branch_to_response(obj) if obj else None


async def create_branch(db: AsyncSession, payload: BranchCreate) -> BranchResponse:
    async with store_guard(db, "creating branch"):
        obj = Branch(
            name=payload.name,
            address=payload.address,
            phone=payload.phone,
            email=payload.email,
            description=payload.description,
            is_active=True,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
        logger.info(f"Created branch {obj.id} ({obj.name})")
        return _branch_to_response(obj)


async def update_branch(
    db: AsyncSession,
    branch_id: UUID,
    payload: BranchUpdate,
) -> Optional[BranchResponse]:
    async with store_guard(db, "updating branch"):
        obj = await db.get(Branch, branch_id)
        if not obj:
            return None
        obj.name = payload.name
        obj.address = payload.address
        obj.phone = payload.phone
        obj.email = payload.email
        obj.description = payload.description
        obj.is_active = payload.is_active
        await db.commit()
        await db.refresh(obj)
        logger.info(f"Updated branch {obj.id}")
        return _branch_to_response(obj)


async def delete_branch(db: AsyncSession, branch_id: UUID) -> Optional[BranchResponse]:
    async with store_guard(db, "deleting branch"):
        obj = await soft_delete(db, Branch, branch_id)
        return _branch_to_response(obj) if obj else None
