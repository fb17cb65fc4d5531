"""Helpers shared by the entity services (branches, teachers, classes)."""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.core.logging_config import get_logger

logger = get_logger(__name__)

M = TypeVar("M")


@asynccontextmanager
async def store_guard(db: AsyncSession, action: str) -> AsyncIterator[None]:
    """Turn any unexpected store failure into ServiceError("Error <action>", 500).

    `action` reads like "creating class" or "fetching teachers". Errors that
    were already mapped (conflicts, validation) pass through untouched.
    """
    try:
        yield
    except ServiceError:
        raise
    except Exception as e:
        # Covers SQLAlchemyError and driver-level failures (refused connection, OSError)
        logger.exception(f"Store error while {action}")
        try:
            await db.rollback()
        except Exception as rollback_error:
            logger.warning(f"Rollback after failed {action} also failed: {rollback_error}")
        raise ServiceError(f"Error {action}") from e


async def get_by_id(
    db: AsyncSession,
    model: Type[M],
    obj_id: UUID,
    active_only: bool = False,
) -> Optional[M]:
    obj = await db.get(model, obj_id)
    if obj is None:
        return None
    if active_only and not obj.is_active:
        return None
    return obj


async def soft_delete(db: AsyncSession, model: Type[M], obj_id: UUID) -> Optional[M]:
    """Deactivate a row instead of removing it. Returns None when it does not exist."""
    obj = await db.get(model, obj_id)
    if obj is None:
        return None
    obj.is_active = False
    await db.commit()
    await db.refresh(obj)
    logger.info(f"Deactivated {model.__tablename__} {obj_id}")
    return obj
