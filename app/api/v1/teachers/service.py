from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError
from app.core.logging_config import get_logger
from app.core.models import Teacher
from app.core.services import get_by_id, soft_delete, store_guard

from .schemas import TeacherCreate, TeacherResponse, TeacherSummary, TeacherUpdate

logger = get_logger(__name__)

EMAIL_TAKEN = "Teacher with this email already exists"
EMAIL_TAKEN_BY_OTHER = "Another teacher with this email already exists"


def _teacher_to_response(t: Teacher) -> TeacherResponse:
    return TeacherResponse.model_validate(t)


async def find_teacher_with_email(
    db: AsyncSession,
    email: str,
    exclude_id: Optional[UUID] = None,
) -> Optional[Teacher]:
    """Email uniqueness check. Deactivated teachers still hold their email."""
    stmt = select(Teacher).where(Teacher.email == email)
    if exclude_id is not None:
        stmt = stmt.where(Teacher.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none()


async def list_teachers(db: AsyncSession) -> List[TeacherSummary]:
    """Public listing: active teachers only, name and specialties."""
    async with store_guard(db, "fetching teachers"):
        result = await db.execute(
            select(Teacher).where(Teacher.is_active.is_(True)).order_by(Teacher.name)
        )
        return [TeacherSummary.model_validate(t) for t in result.scalars().all()]


async def list_teachers_admin(db: AsyncSession) -> List[TeacherResponse]:
    async with store_guard(db, "fetching teachers"):
        result = await db.execute(select(Teacher).order_by(Teacher.name))
        return [_teacher_to_response(t) for t in result.scalars().all()]


async def get_teacher(
    db: AsyncSession,
    teacher_id: UUID,
    active_only: bool = True,
) -> Optional[TeacherResponse]:
    async with store_guard(db, "fetching teacher"):
        obj = await get_by_id(db, Teacher, teacher_id, active_only=active_only)
        return _teacher_to_response(obj) if obj else None


async def create_teacher(db: AsyncSession, payload: TeacherCreate) -> TeacherResponse:
    async with store_guard(db, "creating teacher"):
        if await find_teacher_with_email(db, payload.email):
            logger.warning(f"Rejected teacher create, email in use: {payload.email}")
            raise ConflictError(EMAIL_TAKEN)
        obj = Teacher(
            name=payload.name,
            phone=payload.phone,
            email=payload.email,
            specialties=list(payload.specialties),
            is_active=True,
        )
        db.add(obj)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race with a concurrent create; uq_teacher_email caught it.
            await db.rollback()
            raise ConflictError(EMAIL_TAKEN)
        await db.refresh(obj)
        logger.info(f"Created teacher {obj.id} ({obj.email})")
        return _teacher_to_response(obj)


async def update_teacher(
    db: AsyncSession,
    teacher_id: UUID,
    payload: TeacherUpdate,
) -> Optional[TeacherResponse]:
    async with store_guard(db, "updating teacher"):
        obj = await db.get(Teacher, teacher_id)
        if not obj:
            return None
        if await find_teacher_with_email(db, payload.email, exclude_id=teacher_id):
            logger.warning(f"Rejected teacher {teacher_id} update, email in use: {payload.email}")
            raise ConflictError(EMAIL_TAKEN_BY_OTHER)
        obj.name = payload.name
        obj.phone = payload.phone
        obj.email = payload.email
        obj.specialties = list(payload.specialties)
        obj.is_active = payload.is_active
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ConflictError(EMAIL_TAKEN_BY_OTHER)
        await db.refresh(obj)
        logger.info(f"Updated teacher {obj.id}")
        return _teacher_to_response(obj)


async def delete_teacher(db: AsyncSession, teacher_id: UUID) -> Optional[TeacherResponse]:
    async with store_guard(db, "deleting teacher"):
        obj = await soft_delete(db, Teacher, teacher_id)
        return _teacher_to_response(obj) if obj else None
