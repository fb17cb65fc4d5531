from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import Select, case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.enums import WEEKDAY_LABELS
from app.core.exceptions import ConflictError, ValidationError
from app.core.logging_config import get_logger
from app.core.models import Branch, DanceClass, Teacher
from app.core.services import soft_delete, store_guard

from .schemas import BranchCount, ClassCreate, ClassResponse, ClassStats, ClassUpdate, DayCount

logger = get_logger(__name__)

SLOT_TAKEN = "A class is already scheduled at this time and branch"
SLOT_TAKEN_BY_OTHER = "Another class is already scheduled at this time and branch"

# Sunday..Saturday rather than alphabetical order of the labels
WEEKDAY_ORDER = case(
    {label: i for i, label in enumerate(WEEKDAY_LABELS)},
    value=DanceClass.day,
)


def _class_to_response(c: DanceClass) -> ClassResponse:
    return ClassResponse.model_validate(c)


def _with_refs(stmt: Select) -> Select:
    """Read-time join: embed teacher and branch summaries in the result."""
    return stmt.options(selectinload(DanceClass.branch), selectinload(DanceClass.teacher))


def _public(stmt: Select) -> Select:
    """Classes visible to the public: active, with an active branch and teacher."""
    return (
        stmt.join(Branch, DanceClass.branch_id == Branch.id)
        .join(Teacher, DanceClass.teacher_id == Teacher.id)
        .where(
            DanceClass.is_active.is_(True),
            Branch.is_active.is_(True),
            Teacher.is_active.is_(True),
        )
    )


async def _load_class(db: AsyncSession, class_id: UUID) -> Optional[DanceClass]:
    stmt = _with_refs(select(DanceClass).where(DanceClass.id == class_id))
    result = await db.execute(stmt.execution_options(populate_existing=True))
    return result.scalar_one_or_none()


async def find_conflicting_class(
    db: AsyncSession,
    day: str,
    time: str,
    branch_id: UUID,
    exclude_id: Optional[UUID] = None,
) -> Optional[DanceClass]:
    """Return an active class already holding (day, time, branch), if any."""
    stmt = select(DanceClass).where(
        DanceClass.day == day,
        DanceClass.time == time,
        DanceClass.branch_id == branch_id,
        DanceClass.is_active.is_(True),
    )
    if exclude_id is not None:
        stmt = stmt.where(DanceClass.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none()


async def _check_references(db: AsyncSession, branch_id: UUID, teacher_id: UUID) -> None:
    """Second validation pass, run once the body itself is valid.

    Field errors are reported first; unknown references show up on the next
    attempt, both listed together when both are missing.
    """
    errors: List[str] = []
    if await db.get(Branch, branch_id) is None:
        errors.append("branch: Branch not found")
    if await db.get(Teacher, teacher_id) is None:
        errors.append("teacher: Teacher not found")
    if errors:
        raise ValidationError(errors)


async def list_classes(
    db: AsyncSession,
    branch_id: Optional[UUID] = None,
    day: Optional[str] = None,
) -> List[ClassResponse]:
    async with store_guard(db, "fetching classes"):
        stmt = _with_refs(_public(select(DanceClass)))
        if branch_id is not None:
            stmt = stmt.where(DanceClass.branch_id == branch_id)
        if day is not None:
            stmt = stmt.where(DanceClass.day == day)
        result = await db.execute(stmt.order_by(WEEKDAY_ORDER, DanceClass.time))
        return [_class_to_response(c) for c in result.scalars().all()]


async def list_classes_admin(db: AsyncSession) -> List[ClassResponse]:
    async with store_guard(db, "fetching classes"):
        stmt = _with_refs(select(DanceClass)).order_by(WEEKDAY_ORDER, DanceClass.time)
        result = await db.execute(stmt)
        return [_class_to_response(c) for c in result.scalars().all()]


async def get_schedule(
    db: AsyncSession,
    branch_id: Optional[UUID] = None,
) -> Dict[str, List[ClassResponse]]:
    """Public classes grouped under every weekday label, in week order."""
    classes = await list_classes(db, branch_id=branch_id)
    schedule: Dict[str, List[ClassResponse]] = {label: [] for label in WEEKDAY_LABELS}
    for c in classes:
        schedule[c.day].append(c)
    return schedule


async def get_class(
    db: AsyncSession,
    class_id: UUID,
    active_only: bool = True,
) -> Optional[ClassResponse]:
    async with store_guard(db, "fetching class"):
        stmt = select(DanceClass).where(DanceClass.id == class_id)
        if active_only:
            stmt = _public(stmt)
        result = await db.execute(_with_refs(stmt))
        obj = result.scalar_one_or_none()
        return _class_to_response(obj) if obj else None


async def get_stats(db: AsyncSession) -> ClassStats:
    async with store_guard(db, "fetching statistics"):
        active = DanceClass.is_active.is_(True)

        total = await db.scalar(select(func.count(DanceClass.id)).where(active))

        by_day_rows = await db.execute(
            select(DanceClass.day, func.count(DanceClass.id)).where(active).group_by(DanceClass.day)
        )
        by_day = dict(by_day_rows.all())

        by_branch_rows = await db.execute(
            select(Branch.name, func.count(DanceClass.id))
            .select_from(DanceClass)
            .join(Branch, DanceClass.branch_id == Branch.id)
            .where(active)
            .group_by(Branch.id, Branch.name)
            .order_by(func.count(DanceClass.id).desc(), Branch.name)
        )

        return ClassStats(
            total_classes=total or 0,
            classes_by_day=[
                DayCount(day=label, count=by_day[label]) for label in WEEKDAY_LABELS if label in by_day
            ],
            classes_by_branch=[
                BranchCount(branch=name, count=count) for name, count in by_branch_rows.all()
            ],
        )


async def create_class(db: AsyncSession, payload: ClassCreate) -> ClassResponse:
    day = payload.day.value
    async with store_guard(db, "creating class"):
        await _check_references(db, payload.branch, payload.teacher)
        if await find_conflicting_class(db, day, payload.time, payload.branch):
            logger.warning(f"Rejected class create, slot taken: {day} {payload.time} branch={payload.branch}")
            raise ConflictError(SLOT_TAKEN)

        obj = DanceClass(
            day=day,
            time=payload.time,
            branch_id=payload.branch,
            teacher_id=payload.teacher,
            description=payload.description,
            level=payload.level.value if payload.level else None,
            max_students=payload.max_students,
            duration=payload.duration,
            is_active=True,
        )
        db.add(obj)
        try:
            await db.commit()
        except IntegrityError:
            # Another writer took the slot between the check and the insert;
            # uq_class_active_slot rejected this one.
            await db.rollback()
            logger.warning(f"Slot index rejected class create: {day} {payload.time} branch={payload.branch}")
            raise ConflictError(SLOT_TAKEN)

        logger.info(f"Created class {obj.id} ({obj.formatted_schedule})")
        return _class_to_response(await _load_class(db, obj.id))


async def update_class(
    db: AsyncSession,
    class_id: UUID,
    payload: ClassUpdate,
) -> Optional[ClassResponse]:
    day = payload.day.value
    async with store_guard(db, "updating class"):
        obj = await db.get(DanceClass, class_id)
        if not obj:
            return None
        await _check_references(db, payload.branch, payload.teacher)
        # An inactive row never holds a slot, so only an active result is checked.
        if payload.is_active and await find_conflicting_class(
            db, day, payload.time, payload.branch, exclude_id=class_id
        ):
            logger.warning(f"Rejected class {class_id} update, slot taken: {day} {payload.time}")
            raise ConflictError(SLOT_TAKEN_BY_OTHER)

        obj.day = day
        obj.time = payload.time
        obj.branch_id = payload.branch
        obj.teacher_id = payload.teacher
        obj.description = payload.description
        obj.level = payload.level.value if payload.level else None
        obj.max_students = payload.max_students
        obj.duration = payload.duration
        obj.is_active = payload.is_active
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ConflictError(SLOT_TAKEN_BY_OTHER)

        logger.info(f"Updated class {class_id} ({obj.formatted_schedule})")
        return _class_to_response(await _load_class(db, class_id))


async def delete_class(db: AsyncSession, class_id: UUID) -> Optional[ClassResponse]:
    """Soft delete. The (day, time, branch) slot becomes free for a new class."""
    async with store_guard(db, "deleting class"):
        obj = await soft_delete(db, DanceClass, class_id)
        if not obj:
            return None
        return _class_to_response(await _load_class(db, class_id))
