"""
Seed a demo branch, teacher and a few weekly classes for local development.

Idempotent: rows are matched by branch name, teacher email and class slot.
Usage: python -m app.db.seed_demo
"""
import asyncio
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.classes.service import find_conflicting_class
from app.core.enums import ClassLevel, Weekday
from app.core.models import Branch, DanceClass, Teacher
from app.db.schema_check import ensure_schema
from app.db.session import AsyncSessionLocal, engine

DEMO_BRANCH = {
    "name": "Studio A",
    "address": "12 Herzl St, Tel Aviv",
    "phone": "03-5551234",
    "description": "Main studio, two halls",
}

DEMO_TEACHER = {
    "name": "Dana Levi",
    "phone": "050-1234567",
    "email": "dana@studio-demo.co.il",
    "specialties": ["Hip Hop", "Jazz"],
}

DEMO_CLASSES: List[Dict] = [
    {"day": Weekday.SUNDAY, "time": "17:00", "description": "Hip Hop kids", "level": ClassLevel.BEGINNERS},
    {"day": Weekday.MONDAY, "time": "18:00", "description": "Hip Hop", "level": ClassLevel.CONTINUING},
    {"day": Weekday.WEDNESDAY, "time": "19:30", "description": "Jazz", "level": ClassLevel.ADVANCED, "duration": 90},
]


async def seed_demo(db: AsyncSession) -> None:
    branch = (await db.execute(select(Branch).where(Branch.name == DEMO_BRANCH["name"]))).scalar_one_or_none()
    if not branch:
        branch = Branch(**DEMO_BRANCH, is_active=True)
        db.add(branch)
        await db.flush()
        print("Created branch:", branch.name)

    teacher = (
        await db.execute(select(Teacher).where(Teacher.email == DEMO_TEACHER["email"]))
    ).scalar_one_or_none()
    if not teacher:
        teacher = Teacher(**DEMO_TEACHER, is_active=True)
        db.add(teacher)
        await db.flush()
        print("Created teacher:", teacher.email)

    for item in DEMO_CLASSES:
        day = item["day"].value
        if await find_conflicting_class(db, day, item["time"], branch.id):
            print(f"Slot taken, skipping: {day} {item['time']}")
            continue
        db.add(
            DanceClass(
                day=day,
                time=item["time"],
                branch_id=branch.id,
                teacher_id=teacher.id,
                description=item["description"],
                level=item["level"].value,
                duration=item.get("duration", 60),
                max_students=20,
                is_active=True,
            )
        )
        print(f"Created class: {day} {item['time']} {item['description']}")

    await db.commit()
    print("Demo seed done.")


async def main() -> None:
    await ensure_schema()
    async with AsyncSessionLocal() as db:
        try:
            await seed_demo(db)
        except Exception as e:
            await db.rollback()
            print("Error:", e)
            raise
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
