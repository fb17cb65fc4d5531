import re
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.api.v1.branches.schemas import BranchSummary
from app.api.v1.teachers.schemas import TeacherSummary
from app.core.enums import ClassLevel, Weekday
from app.core.schemas import CamelModel

TIME_24H = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def _normalize_time(v: Any) -> Any:
    """Validate 24-hour H:MM / HH:MM and return zero-padded HH:MM."""
    if not isinstance(v, str):
        return v
    v = v.strip()
    if not TIME_24H.match(v):
        raise ValueError("Please enter time in HH:MM format")
    hours, minutes = v.split(":")
    return f"{int(hours):02d}:{minutes}"


class ClassCreate(CamelModel):
    day: Weekday
    time: str
    branch: UUID
    teacher: UUID
    description: str = Field(..., min_length=1, max_length=200)
    level: Optional[ClassLevel] = None
    max_students: int = Field(20, ge=1, le=50)
    duration: int = Field(60, ge=30, le=180, description="Minutes")

    @field_validator("time", mode="before")
    @classmethod
    def parse_time(cls, v: Any) -> Any:
        return _normalize_time(v)


class ClassUpdate(ClassCreate):
    """Full replace: omitted fields fall back to their defaults."""

    is_active: bool = True


class ClassResponse(CamelModel):
    id: UUID
    day: str
    time: str
    formatted_schedule: str
    branch: Optional[BranchSummary] = None
    teacher: Optional[TeacherSummary] = None
    description: str
    level: Optional[str] = None
    max_students: int
    duration: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class DayCount(BaseModel):
    day: str
    count: int


class BranchCount(BaseModel):
    branch: str
    count: int


class ClassStats(CamelModel):
    total_classes: int
    classes_by_day: List[DayCount]
    classes_by_branch: List[BranchCount]


# Every weekday label maps to its (possibly empty) list of classes.
Schedule = Dict[str, List[ClassResponse]]
