from datetime import datetime
from typing import Annotated, Any, List
from uuid import UUID

from pydantic import EmailStr, Field, StringConstraints, field_validator

from app.core.schemas import CamelModel

PHONE_PATTERN = r"^[0-9\-\+\s\(\)]+$"

Specialty = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class TeacherCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=50, pattern=PHONE_PATTERN)
    email: EmailStr
    specialties: List[Specialty] = Field(default_factory=list)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("specialties", mode="before")
    @classmethod
    def coerce_specialties(cls, v: Any) -> Any:
        """Accept a single specialty string or null as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        return v


class TeacherUpdate(TeacherCreate):
    """Full replace: omitted specialties become empty, is_active defaults to true."""

    is_active: bool = True


class TeacherSummary(CamelModel):
    """Public projection, also embedded in class responses."""

    id: UUID
    name: str
    specialties: List[str] = Field(default_factory=list)


class TeacherResponse(CamelModel):
    id: UUID
    name: str
    phone: str
    email: str
    specialties: List[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime
    updated_at: datetime
