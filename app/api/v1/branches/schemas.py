from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.core.schemas import CamelModel


class BranchCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None


class BranchUpdate(BranchCreate):
    """Full replace: omitted optional fields are cleared, is_active defaults to true."""

    is_active: bool = True


class BranchSummary(CamelModel):
    """Public projection, also embedded in class responses."""

    id: UUID
    name: str
    address: Optional[str] = None


class BranchResponse(CamelModel):
    id: UUID
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
