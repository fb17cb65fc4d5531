from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Both optional so a missing field is reported as 400 by the service,
    # not as a generic validation error.
    username: Optional[str] = None
    password: Optional[str] = None


class AdminInfo(BaseModel):
    username: str
    role: str


class LoginResponse(BaseModel):
    message: str
    token: str
    admin: AdminInfo


class VerifyResponse(BaseModel):
    valid: bool
    admin: AdminInfo


class CurrentAdmin(AdminInfo):
    """Decoded admin identity attached to admin-only handlers."""
