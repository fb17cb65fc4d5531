import secrets
from typing import Optional

from fastapi import status
from jose import JWTError

from app.auth.schemas import AdminInfo, CurrentAdmin, LoginRequest, LoginResponse
from app.auth.security import create_access_token, decode_access_token, verify_password
from app.core.config import settings
from app.core.enums import ADMIN_ROLE
from app.core.exceptions import AuthenticationError, AuthorizationError, ServiceError
from app.core.logging_config import get_logger

logger = get_logger(__name__)

NO_TOKEN_MESSAGE = "Access denied. No token provided."
INVALID_TOKEN_MESSAGE = "Invalid token."
ADMIN_REQUIRED_MESSAGE = "Access denied. Admin privileges required."


def login_admin(payload: LoginRequest) -> LoginResponse:
    """Exchange the configured admin username/password for a 24h admin token."""
    if not payload.username or not payload.password:
        raise ServiceError("Username and password are required", status.HTTP_400_BAD_REQUEST)

    admin_username = settings.admin_username
    admin_password = settings.admin_password
    if not admin_username or not admin_password:
        logger.error("Admin login attempted but ADMIN_USERNAME/ADMIN_PASSWORD are not configured")
        raise AuthenticationError("Invalid credentials")

    username_ok = secrets.compare_digest(payload.username.encode("utf-8"), admin_username.encode("utf-8"))
    password_ok = verify_password(payload.password, admin_password)
    if not (username_ok and password_ok):
        logger.warning(f"Admin login failed for username: {payload.username}")
        raise AuthenticationError("Invalid credentials")

    token = create_access_token(subject={"role": ADMIN_ROLE, "username": admin_username})
    logger.info(f"Admin login successful for: {admin_username}")
    return LoginResponse(
        message="Login successful",
        token=token,
        admin=AdminInfo(username=admin_username, role=ADMIN_ROLE),
    )


def authenticate_admin_token(token: Optional[str]) -> CurrentAdmin:
    """Credential gate: missing -> 401, invalid/expired -> 401, wrong role -> 403."""
    if not token:
        raise AuthenticationError(NO_TOKEN_MESSAGE)

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    if payload.get("role") != ADMIN_ROLE:
        raise AuthorizationError(ADMIN_REQUIRED_MESSAGE)

    username = payload.get("username")
    if not username:
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    return CurrentAdmin(username=username, role=payload["role"])
