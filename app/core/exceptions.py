from typing import List, Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(ServiceError):
    """Missing, malformed, tampered or expired credential."""

    def __init__(self, message: str = "Invalid token.") -> None:
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class AuthorizationError(ServiceError):
    """Credential is valid but does not carry the admin role."""

    def __init__(self, message: str = "Access denied. Admin privileges required.") -> None:
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class ValidationError(ServiceError):
    """One or more field constraints failed. `errors` lists every violation."""

    def __init__(self, errors: List[str], message: str = "Validation error") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)
        self.errors = errors


class ConflictError(ServiceError):
    """A uniqueness rule (class slot, teacher email) would be violated."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class NotFoundError(ServiceError):
    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} not found", status.HTTP_404_NOT_FOUND)


def error_body(message: str, errors: Optional[List[str]] = None) -> dict:
    """JSON body shared by every failed response."""
    body = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    return body
