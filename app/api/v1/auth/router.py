from typing import Optional

from fastapi import APIRouter, Depends
from fastapi import status as http_status
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm

from app.auth.dependencies import oauth2_scheme
from app.auth.schemas import AdminInfo, LoginRequest, LoginResponse, VerifyResponse
from app.auth.services import authenticate_admin_token, login_admin
from app.core.exceptions import AuthenticationError, AuthorizationError

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(payload: LoginRequest) -> LoginResponse:
    return login_admin(payload)


@router.post("/login-oauth")
async def login_oauth(form_data: OAuth2PasswordRequestForm = Depends()):
    """Form-encoded login used by the interactive docs' Authorize button."""
    result = login_admin(LoginRequest(username=form_data.username.strip(), password=form_data.password))
    return {
        "access_token": result.token,
        "token_type": "bearer",
    }


@router.get(
    "/verify",
    response_model=VerifyResponse,
    responses={401: {"description": "Invalid or missing token"}, 403: {"description": "Not an admin token"}},
)
async def verify(token: Optional[str] = Depends(oauth2_scheme)):
    if not token:
        return _invalid(http_status.HTTP_401_UNAUTHORIZED, "No token provided")
    try:
        admin = authenticate_admin_token(token)
    except AuthorizationError:
        return _invalid(http_status.HTTP_403_FORBIDDEN, "Invalid role")
    except AuthenticationError:
        return _invalid(http_status.HTTP_401_UNAUTHORIZED, "Invalid token")
    return VerifyResponse(valid=True, admin=AdminInfo(username=admin.username, role=admin.role))


def _invalid(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"valid": False, "message": message})
