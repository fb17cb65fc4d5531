from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from app.auth.schemas import CurrentAdmin
from app.auth.services import authenticate_admin_token

# auto_error=False: a missing header must reach the gate so it gets the
# studio's own 401 message instead of FastAPI's default.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login-oauth", auto_error=False)


async def require_admin(token: Optional[str] = Depends(oauth2_scheme)) -> CurrentAdmin:
    """Resolve the admin identity from the bearer token or reject the request."""
    return authenticate_admin_token(token)
