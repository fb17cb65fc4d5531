import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.auth.router import router as auth_router
from app.api.v1.branches.router import router as branches_router
from app.api.v1.classes.classes_router import router as classes_router
from app.api.v1.teachers.router import router as teachers_router
from app.core.config import settings
from app.core.exceptions import AuthenticationError, ServiceError, ValidationError, error_body
from app.core.logging_config import (
    clear_correlation_id,
    get_logger,
    log_api_request,
    set_correlation_id,
    setup_logging,
)
from app.db.schema_check import ensure_schema
from app.db.session import engine, get_db

logger = get_logger(__name__)


def format_validation_errors(errors) -> List[str]:
    """One readable message per violated field, e.g. "maxStudents: Input should be ..."."""
    messages = []
    for err in errors:
        # First loc entry is where the value came from (body, query, path)
        loc = [str(part) for part in err.get("loc", ())[1:]] or [str(err.get("loc", ("body",))[0])]
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{'.'.join(loc)}: {msg}")
    return messages


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"Starting dance studio API ({settings.environment})")
    if settings.auto_create_schema:
        await ensure_schema()
    yield
    await engine.dispose()
    logger.info("Dance studio API stopped")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        errors = exc.errors if isinstance(exc, ValidationError) else None
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, errors),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_body("Validation error", format_validation_errors(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=error_body("Internal server error"))


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="Dance Studio Schedule API", lifespan=lifespan)

    # CORS: allow the studio website to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        cid = set_correlation_id(request.headers.get("X-Request-ID"))
        start = time.perf_counter()
        try:
            response = await call_next(request)
            log_api_request(
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - start) * 1000,
            )
            response.headers["X-Request-ID"] = cid
            return response
        finally:
            clear_correlation_id()

    register_exception_handlers(app)

    # Routers
    app.include_router(auth_router)
    app.include_router(branches_router)
    app.include_router(teachers_router)
    app.include_router(classes_router)

    @app.get("/", tags=["meta"])
    async def root():
        return {
            "service": "Dance Studio Schedule API",
            "status": "active",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "auth": "/api/v1/auth/*",
                "branches": "/api/v1/branches/*",
                "teachers": "/api/v1/teachers/*",
                "classes": "/api/v1/classes/*",
            },
        }

    @app.get("/health", tags=["meta"])
    async def health(db: AsyncSession = Depends(get_db)):
        try:
            await db.execute(text("SELECT 1"))
            db_status = "connected"
        except SQLAlchemyError as e:
            logger.warning(f"Health check database error: {e}")
            db_status = "unavailable"
        return {
            "status": "healthy" if db_status == "connected" else "degraded",
            "database": db_status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()
