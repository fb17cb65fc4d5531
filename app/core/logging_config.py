"""
Loguru setup with a per-request correlation id.

The id lives in a ContextVar so every record logged while a request is being
handled carries it, including records from the service layer.
"""

import sys
import uuid
from contextvars import ContextVar
from typing import Any, Dict, Optional

from loguru import logger

from app.core.config import settings

correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

CONSOLE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | "
    "cid={extra[correlation_id]} | {message}"
)

_configured = False


def _add_correlation_id(record: Dict[str, Any]) -> None:
    record["extra"]["correlation_id"] = correlation_id.get() or "none"
    record["extra"]["environment"] = settings.environment


def setup_logging() -> None:
    """Replace loguru's default sink. Safe to call more than once."""
    global _configured
    if _configured:
        return

    logger.remove()
    # Patched on every record, so any sink sees the request id
    logger.configure(patcher=_add_correlation_id)
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=settings.log_level.upper(),
        serialize=settings.environment == "production",
        backtrace=False,
        diagnose=settings.environment == "development",
    )
    _configured = True


def get_logger(name: Optional[str] = None):
    """Get the configured logger instance, bound to the calling module name."""
    setup_logging()
    if name:
        return logger.bind(module=name)
    return logger


def set_correlation_id(cid: Optional[str] = None) -> str:
    if not cid:
        cid = str(uuid.uuid4())
    correlation_id.set(cid)
    return cid


def clear_correlation_id() -> None:
    correlation_id.set(None)


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    logger.info(
        "{method} {path} -> {status_code} ({duration_ms:.1f} ms)",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )
