from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings


def _engine_options(database_url: str) -> dict:
    """Pool settings for a server database; sqlite files get the driver defaults."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    # pool_pre_ping: drop connections the server closed while idle.
    # pool_recycle: never reuse a connection older than 5 minutes.
    return {"pool_pre_ping": True, "pool_recycle": 300}


engine = create_async_engine(
    settings.database_url,
    echo=settings.log_level.upper() == "DEBUG",
    **_engine_options(settings.database_url),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed when the response is sent."""
    async with AsyncSessionLocal() as session:
        yield session
