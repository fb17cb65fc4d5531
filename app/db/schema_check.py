"""
Create any missing tables for the schedule store.

Runs at startup when AUTO_CREATE_SCHEMA is set, or by hand:
  python -m app.db.schema_check
"""
import asyncio

from sqlalchemy.ext.asyncio import AsyncEngine

import app.core.models  # noqa: F401  (registers the tables on Base.metadata)
from app.core.logging_config import get_logger
from app.db.session import Base, engine

logger = get_logger(__name__)


async def ensure_schema(db_engine: AsyncEngine = engine) -> None:
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Schema ready: {', '.join(sorted(Base.metadata.tables))}")


async def main() -> None:
    await ensure_schema()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
