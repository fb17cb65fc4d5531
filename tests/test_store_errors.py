"""Store failures surface as the 500 envelope named after the failed action."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.db.session import get_db
from app.main import app

from factories import CLASSES, TEACHERS, class_payload


class UnreachableSession(AsyncSession):
    """Session whose database refuses every connection."""

    async def execute(self, *args, **kwargs):
        raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 1)")

    async def get(self, *args, **kwargs):
        raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 1)")


class BrokenSession(AsyncSession):
    """Session whose database is reachable but errors on every statement."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    async def scalar(self, *args, **kwargs):
        raise OperationalError("SELECT count(*)", {}, Exception("disk I/O error"))


def _use_session_class(engine: AsyncEngine, session_class) -> None:
    session_factory = async_sessionmaker(bind=engine, class_=session_class, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db


@pytest.mark.asyncio
async def test_unreachable_store_on_read(client: AsyncClient, engine: AsyncEngine) -> None:
    _use_session_class(engine, UnreachableSession)

    response = await client.get(CLASSES)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error fetching classes"}

    response = await client.get(f"{CLASSES}/schedule")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error fetching classes"}


@pytest.mark.asyncio
async def test_unreachable_store_on_write(client: AsyncClient, engine: AsyncEngine, admin_headers) -> None:
    _use_session_class(engine, UnreachableSession)
    some_id = "00000000-0000-4000-8000-000000000000"

    response = await client.post(CLASSES, json=class_payload(some_id, some_id), headers=admin_headers)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error creating class"}


@pytest.mark.asyncio
async def test_database_error_on_read(client: AsyncClient, engine: AsyncEngine) -> None:
    _use_session_class(engine, BrokenSession)

    response = await client.get(TEACHERS)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error fetching teachers"}


@pytest.mark.asyncio
async def test_database_error_on_stats(client: AsyncClient, engine: AsyncEngine, admin_headers) -> None:
    _use_session_class(engine, BrokenSession)

    response = await client.get(f"{CLASSES}/admin/stats", headers=admin_headers)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error fetching statistics"}
