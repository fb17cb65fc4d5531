import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.teachers import service as teacher_service
from app.core.models import Teacher

from factories import TEACHERS, create_teacher, teacher_payload


@pytest.mark.asyncio
async def test_create_teacher_normalizes_fields(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        TEACHERS,
        json=teacher_payload(email="  Dana@X.com ", specialties="Jazz"),
        headers=admin_headers,
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "dana@x.com"
    assert data["specialties"] == ["Jazz"]
    assert data["isActive"] is True


@pytest.mark.asyncio
async def test_validation_reports_every_field(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        TEACHERS,
        json={
            "name": "x" * 101,
            "phone": "call me",
            "email": "not-an-email",
            "specialties": ["y" * 51],
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation error"
    fields = {e.split(":")[0] for e in body["errors"]}
    assert {"name", "phone", "email", "specialties.0"} <= fields


@pytest.mark.asyncio
async def test_email_block_survives_soft_delete(client: AsyncClient, admin_headers) -> None:
    first = await create_teacher(client, admin_headers, email="a@b.com")

    second = await client.post(TEACHERS, json=teacher_payload(name="Noa", email="a@b.com"), headers=admin_headers)
    assert second.status_code == 400
    assert second.json() == {"success": False, "message": "Teacher with this email already exists"}

    deleted = await client.delete(f"{TEACHERS}/{first['id']}", headers=admin_headers)
    assert deleted.status_code == 200

    third = await client.post(TEACHERS, json=teacher_payload(name="Maya", email="A@B.com"), headers=admin_headers)
    assert third.status_code == 400


@pytest.mark.asyncio
async def test_update_into_taken_email_is_rejected(client: AsyncClient, admin_headers) -> None:
    await create_teacher(client, admin_headers, email="dana@x.com")
    noa = await create_teacher(client, admin_headers, name="Noa", email="noa@x.com")

    response = await client.put(
        f"{TEACHERS}/{noa['id']}",
        json=teacher_payload(name="Noa", email="dana@x.com"),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Another teacher with this email already exists"

    # Keeping its own email is fine
    response = await client.put(
        f"{TEACHERS}/{noa['id']}",
        json=teacher_payload(name="Noa Cohen", email="noa@x.com"),
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Noa Cohen"


@pytest.mark.asyncio
async def test_update_replaces_specialties(client: AsyncClient, admin_headers) -> None:
    dana = await create_teacher(client, admin_headers, specialties=["Hip Hop", "Jazz"])

    payload = teacher_payload()
    del payload["specialties"]
    response = await client.put(f"{TEACHERS}/{dana['id']}", json=payload, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["specialties"] == []


@pytest.mark.asyncio
async def test_public_and_admin_listings(client: AsyncClient, admin_headers) -> None:
    dana = await create_teacher(client, admin_headers)
    await create_teacher(client, admin_headers, name="Avi", email="avi@x.com")
    await client.delete(f"{TEACHERS}/{dana['id']}", headers=admin_headers)

    public = (await client.get(TEACHERS)).json()
    assert public["count"] == 1
    assert public["data"][0]["name"] == "Avi"
    assert set(public["data"][0]) == {"id", "name", "specialties"}

    admin = (await client.get(f"{TEACHERS}/admin", headers=admin_headers)).json()
    assert [t["name"] for t in admin["data"]] == ["Avi", "Dana"]
    assert "email" in admin["data"][0]

    assert (await client.get(f"{TEACHERS}/{dana['id']}")).status_code == 404
    assert (await client.get(f"{TEACHERS}/admin/{dana['id']}", headers=admin_headers)).status_code == 200


@pytest.mark.asyncio
async def test_unique_index_backs_up_email_check(
    client: AsyncClient, admin_headers, db_session: AsyncSession, monkeypatch
) -> None:
    await create_teacher(client, admin_headers, email="dana@x.com")

    # Simulate a concurrent writer that passed the pre-check
    async def no_conflict(*args, **kwargs):
        return None

    monkeypatch.setattr(teacher_service, "find_teacher_with_email", no_conflict)

    response = await client.post(TEACHERS, json=teacher_payload(name="Dup"), headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Teacher with this email already exists"


@pytest.mark.asyncio
async def test_email_unique_constraint_in_store(db_session: AsyncSession) -> None:
    db_session.add(Teacher(name="A", phone="1", email="same@x.com", specialties=[], is_active=False))
    await db_session.commit()

    db_session.add(Teacher(name="B", phone="2", email="same@x.com", specialties=[]))
    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()
