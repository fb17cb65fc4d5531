"""Payload builders and API shortcuts shared by the endpoint tests."""
from typing import Any, Dict

from httpx import AsyncClient

BRANCHES = "/api/v1/branches"
TEACHERS = "/api/v1/teachers"
CLASSES = "/api/v1/classes"

MONDAY = "שני"
TUESDAY = "שלישי"
SUNDAY = "ראשון"


def branch_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": "Studio A",
        "address": "12 Herzl St",
        "phone": "03-5551234",
        "email": "studio-a@studio.co.il",
        "description": "Main hall",
    }
    payload.update(overrides)
    return payload


def teacher_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": "Dana",
        "phone": "050-1234567",
        "email": "dana@x.com",
        "specialties": ["Hip Hop"],
    }
    payload.update(overrides)
    return payload


def class_payload(branch_id: str, teacher_id: str, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "day": MONDAY,
        "time": "18:00",
        "branch": branch_id,
        "teacher": teacher_id,
        "description": "Hip Hop",
    }
    payload.update(overrides)
    return payload


async def create_branch(client: AsyncClient, headers: Dict[str, str], **overrides: Any) -> Dict[str, Any]:
    resp = await client.post(BRANCHES, json=branch_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def create_teacher(client: AsyncClient, headers: Dict[str, str], **overrides: Any) -> Dict[str, Any]:
    resp = await client.post(TEACHERS, json=teacher_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def create_class(
    client: AsyncClient,
    headers: Dict[str, str],
    branch_id: str,
    teacher_id: str,
    **overrides: Any,
) -> Dict[str, Any]:
    resp = await client.post(CLASSES, json=class_payload(branch_id, teacher_id, **overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]
