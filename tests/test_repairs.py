"""
Repair job endpoint tests.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from repairdesk.core.config import settings


def parse_utc(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@pytest.mark.asyncio
async def test_submit_job_creates_client_and_device(auth_client: AsyncClient):
    response = await auth_client.post(
        "/repairs",
        json={
            "client": {"_id": "new", "firstName": "A", "lastName": "B", "email": "a@b.fr"},
            "device": {"type": "laptop", "brand": "Asus"},
            "job": {"status": "status1", "emergencyLevel": "High", "issue": "no boot"},
        },
    )

    assert response.status_code == 201
    job = response.json()
    assert job["uniqueCode"] == f"{settings.CODE_PREFIX}1"
    assert job["status"] == "status1"
    assert job["emergencyLevel"] == "High"
    assert job["exitDate"] is None

    clients = (await auth_client.get("/clients")).json()
    devices = (await auth_client.get("/devices")).json()
    assert len(clients) == 1
    assert len(devices) == 1
    assert devices[0]["clientId"] == clients[0]["id"]
    assert job["deviceId"] == devices[0]["id"]


@pytest.mark.asyncio
async def test_submit_job_reuses_existing_entities(auth_client: AsyncClient, create_client, create_device):
    owner = await create_client()
    device = await create_device(owner["id"])

    response = await auth_client.post(
        "/repairs",
        json={
            "client": {"_id": owner["id"]},
            "device": {"_id": device["id"]},
            "job": {"issue": "fan noise"},
        },
    )

    assert response.status_code == 201
    job = response.json()
    assert job["deviceId"] == device["id"]
    assert job["status"] == settings.JOB_STATUSES[0]
    assert job["emergencyLevel"] == "Low"
    assert len((await auth_client.get("/clients")).json()) == 1
    assert len((await auth_client.get("/devices")).json()) == 1


@pytest.mark.asyncio
async def test_new_device_is_owned_by_existing_client(auth_client: AsyncClient, create_client):
    owner = await create_client()

    response = await auth_client.post(
        "/repairs",
        json={
            "client": {"_id": owner["id"]},
            "device": {"_id": "new", "type": "phone"},
            "job": {},
        },
    )

    assert response.status_code == 201
    devices = (await auth_client.get("/devices")).json()
    assert devices[0]["clientId"] == owner["id"]


@pytest.mark.asyncio
async def test_job_codes_increase(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])

    codes = [(await create_job(owner["id"], device["id"]))["uniqueCode"] for _ in range(4)]

    prefix = settings.CODE_PREFIX
    assert codes == [f"{prefix}{n}" for n in range(1, 5)]


@pytest.mark.asyncio
async def test_entry_date_is_now(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])

    job = await create_job(owner["id"], device["id"])

    entry = parse_utc(job["entryDate"])
    assert abs(datetime.now(timezone.utc) - entry) < timedelta(minutes=1)


@pytest.mark.asyncio
async def test_submit_job_unknown_device_rolls_back(auth_client: AsyncClient):
    """A failing step undoes the implicit client creation."""
    response = await auth_client.post(
        "/repairs",
        json={
            "client": {"_id": "new", "firstName": "A", "lastName": "B"},
            "device": {"_id": str(uuid.uuid4())},
            "job": {},
        },
    )

    assert response.status_code == 404
    assert (await auth_client.get("/clients")).json() == []


@pytest.mark.asyncio
async def test_submit_job_new_client_requires_names(auth_client: AsyncClient):
    response = await auth_client.post(
        "/repairs",
        json={"client": {"_id": "new"}, "device": {"type": "laptop"}, "job": {}},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_submit_job_rejects_unknown_status(auth_client: AsyncClient, create_client, create_device):
    owner = await create_client()
    device = await create_device(owner["id"])

    response = await auth_client.post(
        "/repairs",
        json={
            "client": {"_id": owner["id"]},
            "device": {"_id": device["id"]},
            "job": {"status": "teleported"},
        },
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_submit_job_rejects_unknown_emergency_level(auth_client: AsyncClient, create_client, create_device):
    owner = await create_client()
    device = await create_device(owner["id"])

    response = await auth_client.post(
        "/repairs",
        json={
            "client": {"_id": owner["id"]},
            "device": {"_id": device["id"]},
            "job": {"emergencyLevel": "Critical"},
        },
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_repair(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])
    job = await create_job(owner["id"], device["id"])

    response = await auth_client.get(f"/repairs/{job['id']}")

    assert response.status_code == 200
    assert response.json()["uniqueCode"] == job["uniqueCode"]


@pytest.mark.asyncio
async def test_list_repairs_by_device(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    laptop = await create_device(owner["id"], "laptop")
    phone = await create_device(owner["id"], "phone")
    await create_job(owner["id"], laptop["id"])
    phone_job = await create_job(owner["id"], phone["id"])

    response = await auth_client.get("/repairs", params={"deviceId": phone["id"]})

    assert [j["id"] for j in response.json()] == [phone_job["id"]]


@pytest.mark.asyncio
async def test_update_repair(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    laptop = await create_device(owner["id"], "laptop")
    phone = await create_device(owner["id"], "phone")
    job = await create_job(owner["id"], laptop["id"], issue="old")

    response = await auth_client.put(
        f"/repairs/{job['id']}",
        json={
            "client": {"_id": owner["id"]},
            "device": {"_id": phone["id"]},
            "job": {"issue": "new", "notes": "checked", "status": "status3", "emergencyLevel": "Medium"},
        },
    )

    assert response.status_code == 200
    updated = (await auth_client.get(f"/repairs/{job['id']}")).json()
    assert updated["deviceId"] == phone["id"]
    assert updated["issue"] == "new"
    assert updated["notes"] == "checked"
    assert updated["status"] == "status3"
    assert updated["emergencyLevel"] == "Medium"
    assert updated["uniqueCode"] == job["uniqueCode"]
    assert updated["entryDate"] == job["entryDate"]


@pytest.mark.asyncio
async def test_update_repair_never_creates_entities(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])
    job = await create_job(owner["id"], device["id"])

    response = await auth_client.put(
        f"/repairs/{job['id']}",
        json={
            "client": {"_id": "new", "firstName": "X", "lastName": "Y"},
            "device": {"_id": device["id"]},
            "job": {},
        },
    )

    assert response.status_code == 400
    assert len((await auth_client.get("/clients")).json()) == 1


@pytest.mark.asyncio
async def test_update_repair_rejects_device_of_another_client(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client("Ada", "Lovelace")
    other = await create_client("Alan", "Turing")
    device = await create_device(owner["id"], "laptop")
    foreign = await create_device(other["id"], "phone")
    job = await create_job(owner["id"], device["id"])

    response = await auth_client.put(
        f"/repairs/{job['id']}",
        json={
            "client": {"_id": owner["id"]},
            "device": {"_id": foreign["id"]},
            "job": {"issue": "swapped"},
        },
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Device does not belong to the given client"
    unchanged = (await auth_client.get(f"/repairs/{job['id']}")).json()
    assert unchanged["deviceId"] == device["id"]
    assert unchanged["issue"] != "swapped"


@pytest.mark.asyncio
async def test_update_repair_unknown_device(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])
    job = await create_job(owner["id"], device["id"])

    response = await auth_client.put(
        f"/repairs/{job['id']}",
        json={
            "client": {"_id": owner["id"]},
            "device": {"_id": str(uuid.uuid4())},
            "job": {},
        },
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_missing_repair(auth_client: AsyncClient, create_client, create_device):
    owner = await create_client()
    device = await create_device(owner["id"])

    response = await auth_client.put(
        f"/repairs/{uuid.uuid4()}",
        json={"client": {"_id": owner["id"]}, "device": {"_id": device["id"]}, "job": {}},
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Repair job not found"


@pytest.mark.asyncio
async def test_complete_sets_exit_date(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])
    job = await create_job(owner["id"], device["id"])

    response = await auth_client.put(
        f"/repairs_status/{job['id']}",
        json={"status": settings.terminal_status},
    )

    assert response.status_code == 200
    updated = (await auth_client.get(f"/repairs/{job['id']}")).json()
    assert updated["status"] == settings.terminal_status
    exit_date = parse_utc(updated["exitDate"])
    assert abs(datetime.now(timezone.utc) - exit_date) < timedelta(minutes=1)


@pytest.mark.asyncio
async def test_explicit_exit_date_wins(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])
    job = await create_job(owner["id"], device["id"])

    response = await auth_client.put(
        f"/repairs_status/{job['id']}",
        json={"status": settings.terminal_status, "exitDate": "2026-01-02T10:00:00Z"},
    )

    assert response.status_code == 200
    updated = (await auth_client.get(f"/repairs/{job['id']}")).json()
    assert parse_utc(updated["exitDate"]) == datetime(2026, 1, 2, 10, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_intermediate_status_leaves_exit_date(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])
    job = await create_job(owner["id"], device["id"], status="status3")

    response = await auth_client.put(f"/repairs_status/{job['id']}", json={"status": "status2"})

    assert response.status_code == 200
    updated = (await auth_client.get(f"/repairs/{job['id']}")).json()
    assert updated["status"] == "status2"
    assert updated["exitDate"] is None


@pytest.mark.asyncio
async def test_status_of_missing_job(auth_client: AsyncClient):
    response = await auth_client.put(f"/repairs_status/{uuid.uuid4()}", json={"status": "status2"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_repair(auth_client: AsyncClient, create_client, create_device, create_job):
    owner = await create_client()
    device = await create_device(owner["id"])
    job = await create_job(owner["id"], device["id"])

    response = await auth_client.delete(f"/repairs/{job['id']}")

    assert response.status_code == 200
    assert response.json()["deletedCount"] == 1
    assert (await auth_client.get(f"/repairs/{job['id']}")).status_code == 404
    # the device is untouched
    assert (await auth_client.get(f"/devices/{device['id']}")).status_code == 200


@pytest.mark.asyncio
async def test_delete_missing_repair(auth_client: AsyncClient):
    response = await auth_client.delete(f"/repairs/{uuid.uuid4()}")

    assert response.status_code == 404
