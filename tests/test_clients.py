"""
Client endpoint tests.
"""

import uuid

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_client(auth_client: AsyncClient):
    response = await auth_client.post(
        "/clients",
        json={
            "firstName": "Grace",
            "lastName": "Hopper",
            "phoneNumber": "0601020304",
            "email": "grace@example.com",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["firstName"] == "Grace"
    assert data["lastName"] == "Hopper"
    assert data["phoneNumber"] == "0601020304"
    assert data["email"] == "grace@example.com"
    uuid.UUID(data["id"])


@pytest.mark.asyncio
async def test_create_client_blank_email(auth_client: AsyncClient):
    response = await auth_client.post(
        "/clients",
        json={"firstName": "Grace", "lastName": "Hopper", "email": ""},
    )

    assert response.status_code == 201
    assert response.json()["email"] is None


@pytest.mark.asyncio
async def test_create_client_validation_error(auth_client: AsyncClient):
    response = await auth_client.post("/clients", json={"firstName": "Grace"})

    assert response.status_code == 422
    body = response.json()
    assert body["message"]
    assert any("lastName" in e["field"] for e in body["errors"])


@pytest.mark.asyncio
async def test_list_clients_in_insertion_order(auth_client: AsyncClient, create_client):
    await create_client("A", "One")
    await create_client("B", "Two")
    await create_client("C", "Three")

    response = await auth_client.get("/clients")

    assert response.status_code == 200
    assert [c["firstName"] for c in response.json()] == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_search_clients(auth_client: AsyncClient, create_client):
    await create_client("Alan", "Turing", email="alan@example.com")
    await create_client("Edsger", "Dijkstra")

    response = await auth_client.get("/clients", params={"search": "turing"})

    assert [c["lastName"] for c in response.json()] == ["Turing"]


@pytest.mark.asyncio
async def test_get_client(auth_client: AsyncClient, create_client):
    created = await create_client()

    response = await auth_client.get(f"/clients/{created['id']}")

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_get_client_malformed_id(auth_client: AsyncClient):
    response = await auth_client.get("/clients/not-an-id")

    assert response.status_code == 400
    assert "not-an-id" in response.json()["message"]


@pytest.mark.asyncio
async def test_get_client_not_found(auth_client: AsyncClient):
    response = await auth_client.get(f"/clients/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"message": "Client not found"}


@pytest.mark.asyncio
async def test_update_client(auth_client: AsyncClient, create_client):
    created = await create_client()

    response = await auth_client.put(
        f"/clients/{created['id']}",
        json={"phoneNumber": "0700000000"},
    )

    assert response.status_code == 200
    assert response.json()["matchedCount"] == 1
    assert response.json()["modifiedCount"] == 1

    fetched = (await auth_client.get(f"/clients/{created['id']}")).json()
    assert fetched["phoneNumber"] == "0700000000"
    assert fetched["firstName"] == created["firstName"]


@pytest.mark.asyncio
async def test_update_client_unchanged(auth_client: AsyncClient, create_client):
    created = await create_client()

    response = await auth_client.put(
        f"/clients/{created['id']}",
        json={"firstName": created["firstName"]},
    )

    assert response.status_code == 200
    assert response.json()["modifiedCount"] == 0


@pytest.mark.asyncio
async def test_update_client_rejects_null_names(auth_client: AsyncClient, create_client):
    created = await create_client()

    for field in ("firstName", "lastName"):
        response = await auth_client.put(f"/clients/{created['id']}", json={field: None})

        assert response.status_code == 422
        assert response.json()["message"] == "Request validation failed"

    fetched = (await auth_client.get(f"/clients/{created['id']}")).json()
    assert fetched["firstName"] == created["firstName"]
    assert fetched["lastName"] == created["lastName"]


@pytest.mark.asyncio
async def test_update_missing_client(auth_client: AsyncClient):
    response = await auth_client.put(f"/clients/{uuid.uuid4()}", json={"firstName": "X"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_client_cascades(auth_client: AsyncClient, create_client, create_device, create_job):
    """Two devices, one with a job and one without: all of it goes."""
    owner = await create_client()
    other = await create_client("Other", "Client")
    with_job = await create_device(owner["id"], "laptop")
    without_job = await create_device(owner["id"], "phone")
    kept_device = await create_device(other["id"], "tablet")
    await create_job(owner["id"], with_job["id"], issue="screen")
    kept_job = await create_job(other["id"], kept_device["id"], issue="battery")

    response = await auth_client.delete(f"/clients/{owner['id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["clientDeletionCount"] == 1
    assert data["deviceDeletionCount"] == 2
    assert data["jobsDeletionCount"] == 1

    devices = (await auth_client.get("/devices")).json()
    assert [d["id"] for d in devices] == [kept_device["id"]]
    assert without_job["id"] not in [d["id"] for d in devices]

    jobs = (await auth_client.get("/repairs")).json()
    assert [j["id"] for j in jobs] == [kept_job["id"]]

    assert (await auth_client.get(f"/clients/{owner['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_client_without_devices(auth_client: AsyncClient, create_client):
    created = await create_client()

    response = await auth_client.delete(f"/clients/{created['id']}")

    assert response.status_code == 200
    assert response.json()["deviceDeletionCount"] == 0


@pytest.mark.asyncio
async def test_delete_missing_client(auth_client: AsyncClient):
    response = await auth_client.delete(f"/clients/{uuid.uuid4()}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_client_malformed_id(auth_client: AsyncClient):
    response = await auth_client.delete("/clients/123")

    assert response.status_code == 400
