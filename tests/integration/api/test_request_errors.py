import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_missing_token(client: AsyncClient, studio):
    response = await client.get(f"/bookings/{studio.session_id}")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"


@pytest.mark.asyncio
async def test_invalid_token(client: AsyncClient, studio):
    response = await client.get(
        f"/bookings/{studio.session_id}",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"


@pytest.mark.asyncio
async def test_malformed_json(client: AsyncClient, studio):
    response = await client.post(
        "/bookings",
        content=b"{not json",
        headers={**studio.member_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_json"


@pytest.mark.asyncio
async def test_missing_fields(client: AsyncClient, studio):
    response = await client.post(
        "/bookings",
        json={"tenant_id": str(studio.tenant_id)},
        headers=studio.member_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "missing_fields"
