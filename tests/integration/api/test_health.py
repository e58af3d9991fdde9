"""Integration tests for health endpoints."""

import unittest.mock as mock

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "PlayerPath Notifier"


@pytest.mark.asyncio
async def test_ready_when_database_reachable(client: AsyncClient) -> None:
    with mock.patch(
        "playerpath.infrastructure.persistence.database.DatabaseManager.is_reachable",
        new=mock.AsyncMock(return_value=True),
    ):
        response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"
    assert response.json()["email"] in ("configured", "not_configured")


@pytest.mark.asyncio
async def test_not_ready_when_database_unreachable(client: AsyncClient) -> None:
    with mock.patch(
        "playerpath.infrastructure.persistence.database.DatabaseManager.is_reachable",
        new=mock.AsyncMock(return_value=False),
    ):
        response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
