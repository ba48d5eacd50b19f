"""Tests for token issuance and verification."""

import pytest
from httpx import ASGITransport, AsyncClient

from cashflow.auth_router import create_access_token
from cashflow.config import settings
from cashflow.dependencies import get_db
from cashflow.main import app


@pytest.fixture
def raw_client(db):
    """Client without the current-user override, so real tokens are checked."""
    app.dependency_overrides[get_db] = lambda: db
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_login_returns_token(raw_client: AsyncClient):
    async with raw_client as ac:
        response = await ac.post(
            "/api/v1/auth/login",
            json={"username": settings.auth_username, "password": settings.auth_password},
        )

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    assert response.json()["access_token"]


@pytest.mark.asyncio
async def test_login_with_wrong_password(raw_client: AsyncClient):
    async with raw_client as ac:
        response = await ac.post(
            "/api/v1/auth/login",
            json={"username": settings.auth_username, "password": "wrong"},
        )

    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(raw_client: AsyncClient):
    async with raw_client as ac:
        response = await ac.get("/api/v1/dashboard/")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_is_unauthorized(raw_client: AsyncClient):
    token = create_access_token("user-1", expires_minutes=-5)

    async with raw_client as ac:
        response = await ac.get(
            "/api/v1/dashboard/", headers={"Authorization": f"Bearer {token}"}
        )

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


@pytest.mark.asyncio
async def test_valid_token_reaches_handler(raw_client: AsyncClient):
    token = create_access_token("fresh-user")

    async with raw_client as ac:
        response = await ac.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

    # Authenticated, but this subject has not registered yet.
    assert response.status_code == 400
    assert response.json()["error"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_health(raw_client: AsyncClient):
    async with raw_client as ac:
        response = await ac.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
