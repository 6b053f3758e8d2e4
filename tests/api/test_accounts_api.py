"""Tests for setup, login and user management endpoints."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def admin(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/auth/setup", json={"username": "owner", "password": "s3cret"}
    )
    assert response.status_code == 201
    return response.json()


class TestSetup:
    async def test_setup_required_until_first_admin(self, client: AsyncClient):
        assert (await client.get("/api/auth/setup")).json() == {"setup_required": True}

        await client.post("/api/auth/setup", json={"username": "owner", "password": "pw"})

        assert (await client.get("/api/auth/setup")).json() == {"setup_required": False}

    async def test_first_admin_is_super_admin(self, admin: dict):
        assert admin["username"] == "owner"
        assert admin["role"] == "super_admin"

    async def test_second_setup_conflicts(self, client: AsyncClient, admin: dict):
        response = await client.post(
            "/api/auth/setup", json={"username": "intruder", "password": "pw"}
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "SETUP_ALREADY_COMPLETED"


class TestLogin:
    async def test_login(self, client: AsyncClient, admin: dict):
        response = await client.post(
            "/api/auth/login", json={"username": "owner", "password": "s3cret"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == admin["id"]

    async def test_wrong_password(self, client: AsyncClient, admin: dict):
        response = await client.post(
            "/api/auth/login", json={"username": "owner", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTHENTICATION_FAILED"


class TestUsers:
    async def test_create_list_and_delete(self, client: AsyncClient, admin: dict):
        created = await client.post(
            "/api/users", json={"username": "clerk", "password": "pw"}
        )
        assert created.status_code == 201
        assert created.json()["role"] == "staff"

        names = {u["username"] for u in (await client.get("/api/users")).json()}
        assert names == {"owner", "clerk"}

        response = await client.delete(f"/api/users/{created.json()['id']}")
        assert response.status_code == 204
        assert (await client.delete(f"/api/users/{created.json()['id']}")).status_code == 404

    async def test_duplicate_username(self, client: AsyncClient, admin: dict):
        response = await client.post("/api/users", json={"username": "owner", "password": "pw"})
        assert response.status_code == 409

    async def test_update_role(self, client: AsyncClient, admin: dict):
        clerk = (
            await client.post("/api/users", json={"username": "clerk", "password": "pw"})
        ).json()

        response = await client.put(f"/api/users/{clerk['id']}/role", json={"role": "admin"})

        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    async def test_change_password(self, client: AsyncClient, admin: dict):
        response = await client.put(
            f"/api/users/{admin['id']}/password",
            json={"current_password": "s3cret", "new_password": "fresh"},
        )
        assert response.status_code == 204

        login = await client.post(
            "/api/auth/login", json={"username": "owner", "password": "fresh"}
        )
        assert login.status_code == 200

    async def test_change_password_wrong_current(self, client: AsyncClient, admin: dict):
        response = await client.put(
            f"/api/users/{admin['id']}/password",
            json={"current_password": "guess", "new_password": "fresh"},
        )
        assert response.status_code == 401
