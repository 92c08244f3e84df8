"""
Tremu Backend — Auth & User API Tests
=======================================

What we test:
    ✅ register → 201 with the public user fields only
    ✅ duplicate email → 409, case-insensitively
    ✅ malformed bodies → 400 envelope
    ✅ login issues a usable token; bad credentials → 401
    ✅ the auth gate: missing / garbage / expired token → 401
    ✅ GET /api/user/me
"""

from datetime import timedelta

import pytest

from tremu.security import create_access_token


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_success(self, test_client):
        response = await test_client.post(
            "/api/auth/register",
            json={"email": "Alice@Example.com", "name": "  Alice  ", "password": "password123"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["data"]["email"] == "alice@example.com"
        assert body["data"]["name"] == "Alice"
        assert isinstance(body["data"]["id"], int)
        assert "password" not in body["data"]
        assert "passwordHash" not in body["data"]

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, test_client, register_user):
        await register_user("alice@example.com")

        response = await test_client.post(
            "/api/auth/register",
            json={"email": "ALICE@example.com", "name": "Alice", "password": "password123"},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "User with this email already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "not-an-email", "name": "Alice", "password": "password123"},
            {"email": "alice@example.com", "name": "A", "password": "password123"},
            {"email": "alice@example.com", "name": "Alice", "password": "short"},
            {"email": "alice@example.com", "name": "Alice"},
        ],
    )
    async def test_register_invalid_payload(self, test_client, payload):
        response = await test_client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid request")


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client, register_user):
        user = await register_user("bob@example.com", "Bob")

        response = await test_client.post(
            "/api/auth/login",
            json={"email": "bob@example.com", "password": "password123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["user"] == {"id": user["id"], "email": "bob@example.com", "name": "Bob"}
        assert body["data"]["token"]

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_client, register_user):
        await register_user("bob@example.com")

        response = await test_client.post(
            "/api/auth/login",
            json={"email": "bob@example.com", "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_login_unknown_email_same_message(self, test_client):
        response = await test_client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestAuthGate:

    @pytest.mark.asyncio
    async def test_no_token(self, test_client):
        response = await test_client.get("/api/boards")

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"

    @pytest.mark.asyncio
    async def test_wrong_scheme(self, test_client):
        response = await test_client.get("/api/boards", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"

    @pytest.mark.asyncio
    async def test_garbage_token(self, test_client):
        response = await test_client.get(
            "/api/boards", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401
        body = response.json()
        assert body["message"] == "Invalid token"
        assert body["error"]

    @pytest.mark.asyncio
    async def test_expired_token(self, test_client, register_user):
        user = await register_user("carol@example.com")
        token = create_access_token(user["id"], expires_delta=timedelta(seconds=-5))

        response = await test_client.get(
            "/api/user/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"


class TestCurrentUser:

    @pytest.mark.asyncio
    async def test_me(self, test_client, make_user):
        user, headers = await make_user("dave@example.com", "Dave")

        response = await test_client.get("/api/user/me", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "User retrieved successfully"
        assert body["data"] == {"id": user["id"], "email": "dave@example.com", "name": "Dave"}

    @pytest.mark.asyncio
    async def test_me_for_deleted_user(self, test_client):
        token = create_access_token(999)

        response = await test_client.get(
            "/api/user/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"
