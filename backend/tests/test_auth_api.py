"""
Inventory API: Auth Endpoint Tests
====================================

What:  register, login, logout and me over HTTP, plus the bearer guard.

What we test:
    ✅ Registration stores a bcrypt hash, never the plaintext
    ✅ Duplicate email (any case) is rejected
    ✅ Login returns a token and the public user projection only
    ✅ Unknown email and wrong password are indistinguishable
    ✅ Protected routes reject missing, malformed and tampered tokens
"""

import pytest
from sqlalchemy import select

from app.models.user import User
from app.services.token_service import TokenService

REGISTER_BODY = {"nama_user": "Siti", "email": "siti@example.com", "password": "rahasia123"}


async def register(client, **overrides):
    return await client.post("/api/auth/register", json={**REGISTER_BODY, **overrides})


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_success(self, client):
        response = await register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User berhasil didaftarkan"
        assert isinstance(body["id_user"], int)

    @pytest.mark.asyncio
    async def test_password_is_hashed(self, app, client):
        await register(client)

        async with app.state.database.session_factory() as session:
            user = (await session.execute(select(User))).scalar_one()

        assert user.password != "rahasia123"
        assert user.password.startswith("$2b$10$")

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, client):
        await register(client)

        response = await register(client, email="SITI@example.com", nama_user="Siti 2")

        assert response.status_code == 400
        assert response.json()["message"] == "Email sudah terdaftar"

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, client):
        response = await register(client, email="bukan-email")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_missing_field_rejected(self, client):
        response = await client.post("/api/auth/register", json={"email": "a@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Data tidak valid"

    @pytest.mark.asyncio
    async def test_validation_errors_do_not_echo_password(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"email": "a@example.com", "password": "rahasia123"},
        )

        assert response.status_code == 400
        errors = response.json()["details"]["errors"]
        assert errors
        assert all("input" not in error for error in errors)
        assert "rahasia123" not in response.text


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, client):
        await register(client)

        response = await client.post(
            "/api/auth/login",
            json={"email": "siti@example.com", "password": "rahasia123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login berhasil"
        assert body["token"]
        assert body["user"]["email"] == "siti@example.com"
        assert body["user"]["nama_user"] == "Siti"
        assert "password" not in body["user"]

    @pytest.mark.asyncio
    async def test_wrong_password(self, client):
        await register(client)

        response = await client.post(
            "/api/auth/login",
            json={"email": "siti@example.com", "password": "salah"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Email atau password salah"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_unknown_email_same_message(self, client):
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "rahasia123"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Email atau password salah"


class TestProtectedRoutes:

    @pytest.mark.asyncio
    async def test_logout_requires_token(self, client):
        response = await client.post("/api/auth/logout")

        assert response.status_code == 401
        assert response.json()["message"] == "Token tidak ditemukan"

    @pytest.mark.asyncio
    async def test_logout_with_token(self, client, auth_headers):
        response = await client.post("/api/auth/logout", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Logout berhasil"

    @pytest.mark.asyncio
    async def test_me(self, client, auth_headers):
        response = await client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "admin@example.com"

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_rejected(self, client):
        response = await client.get("/api/kategori", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token tidak ditemukan"

    @pytest.mark.asyncio
    async def test_forged_token_rejected(self, client, auth_headers):
        forged = TokenService(secret="some-other-secret-0123456789").issue(1, "admin@example.com")

        response = await client.get("/api/kategori", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token tidak valid"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/kategori", "/api/produk", "/api/stok"])
    async def test_resource_routes_require_token(self, client, path):
        response = await client.get(path)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"
