from __future__ import annotations

import time

import jwt
import pytest
from fastapi.testclient import TestClient

TEST_JWT_SECRET = "test-jwt-secret"


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "Europe/Paris")
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
    monkeypatch.delenv("ADMIN_EMAILS", raising=False)
    monkeypatch.delenv("ADMIN_SESSION_COOKIE", raising=False)
    monkeypatch.delenv("MAX_UPLOAD_BYTES", raising=False)
    monkeypatch.delenv("STORAGE_BUCKET", raising=False)
    monkeypatch.delenv("LOGIN_URL", raising=False)


@pytest.fixture
def make_token():
    def _make(
        *,
        sub: str = "6f1c2d3e-0000-4000-8000-000000000001",
        email: str = "coach@myswing.app",
        role: str | None = "admin",
        audience: str = "authenticated",
        expires_in: int = 3600,
        secret: str = TEST_JWT_SECRET,
    ) -> str:
        now = int(time.time())
        payload = {
            "sub": sub,
            "email": email,
            "aud": audience,
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
            "app_metadata": {"provider": "email", **({"role": role} if role else {})},
        }
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def client():
    from swing_admin.main import app

    app.dependency_overrides.clear()
    # No `with`: the lifespan (DB pool) is not started in tests.
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    from swing_admin.auth import dependencies
    from swing_admin.auth.schemas import AdminUser

    admin = AdminUser(id="admin-1", email="admin@myswing.app")

    async def _admin():
        return admin

    client.app.dependency_overrides[dependencies.get_current_admin] = _admin
    client.app.dependency_overrides[dependencies.get_optional_admin] = _admin
    return client
