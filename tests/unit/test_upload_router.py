from __future__ import annotations

import base64

import pytest

from swing_admin.core import storage

PNG_DATA_URI = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16).decode()


@pytest.fixture
def fake_storage(monkeypatch):
    uploads = []

    async def fake_upload(**kwargs):
        uploads.append(kwargs)
        return {"Key": f"{kwargs['bucket']}/{kwargs['path']}"}

    monkeypatch.setattr(storage, "upload_object", fake_upload)
    return uploads


def test_upload_requires_token(client, fake_storage):
    resp = client.post("/api/upload/image", json={"file": PNG_DATA_URI, "fileName": "a.png"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Missing Authorization header."}
    assert fake_storage == []


def test_upload_rejects_non_admin(client, fake_storage, make_token):
    resp = client.post(
        "/api/upload/image",
        json={"file": PNG_DATA_URI, "fileName": "a.png"},
        headers={"Authorization": f"Bearer {make_token(role=None)}"},
    )
    assert resp.status_code == 403
    assert resp.json() == {"error": "Admin access required."}
    assert fake_storage == []


def test_upload_with_admin_token(client, fake_storage, make_token):
    resp = client.post(
        "/api/upload/image",
        json={"file": PNG_DATA_URI, "fileName": "photo du swing.PNG"},
        headers={"Authorization": f"Bearer {make_token()}"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"url", "path"}
    assert body["path"].startswith("messages/")
    assert body["path"].endswith("-photo_du_swing.PNG")
    assert body["url"] == f"https://demo.supabase.co/storage/v1/object/public/Images/{body['path']}"
    assert fake_storage[0]["content_type"] == "image/png"


def test_upload_with_session_cookie(client, fake_storage, make_token):
    client.cookies.set("sb-access-token", make_token())
    resp = client.post("/api/upload/image", json={"file": PNG_DATA_URI, "file_name": "a.gif"})
    assert resp.status_code == 200
    assert fake_storage[0]["content_type"] == "image/gif"


def test_only_post_is_allowed(admin_client):
    resp = admin_client.get("/api/upload/image")
    assert resp.status_code == 405
    assert resp.headers["allow"] == "POST"
    assert "error" in resp.json()


def test_other_methods_check_admin_first(client, make_token):
    assert client.get("/api/upload/image").status_code == 401

    resp = client.delete(
        "/api/upload/image",
        headers={"Authorization": f"Bearer {make_token(role=None)}"},
    )
    assert resp.status_code == 403

    resp = client.put("/api/upload/image", headers={"Authorization": f"Bearer {make_token()}"})
    assert resp.status_code == 405
    assert resp.headers["allow"] == "POST"


@pytest.mark.parametrize(
    "payload",
    [
        {"fileName": "a.png"},
        {"file": PNG_DATA_URI},
        {"file": "", "fileName": ""},
        {"file": None, "fileName": "a.png"},
        {"file": PNG_DATA_URI, "fileName": None},
        {},
    ],
)
def test_missing_fields_are_rejected(admin_client, fake_storage, payload):
    resp = admin_client.post("/api/upload/image", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "File and file name are required."}
    assert fake_storage == []


def test_storage_failure_is_reported(admin_client, monkeypatch):
    async def failing_upload(**_kwargs):
        raise storage.StorageError("Bucket not found")

    monkeypatch.setattr(storage, "upload_object", failing_upload)

    resp = admin_client.post("/api/upload/image", json={"file": PNG_DATA_URI, "fileName": "a.png"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Upload failed: Bucket not found"}


def test_unexpected_failure_is_reported(admin_client, monkeypatch):
    async def broken_upload(**_kwargs):
        raise KeyError("boom")

    monkeypatch.setattr(storage, "upload_object", broken_upload)

    resp = admin_client.post("/api/upload/image", json={"file": PNG_DATA_URI, "fileName": "a.png"})
    assert resp.status_code == 500
    assert "error" in resp.json()


def test_oversized_upload_is_rejected(admin_client, fake_storage, monkeypatch):
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "8")

    resp = admin_client.post("/api/upload/image", json={"file": PNG_DATA_URI, "fileName": "a.png"})
    assert resp.status_code == 413
    assert resp.json() == {"error": "File too large. Max is 8 bytes."}
    assert fake_storage == []


def test_invalid_base64_is_rejected(admin_client, fake_storage):
    resp = admin_client.post("/api/upload/image", json={"file": "data:image/png;base64,!!!", "fileName": "a.png"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "File is not valid base64 data."}
