# backend/tests/test_contact_and_auth.py

import pytest

from centre.auth import issue_token, verify_token
from centre.config import settings
from centre.services.notifications import get_notifier

from conftest import FailingNotifier

CONTACT = {
    "name": "Alex",
    "email": "alex@example.com",
    "subject": "Hall hire",
    "message": "Is the main hall free on Saturday?",
}


# ── Contact form ──


def test_contact_form_sends(client, notifier):
    r = client.post("/api/contact-form", json=CONTACT)
    assert r.status_code == 200
    assert r.json()["success"] is True

    kind, message = notifier.sent[0]
    assert kind == "contact"
    assert message.subject == "Hall hire"
    assert message.email == "alex@example.com"


def test_contact_form_validation(client):
    r = client.post("/api/contact-form", json={**CONTACT, "email": "nope"})
    assert r.status_code == 400

    r = client.post("/api/contact-form", json={"name": "Alex"})
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required fields"


@pytest.mark.parametrize("email", ["a@b..c", "a@-x.com"])
def test_contact_form_rejects_malformed_email(client, notifier, email):
    r = client.post("/api/contact-form", json={**CONTACT, "email": email})
    assert r.status_code == 400
    assert notifier.sent == []


def test_contact_form_delivery_failure(app, client):
    app.dependency_overrides[get_notifier] = lambda: FailingNotifier()

    r = client.post("/api/contact-form", json=CONTACT)
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to send message. Please try again later."}


# ── Auth ──


@pytest.fixture
def admin_password(monkeypatch):
    monkeypatch.setattr(settings, "admin_password", "s3cret")
    return "s3cret"


def test_login_sets_cookie(client, admin_password):
    r = client.post("/api/auth/login", json={"username": settings.admin_username, "password": admin_password})
    assert r.status_code == 200
    assert r.json()["token"]
    assert "admin_session" in r.cookies

    # cookie alone authenticates
    r = client.get("/api/auth/session")
    assert r.status_code == 200
    assert r.json()["username"] == settings.admin_username

    client.post("/api/auth/logout")
    client.cookies.clear()
    assert client.get("/api/auth/session").status_code == 401


def test_login_rejects_bad_password(client, admin_password):
    r = client.post("/api/auth/login", json={"username": settings.admin_username, "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


def test_login_disabled_without_password(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_password", None)
    r = client.post("/api/auth/login", json={"username": "admin", "password": ""})
    assert r.status_code == 401


def test_bearer_token(client, admin_headers):
    assert client.get("/api/auth/session", headers=admin_headers).status_code == 200


def test_token_expiry_and_tampering():
    token, expires_at = issue_token(settings.admin_username, ttl_seconds=60, now=1000)
    assert verify_token(token, now=1030).expires_at == expires_at

    with pytest.raises(ValueError):
        verify_token(token, now=1061)
    with pytest.raises(ValueError):
        verify_token(token.replace(settings.admin_username, "mallory", 1), now=1030)
    with pytest.raises(ValueError):
        verify_token("garbage", now=1030)


# ── Health ──


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
