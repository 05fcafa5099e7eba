import smtplib
import sqlite3
from unittest.mock import Mock

from modion.adapters.smtp_email import SMTPEmailAdapter
from modion.api.deps import get_email_adapter
from modion.api.main import app


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


# --- Contact ---


def test_contact(client, email_adapter):
    resp = client.post(
        "/api/contact",
        json={"name": "Ann", "email": "ann@example.com", "subject": "Hi", "message": "Hello"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "Message received and email sent."}
    assert email_adapter.get_last_email().subject == "Thanks for Contacting Us"


def test_contact_missing_fields(client, email_adapter):
    resp = client.post("/api/contact", json={"name": "Ann", "email": "ann@example.com"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "All fields are required."}
    assert email_adapter.email_count == 0


def test_contact_email_failure(client, email_adapter):
    email_adapter.fail_with = "connection refused"
    resp = client.post(
        "/api/contact",
        json={"name": "Ann", "email": "ann@example.com", "subject": "Hi", "message": "Hello"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"message": "Something went wrong. Try again later."}


def test_contact_rejects_header_injection(client, db_path, monkeypatch):
    smtp = Mock()
    monkeypatch.setattr(smtplib, "SMTP", smtp)
    app.dependency_overrides[get_email_adapter] = lambda: SMTPEmailAdapter("smtp.example.com")

    resp = client.post(
        "/api/contact",
        json={
            "name": "Ann",
            "email": "ann@example.com\r\nBcc: victim@evil.com",
            "subject": "Hi",
            "message": "Hello",
        },
    )

    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid email format"}
    smtp.assert_not_called()
    with sqlite3.connect(db_path) as conn:
        assert conn.execute("SELECT COUNT(*) FROM contact_messages").fetchone()[0] == 0


# --- Subscribe ---


def test_subscribe_once(client, email_adapter):
    first = client.post("/api/subscribe", json={"email": "Reader@Example.com"})
    assert first.status_code == 201
    assert first.json() == {"message": "Subscription successful!"}
    assert email_adapter.get_last_email().recipient == "reader@example.com"

    again = client.post("/api/subscribe", json={"email": "  reader@example.COM "})
    assert again.status_code == 409
    assert again.json() == {"message": "You're already subscribed"}


def test_subscribe_requires_email(client):
    resp = client.post("/api/subscribe", json={})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Email is required"}


def test_subscribe_invalid_email(client):
    resp = client.post("/api/subscribe", json={"email": "not-an-email"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid email format"}


def test_subscribe_email_failure(client, email_adapter):
    email_adapter.fail_with = "timeout"
    resp = client.post("/api/subscribe", json={"email": "reader@example.com"})
    assert resp.status_code == 500
    assert resp.json() == {"message": "Something went wrong"}
