"""Tests for exchange / info / feedback submissions."""
import logging

import pytest
from werkzeug.security import generate_password_hash

from app.rpv import create_app
from app.rpv.db import session_scope
from app.rpv.models import Base, User, UserRole


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")

    app = create_app()
    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        s.add(User(username="own", password=generate_password_hash("pw1234"), role=UserRole.owner))

    return app.test_client()


def _login(client):
    client.post("/login", data={"username": "own", "password": "pw1234"})


def _csrf(client):
    with client.session_transaction() as sess:
        sess.setdefault("csrf_token", "test-csrf")
        return sess["csrf_token"]


@pytest.mark.parametrize("path", ["/exchange", "/info", "/feedback"])
def test_forms_require_auth(client, path):
    r = client.get(path)
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/login")


@pytest.mark.parametrize("path", ["/exchange", "/info", "/feedback"])
def test_forms_render(client, path):
    _login(client)
    r = client.get(path)
    assert r.status_code == 200
    assert b"<form" in r.data


def test_feedback_is_logged(client, caplog):
    _login(client)
    with caplog.at_level(logging.INFO):
        r = client.post(
            "/feedback",
            json={"rating": "5", "comments": "Lovely week at the lake"},
            headers={"X-CSRF-Token": _csrf(client)},
        )
    assert r.status_code == 200
    assert r.json == {"success": True, "message": "Thank you for your feedback."}
    assert "Lovely week at the lake" in caplog.text


def test_exchange_submission_ok(client):
    _login(client)
    r = client.post(
        "/exchange",
        data={"property_name": "Mammoth", "requested_dates": "2026-08-01 to 2026-08-08"},
        headers={"X-CSRF-Token": _csrf(client)},
    )
    assert r.status_code == 200
    assert r.json["success"] is True


def test_empty_submission_is_rejected(client):
    _login(client)
    r = client.post("/info", data={"subject": "  "}, headers={"X-CSRF-Token": _csrf(client)})
    assert r.status_code == 400
    assert r.json["success"] is False
