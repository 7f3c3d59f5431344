"""Tests for the Owner Directory module."""
import pytest
from werkzeug.security import generate_password_hash

from app.rpv import create_app
from app.rpv.db import session_scope
from app.rpv.models import Base, User, UserRole
from app.rpv.modules.owner_directory.models import Owner
from app.rpv.modules.owner_directory.service import list_owners


def _seed_owners(s):
    owners = [
        Owner(primaryownerfirstname="John", primaryownerlastname="Smith", contact_info="555-0100", email="john@example.com"),
        Owner(
            primaryownerfirstname="Mary",
            primaryownerlastname="Jones",
            secondaryownerfirstname="Pat",
            secondaryownerlastname="Smithers",
        ),
        Owner(primaryownerfirstname="Ann", primaryownerlastname="Lee", secondaryownerfirstname="", secondaryownerlastname=""),
        Owner(primaryownerfirstname="Bob", primaryownerlastname="Brown", notes="Prefers winter weeks"),
    ]
    s.add_all(owners)
    return owners


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")

    app = create_app()
    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        s.add(User(username="mgr", password=generate_password_hash("pw1234"), role=UserRole.manager))
        s.add(User(username="own", password=generate_password_hash("pw1234"), role=UserRole.owner))
        _seed_owners(s)
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


def _login(client, username):
    client.post("/login", data={"username": username, "password": "pw1234"})


def _csrf(client):
    with client.session_transaction() as sess:
        sess.setdefault("csrf_token", "test-csrf")
        return sess["csrf_token"]


def _post(client, url, data=None):
    return client.post(url, data=data or {}, headers={"X-CSRF-Token": _csrf(client)})


def _owner_count(app):
    with session_scope(app) as s:
        return s.query(Owner).count()


# ---------- Listing & search ----------

def test_directory_requires_auth(client):
    r = client.get("/directory")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/login")


def test_directory_lists_display_names(client):
    _login(client, "own")
    r = client.get("/directory")
    assert r.status_code == 200
    assert b"John Smith" in r.data
    assert b"Mary Jones and Pat Smithers" in r.data
    assert b"Ann Lee and" not in r.data


def test_directory_search_filters(client):
    _login(client, "own")
    r = client.get("/directory?search=brown")
    assert r.status_code == 200
    assert b"Bob Brown" in r.data
    assert b"John Smith" not in r.data


def test_list_owners_without_term_is_ordered_by_id(app):
    with session_scope(app) as s:
        owners = list_owners(s)
        assert [o.owner_id for o in owners] == sorted(o.owner_id for o in owners)
        assert len(owners) == 4


def test_list_owners_search_is_case_insensitive_across_name_fields(app):
    with session_scope(app) as s:
        names = [o.primaryownerfirstname for o in list_owners(s, "SMITH")]
        # "Smith" primary last name, "Smithers" secondary last name
        assert names == ["John", "Mary"]


def test_list_owners_search_matches_secondary_first_name(app):
    with session_scope(app) as s:
        assert [o.primaryownerfirstname for o in list_owners(s, "pat")] == ["Mary"]


def test_list_owners_search_ignores_non_name_fields(app):
    with session_scope(app) as s:
        assert list_owners(s, "winter") == []
        assert list_owners(s, "example.com") == []


def test_list_owners_no_match_is_empty(app):
    with session_scope(app) as s:
        assert list_owners(s, "zzz") == []


# ---------- Mutations ----------

def test_manager_can_add_owner(app, client):
    _login(client, "mgr")
    r = _post(
        client,
        "/directory/add",
        {
            "primary_first_name": "Carl",
            "primary_last_name": "Diaz",
            "contact_info": "555-0199",
            "email": "not-an-email",
            "notes": "",
        },
    )
    assert r.status_code == 200
    assert r.json == {"success": True, "message": "Owner added successfully."}
    with session_scope(app) as s:
        o = s.query(Owner).filter(Owner.primaryownerfirstname == "Carl").one()
        assert o.email == "not-an-email"
        assert o.secondaryownerfirstname is None


def test_manager_can_edit_owner(app, client):
    _login(client, "mgr")
    with session_scope(app) as s:
        owner_id = s.query(Owner.owner_id).filter(Owner.primaryownerfirstname == "Bob").scalar()

    r = _post(
        client,
        f"/directory/edit/{owner_id}",
        {"primary_first_name": "Robert", "primary_last_name": "Brown", "secondary_first_name": "Sue"},
    )
    assert r.status_code == 200
    with session_scope(app) as s:
        o = s.get(Owner, owner_id)
        assert o.primaryownerfirstname == "Robert"
        assert o.secondaryownerfirstname == "Sue"
        # Full overwrite: fields not submitted are cleared.
        assert o.notes is None


def test_edit_missing_owner_still_succeeds(client):
    _login(client, "mgr")
    r = _post(client, "/directory/edit/9999", {"primary_first_name": "Ghost"})
    assert r.status_code == 200
    assert r.json["success"] is True


def test_manager_can_delete_owner_idempotently(app, client):
    _login(client, "mgr")
    with session_scope(app) as s:
        owner_id = s.query(Owner.owner_id).filter(Owner.primaryownerfirstname == "Ann").scalar()

    r = _post(client, f"/directory/delete/{owner_id}")
    assert r.status_code == 200
    assert _owner_count(app) == 3

    r = _post(client, f"/directory/delete/{owner_id}")
    assert r.status_code == 200
    assert _owner_count(app) == 3


@pytest.mark.parametrize("url", ["/directory/add", "/directory/edit/1", "/directory/delete/1"])
def test_owner_role_is_forbidden_and_nothing_changes(app, client, url):
    _login(client, "own")
    r = _post(client, url, {"primary_first_name": "Mallory"})
    assert r.status_code == 403
    assert r.json["success"] is False
    assert "Manager" in r.json["message"]
    assert _owner_count(app) == 4
    with session_scope(app) as s:
        assert s.get(Owner, 1).primaryownerfirstname == "John"


def test_unauthenticated_mutation_redirects_to_login(app, client):
    r = _post(client, "/directory/add", {"primary_first_name": "Eve"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/login")
    assert _owner_count(app) == 4


def test_unauthenticated_mutation_without_csrf_token_redirects_to_login(app, client):
    r = client.post("/directory/add", data={"primary_first_name": "Eve"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/login")
    assert _owner_count(app) == 4


def test_mutation_without_csrf_token_is_rejected(app, client):
    _login(client, "mgr")
    r = client.post("/directory/add", data={"primary_first_name": "Eve"})
    assert r.status_code == 400
    assert _owner_count(app) == 4


def test_store_failure_returns_generic_500(app, client):
    _login(client, "mgr")
    Owner.__table__.drop(bind=app.extensions["sqlalchemy_engine"])
    r = _post(client, "/directory/add", {"primary_first_name": "Eve"})
    assert r.status_code == 500
    assert r.json["success"] is False
    assert "owners1" not in r.json["message"]
