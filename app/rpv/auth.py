from __future__ import annotations

import uuid

from flask import Blueprint, abort, current_app, g, jsonify, redirect, render_template, request, session, url_for
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from app.rpv.constants import LOGIN_SUCCESS_REDIRECT, MIN_PASSWORD_LENGTH
from app.rpv.db import db_session
from app.rpv.errors import AuthError, ValidationError
from app.rpv.models import User, UserRole
from app.rpv.sessions import SessionRecord, SessionStore
from app.rpv.utils import request_payload

bp = Blueprint("auth", __name__)

INVALID_CREDENTIALS = "Invalid username or password."


def session_store() -> SessionStore:
    return current_app.extensions["rpv_session_store"]


def login(s: Session, store: SessionStore, username: str, password: str) -> SessionRecord:
    """Verify credentials and open a server-side session. Raises AuthError."""
    if not isinstance(username, str) or not isinstance(password, str):
        raise AuthError(INVALID_CREDENTIALS)
    user = s.query(User).filter(User.username == username).one_or_none()
    if user is None or not check_password_hash(user.password, password):
        raise AuthError(INVALID_CREDENTIALS)
    return store.create(user)


def logout(store: SessionStore, session_id: str | None) -> None:
    store.destroy(session_id)


def register_user(s: Session, username: str, password: str, confirm_password: str, role: UserRole) -> User:
    """
    Create a login account. Raises ValidationError on missing fields,
    mismatched or short passwords, and duplicate usernames.
    """
    if not all(isinstance(v, str) for v in (username, password, confirm_password)):
        raise ValidationError("Username and password must be text.")
    if not username or not password or not confirm_password:
        raise ValidationError("All fields are required.")
    if password != confirm_password:
        raise ValidationError("Passwords do not match.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    if s.query(User.id).filter(User.username == username).first() is not None:
        raise ValidationError("Username already exists.")

    user = User(username=username, password=generate_password_hash(password), role=role)
    s.add(user)
    try:
        s.flush()
    except IntegrityError:
        # Concurrent registration won the unique constraint.
        s.rollback()
        raise ValidationError("Username already exists.")
    return user


def load_current_session() -> None:
    """
    Resolves g.current_session from the opaque id in the signed session cookie.
    Also assigns a simple per-request request_id (for log correlation).
    """
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex
    g.current_session = None
    if request.path.startswith(("/static/", "/health", "/healthz")):
        return

    sid = session.get("sid")
    if not sid:
        return
    record = session_store().resolve(sid)
    if record is None:
        session.pop("sid", None)
        return
    g.current_session = record


@bp.get("/login")
def login_get():
    return render_template("auth/login.html", page_title="RPV Login")


@bp.post("/login")
def login_post():
    payload = request_payload()
    username = payload.get("username") or ""
    password = payload.get("password") or ""

    try:
        record = login(db_session(), session_store(), username, password)
    except AuthError as e:
        current_app.logger.info("Login failed (username=%s request_id=%s)", username, g.request_id)
        return jsonify({"success": False, "message": e.message}), 401

    # Drop any previous session so the old id cannot be replayed.
    session_store().destroy(session.get("sid"))
    session["sid"] = record.session_id
    current_app.logger.info("Login ok (username=%s role=%s)", record.user.username, record.user.role.value)
    return jsonify({"success": True, "message": "Login successful.", "redirectTo": LOGIN_SUCCESS_REDIRECT})


@bp.get("/logout")
def logout_get():
    sid = session.pop("sid", None)
    record = getattr(g, "current_session", None)
    if record:
        current_app.logger.info("Logout (username=%s)", record.user.username)
    logout(session_store(), sid)
    return redirect(url_for("auth.login_get"))


@bp.get("/register/<role>")
def register_get(role: str):
    user_role = _role_from_path(role)
    return render_template("auth/register.html", role=user_role.value)


@bp.post("/register/<role>")
def register_post(role: str):
    user_role = _role_from_path(role)
    payload = request_payload()
    s = db_session()
    user = register_user(
        s,
        username=_strip(payload.get("username") or ""),
        password=payload.get("password") or "",
        confirm_password=payload.get("confirmPassword") or "",
        role=user_role,
    )
    s.commit()
    current_app.logger.info("Registered %s account (username=%s)", user_role.value, user.username)
    return jsonify({"success": True, "message": "Registration successful. Please log in.", "redirectTo": "/login"})


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _role_from_path(role: str) -> UserRole:
    try:
        return UserRole(role)
    except ValueError:
        abort(404)
