"""
Exchange requests, information requests and feedback.

Submissions are written to the application log only; nothing is persisted.
"""
from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify, render_template

from app.rpv.errors import ValidationError
from app.rpv.rbac import require_login
from app.rpv.utils import request_payload

bp = Blueprint("member_requests", __name__)

FORMS = {
    "exchange": {
        "title": "Exchange Request",
        "fields": ("property_name", "current_dates", "requested_dates", "comments"),
        "message": "Exchange request submitted.",
    },
    "info": {
        "title": "Information Request",
        "fields": ("subject", "question"),
        "message": "Information request submitted.",
    },
    "feedback": {
        "title": "Feedback",
        "fields": ("rating", "comments"),
        "message": "Thank you for your feedback.",
    },
}


def _submission(form_key: str) -> dict[str, str]:
    payload = request_payload()
    values = {}
    for name in FORMS[form_key]["fields"]:
        value = str(payload.get(name) or "").strip()
        if value:
            values[name] = value
    if not values:
        raise ValidationError("Please fill out the form before submitting.")
    return values


def _render(form_key: str):
    form = FORMS[form_key]
    return render_template("requests/form.html", form_key=form_key, title=form["title"], fields=form["fields"])


def _submit(form_key: str):
    values = _submission(form_key)
    current_app.logger.info(
        "%s submitted by=%s request_id=%s fields=%s",
        form_key,
        g.current_session.user.username,
        g.request_id,
        values,
    )
    return jsonify({"success": True, "message": FORMS[form_key]["message"]})


@bp.get("/exchange")
@require_login
def exchange_get():
    return _render("exchange")


@bp.post("/exchange")
@require_login
def exchange_post():
    return _submit("exchange")


@bp.get("/info")
@require_login
def info_get():
    return _render("info")


@bp.post("/info")
@require_login
def info_post():
    return _submit("info")


@bp.get("/feedback")
@require_login
def feedback_get():
    return _render("feedback")


@bp.post("/feedback")
@require_login
def feedback_post():
    return _submit("feedback")
