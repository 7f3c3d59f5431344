from __future__ import annotations

from flask import Blueprint, g, jsonify, render_template, request

from app.rpv.db import db_session
from app.rpv.models import UserRole
from app.rpv.modules.owner_directory.service import (
    create_owner,
    delete_owner,
    display_name,
    list_owners,
    update_owner,
)
from app.rpv.rbac import require_login, require_role
from app.rpv.utils import request_payload

bp = Blueprint("owner_directory", __name__)


def _actor() -> str:
    return g.current_session.user.username


# ---------- List ----------
@bp.get("/directory")
@require_login
def directory_list():
    s = db_session()
    search = (request.args.get("search") or "").strip()
    owners = list_owners(s, search or None)
    rows = [{"owner": o, "display_name": display_name(o)} for o in owners]
    return render_template(
        "directory/list.html",
        rows=rows,
        search=search,
        is_manager=g.current_session.user.role == UserRole.manager,
    )


# ---------- Add ----------
@bp.post("/directory/add")
@require_role(UserRole.manager)
def directory_add():
    s = db_session()
    create_owner(s, request_payload(), _actor())
    s.commit()
    return jsonify({"success": True, "message": "Owner added successfully."})


# ---------- Edit ----------
@bp.post("/directory/edit/<int:owner_id>")
@require_role(UserRole.manager)
def directory_edit(owner_id: int):
    s = db_session()
    update_owner(s, owner_id, request_payload(), _actor())
    s.commit()
    return jsonify({"success": True, "message": "Owner updated successfully."})


# ---------- Delete ----------
@bp.post("/directory/delete/<int:owner_id>")
@require_role(UserRole.manager)
def directory_delete(owner_id: int):
    s = db_session()
    delete_owner(s, owner_id, _actor())
    s.commit()
    return jsonify({"success": True, "message": "Owner deleted successfully."})
