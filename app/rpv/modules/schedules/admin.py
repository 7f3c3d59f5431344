from __future__ import annotations

from flask import Blueprint, g, jsonify, render_template, request

from app.rpv.db import db_session
from app.rpv.models import UserRole
from app.rpv.modules.schedules.service import (
    create_entry,
    delete_entry,
    list_owners_for_picker,
    list_properties,
    schedule_for,
    update_entry,
)
from app.rpv.rbac import require_login, require_role
from app.rpv.utils import request_payload

bp = Blueprint("schedules", __name__)


def _actor() -> str:
    return g.current_session.user.username


@bp.get("/schedules")
@require_login
def schedules_view():
    s = db_session()
    property_name = (request.args.get("property_name") or "").strip()
    return render_template(
        "schedules/view.html",
        properties=list_properties(s),
        owners=list_owners_for_picker(s),
        rows=schedule_for(s, property_name),
        selected_property=property_name,
        is_manager=g.current_session.user.role == UserRole.manager,
    )


@bp.post("/schedules/add")
@require_role(UserRole.manager)
def schedules_add():
    s = db_session()
    create_entry(s, request_payload(), _actor())
    s.commit()
    return jsonify({"success": True, "message": "Schedule entry added successfully."})


@bp.post("/schedules/edit/<int:schedule_id>")
@require_role(UserRole.manager)
def schedules_edit(schedule_id: int):
    s = db_session()
    update_entry(s, schedule_id, request_payload(), _actor())
    s.commit()
    return jsonify({"success": True, "message": "Schedule entry updated successfully."})


@bp.post("/schedules/delete/<int:schedule_id>")
@require_role(UserRole.manager)
def schedules_delete(schedule_id: int):
    s = db_session()
    delete_entry(s, schedule_id, _actor())
    s.commit()
    return jsonify({"success": True, "message": "Schedule entry deleted successfully."})
