from __future__ import annotations

from datetime import date
from typing import Any

from flask import request


def request_payload() -> dict[str, Any]:
    """Form fields or a JSON object body, whichever the client sent."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def parse_date(s: Any) -> date | None:
    """Parse YYYY-MM-DD. Empty -> None; malformed raises ValueError."""
    if s is None:
        return None
    s = str(s).strip()
    if not s:
        return None
    return date.fromisoformat(s)


def parse_int(s: Any) -> int | None:
    if s is None:
        return None
    s = str(s).strip()
    if not s:
        return None
    return int(s)
