from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, or_, select, update

from app.rpv.modules.owner_directory.models import Owner

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# Form/JSON key -> owners1 column. Every mutable column is overwritten on edit.
OWNER_FIELDS = {
    "primary_first_name": "primaryownerfirstname",
    "primary_last_name": "primaryownerlastname",
    "secondary_first_name": "secondaryownerfirstname",
    "secondary_last_name": "secondaryownerlastname",
    "contact_info": "contact_info",
    "email": "email",
    "notes": "notes",
}


def has_secondary_owner(secondary_first: str | None, secondary_last: str | None) -> bool:
    return bool(secondary_first) or bool(secondary_last)


def compose_owner_name(
    primary_first: str | None,
    primary_last: str | None,
    secondary_first: str | None = None,
    secondary_last: str | None = None,
) -> str:
    """
    "John Doe", or "John Doe and Jane Roe" when either secondary field is set.
    Empty sub-fields keep their separating space.
    """
    name = f"{primary_first or ''} {primary_last or ''}"
    if has_secondary_owner(secondary_first, secondary_last):
        name += f" and {secondary_first or ''} {secondary_last or ''}"
    return name


def display_name(owner: Owner) -> str:
    return compose_owner_name(
        owner.primaryownerfirstname,
        owner.primaryownerlastname,
        owner.secondaryownerfirstname,
        owner.secondaryownerlastname,
    )


def owner_values(payload: dict[str, Any]) -> dict[str, Any]:
    """Map a submitted payload onto owners1 columns. No format validation."""
    values: dict[str, Any] = {}
    for key, column in OWNER_FIELDS.items():
        raw = payload.get(key)
        values[column] = None if raw is None else str(raw)
    return values


def list_owners(s: "Session", search: str | None = None) -> list[Owner]:
    """All owners by id, or those with `search` in any of the four name fields."""
    stmt = select(Owner)
    term = (search or "").strip()
    if term:
        like = f"%{term}%"
        stmt = stmt.where(
            or_(
                Owner.primaryownerfirstname.ilike(like),
                Owner.primaryownerlastname.ilike(like),
                Owner.secondaryownerfirstname.ilike(like),
                Owner.secondaryownerlastname.ilike(like),
            )
        )
    return list(s.scalars(stmt.order_by(Owner.owner_id.asc())))


def create_owner(s: "Session", payload: dict[str, Any], actor: str) -> Owner:
    owner = Owner(**owner_values(payload))
    s.add(owner)
    s.flush()
    logger.info("owner.create owner_id=%s by=%s", owner.owner_id, actor)
    return owner


def update_owner(s: "Session", owner_id: int, payload: dict[str, Any], actor: str) -> int:
    """Full overwrite by primary key. Returns rows affected; zero is not an error."""
    result = s.execute(update(Owner).where(Owner.owner_id == owner_id).values(**owner_values(payload)))
    if result.rowcount == 0:
        logger.warning("owner.edit matched no rows owner_id=%s by=%s", owner_id, actor)
    else:
        logger.info("owner.edit owner_id=%s by=%s", owner_id, actor)
    return result.rowcount


def delete_owner(s: "Session", owner_id: int, actor: str) -> int:
    """Delete by primary key. Deleting an absent id is a no-op."""
    result = s.execute(delete(Owner).where(Owner.owner_id == owner_id))
    if result.rowcount == 0:
        logger.warning("owner.delete matched no rows owner_id=%s by=%s", owner_id, actor)
    else:
        logger.info("owner.delete owner_id=%s by=%s", owner_id, actor)
    return result.rowcount
