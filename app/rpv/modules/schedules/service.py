from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select, update

from app.rpv.errors import ValidationError
from app.rpv.modules.owner_directory.models import Owner
from app.rpv.modules.owner_directory.service import compose_owner_name
from app.rpv.modules.schedules.models import Property, ScheduleEntry
from app.rpv.utils import parse_date, parse_int

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyOption:
    property_id: int
    property_name: str


@dataclass(frozen=True)
class OwnerOption:
    owner_id: int
    name: str


@dataclass(frozen=True)
class ScheduleRow:
    schedule_id: int
    start_date: date
    end_date: date
    owner_id: int
    property_id: int
    owner_name: str
    status: str | None


def list_properties(s: "Session") -> list[PropertyOption]:
    rows = s.execute(select(Property.property_id, Property.property_name).order_by(Property.property_name.asc()))
    return [PropertyOption(property_id=r.property_id, property_name=r.property_name) for r in rows]


def list_owners_for_picker(s: "Session") -> list[OwnerOption]:
    """Primary owner name only; the secondary owner is never shown here."""
    rows = s.execute(
        select(Owner.owner_id, Owner.primaryownerfirstname, Owner.primaryownerlastname).order_by(Owner.owner_id.asc())
    )
    return [
        OwnerOption(
            owner_id=r.owner_id,
            name=f"{r.primaryownerfirstname or ''} {r.primaryownerlastname or ''}",
        )
        for r in rows
    ]


def schedule_for(s: "Session", property_name: str | None) -> list[ScheduleRow]:
    """Occupancy rows for one property, earliest start first."""
    if not property_name:
        return []
    stmt = (
        select(
            ScheduleEntry.schedule_id,
            ScheduleEntry.start_date,
            ScheduleEntry.end_date,
            ScheduleEntry.ownerid,
            ScheduleEntry.property_id,
            ScheduleEntry.status,
            Owner.primaryownerfirstname,
            Owner.primaryownerlastname,
            Owner.secondaryownerfirstname,
            Owner.secondaryownerlastname,
        )
        .join(Property, ScheduleEntry.property_id == Property.property_id)
        .join(Owner, ScheduleEntry.ownerid == Owner.owner_id)
        .where(Property.property_name == property_name)
        .order_by(ScheduleEntry.start_date.asc(), ScheduleEntry.schedule_id.asc())
    )
    return [
        ScheduleRow(
            schedule_id=r.schedule_id,
            start_date=r.start_date,
            end_date=r.end_date,
            owner_id=r.ownerid,
            property_id=r.property_id,
            owner_name=compose_owner_name(
                r.primaryownerfirstname,
                r.primaryownerlastname,
                r.secondaryownerfirstname,
                r.secondaryownerlastname,
            ),
            status=r.status,
        )
        for r in s.execute(stmt)
    ]


def schedule_values(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a submitted entry and map it onto schedule columns.
    Overlapping bookings are not checked.
    """
    try:
        property_id = parse_int(payload.get("property_id"))
        owner_id = parse_int(payload.get("owner_id"))
    except ValueError:
        raise ValidationError("Property and owner must be valid ids.")
    try:
        start = parse_date(payload.get("start_date"))
        end = parse_date(payload.get("end_date"))
    except ValueError:
        raise ValidationError("Dates must be in YYYY-MM-DD format.")

    if property_id is None or owner_id is None or start is None or end is None:
        raise ValidationError("Property, owner, start date and end date are required.")
    if start > end:
        raise ValidationError("Start date must be on or before end date.")

    status = payload.get("status")
    return {
        "property_id": property_id,
        "ownerid": owner_id,
        "start_date": start,
        "end_date": end,
        "status": None if status is None else str(status),
    }


def create_entry(s: "Session", payload: dict[str, Any], actor: str) -> ScheduleEntry:
    entry = ScheduleEntry(**schedule_values(payload))
    s.add(entry)
    s.flush()
    logger.info(
        "schedule.create schedule_id=%s property_id=%s owner_id=%s by=%s",
        entry.schedule_id,
        entry.property_id,
        entry.ownerid,
        actor,
    )
    return entry


def update_entry(s: "Session", schedule_id: int, payload: dict[str, Any], actor: str) -> int:
    result = s.execute(
        update(ScheduleEntry).where(ScheduleEntry.schedule_id == schedule_id).values(**schedule_values(payload))
    )
    if result.rowcount == 0:
        logger.warning("schedule.edit matched no rows schedule_id=%s by=%s", schedule_id, actor)
    else:
        logger.info("schedule.edit schedule_id=%s by=%s", schedule_id, actor)
    return result.rowcount


def delete_entry(s: "Session", schedule_id: int, actor: str) -> int:
    result = s.execute(delete(ScheduleEntry).where(ScheduleEntry.schedule_id == schedule_id))
    if result.rowcount == 0:
        logger.warning("schedule.delete matched no rows schedule_id=%s by=%s", schedule_id, actor)
    else:
        logger.info("schedule.delete schedule_id=%s by=%s", schedule_id, actor)
    return result.rowcount
