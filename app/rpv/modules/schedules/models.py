from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.rpv.models import Base


class Property(Base):
    """Reference data; populated by scripts/init_db.py, read-only in the app."""

    __tablename__ = "properties"

    property_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    property_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class ScheduleEntry(Base):
    __tablename__ = "schedule"
    __table_args__ = (
        Index("idx_schedule_property_start", "property_id", "start_date"),
    )

    schedule_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.property_id"), nullable=False)
    ownerid: Mapped[int] = mapped_column(ForeignKey("owners1.owner_id"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str | None] = mapped_column(String(64), nullable=True)  # free-form
