from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.rpv.models import Base


class Owner(Base):
    """Property co-owner record kept by staff (the `owners1` table)."""

    __tablename__ = "owners1"

    owner_id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Primary owner
    primaryownerfirstname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    primaryownerlastname: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Secondary owner (optional)
    secondaryownerfirstname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    secondaryownerlastname: Mapped[str | None] = mapped_column(String(100), nullable=True)

    contact_info: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
