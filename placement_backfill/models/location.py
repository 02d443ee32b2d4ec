"""Localised location model holding the placement identifier."""
from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from placement_backfill.database import Base


class LocationL10n(Base):
    """
    Localised location row.

    The backfill only ever reads ``location_id`` and ``name`` and writes
    ``placement_id``. Rows are never created or deleted here.
    """
    __tablename__ = "location_l10n"

    location_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        nullable=False
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name, used as the places text query"
    )
    placement_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Places API placeId, null until backfilled"
    )

    def __repr__(self) -> str:
        return f"<LocationL10n(location_id={self.location_id}, name={self.name}, placement_id={self.placement_id})>"
