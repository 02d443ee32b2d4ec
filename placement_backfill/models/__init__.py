"""SQLAlchemy models for the backfill."""
from placement_backfill.models.location import LocationL10n

__all__ = [
    "LocationL10n",
]
