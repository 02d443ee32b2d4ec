"""Pydantic schemas for place lookups and backfill results."""
from placement_backfill.schemas.placement import (
    PlaceCandidate,
    PlacesResponse,
    ResolutionStatus,
    ResolutionResult,
    LocationCandidate,
    BackfillSummary,
)

__all__ = [
    # Places API schemas
    "PlaceCandidate",
    "PlacesResponse",
    # Backfill schemas
    "ResolutionStatus",
    "ResolutionResult",
    "LocationCandidate",
    "BackfillSummary",
]
