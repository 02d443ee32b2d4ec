"""Pydantic schemas for place lookups and backfill results."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlaceCandidate(BaseModel):
    """One match returned by the places endpoint."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "placeId": "ChIJD7fiBh9u5kcRYJSMaMOCCwQ",
                "displayName": "Paris",
                "formattedAddress": "Paris, France"
            }
        }
    )

    place_id: Optional[str] = Field(None, alias="placeId", description="Opaque place identifier")


class PlacesResponse(BaseModel):
    """Body of a places lookup response."""

    model_config = ConfigDict(extra="allow")

    data: Optional[List[PlaceCandidate]] = Field(None, description="Candidate matches, best first")


class ResolutionStatus(str, Enum):
    """Why a lookup did or did not produce a placement id."""

    RESOLVED = "resolved"
    NO_MATCH = "no_match"
    LOOKUP_FAILED = "lookup_failed"


class ResolutionResult(BaseModel):
    """Outcome of resolving one location name."""

    placement_id: Optional[str] = Field(None, description="Placement id when resolved")
    status: ResolutionStatus = Field(..., description="Resolution outcome")

    @classmethod
    def found(cls, placement_id: str) -> "ResolutionResult":
        return cls(placement_id=placement_id, status=ResolutionStatus.RESOLVED)

    @classmethod
    def absent(cls, status: ResolutionStatus) -> "ResolutionResult":
        return cls(placement_id=None, status=status)

    @property
    def resolved(self) -> bool:
        """True only when a placement id is present."""
        return self.status is ResolutionStatus.RESOLVED and bool(self.placement_id)


class LocationCandidate(BaseModel):
    """A location_l10n row still missing its placement id."""

    model_config = ConfigDict(from_attributes=True)

    location_id: int
    name: Optional[str] = None


class BackfillSummary(BaseModel):
    """Counters reported at the end of a backfill run."""

    total: int = Field(0, ge=0, description="Candidate rows selected")
    updated: int = Field(0, ge=0, description="Rows written with a placement id")
    no_match: int = Field(0, ge=0, description="Lookups with no candidate match")
    failed: int = Field(0, ge=0, description="Lookups that errored")
    skipped: int = Field(0, ge=0, description="Rows skipped without a lookup")

    def __str__(self) -> str:
        return f"{self.updated} of {self.total} updated"
