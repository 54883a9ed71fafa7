"""
Trip request and saved-history contracts.

TripRequest is what the user typed into the planning form. SavedTrip is
the persisted record of a request and the response it produced.
"""

from datetime import date
from typing import List, Optional

from pydantic import ConfigDict, Field

from journeyx.shared.contracts.trip_plan import TripPlan
from journeyx.shared.schemas.base import CamelModel


class TripRequest(CamelModel):
    """User-supplied planning parameters for one session."""

    destination: str = Field(description="Where to go")
    start_date: date = Field(description="First day of the trip")
    end_date: date = Field(description="Last day of the trip")
    party: str = Field(
        default="",
        alias="members",
        description="Who is travelling (e.g., '2位成人，1位小孩(5歲)')",
    )
    must_visit: str = Field(default="", description="Places that must be included")
    accommodation: str = Field(default="", description="Where the party stays")
    preferences: str = Field(default="", description="Free-text preferences and budget")


class GroundingSource(CamelModel):
    """Web source behind a grounding citation."""

    uri: Optional[str] = None
    title: Optional[str] = None


class GroundingChunk(CamelModel):
    """Citation returned alongside a generated plan. Informational only."""

    web: Optional[GroundingSource] = None


class ItineraryResponse(CamelModel):
    """A validated plan together with the citations that accompanied it."""

    plan: TripPlan
    grounding_chunks: List[GroundingChunk] = Field(default_factory=list)


class SavedTrip(CamelModel):
    """Persisted history record. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier generated at save time")
    timestamp: int = Field(description="Creation time in epoch milliseconds")
    details: TripRequest
    response: ItineraryResponse
