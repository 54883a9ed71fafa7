"""Data contracts shared between the parser, session and sync layers."""

from journeyx.shared.contracts.trip_plan import (
    Activity,
    ActivityType,
    DayPlan,
    GeoPoint,
    TripPlan,
    VisualVibe,
)
from journeyx.shared.contracts.trip_request import (
    GroundingChunk,
    GroundingSource,
    ItineraryResponse,
    SavedTrip,
    TripRequest,
)
from journeyx.shared.contracts.travel_book import (
    EventDetail,
    MapMarker,
    TravelBookDay,
    TravelBookEvent,
)

__all__ = [
    "Activity",
    "ActivityType",
    "DayPlan",
    "GeoPoint",
    "TripPlan",
    "VisualVibe",
    "GroundingChunk",
    "GroundingSource",
    "ItineraryResponse",
    "SavedTrip",
    "TripRequest",
    "EventDetail",
    "MapMarker",
    "TravelBookDay",
    "TravelBookEvent",
]
