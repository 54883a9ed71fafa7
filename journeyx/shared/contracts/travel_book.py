"""
Derived views of a validated TripPlan.

MapMarker feeds the map view; TravelBookDay and TravelBookEvent form the
export-book format written to the remote document store.
"""

from typing import List, Literal, Optional

from pydantic import Field

from journeyx.shared.schemas.base import CamelModel


TravelBookEventType = Literal[
    "FOOD", "BUS", "SHOPPING", "HOTEL", "SIGHTSEEING", "WALKING"
]

MARKER_PALETTE = ("#4f46e5", "#db2777", "#059669", "#d97706", "#7c3aed")


class MapMarker(CamelModel):
    """A located activity flattened for the map view."""

    lat: float
    lng: float
    name: str
    address: Optional[str] = None
    day: int = Field(description="Owning day index")
    description: str = Field(description="Description of the activity")

    @property
    def color(self) -> str:
        """Marker color, cycling through the palette by day index."""
        return MARKER_PALETTE[(self.day - 1) % len(MARKER_PALETTE)]

    def popup_lines(self) -> List[str]:
        """Popup content: name, description and address when known."""
        lines = [self.name, self.description]
        if self.address:
            lines.append(self.address)
        return lines


class EventDetail(CamelModel):
    """A labeled detail string on a travel book event."""

    title: str
    content: str


class TravelBookEvent(CamelModel):
    """One activity in export-book form."""

    id: str
    time: str
    title: str
    location_name: str
    location_url: Optional[str] = None
    type: TravelBookEventType
    description: str
    details: Optional[List[EventDetail]] = None


class TravelBookDay(CamelModel):
    """One day in export-book form."""

    day_id: int
    date_str: str
    display_date: str
    region: str
    events: List[TravelBookEvent]
