"""Derived views of validated trip plans: map markers and the export book."""

from journeyx.transform.markers import extract_map_markers
from journeyx.transform.travel_book import (
    activity_type_to_event,
    build_event_details,
    format_coordinate,
    format_display_date,
    travel_book_to_payload,
    trip_plan_to_travel_book,
)

__all__ = [
    "extract_map_markers",
    "activity_type_to_event",
    "build_event_details",
    "format_coordinate",
    "format_display_date",
    "travel_book_to_payload",
    "trip_plan_to_travel_book",
]
