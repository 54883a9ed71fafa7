"""Map marker extraction."""

from typing import List

from journeyx.shared.contracts import MapMarker, TripPlan


def extract_map_markers(plan: TripPlan) -> List[MapMarker]:
    """
    Flatten every located activity into a map marker.

    Markers keep day-then-activity order and carry the owning day index
    and the activity description. Activities without a location are
    skipped.
    """
    return [
        MapMarker(
            lat=activity.location.lat,
            lng=activity.location.lng,
            name=activity.location.name,
            address=activity.location.address,
            day=day.day,
            description=activity.description,
        )
        for day in plan.days
        for activity in day.activities
        if activity.location is not None
    ]
