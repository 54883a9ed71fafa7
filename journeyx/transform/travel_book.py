"""
Export-book transform.

Converts a validated TripPlan into the day/event representation used by
the travel book site. The transform is total and deterministic: the same
plan always yields the same output.
"""

from datetime import date, datetime
from typing import List, Optional

from journeyx.shared.contracts import (
    Activity,
    EventDetail,
    TravelBookDay,
    TravelBookEvent,
    TripPlan,
)


# Indexed by date.weekday(), Monday first
WEEKDAY_LABELS = ("(一)", "(二)", "(三)", "(四)", "(五)", "(六)", "(日)")

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={lat},{lng}"

EVENT_TYPE_BY_ACTIVITY = {
    "food": "FOOD",
    "transport": "BUS",
    "shopping": "SHOPPING",
    "rest": "HOTEL",
    "sightseeing": "SIGHTSEEING",
}


def activity_type_to_event(activity_type: str) -> str:
    """Map an activity category to a travel book event type, WALKING otherwise."""
    return EVENT_TYPE_BY_ACTIVITY.get(activity_type, "WALKING")


def _parse_calendar_date(text: str) -> Optional[date]:
    value = text.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def format_display_date(date_str: str) -> str:
    """
    Format a day's date as ``<month>/<day> (<weekday>)``.

    Text that does not parse as a calendar date is returned verbatim.
    """
    parsed = _parse_calendar_date(date_str)
    if parsed is None:
        return date_str
    return f"{parsed.month}/{parsed.day} {WEEKDAY_LABELS[parsed.weekday()]}"


def build_event_details(activity: Activity) -> Optional[List[EventDetail]]:
    """Collect labeled details in fixed order; None when there are none."""
    candidates = (
        ("交通", activity.transport_detail),
        ("費用", activity.cost),
        ("雨備方案", activity.rain_plan),
        ("在地小秘訣", activity.local_tip),
        ("預估停留", activity.duration),
    )
    details = [
        EventDetail(title=title, content=content)
        for title, content in candidates
        if content
    ]
    return details or None


def format_coordinate(value: float) -> str:
    """Shortest text for a coordinate; whole numbers print without ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _location_url(activity: Activity) -> Optional[str]:
    if activity.location is None:
        return None
    return MAPS_SEARCH_URL.format(
        lat=format_coordinate(activity.location.lat),
        lng=format_coordinate(activity.location.lng),
    )


def trip_plan_to_travel_book(plan: TripPlan) -> List[TravelBookDay]:
    """
    Map each DayPlan to a TravelBookDay, preserving day and activity order.

    Args:
        plan: A validated trip plan

    Returns:
        One TravelBookDay per plan day, each with one event per activity
    """
    book = []
    for day in plan.days:
        events = [
            TravelBookEvent(
                id=f"{day.day}-{index}",
                time=activity.time,
                title=activity.title,
                location_name=(
                    activity.location.name if activity.location else plan.destination
                ),
                location_url=_location_url(activity),
                type=activity_type_to_event(activity.type),
                description=activity.description,
                details=build_event_details(activity),
            )
            for index, activity in enumerate(day.activities)
        ]
        book.append(
            TravelBookDay(
                day_id=day.day,
                date_str=day.date,
                display_date=format_display_date(day.date),
                region=day.theme or plan.destination,
                events=events,
            )
        )
    return book


def travel_book_to_payload(
    book: List[TravelBookDay], keep_absent: bool = False
) -> List[dict]:
    """
    Dump travel book days to JSON-ready dicts.

    Absent optional fields are omitted unless ``keep_absent`` is set, in
    which case they appear with a None value.
    """
    if keep_absent:
        return [day.model_dump(mode="json", by_alias=True) for day in book]
    return [day.to_wire() for day in book]
