"""
Trip plan output contract.

Defines the canonical shape of an itinerary produced by the generation
service. Models are strict: values are never coerced from other types,
and required text must be non-blank after trimming.
"""

from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, ConfigDict, Field

from journeyx.shared.schemas.base import CamelModel


ActivityType = Literal["sightseeing", "food", "transport", "shopping", "rest", "other"]
VisualVibe = Literal["modern", "historical", "nature", "tropical"]

ACTIVITY_TYPES = ("sightseeing", "food", "transport", "shopping", "rest", "other")
VISUAL_VIBES = ("modern", "historical", "nature", "tropical")


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_require_text)]


class StrictCamelModel(CamelModel):
    """CamelModel that rejects type coercion and non-finite floats."""

    model_config = ConfigDict(strict=True, allow_inf_nan=False)


class GeoPoint(StrictCamelModel):
    """A coordinate attached to an activity. Not range-checked."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(description="Latitude")
    lng: float = Field(description="Longitude")
    name: NonBlankStr = Field(description="Display name of the place")
    address: Optional[str] = Field(default=None, description="Street address")


class Activity(StrictCamelModel):
    """One scheduled unit within a day."""

    id: Optional[str] = Field(default=None, description="Client-side key")
    time: NonBlankStr = Field(description="Time label (e.g., '09:00')")
    title: NonBlankStr = Field(description="Activity title")
    description: NonBlankStr = Field(description="Activity details")
    type: ActivityType = Field(description="Closed category tag")
    transport_detail: Optional[str] = Field(
        default=None, description="How to get there"
    )
    cost: Optional[str] = Field(default=None, description="Cost estimate")
    local_tip: Optional[str] = Field(default=None, description="Local advice")
    duration: Optional[str] = Field(default=None, description="Expected stay")
    booking_required: Optional[bool] = Field(
        default=None, description="Whether advance booking is needed"
    )
    rain_plan: Optional[str] = Field(
        default=None, description="Indoor alternative for bad weather"
    )
    location: Optional[GeoPoint] = Field(default=None, description="Where it happens")


class DayPlan(StrictCamelModel):
    """A single day in the itinerary."""

    day: int = Field(gt=0, description="Day number (1-indexed)")
    date: NonBlankStr = Field(description="Date, ideally YYYY-MM-DD")
    theme: NonBlankStr = Field(description="Day theme")
    summary: NonBlankStr = Field(description="Day summary")
    activities: List[Activity] = Field(
        min_length=1, description="Ordered activities for this day"
    )


class TripPlan(StrictCamelModel):
    """
    Root itinerary artifact.

    A TripPlan instance only exists once every structural constraint has
    been checked; there is no partially valid plan.
    """

    trip_title: NonBlankStr = Field(description="Generated trip title")
    destination: NonBlankStr = Field(description="Trip destination")
    duration: NonBlankStr = Field(description="Duration label (e.g., '5天4夜')")
    total_budget_estimate: NonBlankStr = Field(description="Total budget label")
    visual_vibe: VisualVibe = Field(description="Presentational vibe tag")
    days: List[DayPlan] = Field(min_length=1, description="Day-by-day plan")
    general_tips: List[NonBlankStr] = Field(
        min_length=1, description="Cultural and packing tips"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tripTitle": "京都深度 3 日遊",
                "destination": "京都",
                "duration": "3天2夜",
                "totalBudgetEstimate": "每人 20,000 TWD",
                "visualVibe": "historical",
                "generalTips": ["早起避開人潮"],
                "days": [
                    {
                        "day": 1,
                        "date": "2025-01-01",
                        "theme": "古都巡禮",
                        "summary": "探索京都東山區",
                        "activities": [
                            {
                                "time": "09:00",
                                "title": "清水寺",
                                "description": "拜訪世界文化遺產，俯瞰京都市景。",
                                "type": "sightseeing",
                                "location": {
                                    "lat": 34.9949,
                                    "lng": 135.7850,
                                    "name": "清水寺",
                                },
                            }
                        ],
                    }
                ],
            }
        }
    )
