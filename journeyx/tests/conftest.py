"""Shared fixtures for the journeyx test suite."""

import copy
from datetime import date

import pytest

from journeyx.shared.contracts import ItineraryResponse, TripRequest
from journeyx.validation import validate_trip_plan


KYOTO_PLAN = {
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
                    "transportDetail": "從住宿搭乘公車 100 號",
                    "cost": "¥1,000/人",
                    "localTip": "建議開門前到達以避開人潮",
                    "duration": "2 小時",
                    "bookingRequired": False,
                    "rainPlan": "改至三十三間堂（室內）",
                    "location": {
                        "lat": 34.9949,
                        "lng": 135.7850,
                        "name": "清水寺",
                        "address": "京都府京都市東山區",
                    },
                }
            ],
        }
    ],
}


def _make_plan_dict():
    """Fresh copy of a valid one-day plan in wire format."""
    return copy.deepcopy(KYOTO_PLAN)


def _make_two_day_plan_dict():
    """Valid plan with two days, mixing located and unlocated activities."""
    plan = _make_plan_dict()
    plan["days"][0]["activities"].append(
        {
            "time": "12:00",
            "title": "午餐",
            "description": "在附近的食堂用餐。",
            "type": "food",
        }
    )
    plan["days"].append(
        {
            "day": 2,
            "date": "2025-01-02",
            "theme": "嵐山",
            "summary": "竹林與渡月橋",
            "activities": [
                {
                    "time": "10:00",
                    "title": "竹林之道",
                    "description": "漫步竹林。",
                    "type": "other",
                    "location": {"lat": 35.017, "lng": 135.673, "name": "竹林之道"},
                },
                {
                    "time": "15:00",
                    "title": "回飯店休息",
                    "description": "稍作休息。",
                    "type": "rest",
                },
            ],
        }
    )
    return plan


@pytest.fixture
def plan_dict():
    return _make_plan_dict()


@pytest.fixture
def two_day_plan_dict():
    return _make_two_day_plan_dict()


@pytest.fixture
def trip_plan():
    return validate_trip_plan(_make_plan_dict())


@pytest.fixture
def two_day_plan():
    return validate_trip_plan(_make_two_day_plan_dict())


@pytest.fixture
def trip_request():
    return TripRequest(
        destination="日本京都",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 3),
        party="2 位成人",
        must_visit="清水寺",
        accommodation="京都車站附近",
        preferences="步調輕鬆",
    )


@pytest.fixture
def itinerary_response(trip_plan):
    return ItineraryResponse(plan=trip_plan, grounding_chunks=[])
