"""
Built-in sample trip for demos.

Lets the session show a complete Kyoto itinerary without calling the
generation service.
"""

from typing import Tuple

from journeyx.shared.contracts import TripPlan, TripRequest
from journeyx.validation import validate_trip_plan


SAMPLE_REQUEST = {
    "destination": "日本京都",
    "startDate": "2024-04-01",
    "endDate": "2024-04-05",
    "members": "2位成人",
    "mustVisit": "清水寺、嵐山、金閣寺",
    "accommodation": "京都車站附近飯店",
    "preferences": "喜歡歷史文化，步調輕鬆",
}

SAMPLE_PLAN = {
    "tripTitle": "京都古都巡禮五日遊",
    "destination": "日本京都",
    "duration": "5天4夜",
    "totalBudgetEstimate": "約 50,000 TWD (不含機票)",
    "visualVibe": "historical",
    "generalTips": [
        "京都市區巴士一日券非常划算，建議購買。",
        "參觀寺廟請保持安靜，部分區域禁止攝影。",
        "早起可以避開熱門景點的人潮。",
    ],
    "days": [
        {
            "day": 1,
            "date": "2024-04-01",
            "theme": "抵達與車站周邊探索",
            "summary": "抵達京都，入住飯店，探索京都車站周邊現代與傳統的融合。",
            "activities": [
                {
                    "time": "14:00",
                    "title": "抵達京都車站",
                    "description": "搭乘 Haruka 特急抵達京都車站，欣賞現代化建築設計。",
                    "type": "transport",
                    "location": {"lat": 34.9858, "lng": 135.7588, "name": "京都車站"},
                },
                {
                    "time": "15:30",
                    "title": "飯店 Check-in",
                    "description": "前往飯店辦理入住手續，放置行李。",
                    "type": "rest",
                    "location": {"lat": 34.9858, "lng": 135.7588, "name": "京都車站附近飯店"},
                },
                {
                    "time": "17:00",
                    "title": "京都塔展望台",
                    "description": "登上京都塔俯瞰京都市景，欣賞夕陽。",
                    "type": "sightseeing",
                    "location": {"lat": 34.9875, "lng": 135.7594, "name": "京都塔"},
                },
                {
                    "time": "19:00",
                    "title": "拉麵小路晚餐",
                    "description": "在京都車站拉麵小路品嚐來自日本各地的拉麵。",
                    "type": "food",
                    "location": {"lat": 34.9858, "lng": 135.7588, "name": "京都拉麵小路"},
                },
            ],
        },
        {
            "day": 2,
            "date": "2024-04-02",
            "theme": "清水寺與祇園風情",
            "summary": "探訪世界遺產清水寺，漫步二年坂、三年坂，感受祇園古街氛圍。",
            "activities": [
                {
                    "time": "09:00",
                    "title": "清水寺參拜",
                    "description": "參觀著名的清水舞台，祈求良緣與健康。",
                    "type": "sightseeing",
                    "location": {"lat": 34.9949, "lng": 135.7850, "name": "清水寺"},
                },
                {
                    "time": "11:30",
                    "title": "二三年坂散策",
                    "description": "漫步於古色古香的街道，選購傳統工藝品與伴手禮。",
                    "type": "shopping",
                    "location": {"lat": 34.9965, "lng": 135.7820, "name": "三年坂"},
                },
                {
                    "time": "13:00",
                    "title": "湯豆腐午餐",
                    "description": "品嚐京都著名的湯豆腐料理，享受清淡優雅的風味。",
                    "type": "food",
                    "location": {"lat": 34.9910, "lng": 135.7790, "name": "奧丹清水"},
                },
                {
                    "time": "15:00",
                    "title": "八坂神社",
                    "description": "參訪祇園的守護神社，感受熱鬧的氣氛。",
                    "type": "sightseeing",
                    "location": {"lat": 35.0037, "lng": 135.7785, "name": "八坂神社"},
                },
            ],
        },
        {
            "day": 3,
            "date": "2024-04-03",
            "theme": "嵐山竹林與小火車",
            "summary": "前往嵐山地區，搭乘嵯峨野小火車，漫步竹林之道。",
            "activities": [
                {
                    "time": "09:00",
                    "title": "嵯峨野小火車",
                    "description": "搭乘復古小火車欣賞保津川峽谷美景。",
                    "type": "sightseeing",
                    "location": {"lat": 35.0170, "lng": 135.6810, "name": "嵯峨野小火車"},
                },
                {
                    "time": "10:30",
                    "title": "嵐山竹林之道",
                    "description": "漫步於高聳的竹林中，聆聽風吹過竹葉的聲音。",
                    "type": "sightseeing",
                    "location": {"lat": 35.0170, "lng": 135.6730, "name": "竹林之道"},
                },
                {
                    "time": "13:30",
                    "title": "渡月橋與嵐山大街",
                    "description": "欣賞渡月橋美景，品嚐嵐山大街的抹茶甜點。",
                    "type": "food",
                    "location": {"lat": 35.0130, "lng": 135.6770, "name": "渡月橋"},
                },
            ],
        },
    ],
}


def load_sample_trip() -> Tuple[TripRequest, TripPlan]:
    """Return the sample request and its validated plan."""
    return TripRequest.model_validate(SAMPLE_REQUEST), validate_trip_plan(SAMPLE_PLAN)
