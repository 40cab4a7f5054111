# tests/conftest.py

import datetime as dt
import json
from types import SimpleNamespace

import pytest

from core.models import Language, TravelStyle, TripRequest


def make_response(text):
    """Shape of a google.generativeai response: candidates[0].content.parts[*].text"""
    if text is None:
        return SimpleNamespace(candidates=[])
    part = SimpleNamespace(text=text)
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeModel:
    """Stands in for genai.GenerativeModel; records every call."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate_content(self, contents, **kwargs):
        self.calls.append((contents, kwargs))
        if self.error is not None:
            raise self.error
        return make_response(self.reply)


@pytest.fixture
def kyoto_request():
    return TripRequest(
        origin="Taipei",
        destination="Kyoto",
        start=dt.date(2024, 11, 1),
        end=dt.date(2024, 11, 5),
        style=TravelStyle.FOODIE,
        transport_mode="Public Transport",
        language=Language.ZH_TW,
    )


@pytest.fixture
def plan_dict():
    return {
        "destination": "Kyoto",
        "duration": "99 days",
        "style": "foodie",
        "transportMode": "Public Transport",
        "summary": "古都美食",
        "totalBudgetEstimate": "NT$30,000",
        "language": "en",
        "startDate": "1999-01-01",
        "accommodations": [
            {
                "name": "Hotel Kanra",
                "location": "Shimogyo",
                "description": "Modern ryokan-style hotel",
                "pricePerNight": "¥30,000",
                "reason": "Central",
                "googleMapsQuery": "Hotel Kanra Kyoto",
                "rating": "4.6",
                "reviews": ["Great breakfast", "Clean rooms", "Friendly staff"],
            }
        ],
        "days": [
            {
                "dayNumber": 1,
                "title": "東山散策",
                "theme": "culture",
                "activities": [
                    {
                        "time": "10:00 AM",
                        "activity": "Kiyomizu-dera",
                        "description": "Temple on the hill.",
                        "location": "Higashiyama",
                        "type": "sightseeing",
                        "googleMapsQuery": "Kiyomizu-dera Kyoto",
                        "imagePrompt": "Kiyomizu-dera Kyoto",
                    },
                    {
                        "time": "12:30 PM",
                        "activity": "Lunch in Gion",
                        "description": "Kaiseki lunch.",
                        "location": "Gion",
                        "type": "food",
                        "travelTimeFromPrevious": "20 mins",
                        "travelAdvice": "Bus 206",
                        "googleMapsQuery": "Gion Kyoto",
                        "imagePrompt": "Gion Kyoto",
                        "restaurantOptions": [
                            {
                                "name": f"Restaurant {i}",
                                "hours": "11:00-21:00",
                                "price": "¥2,000",
                                "rating": "4.5",
                                "travelTime": "10 mins walk",
                                "googleMapsQuery": f"Restaurant {i} Kyoto",
                                "mustTry": "Yudofu",
                            }
                            for i in range(4)
                        ],
                    },
                ],
            },
            {"dayNumber": 2, "title": "Arashiyama", "theme": "nature", "activities": []},
        ],
    }


@pytest.fixture
def plan_json(plan_dict):
    return json.dumps(plan_dict, ensure_ascii=False)
