# tests/test_models.py

import datetime as dt

from core.models import Activity, ActivityType, ChatMessage, DayPlan, Language, TripPlan


def test_from_dict_tolerates_missing_fields():
    plan = TripPlan.from_dict({"destination": "Kyoto", "days": [{"activities": [{"time": "9:00"}]}]})
    assert plan.accommodations == []
    assert plan.summary == ""
    day = plan.days[0]
    assert day.day_number == 1
    assert day.date is None
    act = day.activities[0]
    assert act.restaurant_options == []
    assert act.travel_time_from_previous is None
    assert act.is_special_event is False


def test_bad_collections_are_ignored():
    plan = TripPlan.from_dict({"destination": "X", "days": "none", "accommodations": [None, "x"]})
    assert plan.days == []
    assert plan.accommodations == []


def test_day_date_parsing():
    assert DayPlan.from_dict({"dayNumber": 2, "date": "2024-06-11"}).date == dt.date(2024, 6, 11)
    assert DayPlan.from_dict({"dayNumber": 2, "date": "Jun 11"}).date is None
    assert DayPlan.from_dict({"dayNumber": "3"}).day_number == 3
    assert DayPlan.from_dict({"dayNumber": "three"}, fallback_number=4).day_number == 4


def test_activity_kind():
    assert Activity.from_dict({"type": "Food"}).kind is ActivityType.FOOD
    assert Activity.from_dict({"type": "nightlife"}).kind is None
    assert Activity.from_dict({"type": "special_event"}).is_special
    assert Activity.from_dict({"type": "food", "isSpecialEvent": True}).is_special


def test_special_event_flag_from_strings():
    assert Activity.from_dict({"isSpecialEvent": "true"}).is_special_event is True
    assert Activity.from_dict({"isSpecialEvent": " TRUE "}).is_special_event is True
    assert Activity.from_dict({"isSpecialEvent": "false"}).is_special is False
    assert Activity.from_dict({"isSpecialEvent": 1}).is_special_event is False


def test_numeric_travel_time_becomes_text():
    assert Activity.from_dict({"travelTimeFromPrevious": 30}).travel_time_from_previous == "30"
    assert Activity.from_dict({"travelTimeFromPrevious": ""}).travel_time_from_previous is None


def test_to_dict_round_trips_wire_format(plan_dict):
    plan = TripPlan.from_dict(plan_dict)
    again = TripPlan.from_dict(plan.to_dict())
    assert again == plan
    first = plan.to_dict()["days"][0]["activities"][0]
    assert "travelTimeFromPrevious" not in first


def test_unknown_language_defaults_to_chinese():
    assert TripPlan.from_dict({"destination": "X", "language": "fr"}).language is Language.ZH_TW


def test_trip_request_duration(kyoto_request):
    assert kyoto_request.duration == 5


def test_chat_message_content():
    assert ChatMessage("model", "hi").to_content() == {"role": "model", "parts": ["hi"]}
