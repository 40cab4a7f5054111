# tests/test_services.py

import datetime as dt
from urllib.parse import parse_qs, urlparse

import pandas as pd

from core.models import Activity, TripPlan
from services import calendar as gcal
from services import maps, workbook


def _query(url):
    return {k: v[0] for k, v in parse_qs(urlparse(url).query).items()}


# ──────────────────────────────────────────────────────────────────────────────
# maps
# ──────────────────────────────────────────────────────────────────────────────
def test_search_url_is_encoded():
    url = maps.search_url("Kiyomizu-dera & Gion, Kyoto")
    assert url.startswith("https://www.google.com/maps/search/?api=1&query=")
    assert " " not in url
    assert _query(url)["query"] == "Kiyomizu-dera & Gion, Kyoto"


def test_directions_url_travel_mode():
    assert _query(maps.directions_url("Gion", "Car"))["travelmode"] == "driving"
    assert _query(maps.directions_url("Gion", "Public Transport"))["travelmode"] == "transit"
    assert _query(maps.directions_url("Gion", "Car"))["destination"] == "Gion"


def test_embed_url():
    url = maps.embed_url("清水寺")
    assert url.startswith("https://maps.google.com/maps?q=")
    assert url.endswith("&output=embed")
    assert "z=15" in url


# ──────────────────────────────────────────────────────────────────────────────
# calendar
# ──────────────────────────────────────────────────────────────────────────────
def test_parse_start_time():
    assert gcal.parse_start_time("10:00 AM") == dt.time(10, 0)
    assert gcal.parse_start_time("7:30 pm") == dt.time(19, 30)
    assert gcal.parse_start_time("12:15 AM") == dt.time(0, 15)
    assert gcal.parse_start_time("14:00") == dt.time(14, 0)
    assert gcal.parse_start_time("morning") is None


def test_activity_event_url():
    act = Activity("7:30 PM", "Gion Odori", description="Dance show", location="Gion Kaikan")
    q = _query(gcal.activity_event_url(act, dt.date(2024, 11, 2), "Kyoto"))
    assert q["action"] == "TEMPLATE"
    assert q["text"] == "Gion Odori (Kyoto)"
    assert q["dates"] == "20241102T193000/20241102T203000"
    assert q["location"] == "Gion Kaikan"


def test_activity_event_url_all_day_when_time_unknown():
    act = Activity("Afternoon", "Free time")
    q = _query(gcal.activity_event_url(act, dt.date(2024, 12, 31), "Kyoto"))
    assert q["dates"] == "20241231/20250101"
    assert q["location"] == "Kyoto"


# ──────────────────────────────────────────────────────────────────────────────
# workbook
# ──────────────────────────────────────────────────────────────────────────────
def test_generate_workbook(tmp_path, plan_dict):
    plan = TripPlan.from_dict(plan_dict)
    path = workbook.generate_workbook(plan, str(tmp_path))

    assert path.endswith("itinerary_Kyoto_1999-01-01.xlsx")
    sheets = pd.read_excel(path, sheet_name=None)
    assert set(sheets) == {"Itinerary", "Restaurants", "Accommodations"}
    itinerary = sheets["Itinerary"]
    assert list(itinerary["activity"]) == ["Kiyomizu-dera", "Lunch in Gion"]
    assert list(itinerary["date"]) == ["1999-01-01", "1999-01-01"]
    assert len(sheets["Restaurants"]) == 4
    assert sheets["Accommodations"].loc[0, "reviews"] == "Great breakfast / Clean rooms / Friendly staff"


def test_workbook_for_empty_plan(tmp_path):
    path = workbook.generate_workbook(TripPlan(destination="Kyoto / Osaka"), str(tmp_path))
    assert path.endswith("itinerary_Kyoto_Osaka_undated.xlsx")


def test_workbook_bytes_for_download(tmp_path, plan_dict):
    name, data = workbook.workbook_bytes(TripPlan.from_dict(plan_dict), str(tmp_path))
    assert name == "itinerary_Kyoto_1999-01-01.xlsx"
    assert data[:2] == b"PK"  # xlsx is a zip archive
    assert (tmp_path / name).read_bytes() == data
