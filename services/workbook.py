# services/workbook.py

from __future__ import annotations

import os
import re
import tempfile
from typing import Optional, Tuple

import pandas as pd

from core.dates import format_local_date
from core.display import badge_for, day_display_date
from core.logging_config import get_logger
from core.models import TripPlan

log = get_logger("workbook")

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _itinerary_rows(plan: TripPlan) -> list[dict]:
    rows = []
    for day in plan.days:
        date = format_local_date(day_display_date(day, plan))
        for act in day.activities:
            rows.append(
                {
                    "day": day.day_number,
                    "date": date,
                    "title": day.title,
                    "time": act.time,
                    "activity": act.activity,
                    "type": badge_for(act).label(plan.language),
                    "special_event": act.is_special,
                    "location": act.location,
                    "estimated_cost": act.estimated_cost,
                    "travel_time": act.travel_time_from_previous or "",
                    "travel_advice": act.travel_advice,
                    "description": act.description,
                }
            )
    return rows


def _restaurant_rows(plan: TripPlan) -> list[dict]:
    return [
        {
            "day": day.day_number,
            "near": act.activity,
            "name": r.name,
            "rating": r.rating,
            "price": r.price,
            "hours": r.hours,
            "travel_time": r.travel_time,
            "must_try": r.must_try,
        }
        for day in plan.days
        for act in day.activities
        for r in act.restaurant_options
    ]


def _accommodation_rows(plan: TripPlan) -> list[dict]:
    return [
        {
            "name": a.name,
            "location": a.location,
            "price_per_night": a.price_per_night,
            "rating": a.rating,
            "reason": a.reason,
            "reviews": " / ".join(a.reviews),
        }
        for a in plan.accommodations
    ]


def workbook_filename(plan: TripPlan) -> str:
    slug = re.sub(r"[^\w-]+", "_", plan.destination).strip("_") or "trip"
    return f"itinerary_{slug}_{format_local_date(plan.start_date) or 'undated'}.xlsx"


def generate_workbook(plan: TripPlan, directory: Optional[str] = None) -> str:
    """
    Write the plan to an XLSX with three sheets (Itinerary, Restaurants,
    Accommodations) and return the file path.
    """
    directory = directory or tempfile.gettempdir()
    xlsx_path = os.path.join(directory, workbook_filename(plan))

    with pd.ExcelWriter(xlsx_path, engine="openpyxl") as writer:
        pd.DataFrame(_itinerary_rows(plan)).to_excel(writer, sheet_name="Itinerary", index=False)
        pd.DataFrame(_restaurant_rows(plan)).to_excel(writer, sheet_name="Restaurants", index=False)
        pd.DataFrame(_accommodation_rows(plan)).to_excel(writer, sheet_name="Accommodations", index=False)

    log.info("Workbook written to %s", xlsx_path)
    return xlsx_path


def workbook_bytes(plan: TripPlan, directory: Optional[str] = None) -> Tuple[str, bytes]:
    """(file name, XLSX content) for a download button."""
    xlsx_path = generate_workbook(plan, directory)
    with open(xlsx_path, "rb") as f:
        return os.path.basename(xlsx_path), f.read()
