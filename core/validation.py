# core/validation.py

from __future__ import annotations

import datetime as dt
import re
from typing import Any, List, Optional, Union

from core.dates import parse_local_date
from core.errors import TripInputError
from core.logging_config import get_logger
from core.models import DEFAULT_TRANSPORT, Language, TravelStyle, TripPlan, TripRequest

log = get_logger("validation")

_MESSAGES = {
    Language.ZH_TW: {
        "required": "請填寫出發地、目的地與日期",
        "order": "結束日期必須晚於或等於開始日期",
        "past": "開始日期不能早於今天",
        "date": "日期格式錯誤 (YYYY-MM-DD)",
    },
    Language.EN: {
        "required": "Please fill in origin, destination and dates",
        "order": "End date must be after start date",
        "past": "Start date cannot be in the past",
        "date": "Invalid date (expected YYYY-MM-DD)",
    },
}


# ──────────────────────────────────────────────────────────────────────────────
# Input validation (before any Gemini call)
# ──────────────────────────────────────────────────────────────────────────────
def validate_request(
    origin: str,
    destination: str,
    start: Any,
    end: Any,
    style: Any = TravelStyle.STANDARD,
    transport_mode: str = "",
    custom_preferences: str = "",
    language: Any = Language.ZH_TW,
    min_date: Optional[dt.date] = None,
) -> TripRequest:
    """Build a TripRequest from raw form values, or raise TripInputError."""
    try:
        lang = Language(language)
    except ValueError as exc:
        raise TripInputError(f"Unsupported language: {language!r}") from exc
    msg = _MESSAGES[lang]

    try:
        travel_style = TravelStyle(style)
    except ValueError as exc:
        raise TripInputError(f"Unsupported travel style: {style!r}") from exc

    try:
        start_date, end_date = parse_local_date(start), parse_local_date(end)
    except (TypeError, ValueError) as exc:
        raise TripInputError(msg["date"]) from exc

    origin, destination = (origin or "").strip(), (destination or "").strip()
    if not (origin and destination and start_date and end_date):
        raise TripInputError(msg["required"])
    if end_date < start_date:
        raise TripInputError(msg["order"])
    if min_date is not None and start_date < min_date:
        raise TripInputError(msg["past"])

    return TripRequest(
        origin=origin,
        destination=destination,
        start=start_date,
        end=end_date,
        style=travel_style,
        transport_mode=(transport_mode or "").strip() or DEFAULT_TRANSPORT,
        custom_preferences=(custom_preferences or "").strip(),
        language=lang,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Post-validation of Gemini's answer (advisory only)
# ──────────────────────────────────────────────────────────────────────────────
_HOURS = re.compile(r"(\d+(?:\.\d+)?)\s*(?:h(?:ou)?rs?|h(?![a-z])|小時|小时)", re.IGNORECASE)
_MINUTES = re.compile(r"(\d+)\s*(?:m(?:in(?:ute)?s?)?\b|分)", re.IGNORECASE)


def parse_minutes(text: Union[str, int, None]) -> Optional[int]:
    """
    "27 mins" → 27, "1 hr 35 mins" → 95, "1小時40分" → 100.
    None if no duration can be read.
    """
    if not text:
        return None
    text = str(text)
    hours = _HOURS.search(text)
    minutes = _MINUTES.search(text)
    if not hours and not minutes:
        return None
    total = 0.0
    if hours:
        total += float(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    return int(round(total))


def round_to_ten(minutes: int) -> int:
    """Nearest multiple of 10, halves rounded up (35 → 40, 12 → 10)."""
    return (minutes + 5) // 10 * 10


def _rating(value: str) -> Optional[float]:
    m = re.search(r"\d+(?:\.\d+)?", value or "")
    return float(m.group()) if m else None


def _summary_too_long(summary: str, language: Language) -> bool:
    if language is Language.EN:
        return len(summary.split()) > 5
    return len(summary.strip()) > 10


def audit_plan(plan: TripPlan) -> List[str]:
    """
    List the ways `plan` ignores the prompt's mandatory rules.
    The plan itself is left untouched.
    """
    issues: List[str] = []

    if _summary_too_long(plan.summary, plan.language):
        issues.append(f"summary too long: {plan.summary!r}")

    if plan.accommodations and not 3 <= len(plan.accommodations) <= 4:
        issues.append(f"expected 3-4 accommodations, got {len(plan.accommodations)}")
    for acc in plan.accommodations:
        if len(acc.reviews) != 3:
            issues.append(f"{acc.name}: expected 3 reviews, got {len(acc.reviews)}")

    expected = list(range(1, len(plan.days) + 1))
    if [d.day_number for d in plan.days] != expected:
        issues.append("day numbers are not sequential from 1")

    for day in plan.days:
        for act in day.activities:
            where = f"day {day.day_number} / {act.activity}"
            minutes = parse_minutes(act.travel_time_from_previous)
            if minutes is not None and minutes % 10:
                issues.append(
                    f"{where}: travel time {act.travel_time_from_previous!r} not rounded to 10 mins"
                    f" (≈ {round_to_ten(minutes)} mins)"
                )
            count = len(act.restaurant_options)
            if count and not 4 <= count <= 5:
                issues.append(f"{where}: expected 4-5 restaurants, got {count}")
            for r in act.restaurant_options:
                m = parse_minutes(r.travel_time)
                if m is not None and m % 10:
                    issues.append(f"{where} / {r.name}: travel time {r.travel_time!r} not rounded to 10 mins")
                rating = _rating(r.rating)
                if rating is not None and rating <= 4.0:
                    issues.append(f"{where} / {r.name}: rating {r.rating} not above 4.0")

    for issue in issues:
        log.warning("Plan for %s: %s", plan.destination, issue)
    return issues

