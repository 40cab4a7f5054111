# services/calendar.py
"""
"Add to Google Calendar" links, one per activity.
The dates are floating local times (no trailing Z): the traveller's calendar
places them in its own timezone.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional
from urllib.parse import urlencode

from core.models import Activity

_BASE = "https://calendar.google.com/calendar/render"
_TIME = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*([AaPp][Mm])?")


def parse_start_time(value: str) -> Optional[dt.time]:
    """'10:00 AM' → 10:00, '7:30 pm' → 19:30, '14:00' → 14:00; None if unreadable."""
    m = _TIME.search(value or "")
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2) or 0)
    meridiem = (m.group(3) or "").upper()
    if meridiem == "PM" and hour < 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0
    if hour > 23 or minute > 59:
        return None
    return dt.time(hour, minute)


def activity_event_url(
    activity: Activity,
    day: dt.date,
    destination: str,
    duration: dt.timedelta = dt.timedelta(hours=1),
) -> str:
    start_time = parse_start_time(activity.time)
    if start_time is None:
        # all-day event
        dates = f"{day:%Y%m%d}/{day + dt.timedelta(days=1):%Y%m%d}"
    else:
        start = dt.datetime.combine(day, start_time)
        dates = f"{start:%Y%m%dT%H%M%S}/{start + duration:%Y%m%dT%H%M%S}"

    params = {
        "action": "TEMPLATE",
        "text": f"{activity.activity} ({destination})",
        "dates": dates,
        "details": activity.description,
        "location": activity.location or destination,
    }
    return f"{_BASE}?{urlencode(params)}"
