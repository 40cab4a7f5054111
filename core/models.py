# core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from core.dates import format_local_date, inclusive_days, parse_local_date


class TravelStyle(str, Enum):
    STANDARD = "standard"
    DEEP = "deep"
    BUDGET = "budget"
    LUXURY = "luxury"
    FOODIE = "foodie"


class ActivityType(str, Enum):
    SIGHTSEEING = "sightseeing"
    FOOD = "food"
    TRANSPORT = "transport"
    REST = "rest"
    SHOPPING = "shopping"
    SPECIAL_EVENT = "special_event"


class Language(str, Enum):
    ZH_TW = "zh-TW"
    EN = "en"


TRANSPORT_CHOICES = ["Public Transport", "Car", "Scooter", "Other"]
DEFAULT_TRANSPORT = "Public Transport"


def _text(data: Dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return default if value is None else str(value)


def _flag(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _items(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    return value if isinstance(value, list) else []


def _date(data: Dict[str, Any], key: str) -> Optional[date]:
    try:
        return parse_local_date(data.get(key))
    except (TypeError, ValueError):
        # Gemini sometimes writes "Oct 25" instead of an ISO date
        return None


# ──────────────────────────────────────────────────────────────────────────────
# Request
# ──────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TripRequest:
    origin: str
    destination: str
    start: date
    end: date
    style: TravelStyle = TravelStyle.STANDARD
    transport_mode: str = DEFAULT_TRANSPORT
    custom_preferences: str = ""
    language: Language = Language.ZH_TW

    @property
    def duration(self) -> int:
        return inclusive_days(self.start, self.end)


# ──────────────────────────────────────────────────────────────────────────────
# Plan returned by Gemini (+ fields injected client-side)
# ──────────────────────────────────────────────────────────────────────────────
@dataclass
class Restaurant:
    name: str
    hours: str = ""
    price: str = ""
    rating: str = ""
    travel_time: str = ""
    google_maps_query: str = ""
    must_try: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Restaurant":
        return cls(
            name=_text(data, "name"),
            hours=_text(data, "hours"),
            price=_text(data, "price"),
            rating=_text(data, "rating"),
            travel_time=_text(data, "travelTime"),
            google_maps_query=_text(data, "googleMapsQuery"),
            must_try=_text(data, "mustTry"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "hours": self.hours,
            "price": self.price,
            "rating": self.rating,
            "travelTime": self.travel_time,
            "googleMapsQuery": self.google_maps_query,
            "mustTry": self.must_try,
        }


@dataclass
class Activity:
    time: str
    activity: str
    description: str = ""
    location: str = ""
    type: str = ActivityType.SIGHTSEEING.value
    is_special_event: bool = False
    estimated_cost: str = ""
    travel_time_from_previous: Optional[str] = None
    travel_advice: str = ""
    google_maps_query: str = ""
    image_prompt: str = ""
    restaurant_options: List[Restaurant] = field(default_factory=list)

    @property
    def kind(self) -> Optional[ActivityType]:
        """Known activity type, or None when Gemini invented one."""
        try:
            return ActivityType((self.type or "").lower())
        except ValueError:
            return None

    @property
    def is_special(self) -> bool:
        return self.is_special_event or self.kind is ActivityType.SPECIAL_EVENT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        return cls(
            time=_text(data, "time"),
            activity=_text(data, "activity"),
            description=_text(data, "description"),
            location=_text(data, "location"),
            type=_text(data, "type", ActivityType.SIGHTSEEING.value),
            is_special_event=_flag(data, "isSpecialEvent"),
            estimated_cost=_text(data, "estimatedCost"),
            travel_time_from_previous=_text(data, "travelTimeFromPrevious") or None,
            travel_advice=_text(data, "travelAdvice"),
            google_maps_query=_text(data, "googleMapsQuery"),
            image_prompt=_text(data, "imagePrompt"),
            restaurant_options=[
                Restaurant.from_dict(r) for r in _items(data, "restaurantOptions") if isinstance(r, dict)
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "time": self.time,
            "activity": self.activity,
            "description": self.description,
            "location": self.location,
            "type": self.type,
            "isSpecialEvent": self.is_special_event,
            "estimatedCost": self.estimated_cost,
            "travelAdvice": self.travel_advice,
            "googleMapsQuery": self.google_maps_query,
            "imagePrompt": self.image_prompt,
            "restaurantOptions": [r.to_dict() for r in self.restaurant_options],
        }
        if self.travel_time_from_previous:
            out["travelTimeFromPrevious"] = self.travel_time_from_previous
        return out


@dataclass
class DayPlan:
    day_number: int
    title: str = ""
    theme: str = ""
    date: Optional[date] = None
    activities: List[Activity] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], fallback_number: int = 1) -> "DayPlan":
        try:
            day_number = int(data.get("dayNumber", fallback_number))
        except (TypeError, ValueError):
            day_number = fallback_number
        return cls(
            day_number=day_number,
            title=_text(data, "title"),
            theme=_text(data, "theme"),
            date=_date(data, "date"),
            activities=[Activity.from_dict(a) for a in _items(data, "activities") if isinstance(a, dict)],
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "dayNumber": self.day_number,
            "title": self.title,
            "theme": self.theme,
            "activities": [a.to_dict() for a in self.activities],
        }
        if self.date is not None:
            out["date"] = format_local_date(self.date)
        return out


@dataclass
class Accommodation:
    name: str
    location: str = ""
    description: str = ""
    price_per_night: str = ""
    reason: str = ""
    google_maps_query: str = ""
    rating: str = ""
    reviews: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Accommodation":
        return cls(
            name=_text(data, "name"),
            location=_text(data, "location"),
            description=_text(data, "description"),
            price_per_night=_text(data, "pricePerNight"),
            reason=_text(data, "reason"),
            google_maps_query=_text(data, "googleMapsQuery"),
            rating=_text(data, "rating"),
            reviews=[str(r) for r in _items(data, "reviews")],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "location": self.location,
            "description": self.description,
            "pricePerNight": self.price_per_night,
            "reason": self.reason,
            "googleMapsQuery": self.google_maps_query,
            "rating": self.rating,
            "reviews": list(self.reviews),
        }


@dataclass
class TripPlan:
    destination: str
    summary: str = ""
    duration: str = ""
    style: str = ""
    transport_mode: str = ""
    total_budget_estimate: str = ""
    accommodations: List[Accommodation] = field(default_factory=list)
    days: List[DayPlan] = field(default_factory=list)
    language: Language = Language.ZH_TW
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TripPlan":
        """
        Build a plan from Gemini's JSON (camelCase keys).
        Missing optional fields become empty values, never errors.
        """
        try:
            language = Language(data.get("language") or Language.ZH_TW.value)
        except ValueError:
            language = Language.ZH_TW
        return cls(
            destination=_text(data, "destination"),
            summary=_text(data, "summary"),
            duration=_text(data, "duration"),
            style=_text(data, "style"),
            transport_mode=_text(data, "transportMode"),
            total_budget_estimate=_text(data, "totalBudgetEstimate"),
            accommodations=[
                Accommodation.from_dict(a) for a in _items(data, "accommodations") if isinstance(a, dict)
            ],
            days=[
                DayPlan.from_dict(d, fallback_number=i)
                for i, d in enumerate((d for d in _items(data, "days") if isinstance(d, dict)), start=1)
            ],
            language=language,
            start_date=_date(data, "startDate"),
            end_date=_date(data, "endDate"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "destination": self.destination,
            "summary": self.summary,
            "duration": self.duration,
            "style": self.style,
            "transportMode": self.transport_mode,
            "totalBudgetEstimate": self.total_budget_estimate,
            "accommodations": [a.to_dict() for a in self.accommodations],
            "days": [d.to_dict() for d in self.days],
            "language": self.language.value,
            "startDate": format_local_date(self.start_date),
            "endDate": format_local_date(self.end_date),
        }


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" | "model"
    text: str

    def to_content(self) -> Dict[str, Any]:
        """Gemini multi-turn content entry."""
        return {"role": self.role, "parts": [self.text]}
