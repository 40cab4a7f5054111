# core/display.py

from __future__ import annotations

import datetime as dt
from typing import Dict, NamedTuple, Optional, Tuple

from core.dates import nth_day
from core.models import Activity, ActivityType, DayPlan, Language, TravelStyle, TripPlan


class Badge(NamedTuple):
    icon: str
    label_zh: str
    label_en: str

    def label(self, language: Language) -> str:
        return self.label_en if language is Language.EN else self.label_zh


# One entry per activity kind; the UI never branches on the type string itself.
ACTIVITY_BADGES: Dict[ActivityType, Badge] = {
    ActivityType.SIGHTSEEING: Badge("📷", "景點", "Sightseeing"),
    ActivityType.FOOD: Badge("🍴", "美食", "Food"),
    ActivityType.TRANSPORT: Badge("🚌", "交通", "Transport"),
    ActivityType.REST: Badge("🛏️", "休息", "Rest"),
    ActivityType.SHOPPING: Badge("🛍️", "購物", "Shopping"),
    ActivityType.SPECIAL_EVENT: Badge("✨", "限定活動", "Special Event"),
}
DEFAULT_BADGE = Badge("📍", "行程", "Activity")

STYLE_LABELS: Dict[TravelStyle, Tuple[str, str]] = {
    TravelStyle.STANDARD: ("標準行程", "Standard"),
    TravelStyle.DEEP: ("深度文化", "Deep Culture"),
    TravelStyle.BUDGET: ("小資省錢", "Budget Saver"),
    TravelStyle.LUXURY: ("豪華享受", "Luxury"),
    TravelStyle.FOODIE: ("美食之旅", "Foodie"),
}

TRANSPORT_LABELS: Dict[str, Tuple[str, str]] = {
    "Public Transport": ("大眾運輸", "Public Transport"),
    "Car": ("汽車", "Car"),
    "Scooter": ("機車", "Scooter"),
    "Other": ("其他 (自行輸入)", "Other"),
}

UI_TEXT: Dict[Language, Dict[str, str]] = {
    Language.ZH_TW: {
        "origin": "出發地",
        "destination": "目的地",
        "dates": "旅遊日期",
        "select_dates": "請選擇日期",
        "clear": "清除",
        "style": "旅遊風格",
        "transport": "交通方式",
        "custom_transport": "輸入交通方式 (例如: 重機, 徒步)",
        "preferences": "特別需求",
        "generate": "開始規劃",
        "generating": "正在規劃您的完美行程…",
        "new_trip": "規劃新行程",
        "your_plan": "您的專屬行程",
        "overview": "總覽",
        "budget": "預估花費",
        "stay": "住宿推薦",
        "top_reviews": "精選評論",
        "check_availability": "查看地圖與房價",
        "must_try": "必點招牌",
        "go": "導航",
        "travel_to_next": "前往下一站",
        "depends_on_traffic": "依路況而定",
        "special_event": "期間限定",
        "restaurants": "餐廳推薦",
        "chat_title": "AI 旅遊顧問",
        "chat_hint": "👋 嗨！對這個行程有什麼想法嗎？我可以幫你解釋或提供建議。",
        "chat_placeholder": "提出任何問題...",
        "download": "下載行程 (XLSX)",
        "add_to_calendar": "加入 Google 日曆",
        "audit": "注意：AI 回覆未完全符合規則",
    },
    Language.EN: {
        "origin": "From",
        "destination": "To",
        "dates": "Travel dates",
        "select_dates": "Select dates",
        "clear": "Clear",
        "style": "Travel style",
        "transport": "Transport",
        "custom_transport": "Enter your transport",
        "preferences": "Special requests",
        "generate": "Plan my trip",
        "generating": "Building your perfect trip...",
        "new_trip": "New Trip",
        "your_plan": "Your Custom Plan",
        "overview": "Overview",
        "budget": "Estimated budget",
        "stay": "Where to stay",
        "top_reviews": "Top Reviews",
        "check_availability": "Check Availability",
        "must_try": "Must Try",
        "go": "Go",
        "travel_to_next": "Travel to next stop",
        "depends_on_traffic": "Depends on traffic",
        "special_event": "Special Event",
        "restaurants": "Restaurant picks",
        "chat_title": "Travel Assistant",
        "chat_hint": "👋 Hi! Any thoughts on this itinerary? I can help explain or suggest changes.",
        "chat_placeholder": "Ask anything...",
        "download": "Download itinerary (XLSX)",
        "add_to_calendar": "Add to Google Calendar",
        "audit": "Heads-up: the AI answer does not follow every rule",
    },
}

_DRIVE_WORDS = ("car", "drive", "taxi", "uber", "motor", "scooter")


def text(language: Language, key: str) -> str:
    return UI_TEXT[language][key]


def badge_for(activity: Activity) -> Badge:
    if activity.is_special:
        return ACTIVITY_BADGES[ActivityType.SPECIAL_EVENT]
    return ACTIVITY_BADGES.get(activity.kind, DEFAULT_BADGE)


def style_label(style: str, language: Language) -> str:
    try:
        zh, en = STYLE_LABELS[TravelStyle(style)]
    except ValueError:
        return style
    return en if language is Language.EN else zh


def day_display_date(day: DayPlan, plan: TripPlan) -> Optional[dt.date]:
    """Explicit date from Gemini, else start date + (dayNumber - 1)."""
    if day.date is not None:
        return day.date
    return nth_day(plan.start_date, day.day_number)


def trip_title(plan: TripPlan) -> str:
    if plan.language is Language.EN:
        return f"{plan.duration} Days in {plan.destination}"
    return f"{plan.destination} {plan.duration} 日遊"


def is_drive_mode(transport_mode: str) -> bool:
    mode = (transport_mode or "").lower()
    return any(word in mode for word in _DRIVE_WORDS)


def split_time(value: str) -> Tuple[str, str]:
    """'10:00 AM' → ('10:00', 'AM'); missing meridiem defaults to AM."""
    parts = (value or "").split(" ")
    return parts[0], parts[1] if len(parts) > 1 and parts[1] else "AM"


def month_label(day: dt.date, language: Language) -> str:
    """'Jun 2024' / '2024年6月' shown under the big day number."""
    if language is Language.EN:
        return day.strftime("%b %Y")
    return f"{day.year}年{day.month}月"
