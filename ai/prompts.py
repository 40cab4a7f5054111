# ai/prompts.py

import textwrap

from core.dates import format_local_date
from core.models import Language, TripPlan, TripRequest

LANG_EN = "Output Language: English (US)."
LANG_ZH = (
    "Output Language: Traditional Chinese (繁體中文). All generated text "
    "(including titles, descriptions, advice, reasons) MUST be in Traditional Chinese."
)

# ──────────────────────────────────────────────────────────────────────────────
# Prompt template – new itinerary
# ──────────────────────────────────────────────────────────────────────────────
_PROMPT_TEMPLATE = textwrap.dedent(
    """\
    Act as a professional Travel Planner & Social Media Expert.
    Plan a **{days}-day** trip starting from **{origin}** to **{destination}**.
    **Dates: {start} to {end}**.
    Travel Style: {style}.
    Transport Mode: {transport}.
    {lang_instruction}

    {preferences}

    CRITICAL INSTRUCTIONS:
    1. **CHECK FOR SPECIAL EVENTS (CRITICAL)**:
       - Search for ANY local festivals, concerts, public holidays, markets, or special exhibitions happening specifically between **{start} and {end}** in {destination}.
       - If a relevant event matches the user's style and fits the logistics, **YOU MUST INCLUDE IT**.
       - Mark these activities with type="special_event" and isSpecialEvent=true.

    2. **Transport Time Rounding (MANDATORY)**:
       - You MUST estimate travel times using Google Maps logic but **ROUND to the nearest 10 minutes**.
       - Examples: 12 mins -> 10 mins. 27 mins -> 30 mins. 43 mins -> 40 mins. 1 hr 35 mins -> 1 hr 40 mins.
       - Apply this logic to 'travelTimeFromPrevious' and restaurant 'travelTime'.

    3. **Food (Interactive Cards)**:
       - For lunch/dinner, provide **4-5 specific restaurant options**.
       - Focus on **"Insta-worthy"**, **"Local Hidden Gems"**, or **"Blogger Recommended"** spots.
       - Include a specific **"Must Try"** dish for each.
       - High ratings (>4.0).

    4. **Accommodation (Data Focused)**:
       - Provide **3-4 options**.
       - MUST include "rating" (e.g. 4.7), "reviews" (Array of 3 short phrases), and realistic "pricePerNight".
       - NO IMAGE PROMPTS NEEDED for accommodation.

    5. **Summary**:
       - STRICT LIMIT: **MAX 10 characters** (if Chinese) or 5 words (if English).
       - Must be catchy and short.
    """
)

_CHAT_CONTEXT = textwrap.dedent(
    """\
    You are a helpful Travel Assistant specialized in the user's current trip to {destination}.
    User Language: {language}.

    Current Itinerary Context:
    - Destination: {destination}
    - Dates: {start} to {end}
    - Style: {style}
    - Transport: {transport}
    - Accommodation Options: {accommodations}

    The user wants to adjust their plan or ask questions about it.
    Answer concisely.
    """
)

CHAT_ACK = "Understood. I am ready to help with the itinerary."


def language_directive(language: Language) -> str:
    return LANG_EN if language == Language.EN else LANG_ZH


def build_prompt(req: TripRequest) -> str:
    """Return the itinerary prompt for Gemini."""
    preferences = ""
    if req.custom_preferences:
        preferences = f"**USER SPECIAL REQUESTS (PRIORITY):** {req.custom_preferences}"

    return _PROMPT_TEMPLATE.format(
        days=req.duration,
        origin=req.origin,
        destination=req.destination,
        start=format_local_date(req.start),
        end=format_local_date(req.end),
        style=req.style.value,
        transport=req.transport_mode,
        lang_instruction=language_directive(req.language),
        preferences=preferences,
    )


def build_chat_context(plan: TripPlan, language: Language) -> str:
    """First (synthetic) user turn of every chat request."""
    return _CHAT_CONTEXT.format(
        destination=plan.destination,
        language="English" if language == Language.EN else "Traditional Chinese (繁體中文)",
        start=format_local_date(plan.start_date),
        end=format_local_date(plan.end_date),
        style=plan.style,
        transport=plan.transport_mode,
        accommodations=", ".join(a.name for a in plan.accommodations),
    )
