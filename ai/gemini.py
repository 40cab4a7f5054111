# ai/gemini.py
# ------------------------------------------------------------------------------
import copy
import json
from typing import List, Optional, Sequence

import google.generativeai as genai

from ai.prompts import CHAT_ACK, build_chat_context, build_prompt
from ai.schema import TRAVEL_SCHEMA
from core.config import Settings, load_settings
from core.errors import GenerationError
from core.logging_config import get_logger
from core.models import ChatMessage, Language, TripPlan, TripRequest

log = get_logger("gemini")

ITINERARY_TEMPERATURE = 0.5
CHAT_EMPTY_REPLY = "I'm having trouble connecting right now."
CHAT_FALLBACK = "Sorry, I can't answer that right now."


# ──────────────────────────────────────────────────────────────────────────────
# Helper: configured Gemini model
# ──────────────────────────────────────────────────────────────────────────────
def get_model(settings: Optional[Settings] = None) -> genai.GenerativeModel:
    """
    Configure the SDK with the API key and return the model.
    An empty key is passed through as-is: the call itself will fail.
    """
    settings = settings or load_settings()
    genai.configure(api_key=settings.gemini_api_key)
    return genai.GenerativeModel(settings.gemini_model)


def _response_text(resp) -> str:
    """Concatenated text of the first candidate, '' if Gemini sent nothing."""
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    return "".join(getattr(p, "text", "") or "" for p in parts)


def _itinerary_config() -> genai.GenerationConfig:
    return genai.GenerationConfig(
        response_mime_type="application/json",
        response_schema=copy.deepcopy(TRAVEL_SCHEMA),
        temperature=ITINERARY_TEMPERATURE,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Generate itinerary
# ──────────────────────────────────────────────────────────────────────────────
def generate_itinerary(req: TripRequest, model=None) -> TripPlan:
    """
    Ask Gemini for a plan matching TRAVEL_SCHEMA and return it as a TripPlan.
    language / start_date / end_date / duration always come from `req`.
    Raises GenerationError on any failure.
    """
    prompt = build_prompt(req)
    log.info("Generating %s-day itinerary %s → %s", req.duration, req.origin, req.destination)

    try:
        model = model or get_model()
        resp = model.generate_content(prompt, generation_config=_itinerary_config())
        raw_json = _response_text(resp).strip("`json \n")
        if not raw_json:
            raise GenerationError("No data received from Gemini.")
        data = json.loads(raw_json)
        if not isinstance(data, dict):
            raise GenerationError(f"Expected a JSON object, got {type(data).__name__}")
    except Exception as e:
        log.error("Gemini itinerary request failed: %s", e, exc_info=True)
        raise GenerationError() from e

    plan = TripPlan.from_dict(data)
    plan.language = req.language
    plan.start_date = req.start
    plan.end_date = req.end
    plan.duration = str(req.duration)

    log.info("Itinerary received: %d days, %d accommodations", len(plan.days), len(plan.accommodations))
    return plan


# ──────────────────────────────────────────────────────────────────────────────
# Chat about the current itinerary
# ──────────────────────────────────────────────────────────────────────────────
def build_chat_contents(
    plan: TripPlan,
    history: Sequence[ChatMessage],
    new_message: str,
    language: Language,
) -> List[dict]:
    return [
        {"role": "user", "parts": [build_chat_context(plan, language)]},
        {"role": "model", "parts": [CHAT_ACK]},
        *(m.to_content() for m in history),
        {"role": "user", "parts": [new_message]},
    ]


def chat_with_agent(
    plan: TripPlan,
    history: Sequence[ChatMessage],
    new_message: str,
    language: Language,
    model=None,
) -> str:
    """
    One chat turn. Never raises: failures turn into a canned apology so the
    chat panel always has something to show.
    """
    try:
        contents = build_chat_contents(plan, history, new_message, language)
        model = model or get_model()
        resp = model.generate_content(contents)
        return _response_text(resp) or CHAT_EMPTY_REPLY
    except Exception as e:
        log.error("Gemini chat request failed: %s", e, exc_info=True)
        return CHAT_FALLBACK
