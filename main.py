# main.py

import datetime
from typing import List, Literal, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from ai import gemini
from core.config import load_settings
from core.errors import GenerationError, TripInputError
from core.logging_config import setup_logging
from core.models import ChatMessage, DEFAULT_TRANSPORT, Language, TravelStyle, TripPlan
from core.validation import audit_plan, validate_request

# Load environment variables (.env)
load_dotenv()
setup_logging(load_settings().log_level)

app = FastAPI(title="AI Travel Planner")


# Request schema for an itinerary
class ItineraryRequest(BaseModel):
    origin: str
    destination: str
    startDate: datetime.date
    endDate: datetime.date
    style: TravelStyle = TravelStyle.STANDARD
    transportMode: str = DEFAULT_TRANSPORT
    customPreferences: str = ""
    language: Language = Language.ZH_TW


class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    text: str


# Request schema for a chat turn: the client sends back the plan it holds
class ChatRequest(BaseModel):
    plan: dict
    history: List[ChatTurn] = Field(default_factory=list)
    message: str
    language: Optional[Language] = None


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/itinerary", response_model=dict)
def generate_itinerary_endpoint(req: ItineraryRequest):
    try:
        trip_req = validate_request(
            origin=req.origin,
            destination=req.destination,
            start=req.startDate,
            end=req.endDate,
            style=req.style,
            transport_mode=req.transportMode,
            custom_preferences=req.customPreferences,
            language=req.language,
        )
        plan = gemini.generate_itinerary(trip_req)
    except TripInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {**plan.to_dict(), "warnings": audit_plan(plan)}


@app.post("/api/chat", response_model=dict)
def chat_endpoint(req: ChatRequest):
    plan = TripPlan.from_dict(req.plan)
    history = [ChatMessage(t.role, t.text) for t in req.history]
    reply = gemini.chat_with_agent(plan, history, req.message, req.language or plan.language)
    return {"reply": reply}
