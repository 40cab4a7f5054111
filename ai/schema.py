# ai/schema.py
"""
Response schema handed to Gemini (`response_schema`) so the itinerary comes
back as JSON of a known shape. Gemini treats it as guidance, not a guarantee:
the parser in core.models still accepts missing optional fields.
"""

from core.models import ActivityType

STRING = {"type": "STRING"}


def _string(description: str) -> dict:
    return {"type": "STRING", "description": description}


RESTAURANT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "name": STRING,
        "hours": _string("e.g. 11:00-21:00"),
        "price": _string("e.g. $10-20 USD"),
        "rating": _string("e.g. 4.5"),
        "travelTime": _string("e.g. '10 mins walk' - Round to nearest 10 mins."),
        "googleMapsQuery": STRING,
        "mustTry": _string(
            "One signature dish or item recommended by bloggers/influencers. "
            "e.g. 'Truffle Risotto', 'Matcha Latte'"
        ),
    },
    "required": ["name", "hours", "price", "rating", "travelTime", "googleMapsQuery", "mustTry"],
}

ACTIVITY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "time": _string("Activity Start time, e.g. 10:00 AM"),
        "activity": _string("Name of the activity"),
        "description": _string("2-3 sentences. If this is a special event, mention it here."),
        "location": STRING,
        "type": {"type": "STRING", "enum": [t.value for t in ActivityType]},
        "isSpecialEvent": {
            "type": "BOOLEAN",
            "description": "True if this is a time-specific local festival, concert, or holiday event.",
        },
        "estimatedCost": _string("e.g. $20 USD / Free"),
        "travelTimeFromPrevious": _string(
            "Round to nearest 10 mins. e.g. '30 mins' (not 27), '1 hr 40 mins' (not 1 hr 35)."
        ),
        "travelAdvice": _string("Specific details like Bus numbers or Highway names."),
        "googleMapsQuery": _string("Query string to find this location"),
        "imagePrompt": _string("Exact name of the location + city, real photo"),
        "restaurantOptions": {
            "type": "ARRAY",
            "description": "Provide 4-5 specific restaurant options suitable for Instagram/Social Media/Foodies.",
            "items": RESTAURANT_SCHEMA,
        },
    },
    "required": ["time", "activity", "description", "location", "type", "googleMapsQuery", "imagePrompt"],
}

DAY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "dayNumber": {"type": "INTEGER"},
        "date": _string("The specific date for this day, e.g. '2023-10-25'"),
        "title": _string("Theme title for the day"),
        "theme": STRING,
        "activities": {"type": "ARRAY", "items": ACTIVITY_SCHEMA},
    },
    "required": ["dayNumber", "title", "activities"],
}

ACCOMMODATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "name": STRING,
        "location": _string("Area or address"),
        "description": _string("Brief description of the hotel/hostel"),
        "pricePerNight": _string("Estimated cost per night with currency"),
        "reason": _string("Why this is a good choice"),
        "googleMapsQuery": _string("Query string to search this hotel on maps"),
        "rating": _string("Google Maps Star Rating, e.g. 4.6"),
        "reviews": {
            "type": "ARRAY",
            "items": STRING,
            "description": "3 short summaries of positive reviews, e.g. 'Great breakfast', 'Clean rooms'",
        },
    },
    "required": [
        "name", "location", "description", "reason", "googleMapsQuery", "pricePerNight", "rating", "reviews",
    ],
}

TRAVEL_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "destination": STRING,
        "duration": STRING,
        "style": STRING,
        "transportMode": STRING,
        "summary": _string("Strictly MAX 10 characters (Chinese) or 5 words. Very concise trip vibe."),
        "totalBudgetEstimate": _string("Estimated budget range excluding flights."),
        "accommodations": {
            "type": "ARRAY",
            "description": "Provide 3-4 different accommodation options ranging from budget to luxury or style-fit.",
            "items": ACCOMMODATION_SCHEMA,
        },
        "days": {"type": "ARRAY", "items": DAY_SCHEMA},
    },
    "required": ["destination", "summary", "days", "accommodations"],
}


def required_fields(*path: str) -> list:
    """
    Required keys at a nested location, e.g.
    required_fields("days", "activities") → the activity's required list.
    """
    node = TRAVEL_SCHEMA
    for key in path:
        node = node["properties"][key]
        if node["type"] == "ARRAY":
            node = node["items"]
    return list(node.get("required", []))
