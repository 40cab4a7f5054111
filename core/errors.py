# core/errors.py


class TravelPlannerError(Exception):
    """Base class for every error raised by the planner."""


class TripInputError(TravelPlannerError, ValueError):
    """
    Client-side input error (missing field, end date before start date…).
    Raised before any call to Gemini, never retried.
    """


class GenerationError(TravelPlannerError, RuntimeError):
    """Gemini call failed, returned nothing, or returned something that is not JSON."""

    USER_MESSAGE = "Failed to generate itinerary. Please try again."

    def __init__(self, message: str = USER_MESSAGE):
        super().__init__(message)
