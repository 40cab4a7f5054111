# core/session.py

from __future__ import annotations

import itertools
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from core.logging_config import get_logger
from core.models import ChatMessage, TripPlan

log = get_logger("session")


class CycleState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


@dataclass
class RequestCycle:
    """
    Busy flag for one kind of request (itinerary or chat).
    While IN_FLIGHT the UI keeps its trigger disabled.
    """

    name: str
    state: CycleState = CycleState.IDLE

    @property
    def busy(self) -> bool:
        return self.state is CycleState.IN_FLIGHT

    def begin(self) -> bool:
        if self.busy:
            log.info("%s request already in flight, ignoring new submission", self.name)
            return False
        self.state = CycleState.IN_FLIGHT
        return True

    def finish(self) -> None:
        self.state = CycleState.IDLE

    @contextmanager
    def running(self) -> Iterator[bool]:
        """
        with cycle.running() as started:
            if started: ...
        Back to IDLE on every exit path, exceptions included.
        """
        started = self.begin()
        try:
            yield started
        finally:
            if started:
                self.finish()


_tokens = itertools.count(1)


@dataclass
class PlanSession:
    """
    Everything the app keeps for one planning session: the active plan,
    the chat transcript and a generation token used to drop stale answers.
    """

    plan: Optional[TripPlan] = None
    transcript: List[ChatMessage] = field(default_factory=list)
    error: Optional[str] = None
    token: int = field(default_factory=lambda: next(_tokens))
    itinerary_cycle: RequestCycle = field(default_factory=lambda: RequestCycle("itinerary"))
    chat_cycle: RequestCycle = field(default_factory=lambda: RequestCycle("chat"))

    def start_generation(self) -> int:
        self.error = None
        return self.token

    def is_current(self, token: int) -> bool:
        return token == self.token

    def accept_plan(self, token: int, plan: TripPlan) -> bool:
        """Store `plan` unless the session was reset after the request started."""
        if not self.is_current(token):
            log.warning("Discarding stale itinerary for %s (token %s)", plan.destination, token)
            return False
        self.plan = plan
        self.transcript = []
        return True

    def fail(self, token: int, message: str) -> None:
        if self.is_current(token):
            self.error = message

    def record_exchange(self, token: int, user_text: str, reply: str) -> bool:
        if not self.is_current(token) or self.plan is None:
            log.warning("Discarding stale chat reply (token %s)", token)
            return False
        self.transcript.append(ChatMessage("user", user_text))
        self.transcript.append(ChatMessage("model", reply))
        return True

    def dismiss_error(self) -> None:
        self.error = None

    def reset(self) -> None:
        """'New trip': drop plan, transcript and notice; outstanding answers become stale."""
        self.plan = None
        self.transcript = []
        self.error = None
        self.token = next(_tokens)
