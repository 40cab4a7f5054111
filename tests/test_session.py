# tests/test_session.py

import pytest

from core.models import TripPlan
from core.session import CycleState, PlanSession, RequestCycle


def test_cycle_refuses_concurrent_requests():
    cycle = RequestCycle("chat")
    assert cycle.begin()
    assert cycle.busy
    assert not cycle.begin()
    cycle.finish()
    assert cycle.state is CycleState.IDLE


def test_cycle_returns_to_idle_after_error():
    cycle = RequestCycle("itinerary")
    with pytest.raises(RuntimeError):
        with cycle.running() as started:
            assert started
            assert cycle.busy
            raise RuntimeError("boom")
    assert not cycle.busy


def test_nested_running_does_not_release_outer():
    cycle = RequestCycle("itinerary")
    with cycle.running() as outer:
        with cycle.running() as inner:
            assert outer and not inner
        assert cycle.busy
    assert not cycle.busy


def test_accept_plan_with_current_token():
    session = PlanSession()
    token = session.start_generation()
    assert session.accept_plan(token, TripPlan(destination="Kyoto"))
    assert session.plan.destination == "Kyoto"


def test_stale_plan_after_reset_is_discarded():
    session = PlanSession()
    token = session.start_generation()
    session.reset()
    assert not session.accept_plan(token, TripPlan(destination="Kyoto"))
    assert session.plan is None


def test_stale_failure_is_not_shown():
    session = PlanSession()
    token = session.start_generation()
    session.reset()
    session.fail(token, "Failed to generate itinerary. Please try again.")
    assert session.error is None


def test_failure_notice_and_dismiss():
    session = PlanSession()
    token = session.start_generation()
    session.fail(token, "Failed")
    assert session.error == "Failed"
    session.dismiss_error()
    assert session.error is None


def test_transcript_append_and_reset():
    session = PlanSession()
    session.accept_plan(session.start_generation(), TripPlan(destination="Kyoto"))
    token = session.token
    assert session.record_exchange(token, "hi", "hello")
    assert [(m.role, m.text) for m in session.transcript] == [("user", "hi"), ("model", "hello")]

    session.reset()
    assert session.transcript == []
    assert session.plan is None
    assert not session.record_exchange(token, "late", "reply")
    assert session.transcript == []


def test_new_plan_starts_new_transcript():
    session = PlanSession()
    session.accept_plan(session.start_generation(), TripPlan(destination="Kyoto"))
    session.record_exchange(session.token, "hi", "hello")
    session.accept_plan(session.start_generation(), TripPlan(destination="Osaka"))
    assert session.transcript == []
