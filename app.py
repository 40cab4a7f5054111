# app.py

import datetime

from dotenv import load_dotenv

load_dotenv()  # ← Must precede any import depending on .env

import streamlit as st
import streamlit.components.v1 as components

from ai import gemini
from core.config import load_settings
from core.date_range import WEEKDAY_HEADERS, DateRangeSelector
from core.dates import format_local_date
from core.display import (
    STYLE_LABELS,
    TRANSPORT_LABELS,
    badge_for,
    day_display_date,
    month_label,
    split_time,
    style_label,
    text,
    trip_title,
)
from core.errors import GenerationError, TripInputError
from core.logging_config import setup_logging
from core.models import TRANSPORT_CHOICES, Language, TravelStyle
from core.session import PlanSession
from core.validation import audit_plan, validate_request
from services import calendar as gcal
from services import maps
from services import workbook

# ──────────────────────────────────────────────────────────────────────────────
# 0. Streamlit configuration
# ──────────────────────────────────────────────────────────────────────────────
st.set_page_config(page_title="AI Travel Planner", page_icon="✈️", layout="wide")

settings = load_settings()
setup_logging(settings.log_level)


@st.cache_resource
def _model():
    return gemini.get_model(settings)


# one workbook per accepted plan; chat turns rerun the page but keep the token
@st.cache_data(max_entries=8, show_spinner=False)
def _workbook(token: int, _plan):
    return workbook.workbook_bytes(_plan, settings.export_dir)


# ──────────────────────────────────────────────────────────────────────────────
# 1. session_state initialisation (default values)
# ──────────────────────────────────────────────────────────────────────────────
defaults = {
    "session": PlanSession(),        # plan + chat transcript + generation token
    "picker": DateRangeSelector(),   # two-click date range state machine
    "picker_open": True,
    "language": Language.ZH_TW.value,
    "audit": [],                     # rule violations found in the last plan
}
for k, v in defaults.items():
    st.session_state.setdefault(k, v)

session: PlanSession = st.session_state.session
picker: DateRangeSelector = st.session_state.picker


# ──────────────────────────────────────────────────────────────────────────────
# 2. Date range picker (outside the form: forms cannot hold plain buttons)
# ──────────────────────────────────────────────────────────────────────────────
def render_date_picker(lang: Language):
    sel = picker.selection
    summary = f"{format_local_date(sel.start) or '—'} → {format_local_date(sel.end) or '—'}"
    if st.button(f"📅 {text(lang, 'dates')}: {summary}", key="toggle_picker"):
        st.session_state.picker_open = not st.session_state.picker_open
        st.rerun()

    if not st.session_state.picker_open:
        return

    with st.container(border=True):
        nav = st.columns([1, 1, 4, 1, 1])
        if nav[0].button("«", key="prev_year"):
            picker.change_year(-1)
            st.rerun()
        if nav[1].button("‹", key="prev_month"):
            picker.change_month(-1)
            st.rerun()
        nav[2].markdown(f"**{picker.month_title(lang)}**")
        if nav[3].button("›", key="next_month"):
            picker.change_month(1)
            st.rerun()
        if nav[4].button("»", key="next_year"):
            picker.change_year(1)
            st.rerun()

        for col, name in zip(st.columns(7), WEEKDAY_HEADERS[lang]):
            col.caption(name)

        for week in picker.month_grid():
            for col, cell in zip(st.columns(7), week):
                if cell is None:
                    col.write("")
                    continue
                label = f"·{cell.day.day}·" if cell.in_range else str(cell.day.day)
                clicked = col.button(
                    label,
                    key=f"day_{cell.day.isoformat()}",
                    disabled=cell.disabled,
                    type="primary" if (cell.is_start or cell.is_end) else "secondary",
                    use_container_width=True,
                )
                if clicked:
                    result = picker.select(cell.day)
                    if result.close_requested:
                        st.session_state.picker_open = False
                    st.rerun()

        foot = st.columns([4, 1])
        foot[0].caption(text(lang, "select_dates"))
        if (sel.start or sel.end) and foot[1].button(text(lang, "clear"), key="clear_dates"):
            picker.clear()
            st.rerun()


# ──────────────────────────────────────────────────────────────────────────────
# 3. Hero form
# ──────────────────────────────────────────────────────────────────────────────
def render_form():
    st.radio(
        "Language",
        [lang.value for lang in Language],
        format_func=lambda v: "繁體中文" if v == Language.ZH_TW.value else "English",
        horizontal=True,
        key="language",
    )
    lang = Language(st.session_state.language)

    st.markdown("## ✈️ AI Travel Planner")
    render_date_picker(lang)

    with st.form("travel_form"):
        c1, c2 = st.columns(2)
        origin_input = c1.text_input(text(lang, "origin"), "Taipei", key="origin")
        dest_input = c2.text_input(text(lang, "destination"), "", key="destination")

        c3, c4 = st.columns(2)
        style_input = c3.selectbox(
            text(lang, "style"),
            [s.value for s in TravelStyle],
            format_func=lambda v: STYLE_LABELS[TravelStyle(v)][1 if lang is Language.EN else 0],
            key="style",
        )
        transport_select = c4.selectbox(
            text(lang, "transport"),
            TRANSPORT_CHOICES,
            format_func=lambda v: TRANSPORT_LABELS[v][1 if lang is Language.EN else 0],
            key="transport_select",
        )
        custom_transport = st.text_input(
            text(lang, "custom_transport"), "", key="custom_transport",
            help="Used when 'Other' is selected.",
        )
        prefs_input = st.text_area(text(lang, "preferences"), "", key="prefs", height=80)
        submitted = st.form_submit_button(
            text(lang, "generate"), disabled=session.itinerary_cycle.busy, type="primary"
        )

    if not submitted:
        return

    transport = custom_transport if transport_select == "Other" else transport_select
    try:
        trip_req = validate_request(
            origin=origin_input,
            destination=dest_input,
            start=picker.selection.start,
            end=picker.selection.end,
            style=style_input,
            transport_mode=transport,
            custom_preferences=prefs_input,
            language=lang,
            min_date=datetime.date.today(),
        )
    except TripInputError as e:
        st.warning(f"🛑 {e}")
        return

    with session.itinerary_cycle.running() as started:
        if not started:
            return
        token = session.start_generation()
        with st.spinner(text(lang, "generating")):
            try:
                plan = gemini.generate_itinerary(trip_req, model=_model())
            except GenerationError as e:
                session.fail(token, str(e))
            else:
                if session.accept_plan(token, plan):
                    st.session_state.audit = audit_plan(plan)
    st.rerun()


# ──────────────────────────────────────────────────────────────────────────────
# 4. Itinerary display
# ──────────────────────────────────────────────────────────────────────────────
def render_accommodations(plan, lang):
    st.subheader(f"🛏️ {text(lang, 'stay')}")
    cols = st.columns(max(1, min(len(plan.accommodations), 4)))
    for col, acc in zip(cols * 2, plan.accommodations):
        with col.container(border=True):
            st.markdown(f"**{acc.name}**  ⭐ {acc.rating}")
            st.caption(f"📍 {acc.location}")
            st.write(acc.description)
            st.markdown(f"**{acc.price_per_night}**")
            st.caption(acc.reason)
            if acc.reviews:
                st.markdown(f"*{text(lang, 'top_reviews')}*")
                for review in acc.reviews:
                    st.markdown(f"- “{review}”")
            st.link_button(text(lang, "check_availability"), maps.search_url(acc.google_maps_query or acc.name))


def render_restaurants(activity, lang):
    st.markdown(f"**🍴 {text(lang, 'restaurants')}**")
    cols = st.columns(2)
    for i, r in enumerate(activity.restaurant_options):
        with cols[i % 2].container(border=True):
            st.markdown(f"**{r.name}**  `{r.rating} ★`")
            st.caption(f"📍 {r.travel_time} · {r.price} · 🕒 {r.hours}")
            if r.must_try:
                st.markdown(f"{text(lang, 'must_try')}: 🍴 **{r.must_try}**")
            st.link_button(text(lang, "go"), maps.search_url(r.google_maps_query or r.name))


def render_activity(activity, day_date, plan, lang):
    # Transport block: the first stop of a day usually has no travel time
    if activity.travel_time_from_previous:
        advice = activity.travel_advice or text(lang, "depends_on_traffic")
        st.caption(
            f"⋮ {text(lang, 'travel_to_next')} — {activity.travel_time_from_previous} • {advice} "
            f"[🧭]({maps.directions_url(activity.location, plan.transport_mode)})"
        )

    badge = badge_for(activity)
    clock, meridiem = split_time(activity.time)
    with st.container(border=True):
        left, right = st.columns([1, 5])
        left.markdown(f"### {clock}")
        left.caption(meridiem)
        if activity.is_special:
            right.markdown(f"✨ **{text(lang, 'special_event')}**")
        right.markdown(f"{badge.icon} **{activity.activity}**  ·  {badge.label(lang)}")
        right.caption(f"📍 {activity.location}")
        right.write(activity.description)
        if activity.estimated_cost:
            right.caption(f"💰 {activity.estimated_cost}")

        with st.expander("🗺️"):
            components.iframe(maps.embed_url(activity.google_maps_query or activity.location), height=220)
            links = f"[{text(lang, 'go')}]({maps.search_url(activity.google_maps_query or activity.location)})"
            if day_date:
                links += f" · [{text(lang, 'add_to_calendar')}]({gcal.activity_event_url(activity, day_date, plan.destination)})"
            st.markdown(links)

        if activity.restaurant_options:
            render_restaurants(activity, lang)


def render_day(day, plan, lang):
    day_date = day_display_date(day, plan)
    head_left, head_right = st.columns([1, 5])
    if day_date:
        head_left.caption(day_date.strftime("%a"))
        head_left.markdown(f"## {day_date.day}")
        head_left.caption(month_label(day_date, lang))
    else:
        head_left.markdown(f"## {day.day_number}")
    head_right.markdown(f"### {day.title}")
    head_right.caption(f"#{day.theme}  ·  Day {day.day_number}")

    for activity in day.activities:
        render_activity(activity, day_date, plan, lang)


def render_chat(plan, lang):
    st.markdown("---")
    st.subheader(f"💬 {text(lang, 'chat_title')}")
    if not session.transcript:
        st.caption(text(lang, "chat_hint"))
    for msg in session.transcript:
        with st.chat_message("user" if msg.role == "user" else "assistant"):
            st.write(msg.text)

    question = st.chat_input(text(lang, "chat_placeholder"), disabled=session.chat_cycle.busy)
    if not question or not question.strip():
        return

    with session.chat_cycle.running() as started:
        if not started:
            return
        token = session.token
        with st.chat_message("user"):
            st.write(question)
        with st.spinner("…"):
            reply = gemini.chat_with_agent(plan, list(session.transcript), question, lang, model=_model())
        session.record_exchange(token, question, reply)
    st.rerun()


def render_plan(plan):
    lang = plan.language

    head, reset_col = st.columns([5, 1])
    head.caption(text(lang, "your_plan"))
    head.title(trip_title(plan))
    if reset_col.button(text(lang, "new_trip"), key="reset"):
        session.reset()
        st.session_state.audit = []
        picker.clear()
        st.session_state.picker_open = True
        st.rerun()

    st.markdown(f"**{plan.summary}**  ·  {style_label(plan.style, lang)}  ·  {plan.transport_mode}")
    st.caption(f"{format_local_date(plan.start_date)} → {format_local_date(plan.end_date)}")
    if plan.total_budget_estimate:
        st.write(f"💰 {text(lang, 'budget')}: {plan.total_budget_estimate}")

    if st.session_state.audit:
        with st.expander(f"⚠️ {text(lang, 'audit')} ({len(st.session_state.audit)})"):
            for issue in st.session_state.audit:
                st.caption(issue)

    tabs = st.tabs([text(lang, "overview")] + [f"Day {d.day_number}" for d in plan.days])
    with tabs[0]:
        if plan.accommodations:
            render_accommodations(plan, lang)
        file_name, data = _workbook(session.token, plan)
        st.download_button(f"📥 {text(lang, 'download')}", data, file_name=file_name, mime=workbook.XLSX_MIME)
    for tab, day in zip(tabs[1:], plan.days):
        with tab:
            render_day(day, plan, lang)

    render_chat(plan, lang)


# ──────────────────────────────────────────────────────────────────────────────
# 5. Page
# ──────────────────────────────────────────────────────────────────────────────
if session.error:
    err_col, close_col = st.columns([12, 1])
    err_col.error(f"⚠️ Oops! {session.error}")
    if close_col.button("✕", key="dismiss_error"):
        session.dismiss_error()
        st.rerun()

if session.plan is not None:
    render_plan(session.plan)
else:
    render_form()
