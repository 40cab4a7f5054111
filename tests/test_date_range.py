# tests/test_date_range.py

import datetime as dt

from core.date_range import CLOSE_DELAY_SECONDS, DateRangeSelector, DateSelection, SelectionState
from core.models import Language

TODAY = dt.date(2024, 6, 1)


def make_picker(**kwargs):
    return DateRangeSelector(today=TODAY, **kwargs)


def test_first_click_sets_start_only():
    picker = make_picker()
    result = picker.select("2024-06-10")
    assert result.selection == DateSelection(dt.date(2024, 6, 10), None)
    assert picker.state is SelectionState.START_ONLY
    assert not result.close_requested


def test_second_click_completes_and_requests_close():
    picker = make_picker(start="2024-06-10")
    result = picker.select(dt.date(2024, 6, 14))
    assert result.selection == DateSelection(dt.date(2024, 6, 10), dt.date(2024, 6, 14))
    assert result.close_requested
    assert result.close_delay == CLOSE_DELAY_SECONDS
    assert picker.state is SelectionState.COMPLETE


def test_same_day_range_is_allowed():
    picker = make_picker(start="2024-06-10")
    result = picker.select("2024-06-10")
    assert result.selection == DateSelection(dt.date(2024, 6, 10), dt.date(2024, 6, 10))


def test_click_before_start_becomes_new_start():
    picker = make_picker(start="2024-06-10")
    result = picker.select("2024-06-05")
    assert result.selection == DateSelection(dt.date(2024, 6, 5), None)
    assert not result.close_requested


def test_click_after_complete_restarts_selection():
    for clicked in ["2024-06-02", "2024-06-12", "2024-07-30"]:
        picker = make_picker(start="2024-06-10", end="2024-06-14")
        result = picker.select(clicked)
        assert result.selection.start == dt.date.fromisoformat(clicked)
        assert result.selection.end is None


def test_past_dates_are_ignored():
    picker = make_picker(start="2024-06-10")
    before = picker.selection
    result = picker.select("2024-05-31")
    assert result.selection == before
    assert picker.selection == before
    assert not result.close_requested


def test_min_date_is_inclusive_and_configurable():
    picker = make_picker(min_date="2024-06-05")
    assert picker.select("2024-06-04").selection.start is None
    assert picker.select("2024-06-05").selection.start == dt.date(2024, 6, 5)


def test_clear():
    picker = make_picker(start="2024-06-10", end="2024-06-14")
    assert picker.clear() == DateSelection()
    assert picker.state is SelectionState.EMPTY


def test_navigation_never_touches_selection():
    picker = make_picker(start="2024-06-10", end="2024-06-14")
    before = picker.selection
    picker.change_month(1)
    picker.change_year(-1)
    picker.change_month(-13)
    assert picker.selection == before
    assert picker.view == dt.date(2022, 6, 1)


def test_initial_view_follows_start_or_today():
    assert make_picker().view == dt.date(2024, 6, 1)
    assert make_picker(start="2024-09-17").view == dt.date(2024, 9, 1)


def test_month_grid_flags():
    picker = make_picker(start="2024-06-10", end="2024-06-13")
    weeks = picker.month_grid()
    # June 2024 starts on a Saturday → six padding cells in a Sunday-first grid
    assert weeks[0][:6] == [None] * 6
    assert weeks[0][6].day == dt.date(2024, 6, 1)
    assert all(len(w) == 7 for w in weeks)

    cells = {c.day: c for w in weeks for c in w if c is not None}
    assert len(cells) == 30
    assert cells[dt.date(2024, 6, 10)].is_start
    assert cells[dt.date(2024, 6, 13)].is_end
    assert [d.day for d, c in sorted(cells.items()) if c.in_range] == [11, 12]
    assert not cells[dt.date(2024, 6, 1)].disabled


def test_month_grid_disables_past_days():
    picker = DateRangeSelector(today=dt.date(2024, 6, 15))
    cells = [c for w in picker.month_grid() for c in w if c is not None]
    assert [c.day.day for c in cells if c.disabled] == list(range(1, 15))


def test_month_title():
    picker = make_picker()
    assert picker.month_title(Language.EN) == "June 2024"
    assert picker.month_title(Language.ZH_TW) == "2024 年 6月"
