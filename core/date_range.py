# core/date_range.py
"""
Two-click date range selection, independent of any UI toolkit.

    EMPTY ──click──▶ START_ONLY ──click ≥ start──▶ COMPLETE
                        │  ▲                          │
                        └──┘ click < start            └──click──▶ START_ONLY
                        (new start)                   (fresh selection)

Clicks on dates before `min_date` are ignored. Month / year navigation only
moves the displayed grid.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

from core.dates import DateLike, add_months, days_in_month, parse_local_date
from core.models import Language

# The UI should dismiss the picker this long after a range is completed,
# so the user sees the end date highlighted first.
CLOSE_DELAY_SECONDS = 0.2

MONTH_NAMES = {
    Language.ZH_TW: [f"{m}月" for m in range(1, 13)],
    Language.EN: [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
}

WEEKDAY_HEADERS = {
    Language.ZH_TW: ["日", "一", "二", "三", "四", "五", "六"],
    Language.EN: ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"],
}


class SelectionState(str, Enum):
    EMPTY = "empty"
    START_ONLY = "start_only"
    COMPLETE = "complete"


@dataclass(frozen=True)
class DateSelection:
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None

    @property
    def state(self) -> SelectionState:
        if self.start is None:
            return SelectionState.EMPTY
        if self.end is None:
            return SelectionState.START_ONLY
        return SelectionState.COMPLETE


@dataclass(frozen=True)
class SelectResult:
    selection: DateSelection
    close_requested: bool = False
    close_delay: float = 0.0


@dataclass(frozen=True)
class DayCell:
    day: dt.date
    disabled: bool
    is_start: bool
    is_end: bool
    in_range: bool


class DateRangeSelector:
    def __init__(
        self,
        start: DateLike = None,
        end: DateLike = None,
        min_date: DateLike = None,
        today: Optional[dt.date] = None,
    ):
        today = today or dt.date.today()
        self.min_date = parse_local_date(min_date) or today
        self.selection = DateSelection(parse_local_date(start), parse_local_date(end))
        anchor = self.selection.start or today
        self.view = anchor.replace(day=1)

    @property
    def state(self) -> SelectionState:
        return self.selection.state

    def is_disabled(self, day: dt.date) -> bool:
        return day < self.min_date

    def select(self, clicked: DateLike) -> SelectResult:
        """Apply one click and return the new selection (+ close request)."""
        c = parse_local_date(clicked)
        if c is None or self.is_disabled(c):
            return SelectResult(self.selection)

        state = self.state
        if state is SelectionState.START_ONLY and c >= self.selection.start:
            self.selection = replace(self.selection, end=c)
            return SelectResult(self.selection, close_requested=True, close_delay=CLOSE_DELAY_SECONDS)

        # EMPTY, COMPLETE, or a click before the current start: fresh start
        self.selection = DateSelection(start=c)
        return SelectResult(self.selection)

    def clear(self) -> DateSelection:
        self.selection = DateSelection()
        return self.selection

    def change_month(self, offset: int) -> dt.date:
        self.view = add_months(self.view, offset)
        return self.view

    def change_year(self, offset: int) -> dt.date:
        self.view = add_months(self.view, 12 * offset)
        return self.view

    def month_title(self, language: Language = Language.ZH_TW) -> str:
        name = MONTH_NAMES[language][self.view.month - 1]
        if language is Language.ZH_TW:
            return f"{self.view.year} 年 {name}"
        return f"{name} {self.view.year}"

    def month_grid(self) -> List[List[Optional[DayCell]]]:
        """
        Weeks of the displayed month, Sunday first. Cells before the 1st
        and after the last day are None.
        """
        year, month = self.view.year, self.view.month
        start, end = self.selection.start, self.selection.end
        # date.weekday(): Monday=0 … Sunday=6 → Sunday-first column index
        padding = (dt.date(year, month, 1).weekday() + 1) % 7

        cells: List[Optional[DayCell]] = [None] * padding
        for d in range(1, days_in_month(year, month) + 1):
            day = dt.date(year, month, d)
            cells.append(
                DayCell(
                    day=day,
                    disabled=self.is_disabled(day),
                    is_start=day == start,
                    is_end=day == end,
                    in_range=bool(start and end and start < day < end),
                )
            )
        cells.extend([None] * (-len(cells) % 7))
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]
