"""Layout policies and the slot kinds that make up a calendar grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from calendar_logic import Day, GregorianCalendar, Month


class DayOfWeekPosition(IntEnum):
    """1-based column of a weekday header within a month."""

    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5
    SIXTH = 6
    SEVENTH = 7
    LAST = 7

    def try_predecessor(self) -> DayOfWeekPosition | None:
        if self == DayOfWeekPosition.FIRST:
            return None
        return DayOfWeekPosition(self - 1)

    def try_successor(self) -> DayOfWeekPosition | None:
        if self == DayOfWeekPosition.LAST:
            return None
        return DayOfWeekPosition(self + 1)


# ------------------------------------------------------------------
# Layout policy
# ------------------------------------------------------------------
@dataclass(frozen=True)
class VerticalLayout:
    """Months stacked vertically; weekday headers may be pinned above the grid."""

    pin_days_of_week_to_top: bool = False
    orientation = "vertical"


@dataclass(frozen=True)
class HorizontalLayout:
    """Months side by side; weekday headers always repeat per month."""

    orientation = "horizontal"


LayoutPolicy = VerticalLayout | HorizontalLayout


def pins_days_of_week_to_top(layout: LayoutPolicy) -> bool:
    return isinstance(layout, VerticalLayout) and layout.pin_days_of_week_to_top


# ------------------------------------------------------------------
# Item types
# ------------------------------------------------------------------
@dataclass(frozen=True)
class MonthHeader:
    month: Month


@dataclass(frozen=True)
class MonthFooter:
    month: Month


@dataclass(frozen=True)
class DayOfWeekHeader:
    position: DayOfWeekPosition
    month: Month


@dataclass(frozen=True)
class DayCell:
    day: Day

    @property
    def month(self) -> Month:
        return self.day.month


ItemType = MonthHeader | MonthFooter | DayOfWeekHeader | DayCell


def describe(item_type: ItemType, cal: GregorianCalendar | None = None) -> str:
    """Return a one-line human label for a slot."""
    if isinstance(item_type, MonthHeader):
        return item_type.month.name
    if isinstance(item_type, MonthFooter):
        return f"end of {item_type.month.name}"
    if isinstance(item_type, DayOfWeekHeader):
        cal = cal or GregorianCalendar()
        return cal.weekday_abbr(item_type.position)
    if isinstance(item_type, DayCell):
        return str(item_type.day)
    raise TypeError(f"Not an item type: {item_type!r}")


def to_dict(item_type: ItemType) -> dict:
    """JSON-ready representation of a slot."""
    if isinstance(item_type, MonthHeader):
        return {"kind": "month_header", "month": str(item_type.month)}
    if isinstance(item_type, MonthFooter):
        return {"kind": "month_footer", "month": str(item_type.month)}
    if isinstance(item_type, DayOfWeekHeader):
        return {"kind": "day_of_week", "month": str(item_type.month),
                "position": int(item_type.position)}
    if isinstance(item_type, DayCell):
        return {"kind": "day", "month": str(item_type.month),
                "date": str(item_type.day)}
    raise TypeError(f"Not an item type: {item_type!r}")
