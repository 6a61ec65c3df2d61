"""Pure calendar calculations — months, days, ranges and date arithmetic."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


@dataclass(frozen=True, order=True)
class Month:
    """A calendar month. Ordered by (year, month)."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month {self.month} is not between 1 and 12.")

    @classmethod
    def from_date(cls, d: date) -> Month:
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, text: str) -> Month:
        """Parse ``YYYY-MM``."""
        year, _, month = text.strip().partition("-")
        return cls(int(year), int(month))

    @property
    def name(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, order=True)
class Day:
    """A calendar day; belongs to exactly one month."""

    month: Month
    day: int

    def __post_init__(self) -> None:
        last = calendar.monthrange(self.month.year, self.month.month)[1]
        if not 1 <= self.day <= last:
            raise ValueError(f"Day {self.day} is not in {self.month} (1-{last}).")

    @classmethod
    def from_date(cls, d: date) -> Day:
        return cls(Month.from_date(d), d.day)

    @property
    def date(self) -> date:
        return date(self.month.year, self.month.month, self.day)

    def __str__(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class _ClosedRange:
    lower_bound: object
    upper_bound: object

    def __post_init__(self) -> None:
        if self.upper_bound < self.lower_bound:
            raise ValueError(
                f"Empty range: {self.lower_bound} is after {self.upper_bound}.")

    def contains(self, value) -> bool:
        return self.lower_bound <= value <= self.upper_bound

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def __str__(self) -> str:
        return f"{self.lower_bound}..{self.upper_bound}"


@dataclass(frozen=True)
class MonthRange(_ClosedRange):
    """Closed range of eligible months."""

    lower_bound: Month
    upper_bound: Month


@dataclass(frozen=True)
class DayRange(_ClosedRange):
    """Closed range of eligible days. Bounds need not sit on month edges."""

    lower_bound: Day
    upper_bound: Day

    @classmethod
    def covering(cls, months: MonthRange) -> DayRange:
        """Every day of every month in ``months``."""
        cal = GregorianCalendar()
        return cls(
            cal.day_containing(cal.first_date_of_month(months.lower_bound)),
            cal.day_containing(cal.last_date_of_month(months.upper_bound)),
        )


class CalendarLike(Protocol):
    """Date arithmetic the item-type enumerator relies on."""

    def month_offset(self, month: Month, months: int) -> Month: ...

    def day_offset(self, day: Day, days: int) -> Day: ...

    def first_date_of_month(self, month: Month) -> date: ...

    def last_date_of_month(self, month: Month) -> date: ...

    def day_containing(self, d: date) -> Day: ...


class GregorianCalendar:
    """Proleptic Gregorian calendar backed by :mod:`calendar` and :mod:`datetime`.

    ``first_weekday`` follows the stdlib convention (0 = Monday, 6 = Sunday)
    and only affects the labels of weekday headers.
    """

    __slots__ = ("first_weekday",)

    def __init__(self, first_weekday: int = calendar.MONDAY) -> None:
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0-6, got {first_weekday}.")
        self.first_weekday = first_weekday

    def month_offset(self, month: Month, months: int) -> Month:
        year, index = divmod(month.year * 12 + month.month - 1 + months, 12)
        return Month(year, index + 1)

    def day_offset(self, day: Day, days: int) -> Day:
        return Day.from_date(day.date + timedelta(days=days))

    def first_date_of_month(self, month: Month) -> date:
        return date(month.year, month.month, 1)

    def last_date_of_month(self, month: Month) -> date:
        return date(month.year, month.month,
                    calendar.monthrange(month.year, month.month)[1])

    def day_containing(self, d: date) -> Day:
        return Day.from_date(d)

    def weekday_abbr(self, position: int) -> str:
        """Label for the 1-based weekday header ``position``."""
        return DAY_ABBR[(self.first_weekday + position - 1) % 7]
