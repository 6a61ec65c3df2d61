"""Ordering of the structural slots of a calendar grid.

A month is assembled as::

    month header -> weekday header (x7) -> day (x28..31) -> [month footer]

and the next month follows. :class:`ItemTypeEnumerator` defines that order as
a pair of transition functions (``predecessor`` / ``successor``) and walks
it in both directions from any starting slot, bounded by a month range and a
day range. The range check is the only thing that ends a walk; the
transitions always produce a structurally valid neighbour, even one step
past a boundary.
"""

from __future__ import annotations

from typing import Callable, Iterator, NoReturn

from loguru import logger

from calendar_logic import CalendarLike, Day, DayRange, Month, MonthRange
from layout import (
    DayCell,
    DayOfWeekHeader,
    DayOfWeekPosition,
    ItemType,
    LayoutPolicy,
    MonthFooter,
    MonthHeader,
    pins_days_of_week_to_top,
)

# Return a truthy value to stop walking in that direction.
ItemTypeHandler = Callable[[ItemType], "bool | None"]


class ItemTypeInvariantError(AssertionError):
    """A transition reached a state its guards should have made impossible."""


class ItemTypeEnumerator:
    """Walks calendar slots backward and forward from a starting slot."""

    __slots__ = ("calendar", "layout", "month_range", "day_range",
                 "generate_footers")

    def __init__(self, calendar: CalendarLike, layout: LayoutPolicy,
                 month_range: MonthRange, day_range: DayRange,
                 generate_footers: bool = False) -> None:
        self.calendar = calendar
        self.layout = layout
        self.month_range = month_range
        self.day_range = day_range
        self.generate_footers = generate_footers

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def enumerate_item_types(self, starting_at: ItemType,
                             on_backward: ItemTypeHandler,
                             on_forward: ItemTypeHandler) -> None:
        """Feed ``on_backward`` the slots before ``starting_at`` (nearest
        first), then feed ``on_forward`` ``starting_at`` and the slots after it.

        Each handler ends its own direction by returning a truthy value.
        """
        for item_type in self.iter_backward(starting_at):
            if on_backward(item_type):
                break
        for item_type in self.iter_forward(starting_at):
            if on_forward(item_type):
                break

    def iter_backward(self, starting_at: ItemType) -> Iterator[ItemType]:
        """Slots strictly before ``starting_at``, nearest first."""
        current = self.predecessor(starting_at)
        while self.is_in_range(current):
            yield current
            current = self.predecessor(current)
        logger.debug("Backward walk from {} halted at {}", starting_at, current)

    def iter_forward(self, starting_at: ItemType) -> Iterator[ItemType]:
        """``starting_at`` (if in range) followed by the slots after it."""
        current = starting_at
        while self.is_in_range(current):
            yield current
            current = self.successor(current)
        logger.debug("Forward walk from {} halted at {}", starting_at, current)

    def is_in_range(self, item_type: ItemType) -> bool:
        if isinstance(item_type, DayCell):
            return self.day_range.contains(item_type.day)
        if isinstance(item_type, (MonthHeader, MonthFooter, DayOfWeekHeader)):
            return self.month_range.contains(item_type.month)
        raise TypeError(f"Not an item type: {item_type!r}")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def predecessor(self, item_type: ItemType) -> ItemType:
        if isinstance(item_type, (MonthHeader, MonthFooter)):
            previous_month = self.calendar.month_offset(item_type.month, -1)
            return DayCell(self._last_day_of(previous_month))

        if isinstance(item_type, DayOfWeekHeader):
            if item_type.position == DayOfWeekPosition.FIRST:
                return MonthHeader(item_type.month)
            position = item_type.position.try_predecessor()
            if position is None:
                self._invariant_failure(
                    f"Could not get the day-of-week position preceding {item_type.position!r}.")
            return DayOfWeekHeader(position, item_type.month)

        if isinstance(item_type, DayCell):
            day = item_type.day
            if day.day == 1 or day == self.day_range.lower_bound:
                if pins_days_of_week_to_top(self.layout):
                    if self.generate_footers:
                        return MonthFooter(day.month)
                    return MonthHeader(day.month)
                return DayOfWeekHeader(DayOfWeekPosition.LAST, day.month)
            return DayCell(self.calendar.day_offset(day, -1))

        raise TypeError(f"Not an item type: {item_type!r}")

    def successor(self, item_type: ItemType) -> ItemType:
        if isinstance(item_type, MonthHeader):
            if pins_days_of_week_to_top(self.layout):
                return DayCell(self.first_day_in_range(item_type.month))
            return DayOfWeekHeader(DayOfWeekPosition.FIRST, item_type.month)

        if isinstance(item_type, MonthFooter):
            if pins_days_of_week_to_top(self.layout):
                next_day = self.calendar.day_offset(
                    self.last_day_in_range(item_type.month), 1)
                return MonthHeader(next_day.month)
            return MonthHeader(self.calendar.month_offset(item_type.month, 1))

        if isinstance(item_type, DayOfWeekHeader):
            if item_type.position == DayOfWeekPosition.LAST:
                return DayCell(self.first_day_in_range(item_type.month))
            position = item_type.position.try_successor()
            if position is None:
                self._invariant_failure(
                    f"Could not get the day-of-week position succeeding {item_type.position!r}.")
            return DayOfWeekHeader(position, item_type.month)

        if isinstance(item_type, DayCell):
            day = item_type.day
            next_day = self.calendar.day_offset(day, 1)
            closes_month = (day.month != next_day.month
                            or day == self.day_range.upper_bound)
            if closes_month and self.generate_footers:
                return MonthFooter(day.month)
            if closes_month:
                return MonthHeader(self.calendar.month_offset(day.month, 1))
            return DayCell(next_day)

        raise TypeError(f"Not an item type: {item_type!r}")

    # ------------------------------------------------------------------
    # Eligible days
    # ------------------------------------------------------------------
    def first_day_in_range(self, month: Month) -> Day:
        first_day = self.calendar.day_containing(
            self.calendar.first_date_of_month(month))
        if month == self.day_range.lower_bound.month:
            return max(first_day, self.day_range.lower_bound)
        return first_day

    def last_day_in_range(self, month: Month) -> Day:
        # Takes the later of the two, like first_day_in_range. Within the
        # upper bound's month this is always the calendar last day.
        last_day = self._last_day_of(month)
        if month == self.day_range.upper_bound.month:
            return max(last_day, self.day_range.upper_bound)
        return last_day

    def _last_day_of(self, month: Month) -> Day:
        return self.calendar.day_containing(self.calendar.last_date_of_month(month))

    @staticmethod
    def _invariant_failure(message: str) -> NoReturn:
        logger.critical(message)
        raise ItemTypeInvariantError(message)
