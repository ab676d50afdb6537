"""Scheduling rules for recurring expenses.

Every function here is pure: definitions go in, new definitions (or the same
one, unchanged) come out. Persistence and the daily tick live in
RecurringService.
"""
from dataclasses import replace
from datetime import date, timedelta

from models.recurring_expense import Frequency, RecurringExpense
from utils.date_helpers import add_months

_DAY_INTERVALS = {
    Frequency.DAILY: 1,
    Frequency.WEEKLY: 7,
    Frequency.BIWEEKLY: 14,
}

_MONTH_INTERVALS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.YEARLY: 12,
}


def compute_next_occurrence(current: date, frequency: Frequency) -> date:
    """Return the occurrence one period after `current`.

    Month-based frequencies keep the day of month and clamp to the last day
    of a shorter target month (Jan 31 -> Feb 28/29, Feb 29 -> Feb 28).
    """
    if frequency in _DAY_INTERVALS:
        return current + timedelta(days=_DAY_INTERVALS[frequency])
    return add_months(current, _MONTH_INTERVALS[frequency])


def is_series_exhausted(definition: RecurringExpense, reference_date: date | None = None) -> bool:
    """True when the series is inactive or its next advance would pass end_date.

    reference_date does not affect the answer; exhaustion depends only on the
    schedule itself.
    """
    if not definition.active:
        return True
    if definition.end_date is None:
        return False
    following = compute_next_occurrence(definition.next_occurrence, definition.frequency)
    return following > definition.end_date


def advance(definition: RecurringExpense) -> RecurringExpense:
    """Move next_occurrence forward one period.

    An exhausted series comes back unchanged, pinned at its last valid
    occurrence. Each call advances once; callers invoke it at most once per
    tick.
    """
    if is_series_exhausted(definition):
        return definition
    return replace(
        definition,
        next_occurrence=compute_next_occurrence(definition.next_occurrence, definition.frequency),
    )


def toggle_active(definition: RecurringExpense, active: bool) -> RecurringExpense:
    """Set the active flag. next_occurrence is left as it was."""
    return replace(definition, active=active)


def fast_forward(definition: RecurringExpense, reference_date: date) -> RecurringExpense:
    """Skip occurrences that fell before reference_date without firing them."""
    current = definition
    while current.next_occurrence < reference_date:
        moved = advance(current)
        if moved is current:
            break
        current = moved
    return current


def upcoming_occurrences(definition: RecurringExpense, count: int) -> list[date]:
    """The next `count` dates the series would fire on, bounded by end_date."""
    result: list[date] = []
    current = definition.next_occurrence
    while len(result) < count:
        if definition.end_date and current > definition.end_date:
            break
        result.append(current)
        current = compute_next_occurrence(current, definition.frequency)
    return result
