"""
Due-date and reminder firing computation.

This is a pure computation module with no I/O. All datetimes are naive
local wall-clock values; there is no timezone handling.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator

from cadence.domain.schedule.models import FrequencyRule, HabitSchedule, weekday_of


def is_due(frequency: FrequencyRule, d: date) -> bool:
    """Whether the habit is scheduled on a calendar date."""
    return frequency.is_due_on(weekday_of(d))


def due_dates(frequency: FrequencyRule, start: date, end: date) -> list[date]:
    """All dates in [start, end] on which the habit is due."""
    dates: list[date] = []
    current = start
    while current <= end:
        if is_due(frequency, current):
            dates.append(current)
        current += timedelta(days=1)
    return dates


def completion_rate(
    frequency: FrequencyRule,
    completed: Iterable[date],
    start: date,
    end: date,
) -> float:
    """
    Fraction of due days in [start, end] that were completed.

    Completions on days the habit was not due are ignored. Returns 0.0 when
    nothing was due.
    """
    scheduled = due_dates(frequency, start, end)
    if not scheduled:
        return 0.0
    done = set(completed)
    return sum(1 for d in scheduled if d in done) / len(scheduled)


def month_completion_rate(
    frequency: FrequencyRule,
    completed: Iterable[date],
    year: int,
    month: int,
) -> float:
    """completion_rate over one calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return completion_rate(frequency, completed, date(year, month, 1), date(year, month, last_day))


def iter_reminders(schedule: HabitSchedule, after: datetime) -> Iterator[datetime]:
    """
    Yield reminder firing datetimes strictly after `after`, in order.

    Yields nothing when the reminder is disabled or has no firing days.
    """
    reminder = schedule.reminder
    if not reminder.enabled or not reminder.time.is_valid:
        return

    firing = set(reminder.firing_days(schedule.frequency))
    if not firing:
        return

    at = time(reminder.time.hour, reminder.time.minute)
    day = after.date()
    while True:
        if weekday_of(day) in firing:
            candidate = datetime.combine(day, at)
            if candidate > after:
                yield candidate
        day += timedelta(days=1)


def next_reminder(schedule: HabitSchedule, after: datetime) -> datetime | None:
    return next(iter_reminders(schedule, after), None)


def upcoming_reminders(schedule: HabitSchedule, after: datetime, count: int) -> list[datetime]:
    """The next `count` reminder datetimes after `after`."""
    result: list[datetime] = []
    if count <= 0:
        return result
    for fire_at in iter_reminders(schedule, after):
        result.append(fire_at)
        if len(result) >= count:
            break
    return result
