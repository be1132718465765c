"""
Domain models for habit recurrence and reminders.

These are pure value types with no I/O. Every "mutating" operation returns
a new instance; a refused mutation returns the instance unchanged.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Iterable

from cadence.domain.constants import (
    ALL_DAYS,
    DEFAULT_REMINDER_HOUR,
    DEFAULT_REMINDER_MINUTE,
    MAX_TIMES_PER_DAY,
    MIN_TIMES_PER_DAY,
    WEEKLY_DEFAULT_DAYS,
)

from .errors import InvalidTimeError

logger = logging.getLogger(__name__)


class FrequencyType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


def is_weekday(day: int) -> bool:
    return isinstance(day, int) and not isinstance(day, bool) and 0 <= day <= 6


def weekday_of(d: date) -> int:
    """Sunday-first weekday (0 = Sunday) for a calendar date."""
    return (d.weekday() + 1) % 7


def normalize_days(days: Iterable[int]) -> tuple[int, ...]:
    """Unique, ascending day tuple."""
    return tuple(sorted(set(days)))


def _toggle(days: tuple[int, ...], day: int, owner: str) -> tuple[int, ...]:
    """
    Add or remove a weekday.

    Returns the original tuple when the change is refused: either the day is
    not a weekday, or removing it would leave no days at all.
    """
    if not is_weekday(day):
        logger.warning(f"Ignoring toggle of invalid weekday {day!r} on {owner}")
        return days

    if day in days:
        new_days = tuple(d for d in days if d != day)
    else:
        new_days = normalize_days((*days, day))

    if not new_days:
        logger.debug(f"Refusing to remove last day {day} from {owner}")
        return days
    return new_days


@dataclass(frozen=True, order=True)
class LocalTime:
    """
    Wall-clock time with no date or timezone.

    Use LocalTime.of() for checked construction. Direct construction is
    unchecked so that decoded data can be held and reported by validation.
    """

    hour: int
    minute: int

    @classmethod
    def of(cls, hour: int, minute: int) -> "LocalTime":
        t = cls(hour, minute)
        if not t.is_valid:
            raise InvalidTimeError(f"{hour}:{minute}")
        return t

    @classmethod
    def parse(cls, text: str) -> "LocalTime":
        """Parse a 24-hour "HH:MM" string."""
        try:
            hours, minutes = text.split(":")
            hour, minute = int(hours), int(minutes)
        except (AttributeError, ValueError) as e:
            raise InvalidTimeError(str(text)) from e
        return cls.of(hour, minute)

    @property
    def is_valid(self) -> bool:
        return (
            isinstance(self.hour, int)
            and isinstance(self.minute, int)
            and not isinstance(self.hour, bool)
            and not isinstance(self.minute, bool)
            and 0 <= self.hour <= 23
            and 0 <= self.minute <= 59
        )

    def isoformat(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.isoformat()


DEFAULT_REMINDER_TIME = LocalTime(DEFAULT_REMINDER_HOUR, DEFAULT_REMINDER_MINUTE)


@dataclass(frozen=True)
class FrequencyRule:
    """
    How often, and on which weekdays, a habit occurs.

    Attributes:
        type: Daily, Weekly or Custom.
        days: Unique ascending weekdays (0 = Sunday). Never empty. The full
            week for Daily.
        times_per_day: Completions expected per due day, 1-10.
    """

    type: FrequencyType = FrequencyType.DAILY
    days: tuple[int, ...] = ALL_DAYS
    times_per_day: int = MIN_TIMES_PER_DAY

    def __post_init__(self):
        object.__setattr__(self, "type", FrequencyType(self.type))
        if self.type is FrequencyType.DAILY:
            object.__setattr__(self, "days", ALL_DAYS)
        else:
            object.__setattr__(self, "days", normalize_days(self.days))

    def set_type(self, new_type: FrequencyType | str) -> "FrequencyRule":
        new_type = FrequencyType(new_type)

        if new_type is FrequencyType.DAILY:
            return replace(self, type=new_type, days=ALL_DAYS)

        if new_type is FrequencyType.WEEKLY:
            if self.type is FrequencyType.WEEKLY:
                # Re-selecting weekly keeps the user's picks
                return self
            return replace(self, type=new_type, days=WEEKLY_DEFAULT_DAYS)

        return replace(self, type=new_type)

    def toggle_day(self, day: int) -> "FrequencyRule":
        new_days = _toggle(self.days, day, "frequency")
        if new_days is self.days:
            return self
        return replace(self, days=new_days)

    def set_times_per_day(self, delta: int) -> "FrequencyRule":
        value = max(MIN_TIMES_PER_DAY, min(self.times_per_day + delta, MAX_TIMES_PER_DAY))
        if value == self.times_per_day:
            return self
        return replace(self, times_per_day=value)

    def is_due_on(self, day: int) -> bool:
        if self.type is FrequencyType.DAILY:
            return True
        return day in self.days


@dataclass(frozen=True)
class ReminderRule:
    """
    Whether, when and on which weekdays a reminder fires.

    `picker_open` is transient editing state for the time picker and is not
    part of equality or the persisted form.
    """

    enabled: bool = True
    time: LocalTime = DEFAULT_REMINDER_TIME
    days: tuple[int, ...] = ALL_DAYS
    picker_open: bool = field(default=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "days", normalize_days(self.days))

    def set_enabled(self, flag: bool) -> "ReminderRule":
        return replace(self, enabled=bool(flag))

    def set_time(self, hour: int, minute: int) -> "ReminderRule":
        return replace(self, time=LocalTime.of(hour, minute), picker_open=False)

    def toggle_day(self, day: int) -> "ReminderRule":
        new_days = _toggle(self.days, day, "reminder")
        if new_days is self.days:
            return self
        return replace(self, days=new_days)

    def with_days(self, days: Iterable[int]) -> "ReminderRule":
        return replace(self, days=normalize_days(days))

    def open_picker(self) -> "ReminderRule":
        return replace(self, picker_open=True)

    def close_picker(self) -> "ReminderRule":
        return replace(self, picker_open=False)

    @staticmethod
    def format_display(time: LocalTime) -> str:
        """12-hour display form, e.g. 13:30 -> "1:30 PM", 00:00 -> "12:00 AM"."""
        period = "PM" if time.hour >= 12 else "AM"
        hour = time.hour % 12
        if hour == 0:
            hour = 12
        return f"{hour}:{time.minute:02d} {period}"

    def visible_day_selector(self, frequency: FrequencyRule) -> bool:
        return self.enabled and frequency.type is not FrequencyType.DAILY

    def firing_days(self, frequency: FrequencyRule) -> tuple[int, ...]:
        """
        Weekdays the reminder actually fires on.

        Daily habits use the whole week. Otherwise a reminder never fires on
        a day the habit is not scheduled, or on a day outside 0..6, even if
        stored data says so.
        """
        if frequency.type is FrequencyType.DAILY:
            return ALL_DAYS
        return tuple(d for d in self.days if is_weekday(d) and d in frequency.days)


@dataclass(frozen=True)
class HabitSchedule:
    """A frequency rule together with its dependent reminder rule."""

    frequency: FrequencyRule = field(default_factory=FrequencyRule)
    reminder: ReminderRule = field(default_factory=ReminderRule)

    @classmethod
    def default(
        cls,
        reminder_time: LocalTime = DEFAULT_REMINDER_TIME,
        reminder_enabled: bool = True,
    ) -> "HabitSchedule":
        return cls(
            frequency=FrequencyRule(),
            reminder=ReminderRule(enabled=reminder_enabled, time=reminder_time),
        )
