"""
Habit schedule form: application layer orchestrator.

Owns one FrequencyRule and one ReminderRule for the length of an edit
session and keeps the reminder's days consistent with the habit's days.
"""

import logging

from cadence.domain.constants import MAX_TIMES_PER_DAY, MIN_TIMES_PER_DAY
from cadence.domain.schedule.errors import (
    ScheduleValidationFailed,
    ValidationError,
    ValidationResult,
)
from cadence.domain.schedule.models import (
    FrequencyRule,
    FrequencyType,
    HabitSchedule,
    ReminderRule,
    is_weekday,
)

logger = logging.getLogger(__name__)


def reconcile_reminder(reminder: ReminderRule, frequency: FrequencyRule) -> ReminderRule:
    """
    Bring reminder days back inside the frequency's days.

    Days the habit no longer occurs on are dropped. If that would leave the
    reminder with no days, it takes over the frequency's full day set.
    """
    allowed = set(frequency.days)
    if set(reminder.days) <= allowed:
        return reminder

    kept = [d for d in reminder.days if d in allowed]
    if kept:
        logger.debug(f"Reminder days {reminder.days} narrowed to {tuple(kept)}")
        return reminder.with_days(kept)

    logger.debug(f"Reminder days {reminder.days} reset to frequency days {frequency.days}")
    return reminder.with_days(frequency.days)


def validate_schedule(schedule: HabitSchedule) -> ValidationResult:
    """
    Check every schedule rule and report all violations together.
    """
    frequency = schedule.frequency
    reminder = schedule.reminder
    errors: list[ValidationError] = []

    if not frequency.days:
        errors.append(
            ValidationError("frequency.days", "frequency_days_empty", "Select at least one day")
        )
    elif not all(is_weekday(d) for d in frequency.days):
        errors.append(
            ValidationError(
                "frequency.days",
                "frequency_days_invalid",
                f"Frequency days must be between 0 and 6, got {list(frequency.days)}",
            )
        )

    if not (MIN_TIMES_PER_DAY <= frequency.times_per_day <= MAX_TIMES_PER_DAY):
        errors.append(
            ValidationError(
                "frequency.times_per_day",
                "times_per_day_out_of_range",
                f"Times per day must be between {MIN_TIMES_PER_DAY} and {MAX_TIMES_PER_DAY}, "
                f"got {frequency.times_per_day}",
            )
        )

    if reminder.enabled:
        if not reminder.time.is_valid:
            errors.append(
                ValidationError(
                    "reminder.time",
                    "reminder_time_invalid",
                    f"Reminder time {reminder.time.hour}:{reminder.time.minute} is not a valid time",
                )
            )

        if not reminder.days:
            errors.append(
                ValidationError(
                    "reminder.days", "reminder_days_empty", "Select at least one reminder day"
                )
            )
        elif not all(is_weekday(d) for d in reminder.days):
            errors.append(
                ValidationError(
                    "reminder.days",
                    "reminder_days_invalid",
                    f"Reminder days must be between 0 and 6, got {list(reminder.days)}",
                )
            )
        elif frequency.type is not FrequencyType.DAILY and not set(reminder.days) <= set(
            frequency.days
        ):
            extra = sorted(set(reminder.days) - set(frequency.days))
            errors.append(
                ValidationError(
                    "reminder.days",
                    "reminder_days_not_subset",
                    f"Reminder is set for days the habit is not scheduled on: {extra}",
                )
            )

    return ValidationResult(tuple(errors))


class HabitScheduleForm:
    """
    Edit session for one habit's schedule.

    The initial schedule is taken as-is (so stored data can be validated
    without being silently repaired); every edit afterwards is reconciled.
    """

    def __init__(self, schedule: HabitSchedule | None = None):
        self._schedule = schedule or HabitSchedule.default()

    @property
    def schedule(self) -> HabitSchedule:
        return self._schedule

    @property
    def frequency(self) -> FrequencyRule:
        return self._schedule.frequency

    @property
    def reminder(self) -> ReminderRule:
        return self._schedule.reminder

    # -- Replacement operations --

    def apply_frequency_change(self, rule: FrequencyRule) -> HabitSchedule:
        reminder = reconcile_reminder(self.reminder, rule)
        self._schedule = HabitSchedule(frequency=rule, reminder=reminder)
        return self._schedule

    def apply_reminder_change(self, rule: ReminderRule) -> HabitSchedule:
        reminder = reconcile_reminder(rule, self.frequency)
        self._schedule = HabitSchedule(frequency=self.frequency, reminder=reminder)
        return self._schedule

    # -- User intents --

    def set_frequency_type(self, new_type: FrequencyType | str) -> HabitSchedule:
        return self.apply_frequency_change(self.frequency.set_type(new_type))

    def toggle_frequency_day(self, day: int) -> HabitSchedule:
        return self.apply_frequency_change(self.frequency.toggle_day(day))

    def adjust_times_per_day(self, delta: int) -> HabitSchedule:
        return self.apply_frequency_change(self.frequency.set_times_per_day(delta))

    def set_reminder_enabled(self, flag: bool) -> HabitSchedule:
        return self.apply_reminder_change(self.reminder.set_enabled(flag))

    def set_reminder_time(self, hour: int, minute: int) -> HabitSchedule:
        return self.apply_reminder_change(self.reminder.set_time(hour, minute))

    def toggle_reminder_day(self, day: int) -> HabitSchedule:
        return self.apply_reminder_change(self.reminder.toggle_day(day))

    def open_time_picker(self) -> HabitSchedule:
        return self.apply_reminder_change(self.reminder.open_picker())

    def close_time_picker(self) -> HabitSchedule:
        return self.apply_reminder_change(self.reminder.close_picker())

    # -- Derived values --

    @property
    def reminder_display(self) -> str:
        return ReminderRule.format_display(self.reminder.time)

    @property
    def show_reminder_days(self) -> bool:
        return self.reminder.visible_day_selector(self.frequency)

    @property
    def show_frequency_days(self) -> bool:
        return self.frequency.type is not FrequencyType.DAILY

    def validate(self) -> ValidationResult:
        return validate_schedule(self._schedule)

    def submit(self) -> HabitSchedule:
        """
        Return the finished schedule for hand-off to persistence.

        Raises:
            ScheduleValidationFailed: If any rule is violated.
        """
        result = self.validate()
        if not result.ok:
            raise ScheduleValidationFailed(list(result.errors))
        return HabitSchedule(frequency=self.frequency, reminder=self.reminder.close_picker())
