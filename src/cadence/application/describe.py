"""Human-readable summaries of a habit's frequency and reminder."""

from cadence.domain.constants import DAY_NAMES
from cadence.domain.schedule.models import (
    FrequencyRule,
    FrequencyType,
    HabitSchedule,
    ReminderRule,
    is_weekday,
)


def day_names(days: tuple[int, ...]) -> str:
    # Out-of-range days are left to validation
    return ", ".join(DAY_NAMES[d] for d in days if is_weekday(d))


def describe_frequency(frequency: FrequencyRule) -> str:
    """
    "Every day" for daily habits, otherwise e.g. "3 days a week (Mon, Wed, Fri)".

    A times-per-day count above one is appended as ", 2 times a day".
    """
    if frequency.type is FrequencyType.DAILY:
        text = "Every day"
    else:
        days = tuple(d for d in frequency.days if is_weekday(d))
        text = f"{len(days)} days a week ({day_names(days)})"

    if frequency.times_per_day > 1:
        text += f", {frequency.times_per_day} times a day"
    return text


def describe_reminder(schedule: HabitSchedule) -> str:
    reminder = schedule.reminder
    if not reminder.enabled:
        return "No reminders set"

    at = ReminderRule.format_display(reminder.time)
    if schedule.frequency.type is FrequencyType.DAILY:
        return f"Daily at {at}"
    return f"At {at} on {day_names(reminder.firing_days(schedule.frequency))}"
