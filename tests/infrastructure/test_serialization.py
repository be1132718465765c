"""Tests for the schedule wire format."""

import pytest

from cadence.application.schedule_form import validate_schedule
from cadence.domain.schedule.errors import ScheduleFormatError
from cadence.domain.schedule.models import (
    FrequencyRule,
    FrequencyType,
    HabitSchedule,
    LocalTime,
    ReminderRule,
)
from cadence.infrastructure.serialization import schedule_from_dict, schedule_to_dict


def test_encode_default():
    assert schedule_to_dict(HabitSchedule.default()) == {
        "frequency": {"type": "daily", "days": [0, 1, 2, 3, 4, 5, 6], "timesPerDay": 1},
        "reminder": {"enabled": True, "time": "09:00", "days": [0, 1, 2, 3, 4, 5, 6]},
    }


def test_encode_zero_pads_time_and_sorts_days():
    schedule = HabitSchedule(
        frequency=FrequencyRule(type=FrequencyType.CUSTOM, days=(5, 1, 3), times_per_day=2),
        reminder=ReminderRule(enabled=False, time=LocalTime(7, 5), days=(5, 1)),
    )
    data = schedule_to_dict(schedule)
    assert data["frequency"] == {"type": "custom", "days": [1, 3, 5], "timesPerDay": 2}
    assert data["reminder"] == {"enabled": False, "time": "07:05", "days": [1, 5]}


def test_decode_normalizes_days():
    schedule = schedule_from_dict(
        {
            "frequency": {"type": "weekly", "days": [5, 1, 1, 3], "timesPerDay": 2},
            "reminder": {"enabled": True, "time": "18:30", "days": [3, 3, 1]},
        }
    )
    assert schedule.frequency.type is FrequencyType.WEEKLY
    assert schedule.frequency.days == (1, 3, 5)
    assert schedule.frequency.times_per_day == 2
    assert schedule.reminder.time == LocalTime(18, 30)
    assert schedule.reminder.days == (1, 3)


def test_round_trip():
    schedule = HabitSchedule(
        frequency=FrequencyRule(type=FrequencyType.CUSTOM, days=(0, 6), times_per_day=4),
        reminder=ReminderRule(time=LocalTime(21, 0), days=(6,)),
    )
    assert schedule_from_dict(schedule_to_dict(schedule)) == schedule


def test_missing_sections_use_defaults():
    assert schedule_from_dict({}) == HabitSchedule.default()


def test_out_of_range_values_left_for_validation():
    schedule = schedule_from_dict(
        {
            "frequency": {"type": "custom", "days": [1], "timesPerDay": 0},
            "reminder": {"enabled": True, "time": "24:00", "days": [1]},
        }
    )
    assert validate_schedule(schedule).codes() == [
        "times_per_day_out_of_range",
        "reminder_time_invalid",
    ]


def test_sexagesimal_yaml_time_is_recovered():
    schedule = schedule_from_dict({"reminder": {"time": 19 * 60 + 30}})
    assert schedule.reminder.time == LocalTime(19, 30)


@pytest.mark.parametrize(
    "data",
    [
        [],
        "daily",
        {"frequency": {"type": "monthly"}},
        {"frequency": {"days": "mon"}},
        {"reminder": {"time": "9am"}},
        {"reminder": {"enabled": "maybe"}},
    ],
    ids=["list", "string", "bad_type", "bad_days", "bad_time", "bad_enabled"],
)
def test_malformed_payloads(data):
    with pytest.raises(ScheduleFormatError):
        schedule_from_dict(data)


def test_daily_decodes_to_full_week():
    schedule = schedule_from_dict({"frequency": {"type": "daily", "days": [2]}})
    assert schedule.frequency.days == (0, 1, 2, 3, 4, 5, 6)
    assert schedule_to_dict(schedule)["frequency"]["days"] == [0, 1, 2, 3, 4, 5, 6]
