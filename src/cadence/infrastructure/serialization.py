"""
Wire format for habit schedules.

    frequency: { type: "daily"|"weekly"|"custom", days: [0..6], timesPerDay: 1..10 }
    reminder:  { enabled: bool, time: "HH:MM", days: [0..6] }

Decoding checks structure only. Range problems (day 9, timesPerDay 0,
"25:00") are carried into the domain objects so validation can report them
alongside everything else.
"""

import re
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from cadence.domain.constants import ALL_DAYS
from cadence.domain.schedule.errors import ScheduleFormatError
from cadence.domain.schedule.models import (
    FrequencyRule,
    FrequencyType,
    HabitSchedule,
    LocalTime,
    ReminderRule,
    normalize_days,
)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


DayList = Annotated[list[int], AfterValidator(lambda v: list(normalize_days(v)))]


class FrequencyPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: FrequencyType = FrequencyType.DAILY
    days: DayList = Field(default_factory=lambda: list(ALL_DAYS))
    times_per_day: int = Field(default=1, alias="timesPerDay")


class ReminderPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool = True
    time: str = "09:00"
    days: DayList = Field(default_factory=lambda: list(ALL_DAYS))

    @field_validator("time", mode="before")
    @classmethod
    def undo_sexagesimal(cls, v: Any) -> Any:
        # YAML 1.1 reads an unquoted 19:30 as the base-60 integer 1170
        if isinstance(v, int) and not isinstance(v, bool) and v >= 0:
            return f"{v // 60:02d}:{v % 60:02d}"
        return v

    @field_validator("time")
    @classmethod
    def check_time_shape(cls, v: str) -> str:
        if not _TIME_RE.match(v):
            raise ValueError(f"expected HH:MM, got {v!r}")
        return v


class SchedulePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    frequency: FrequencyPayload = Field(default_factory=FrequencyPayload)
    reminder: ReminderPayload = Field(default_factory=ReminderPayload)


def schedule_to_dict(schedule: HabitSchedule) -> dict[str, Any]:
    """Encode a schedule into its wire dictionary."""
    frequency = schedule.frequency
    reminder = schedule.reminder
    payload = SchedulePayload(
        frequency=FrequencyPayload(
            type=frequency.type,
            days=list(frequency.days),
            times_per_day=frequency.times_per_day,
        ),
        reminder=ReminderPayload(
            enabled=reminder.enabled,
            time=reminder.time.isoformat(),
            days=list(reminder.days),
        ),
    )
    return payload.model_dump(mode="json", by_alias=True)


def schedule_from_dict(data: Any) -> HabitSchedule:
    """
    Decode a wire dictionary into a schedule.

    Raises:
        ScheduleFormatError: If the payload is not shaped like a schedule.
    """
    if not isinstance(data, dict):
        raise ScheduleFormatError(f"Expected a mapping, got {type(data).__name__}")

    try:
        payload = SchedulePayload.model_validate(data)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ScheduleFormatError(f"Invalid schedule: {details}") from e

    hours, minutes = payload.reminder.time.split(":")

    return HabitSchedule(
        frequency=FrequencyRule(
            type=payload.frequency.type,
            days=tuple(payload.frequency.days),
            times_per_day=payload.frequency.times_per_day,
        ),
        reminder=ReminderRule(
            enabled=payload.reminder.enabled,
            time=LocalTime(int(hours), int(minutes)),
            days=tuple(payload.reminder.days),
        ),
    )
