# Domain Schedule Package
from .errors import (
    CadenceError,
    InvalidTimeError,
    ScheduleFormatError,
    ScheduleNotFoundError,
    ScheduleValidationFailed,
    ValidationError,
    ValidationResult,
)
from .models import (
    FrequencyRule,
    FrequencyType,
    HabitSchedule,
    LocalTime,
    ReminderRule,
    weekday_of,
)
from .ports import ScheduleRepository

__all__ = [
    "CadenceError",
    "InvalidTimeError",
    "ScheduleFormatError",
    "ScheduleNotFoundError",
    "ScheduleValidationFailed",
    "ValidationError",
    "ValidationResult",
    "FrequencyRule",
    "FrequencyType",
    "HabitSchedule",
    "LocalTime",
    "ReminderRule",
    "weekday_of",
    "ScheduleRepository",
]
