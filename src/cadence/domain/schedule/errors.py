"""
Error types for the scheduling model.

Only time construction raises. Everything else that can go wrong with a
schedule is collected as ValidationError values so a caller can show every
problem at once.
"""

from dataclasses import dataclass, field


class CadenceError(Exception):
    """Base class for all Cadence errors."""


class InvalidTimeError(CadenceError, ValueError):
    """Raised when a time is not a valid 24-hour hour/minute pair."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid time {value!r} (expected hour 0-23 and minute 0-59)")


class ScheduleFormatError(CadenceError, ValueError):
    """Raised when a stored/wire payload is structurally not a schedule."""


class ScheduleNotFoundError(CadenceError, KeyError):
    """Raised by a repository when no schedule is stored for a habit."""

    def __str__(self) -> str:
        return f"No schedule stored for habit {self.args[0]!r}"


class ScheduleValidationFailed(CadenceError):
    """Raised on submit when the schedule still has validation errors."""

    def __init__(self, errors: list["ValidationError"]):
        self.errors = errors
        summary = "; ".join(e.message for e in errors)
        super().__init__(f"Schedule is invalid: {summary}")


@dataclass(frozen=True)
class ValidationError:
    """
    A single violated rule.

    Attributes:
        field: Dotted path of the offending field (e.g. "reminder.days").
        code: Stable machine-readable identifier.
        message: Human-readable description.
    """

    field: str
    code: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a schedule. Empty errors means OK."""

    errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.ok

    def codes(self) -> list[str]:
        return [e.code for e in self.errors]
