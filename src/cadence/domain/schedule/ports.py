"""
Ports (interfaces) for schedule persistence.

The scheduling core never stores anything itself; a finished schedule is
handed to whatever implements this contract.
"""

from abc import ABC, abstractmethod

from .models import HabitSchedule


class ScheduleRepository(ABC):
    """
    Port for storing finalized habit schedules.

    Implementations:
        - YamlScheduleRepository: One YAML file per habit in a directory.
    """

    @abstractmethod
    def save(self, habit_id: str, schedule: HabitSchedule) -> None:
        """Store (or overwrite) the schedule for a habit."""
        pass

    @abstractmethod
    def load(self, habit_id: str) -> HabitSchedule:
        """
        Fetch the schedule for a habit.

        Raises:
            ScheduleNotFoundError: If no schedule is stored for habit_id.
        """
        pass

    @abstractmethod
    def delete(self, habit_id: str) -> bool:
        """Remove a stored schedule. Returns False if there was nothing to remove."""
        pass

    @abstractmethod
    def list_ids(self) -> list[str]:
        """Habit IDs with a stored schedule, sorted."""
        pass
