"""
YAML file implementation of the ScheduleRepository port.

Each habit's schedule lives in `<root>/<habit_id>.yaml`.
"""

import logging
import re
from pathlib import Path

import yaml  # type: ignore
import yaml.error

from cadence.domain.schedule.errors import ScheduleFormatError, ScheduleNotFoundError
from cadence.domain.schedule.models import HabitSchedule
from cadence.domain.schedule.ports import ScheduleRepository
from cadence.infrastructure.serialization import schedule_from_dict, schedule_to_dict

logger = logging.getLogger(__name__)

_HABIT_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def read_schedule_file(path: Path) -> HabitSchedule:
    """
    Load a single schedule document.

    Raises:
        FileNotFoundError: If path does not exist.
        ScheduleFormatError: If the file is not valid YAML or not a schedule.
    """
    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.error.YAMLError as e:
        raise ScheduleFormatError(f"{path}: not valid YAML ({e})") from e
    return schedule_from_dict(data)


def write_schedule_file(path: Path, schedule: HabitSchedule) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = yaml.safe_dump(schedule_to_dict(schedule), sort_keys=False, default_flow_style=None)
    path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote schedule to {path}")


class YamlScheduleRepository(ScheduleRepository):
    """Stores one YAML document per habit under a root directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path_for(self, habit_id: str) -> Path:
        if not _HABIT_ID_RE.match(habit_id):
            raise ValueError(f"Invalid habit id {habit_id!r}")
        return self.root / f"{habit_id}.yaml"

    def save(self, habit_id: str, schedule: HabitSchedule) -> None:
        write_schedule_file(self._path_for(habit_id), schedule)

    def load(self, habit_id: str) -> HabitSchedule:
        path = self._path_for(habit_id)
        if not path.exists():
            raise ScheduleNotFoundError(habit_id)
        return read_schedule_file(path)

    def delete(self, habit_id: str) -> bool:
        path = self._path_for(habit_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted schedule for {habit_id}")
        return True

    def list_ids(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob("*.yaml"))
