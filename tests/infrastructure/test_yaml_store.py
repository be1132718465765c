import pytest

from cadence.domain.schedule.errors import ScheduleFormatError, ScheduleNotFoundError
from cadence.domain.schedule.models import (
    FrequencyRule,
    FrequencyType,
    HabitSchedule,
    LocalTime,
    ReminderRule,
)
from cadence.infrastructure.adapters.yaml_store import (
    YamlScheduleRepository,
    read_schedule_file,
    write_schedule_file,
)


@pytest.fixture
def repo(tmp_path):
    return YamlScheduleRepository(tmp_path / "habits")


@pytest.fixture
def schedule():
    return HabitSchedule(
        frequency=FrequencyRule(type=FrequencyType.WEEKLY, days=(1, 3, 5), times_per_day=2),
        reminder=ReminderRule(time=LocalTime(19, 30), days=(1, 5)),
    )


def test_save_and_load(repo, schedule):
    repo.save("read-a-book", schedule)
    assert repo.load("read-a-book") == schedule
    assert (repo.root / "read-a-book.yaml").exists()


def test_list_and_delete(repo, schedule):
    assert repo.list_ids() == []
    repo.save("walk", schedule)
    repo.save("drink_water", HabitSchedule.default())
    assert repo.list_ids() == ["drink_water", "walk"]

    assert repo.delete("walk") is True
    assert repo.delete("walk") is False
    assert repo.list_ids() == ["drink_water"]


def test_load_missing(repo):
    with pytest.raises(ScheduleNotFoundError):
        repo.load("nope")


@pytest.mark.parametrize("habit_id", ["../escape", "", "a/b", ".hidden"])
def test_rejects_unsafe_ids(repo, schedule, habit_id):
    with pytest.raises(ValueError):
        repo.save(habit_id, schedule)


def test_time_is_quoted_in_yaml(tmp_path, schedule):
    path = tmp_path / "s.yaml"
    write_schedule_file(path, schedule)
    text = path.read_text()
    assert "19:30" in text
    assert "timesPerDay: 2" in text
    assert read_schedule_file(path) == schedule


def test_hand_written_file(tmp_path):
    path = tmp_path / "hand.yaml"
    path.write_text(
        "frequency:\n"
        "  type: custom\n"
        "  days: [6, 0]\n"
        "reminder:\n"
        "  time: 7:45\n"
        "  days: [0]\n"
    )
    schedule = read_schedule_file(path)
    assert schedule.frequency.days == (0, 6)
    assert schedule.reminder.time == LocalTime(7, 45)
    assert schedule.reminder.days == (0,)


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("frequency: [unclosed\n")
    with pytest.raises(ScheduleFormatError):
        read_schedule_file(path)
