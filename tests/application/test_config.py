from pathlib import Path

import pytest
from pydantic import ValidationError

from cadence.application.config import CadenceConfig, resolve_config
from cadence.domain.schedule.models import LocalTime


def test_defaults(mock_home):
    config = resolve_config()
    assert config.default_reminder_time == "09:00"
    assert config.default_reminder_enabled is True
    assert config.upcoming_count == 5
    assert config.store_dir == mock_home / ".local/share/cadence"


def test_env_override(mock_home, monkeypatch):
    monkeypatch.setenv("CADENCE_DEFAULT_REMINDER_TIME", "7:30")
    config = resolve_config()
    assert config.default_reminder_time == "07:30"
    assert config.new_schedule().reminder.time == LocalTime(7, 30)


def test_toml_file(mock_home):
    cfg = mock_home / ".config/cadence/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text('default_reminder_enabled = false\nupcoming_count = 2\n')

    config = resolve_config()
    assert config.default_reminder_enabled is False
    assert config.upcoming_count == 2
    assert config.new_schedule().reminder.enabled is False


def test_env_beats_toml(mock_home, monkeypatch):
    cfg = mock_home / ".cadence.toml"
    cfg.write_text('default_reminder_time = "06:00"\n')
    monkeypatch.setenv("CADENCE_DEFAULT_REMINDER_TIME", "06:45")
    assert resolve_config().default_reminder_time == "06:45"


def test_cli_overrides_win_and_none_is_skipped(mock_home, monkeypatch):
    monkeypatch.setenv("CADENCE_UPCOMING_COUNT", "3")
    config = resolve_config({"upcoming_count": 8, "default_reminder_time": None})
    assert config.upcoming_count == 8
    assert config.default_reminder_time == "09:00"


def test_store_dir_expands_user(mock_home):
    config = CadenceConfig(store_dir="~/habits")
    assert config.store_dir == Path(str(mock_home)) / "habits"


def test_invalid_reminder_time_rejected(mock_home):
    with pytest.raises(ValidationError):
        CadenceConfig(default_reminder_time="25:00")
