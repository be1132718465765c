from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from cadence.domain.schedule.models import HabitSchedule, LocalTime


def _config_files() -> list[Path]:
    return [
        Path.home() / ".config/cadence/config.toml",
        Path.home() / ".cadence.toml",
    ]


class CadenceConfig(BaseSettings):
    """
    Configuration model for cadence.
    Supports loading from:
    1. Environment variables (CADENCE_*)
    2. Config file (~/.config/cadence/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="CADENCE_",
        extra="ignore",
    )

    # New-habit defaults
    default_reminder_time: str = "09:00"
    default_reminder_enabled: bool = True

    # Paths
    store_dir: Path = Field(default_factory=lambda: Path.home() / ".local/share/cadence")

    # Output
    upcoming_count: int = Field(default=5, ge=1)
    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in _config_files() if f.exists()), None)

        # Overrides beat env, env beats the file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("default_reminder_time")
    @classmethod
    def check_reminder_time(cls, v: str) -> str:
        return LocalTime.parse(v).isoformat()

    @field_validator("store_dir", mode="before")
    @classmethod
    def resolve_store_dir(cls, v: Any) -> Path:
        return Path(v).expanduser()

    def new_schedule(self) -> HabitSchedule:
        """Default schedule for a freshly started habit."""
        return HabitSchedule.default(
            reminder_time=LocalTime.parse(self.default_reminder_time),
            reminder_enabled=self.default_reminder_enabled,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> CadenceConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in CadenceConfig
    2. ~/.config/cadence/config.toml (if exists)
    3. Environment variables (CADENCE_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return CadenceConfig(**overrides)
