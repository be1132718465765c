"""Cadence CLI: create, inspect and check habit schedules."""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated, Callable, NoReturn

import typer

from cadence.application.config import CadenceConfig, resolve_config
from cadence.application.describe import describe_frequency, describe_reminder
from cadence.application.occurrences import upcoming_reminders
from cadence.application.schedule_form import HabitScheduleForm, validate_schedule
from cadence.consts import VERSION
from cadence.domain.constants import ALL_DAYS, DAY_NAMES
from cadence.domain.schedule.errors import (
    CadenceError,
    ScheduleValidationFailed,
)
from cadence.domain.schedule.models import (
    FrequencyType,
    HabitSchedule,
    LocalTime,
    ReminderRule,
    weekday_of,
)
from cadence.infrastructure.adapters.yaml_store import (
    YamlScheduleRepository,
    read_schedule_file,
    write_schedule_file,
)
from cadence.infrastructure.serialization import schedule_to_dict

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="cadence: habit frequency and reminder scheduling.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage cadence configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

TargetArg = Annotated[
    str,
    typer.Argument(help="Habit ID in the store directory, or a path to a .yaml file."),
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg="red", err=True)
    raise typer.Exit(1)


def _is_file_target(target: str) -> bool:
    return Path(target).suffix in (".yaml", ".yml")


def _load(target: str, config: CadenceConfig) -> HabitSchedule:
    try:
        if _is_file_target(target):
            return read_schedule_file(Path(target))
        return YamlScheduleRepository(config.store_dir).load(target)
    except FileNotFoundError:
        _fail(f"File not found: {target}")
    except (CadenceError, ValueError) as e:
        _fail(str(e))


def _load_valid(target: str, config: CadenceConfig) -> HabitSchedule:
    schedule = _load(target, config)
    result = validate_schedule(schedule)
    if not result.ok:
        for e in result.errors:
            typer.secho(f"  {e.field}: {e.message}", fg="red", err=True)
        _fail(f"{target} is not a valid schedule. Run `cadence check {target}` for details.")
    return schedule


def _save(target: str, schedule: HabitSchedule, config: CadenceConfig) -> None:
    try:
        if _is_file_target(target):
            write_schedule_file(Path(target), schedule)
        else:
            YamlScheduleRepository(config.store_dir).save(target, schedule)
    except (OSError, ValueError) as e:
        _fail(str(e))


def _exists(target: str, config: CadenceConfig) -> bool:
    if _is_file_target(target):
        return Path(target).exists()
    return target in YamlScheduleRepository(config.store_dir).list_ids()


def _check_days(days: list[int] | None, param_hint: str) -> None:
    bad = sorted(set(days or ()) - set(ALL_DAYS))
    if bad:
        raise typer.BadParameter(
            f"Weekdays must be between 0 (Sun) and 6 (Sat), got {bad}", param_hint=param_hint
        )


def _select_days(
    wanted: list[int],
    current: Callable[[], tuple[int, ...]],
    toggle: Callable[[int], HabitSchedule],
) -> None:
    # Add before removing so the day set never has to pass through empty
    for day in sorted(set(wanted)):
        if day not in current():
            toggle(day)
    for day in current():
        if day not in wanted:
            toggle(day)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for cadence."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose >= 2:
        logging.getLogger().setLevel(logging.DEBUG)
    elif verbose == 1:
        logging.getLogger().setLevel(logging.INFO)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def new(
    target: TargetArg,
    frequency_type: Annotated[
        FrequencyType, typer.Option("--type", "-t", help="daily, weekly or custom.")
    ] = FrequencyType.DAILY,
    day: Annotated[
        list[int] | None,
        typer.Option("--day", "-d", help="Habit weekday, 0=Sun..6=Sat. Repeatable."),
    ] = None,
    times: Annotated[int, typer.Option(help="Times per day (1-10, clamped).")] = 1,
    time: Annotated[str | None, typer.Option("--time", help="Reminder time as HH:MM.")] = None,
    reminder: Annotated[
        bool | None,
        typer.Option("--reminder/--no-reminder", help="Enable the reminder."),
    ] = None,
    reminder_day: Annotated[
        list[int] | None,
        typer.Option("--reminder-day", help="Reminder weekday, 0=Sun..6=Sat. Repeatable."),
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing schedule.")] = False,
):
    """[bold green]Create[/bold green] a habit schedule and save it."""
    _check_days(day, "--day")
    _check_days(reminder_day, "--reminder-day")
    config = resolve_config()

    if _exists(target, config) and not force:
        _fail(f"{target} already exists. Use --force to overwrite.")

    logger.debug(f"New schedule for {target} using defaults from {config.store_dir}")
    form = HabitScheduleForm(config.new_schedule())
    form.set_frequency_type(frequency_type)

    if day:
        if frequency_type is FrequencyType.DAILY:
            typer.secho("--day is ignored for daily habits.", fg="yellow")
        else:
            _select_days(day, lambda: form.frequency.days, form.toggle_frequency_day)

    form.adjust_times_per_day(times - form.frequency.times_per_day)

    if reminder is not None:
        form.set_reminder_enabled(reminder)

    if time is not None:
        try:
            parsed = LocalTime.parse(time)
        except ValueError as e:
            _fail(str(e))
        form.set_reminder_time(parsed.hour, parsed.minute)

    if reminder_day:
        if not form.show_reminder_days:
            typer.secho("--reminder-day only applies to enabled, non-daily reminders.", fg="yellow")
        else:
            _select_days(reminder_day, lambda: form.reminder.days, form.toggle_reminder_day)

    try:
        schedule = form.submit()
    except ScheduleValidationFailed as e:
        for err in e.errors:
            typer.secho(f"  {err.field}: {err.message}", fg="red", err=True)
        raise typer.Exit(1)

    _save(target, schedule, config)
    typer.secho(f"Saved {target}", fg="green")
    typer.echo(f"  {describe_frequency(schedule.frequency)}")
    typer.echo(f"  {describe_reminder(schedule)}")


@app.command()
def show(
    target: TargetArg,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show a schedule in plain words."""
    config = resolve_config()
    schedule = _load_valid(target, config)

    if json_output:
        data = schedule_to_dict(schedule)
        data["summary"] = {
            "frequency": describe_frequency(schedule.frequency),
            "reminder": describe_reminder(schedule),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Frequency: {describe_frequency(schedule.frequency)}")
    typer.echo(f"Reminder:  {describe_reminder(schedule)}")


@app.command()
def check(
    target: TargetArg,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Validate a stored schedule and list every problem."""
    config = resolve_config()
    schedule = _load(target, config)
    result = HabitScheduleForm(schedule).validate()

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "ok": result.ok,
                    "errors": [
                        {"field": e.field, "code": e.code, "message": e.message}
                        for e in result.errors
                    ],
                },
                indent=2,
            )
        )
    elif result.ok:
        typer.secho("Schedule is valid.", fg="green")
    else:
        typer.secho(f"Schedule has {len(result.errors)} problem(s):", fg="red")
        for e in result.errors:
            typer.echo(f"  {e.field}: {e.message}")

    if not result.ok:
        raise typer.Exit(1)


@app.command("next")
def next_cmd(
    target: TargetArg,
    count: Annotated[int | None, typer.Option("--count", "-n", help="How many to list.")] = None,
    after: Annotated[
        str | None, typer.Option(help="Start from this local ISO datetime. Defaults to now.")
    ] = None,
):
    """List upcoming reminder times."""
    config = resolve_config()
    schedule = _load_valid(target, config)

    if after is None:
        start = datetime.now().replace(second=0, microsecond=0)
    else:
        try:
            start = datetime.fromisoformat(after)
        except ValueError:
            raise typer.BadParameter(
                f"Not an ISO datetime: {after}", param_hint="--after"
            ) from None

    if not schedule.reminder.enabled:
        typer.secho("Reminders are disabled for this habit.", fg="yellow")
        return

    for fire_at in upcoming_reminders(schedule, start, count or config.upcoming_count):
        label = DAY_NAMES[weekday_of(fire_at.date())]
        display = ReminderRule.format_display(LocalTime(fire_at.hour, fire_at.minute))
        typer.echo(f"{label} {fire_at:%Y-%m-%d %H:%M}  ({display})")


@app.command()
def version():
    """Print the cadence version."""
    typer.echo(f"cadence {VERSION}")


@app.command("list")
def list_cmd():
    """List habit IDs in the store directory."""
    config = resolve_config()
    ids = YamlScheduleRepository(config.store_dir).list_ids()
    if not ids:
        typer.secho(f"No schedules in {config.store_dir}", fg="yellow")
        return
    for habit_id in ids:
        typer.echo(habit_id)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
