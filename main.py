"""Entry point — prints the slot sequence of a calendar grid."""

from __future__ import annotations

import json
import sys
from datetime import date
from typing import NoReturn, Optional

import typer
from loguru import logger

import settings as settings_store
from calendar_logic import Day, DayRange, GregorianCalendar, Month, MonthRange
from item_type_enumerator import ItemTypeEnumerator
from layout import DayCell, ItemType, MonthHeader, describe, to_dict

app = typer.Typer(help="Calendar grid slot sequences")
settings_app = typer.Typer(help="Show or change saved layout settings")
app.add_typer(settings_app, name="settings")


def setup_logging(debug: bool = False) -> None:
    """Replace loguru's default sink with a coloured stderr sink."""
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{file.name}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level="DEBUG" if debug else "INFO",
        colorize=True,
    )


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(2)


def _split_range(text: str) -> tuple[str, str]:
    lo, sep, hi = text.partition("..")
    if not sep:
        return text, text
    return lo, hi


def parse_month_range(text: str) -> MonthRange:
    """``2024-01..2024-03`` or a single ``2024-01``."""
    lo, hi = _split_range(text)
    return MonthRange(Month.parse(lo), Month.parse(hi))


def parse_day_range(text: str) -> DayRange:
    """``2024-01-15..2024-03-10`` or a single ISO date."""
    lo, hi = _split_range(text)
    return DayRange(Day.from_date(date.fromisoformat(lo.strip())),
                    Day.from_date(date.fromisoformat(hi.strip())))


def collect_slots(enumerator: ItemTypeEnumerator, starting_at: ItemType,
                  limit: int | None = None) -> list[ItemType]:
    """Backward walk (reversed) followed by the forward walk from ``starting_at``.

    Footer-free configurations give calendar order. With footers on, backward
    walks never pass through the previous month's footer, and in pinned
    layouts they reach a month's own footer before its first day.
    """
    before: list[ItemType] = []
    after: list[ItemType] = []

    def on_backward(item_type: ItemType) -> bool:
        before.append(item_type)
        return limit is not None and len(before) >= limit

    def on_forward(item_type: ItemType) -> bool:
        after.append(item_type)
        return limit is not None and len(after) >= limit

    enumerator.enumerate_item_types(starting_at, on_backward, on_forward)
    before.reverse()
    return before + after


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    setup_logging(debug)


@app.command("slots")
def slots(
    months: Optional[str] = typer.Option(None, help="Month range like '2024-01..2024-03' (default: this month)."),
    days: Optional[str] = typer.Option(None, help="Day range like '2024-01-15..2024-03-10' (default: whole months)."),
    start: Optional[str] = typer.Option(None, help="Starting date (default: first eligible day)."),
    start_header: bool = typer.Option(False, help="Start at the month header of --start instead of the day."),
    layout: Optional[str] = typer.Option(None, help="Orientation: vertical | horizontal."),
    pin: Optional[bool] = typer.Option(None, "--pin/--no-pin", help="Pin weekday headers above the grid."),
    footers: Optional[bool] = typer.Option(None, "--footers/--no-footers", help="Generate month footers."),
    first_weekday: Optional[int] = typer.Option(None, help="First weekday, 0 = Monday."),
    limit: Optional[int] = typer.Option(None, min=1, help="Maximum slots per direction."),
    settings_file: Optional[str] = typer.Option(None, help="Settings JSON path."),
    json_out: Optional[str] = typer.Option(None, help="Write JSON to a path, '-' for stdout."),
):
    config = settings_store.load_settings(settings_file)
    if layout is not None:
        config["orientation"] = layout
    if pin is not None:
        config["pin_days_of_week_to_top"] = pin
    if footers is not None:
        config["generate_footers"] = footers
    if first_weekday is not None:
        config["first_weekday"] = first_weekday

    try:
        month_range = parse_month_range(months) if months else MonthRange(
            Month.from_date(date.today()), Month.from_date(date.today()))
        day_range = parse_day_range(days) if days else DayRange.covering(month_range)
        start_day = Day.from_date(date.fromisoformat(start)) if start else day_range.lower_bound
        policy = settings_store.layout_from_settings(config)
        cal = GregorianCalendar(config["first_weekday"])
    except ValueError as e:
        _fail(str(e))

    if start_header:
        starting_at: ItemType = MonthHeader(start_day.month)
    else:
        starting_at = DayCell(start_day)

    enumerator = ItemTypeEnumerator(cal, policy, month_range, day_range,
                                    generate_footers=config["generate_footers"])
    if not enumerator.is_in_range(starting_at):
        _fail(f"Start {describe(starting_at, cal)} is outside months {month_range} / days {day_range}")

    logger.debug(f"Enumerating from {starting_at} with {policy}, footers={config['generate_footers']}")
    sequence = collect_slots(enumerator, starting_at, limit)
    logger.info(f"{len(sequence)} slots between {month_range.lower_bound} and {month_range.upper_bound}")

    if json_out:
        out = sys.stdout if json_out == "-" else open(json_out, "w", encoding="utf-8")
        print(json.dumps([to_dict(it) for it in sequence], indent=2), file=out)
        if out is not sys.stdout:
            out.close()
        return

    for item_type in sequence:
        kind = to_dict(item_type)["kind"]
        typer.echo(f"{kind:<14}{describe(item_type, cal)}")


@settings_app.command("show")
def settings_show(settings_file: Optional[str] = typer.Option(None, help="Settings JSON path.")):
    typer.echo(json.dumps(settings_store.load_settings(settings_file), indent=2))


@settings_app.command("set")
def settings_set(
    key: str = typer.Argument(..., help="Setting name"),
    value: str = typer.Argument(..., help="New value"),
    settings_file: Optional[str] = typer.Option(None, help="Settings JSON path."),
):
    try:
        parsed = settings_store.parse_setting(key, value)
    except ValueError as e:
        _fail(str(e))
    config = settings_store.load_settings(settings_file)
    config[key] = parsed
    settings_store.save_settings(config, settings_file)
    logger.info(f"Saved {key}={parsed!r} to {settings_store.settings_path(settings_file)}")
    typer.echo(json.dumps(config, indent=2))


if __name__ == "__main__":
    app()
