"""
Main CLI application using Typer.
"""

from itertools import islice
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import RangeConfig, configure, get_default_config_path
from ..domain.exceptions import DateRangeError
from ..domain.factory import date_range, unit_range
from ..domain.models import DateRange
from ..domain.operations import merge_ranges

app = typer.Typer(
    name="daterange",
    help="Inspect and combine date ranges written as 'start/end'",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./daterange.yaml if present")
]
TimezoneOption = Annotated[
    Optional[str],
    typer.Option("--tz", help="Timezone for inputs without an offset")
]


def _apply_config(config_file: Optional[Path], tz: Optional[str]) -> RangeConfig:
    """
    Load the configuration, apply the --tz override and make it active.
    """
    if config_file is not None:
        config = RangeConfig.load_from_yaml(config_file)
    else:
        default_path = get_default_config_path()
        config = RangeConfig.load_from_yaml(default_path) if default_path.exists() else RangeConfig()

    if tz:
        config = RangeConfig(**{**config.model_dump(), "timezone": tz})

    configure(config)
    return config


def _print_ranges(ranges: List[DateRange], config: RangeConfig, empty_message: str) -> None:
    if not ranges:
        console.print(f"[yellow]{empty_message}[/yellow]")
        return

    for rng in ranges:
        duration = rng.diff("minutes")
        console.print(
            f"  {rng.start.format(config.display_format)} - {rng.end.format(config.display_format)}"
            f" [dim]({duration} Min.)[/dim]"
        )


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    raise typer.Exit(1)


@app.command()
def show(
    range_text: Annotated[str, typer.Argument(metavar="RANGE", help="Range as 'start/end'")],
    config_file: ConfigOption = None,
    tz: TimezoneOption = None,
):
    """
    Show the endpoints, length and center of a range.
    """
    try:
        config = _apply_config(config_file, tz)
        rng = date_range(range_text, tz=config.timezone)

        table = Table(
            title=str(rng),
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Property", style="bold yellow")
        table.add_column("Value")

        table.add_row("Start", rng.start.format(config.display_format))
        table.add_row("End", rng.end.format(config.display_format))
        table.add_row("Center", rng.center().format(config.display_format))
        table.add_row("Days", str(rng.diff("days")))
        table.add_row("Hours", str(rng.diff("hours")))
        table.add_row("Milliseconds", str(rng.duration()))

        console.print()
        console.print(table)
        console.print()

    except (DateRangeError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def intersect(
    first: Annotated[str, typer.Argument(help="First range as 'start/end'")],
    second: Annotated[str, typer.Argument(help="Second range as 'start/end'")],
    config_file: ConfigOption = None,
    tz: TimezoneOption = None,
):
    """
    Print the overlap of two ranges.
    """
    try:
        config = _apply_config(config_file, tz)
        result = date_range(first, tz=config.timezone).intersect(date_range(second, tz=config.timezone))
        _print_ranges([result] if result is not None else [], config, "No overlap.")

    except (DateRangeError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def subtract(
    first: Annotated[str, typer.Argument(help="Range to subtract from as 'start/end'")],
    second: Annotated[str, typer.Argument(help="Range to remove as 'start/end'")],
    config_file: ConfigOption = None,
    tz: TimezoneOption = None,
):
    """
    Print what is left of the first range once the second is removed.
    """
    try:
        config = _apply_config(config_file, tz)
        pieces = date_range(first, tz=config.timezone).subtract(date_range(second, tz=config.timezone))
        _print_ranges(pieces, config, "Nothing remains.")

    except (DateRangeError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command("add")
def add_ranges(
    first: Annotated[str, typer.Argument(help="First range as 'start/end'")],
    second: Annotated[str, typer.Argument(help="Second range as 'start/end'")],
    config_file: ConfigOption = None,
    tz: TimezoneOption = None,
):
    """
    Print the union of two ranges if they overlap.
    """
    try:
        config = _apply_config(config_file, tz)
        result = date_range(first, tz=config.timezone).add(date_range(second, tz=config.timezone))
        _print_ranges([result] if result is not None else [], config, "Ranges do not overlap.")

    except (DateRangeError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def merge(
    ranges: Annotated[List[str], typer.Argument(metavar="RANGE...", help="Ranges as 'start/end'")],
    config_file: ConfigOption = None,
    tz: TimezoneOption = None,
):
    """
    Merge all overlapping or touching ranges.
    """
    try:
        config = _apply_config(config_file, tz)
        merged = merge_ranges(date_range(text, tz=config.timezone) for text in ranges)
        console.print(f"[bold green]✓ {len(merged)} range(s) after merging:[/bold green]")
        _print_ranges(merged, config, "No ranges given.")

    except (DateRangeError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def iterate(
    range_text: Annotated[str, typer.Argument(metavar="RANGE", help="Range as 'start/end'")],
    by: Annotated[Optional[str], typer.Option("--by", help="Unit to step by, e.g. day or week")] = None,
    every: Annotated[Optional[str], typer.Option("--every", help="Range whose length is the step, as 'start/end'")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", min=1, help="Stop after this many instants")] = None,
    config_file: ConfigOption = None,
    tz: TimezoneOption = None,
):
    """
    List the instants of a range, stepping by a unit or by another range's length.

    Examples:

        daterange iterate 2024-01-01/2024-01-10 --by day

        daterange iterate 2024-01-01/2024-01-02 --every 2024-01-01T00:00/2024-01-01T06:00
    """
    if (by is None) == (every is None):
        console.print("[red]Error: exactly one of --by and --every is required.[/red]")
        raise typer.Exit(1)

    try:
        config = _apply_config(config_file, tz)
        rng = date_range(range_text, tz=config.timezone)
        step = by if by is not None else date_range(every, tz=config.timezone)

        for instant in islice(rng.by(step), limit):
            console.print(f"  {instant.format(config.display_format)}")

    except (DateRangeError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def unit(
    unit_name: Annotated[str, typer.Argument(metavar="UNIT", help="year, month, week, day, hour, minute or second")],
    at: Annotated[Optional[str], typer.Option("--at", help="Reference instant. Defaults to now")] = None,
    config_file: ConfigOption = None,
    tz: TimezoneOption = None,
):
    """
    Print the range covering the calendar unit around an instant.
    """
    try:
        config = _apply_config(config_file, tz)
        rng = unit_range(at, unit_name, tz=config.timezone)
        _print_ranges([rng], config, "")

    except (DateRangeError, FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]daterange[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
