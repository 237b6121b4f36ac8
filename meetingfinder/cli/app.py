"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.http_event_source import HttpEventSource
from ..adapters.json_event_source import JsonEventSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import MeetingFinderError
from ..services.meeting_finder import EventSourceProtocol, MeetingFinderService

app = typer.Typer(
    name="meetingfinder",
    help="Find meeting windows in a day's calendar",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
CalendarOption = Annotated[
    Optional[Path],
    typer.Option("--calendar", help="Calendar JSON file (overrides config)"),
]
UrlOption = Annotated[
    Optional[str],
    typer.Option("--url", help="Calendar endpoint URL (overrides config)"),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration, falling back to defaults when no file exists
    at the default location. An explicitly given file must exist.
    """
    config_path = config_file or get_default_config_path()

    if config_file is None and not config_path.exists():
        return AppConfig()

    try:
        return AppConfig.load_from_yaml(config_path)
    except ValidationError as exc:
        console.print(f"[bold red]Invalid configuration:[/bold red] {exc}")
        raise typer.Exit(1)


def _build_event_source(
    config: AppConfig,
    calendar: Optional[Path],
    url: Optional[str],
) -> EventSourceProtocol:
    """Pick the event source: CLI options first, then the config file."""
    if calendar is not None:
        return JsonEventSource(calendar)
    if url is not None:
        return HttpEventSource(url, timeout=config.request_timeout)
    if config.calendar_file is not None:
        return JsonEventSource(config.calendar_file)
    if config.calendar_url is not None:
        return HttpEventSource(config.calendar_url, timeout=config.request_timeout)

    console.print(
        "[bold red]Error:[/bold red] No calendar configured. "
        "Use --calendar, --url or set calendar_file in config.yaml."
    )
    raise typer.Exit(1)


@app.command()
def find(
    attendees: Annotated[Optional[List[str]], typer.Argument(help="Mandatory attendees (aliases or emails)")] = None,
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optional attendee, repeatable")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    config_file: ConfigOption = None,
    calendar: CalendarOption = None,
    url: UrlOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
):
    """
    Find the windows of the day that fit a meeting.

    Examples:

        meetingfinder find alice bob --duration 60

        meetingfinder find alice -o carol --calendar calendar.json
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        source = _build_event_source(config, calendar, url)

        mandatory = config.resolve_attendees(attendees or [])
        optional_attendees = config.resolve_attendees(optional or [])
        minutes = duration if duration is not None else config.defaults.duration_minutes

        console.print("[bold cyan]Summary:[/bold cyan]")
        console.print(f"   Attendees: {', '.join(mandatory) or '-'}")
        console.print(f"   Optional: {', '.join(optional_attendees) or '-'}")
        console.print(f"   Duration: {minutes} minutes")
        console.print()

        service = MeetingFinderService(event_source=source)
        ranges = service.find_meeting_times(
            duration=minutes,
            attendees=mandatory,
            optional_attendees=optional_attendees,
        )

        if not ranges:
            console.print(
                "[yellow]⚠ No available windows found.[/yellow]\n"
                "Try a shorter duration or fewer attendees."
            )
            return

        table = Table(
            title=f"{len(ranges)} available window(s)",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Window", style="bold green")
        table.add_column("Length", style="dim")

        for time_range in ranges:
            table.add_row(
                time_range.format_clock(),
                pendulum.duration(minutes=time_range.duration).in_words(),
            )

        console.print(table)

    except (FileNotFoundError, MeetingFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def events(
    attendee: Annotated[Optional[str], typer.Option("--attendee", "-a", help="Only show events of this attendee")] = None,
    config_file: ConfigOption = None,
    calendar: CalendarOption = None,
    url: UrlOption = None,
):
    """
    List the events of the calendar.
    """
    try:
        config = _load_config(config_file)
        service = MeetingFinderService(event_source=_build_event_source(config, calendar, url))
        if attendee is not None:
            day_events = service.events_for(config.resolve_attendee(attendee))
        else:
            day_events = service.fetch_events()

        if not day_events:
            console.print("[yellow]No events found.[/yellow]")
            return

        table = Table(title="Events", show_header=True, header_style="bold cyan")
        table.add_column("Time", style="bold yellow")
        table.add_column("Name")
        table.add_column("Attendees", style="dim")

        for event in day_events:
            table.add_row(
                event.when.format_clock(),
                event.name,
                ", ".join(sorted(event.attendees)),
            )

        console.print(table)

    except (FileNotFoundError, MeetingFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_colleagues(config_file: ConfigOption = None):
    """
    List all configured colleagues.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, MeetingFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not config.colleagues:
        console.print("[yellow]No colleagues defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured colleagues",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name (Alias)", style="bold yellow")
    table.add_column("Email", style="dim")

    for colleague in config.colleagues:
        table.add_row(colleague.name, colleague.email)

    console.print(table)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"[bold cyan]meetingfinder[/bold cyan] version [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
