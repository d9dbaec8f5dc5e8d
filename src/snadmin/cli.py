"""CLI entry point for snadmin."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, DownloadColumn, Progress, TextColumn, TransferSpeedColumn
from rich.table import Table

from snadmin.api.client import EpisodeClient
from snadmin.audio.downloader import DownloadProgress, MediaDownloader
from snadmin.config.logging import setup_logging
from snadmin.config.settings import AdminSettings, load_settings
from snadmin.episodes.coercion import FIELD_INPUT_HINTS, FIELD_KINDS, coerce_field_value
from snadmin.episodes.models import DATABASE_FIELDS, SortKey, format_listing_line, sort_episodes
from snadmin.utils.errors import SnadminError

logger = logging.getLogger(__name__)

# Commands that never talk to the API
OFFLINE_COMMANDS = {"version", "fields"}

app = typer.Typer(
    name="snadmin",
    help="Administer episodes of a Snapcast-hosted podcast feed",
    no_args_is_help=True,
)
console = Console()


def _print_error(e: SnadminError) -> None:
    console.print(f"[red]✗[/red] {escape(str(e))}")
    if e.suggestion:
        console.print(f"[dim]  {escape(e.suggestion)}[/dim]")


def _settings(ctx: typer.Context) -> AdminSettings:
    return ctx.obj


def _terminal_width() -> int | None:
    """Console width, or None when output is not a terminal."""
    return console.width if console.is_terminal else None


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """snadmin - list, inspect, update and download podcast episodes.

    Reads SNADMIN_FEED_ID, SNADMIN_TOKEN and SNADMIN_BASE_URL from the environment.
    """
    setup_logging(verbose=verbose, log_file=log_file)

    if ctx.invoked_subcommand in OFFLINE_COMMANDS:
        return
    try:
        ctx.obj = load_settings()
    except SnadminError as e:
        _print_error(e)
        sys.exit(1)
    logger.debug(f"Using feed {ctx.obj.feed_id} at {ctx.obj.base_url}")


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from snadmin import __version__

    console.print(f"[bold cyan]snadmin[/bold cyan] v{__version__}")


@app.command("fields")
def list_fields() -> None:
    """List the episode fields that can be updated."""
    table = Table(title="[bold]Updatable Fields[/bold]")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Type", style="yellow")
    table.add_column("Input format", style="dim")

    for field in DATABASE_FIELDS:
        kind = FIELD_KINDS[field]
        table.add_row(field, kind.value, escape(FIELD_INPUT_HINTS[kind]))

    console.print(table)


@app.command("list")
def list_episodes(
    ctx: typer.Context,
    sort: Annotated[
        SortKey,
        typer.Option("--sort", "-s", help="Sort results by field"),
    ] = SortKey.PUB_DATE,
    find: Annotated[
        str | None,
        typer.Option("--find", "-f", metavar="TEXT", help="Filter results containing TEXT (not implemented yet)"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Print a list of all episodes.

    Examples:
        snadmin list

        snadmin list --sort id
    """
    if find is not None:
        logger.warning(f"--find is not implemented yet; ignoring '{find}' and listing all episodes")

    try:
        with EpisodeClient(_settings(ctx)) as client:
            episodes = sort_episodes(client.list_episodes(), sort)
    except SnadminError as e:
        _print_error(e)
        sys.exit(1)

    if json_output:
        print(json.dumps([ep.model_dump(mode="json") for ep in episodes], indent=2))
        return

    width = _terminal_width()
    for episode in episodes:
        console.print(
            format_listing_line(episode, width),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


@app.command("info")
def episode_info(
    ctx: typer.Context,
    episode_id: Annotated[str, typer.Argument(help="Episode id")],
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Fetch information about an episode."""
    try:
        with EpisodeClient(_settings(ctx)) as client:
            episode = client.get_episode(episode_id)
    except SnadminError as e:
        _print_error(e)
        sys.exit(1)

    if json_output:
        print(episode.model_dump_json(indent=2))
        return

    table = Table(title=f"[bold]Episode {episode.id}[/bold]", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    for name, value in episode.model_dump(mode="json").items():
        table.add_row(name, escape("—" if value is None else str(value)))
    console.print(table)


@app.command("update")
def update_episode(
    ctx: typer.Context,
    episode_id: Annotated[str, typer.Argument(help="Episode id as a number")],
    field: Annotated[str, typer.Argument(help="The database field to update")],
    value: Annotated[str, typer.Argument(help="The new value to set the field to")],
) -> None:
    """Update a field of an episode.

    Examples:
        snadmin update 12 title "New title"

        snadmin update 12 media_duration 1:02:03

        snadmin update 12 pub_date "2024-03-01 14:30"
    """
    try:
        new_value = coerce_field_value(field, value)
        with EpisodeClient(_settings(ctx)) as client:
            episode = client.get_episode(episode_id)
            client.update_episode(episode.uuid, field, new_value)
    except SnadminError as e:
        _print_error(e)
        sys.exit(1)

    console.print(
        f"[green]✓[/green] Episode {episode.id}: "
        f"[bold]{field}[/bold] set to {escape(repr(new_value))}"
    )


@app.command("download")
def download_episode(
    ctx: typer.Context,
    episode_id: Annotated[str, typer.Argument(help="Episode id")],
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory to save into (default: current directory)"),
    ] = None,
) -> None:
    """Download an episode's media file."""
    settings = _settings(ctx)
    try:
        with EpisodeClient(settings) as client:
            episode = client.get_episode(episode_id)

        if console.is_terminal:
            with Progress(
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                console=console,
            ) as progress:
                task = progress.add_task(f"Downloading {episode.id}", total=None)

                def on_progress(update: DownloadProgress) -> None:
                    progress.update(
                        task, completed=update.downloaded_bytes, total=update.total_bytes
                    )

                path = MediaDownloader(
                    output_dir,
                    on_progress,
                    settings.timeout,
                    token=settings.token,
                    api_base_url=settings.base_url,
                ).download(episode)
        else:
            path = MediaDownloader(
                output_dir,
                timeout=settings.timeout,
                token=settings.token,
                api_base_url=settings.base_url,
            ).download(episode)
    except SnadminError as e:
        _print_error(e)
        sys.exit(1)

    console.print(f"[green]✓[/green] Saved {escape(str(path))}")
