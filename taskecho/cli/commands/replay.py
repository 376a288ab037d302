"""``taskecho replay FILE`` — render a recorded host session.

Reads a JSON Lines recording of host events and feeds it through a
reporter exactly as a live host would.  The exit code mirrors the
session's aggregate exit status.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from taskecho.config import ReporterConfig
from taskecho.core.correlator import LifecycleCorrelator
from taskecho.core.event_hub import EventHub
from taskecho.core.replay import ReplayError, load_records, replay_session

console = Console()


def replay_cmd(
    recording: Path = typer.Argument(
        ...,
        help="JSON Lines recording of host events.",
    ),
    descriptor: Path = typer.Option(
        None,
        "--descriptor",
        "-d",
        help="Configuration descriptor the host resolved (omit for 'missing').",
    ),
    quiet_notices: bool = typer.Option(
        False,
        "--quiet-notices",
        "-q",
        help="Suppress the startup notices.",
    ),
) -> None:
    """Replay a recorded session through the reporter."""
    if not recording.exists():
        console.print(f"[bold red]Recording not found:[/bold red] {recording}")
        raise typer.Exit(code=2)

    try:
        records = load_records(recording)
    except ReplayError as exc:
        console.print(f"[bold red]Bad recording:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    settings = ReporterConfig()
    if quiet_notices:
        settings = settings.model_copy(update={"notify_cwd": False, "notify_plugins": False})

    hub = EventHub(descriptor_path=descriptor)
    reporter = LifecycleCorrelator(hub, settings=settings)
    replay_session(records, hub)

    if not reporter.session.succeeded:
        raise typer.Exit(code=1)
