"""Main Typer application — imports and registers all CLI commands.

Entry point: ``taskecho`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from taskecho.cli.commands.demo import demo_cmd
from taskecho.cli.commands.replay import replay_cmd
from taskecho.config import config

app = typer.Typer(
    name="taskecho",
    help="Taskecho: timestamped console reporter for task-runner lifecycle events.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="replay", help="Replay a recorded host session.")(replay_cmd)
app.command(name="demo", help="Run a synthetic session through the reporter.")(demo_cmd)


@app.callback()
def configure(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Diagnostic log level (defaults to TASKECHO_LOG_LEVEL).",
    ),
) -> None:
    """Send diagnostics to stderr through Rich."""
    level = (log_level or config.log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
