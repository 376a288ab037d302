"""``taskecho demo`` — drive a synthetic session through the reporter.

Emits the events a host would emit for one two-script task followed by
a file change, pausing between events so the elapsed stamps move.
"""

from __future__ import annotations

import time
from typing import Any

import typer

from taskecho.config import ReporterConfig
from taskecho.core.correlator import LifecycleCorrelator
from taskecho.core.event_hub import EventHub
from taskecho.models.events import HostEvent


def demo_events(fail: bool = False) -> list[tuple[HostEvent, tuple[Any, ...]]]:
    """The scripted host events of the demo session."""
    lint = {"script": {"name": "lint"}, "exitCode": 0}
    test = {"script": {"name": "test", "meta": {"suffix": ["--coverage"]}}, "exitCode": 1 if fail else 0}
    return [
        (HostEvent.LOG, ("demo", "session")),
        (HostEvent.TASK_START, ([{"main": {"name": "lint"}}, {"main": {"name": "test"}}],)),
        (HostEvent.SCRIPT_START, (lint,)),
        (HostEvent.SCRIPT_END, (lint,)),
        (HostEvent.SCRIPT_START, (test,)),
        (HostEvent.SCRIPT_END, (test,)),
        (HostEvent.TASK_END, ([lint, test],)),
        (HostEvent.WATCH, ("src/app.py", "changed")),
    ]


def demo_cmd(
    fail: bool = typer.Option(
        False,
        "--fail",
        help="Make the second script exit non-zero.",
    ),
    delay: float = typer.Option(
        0.2,
        "--delay",
        help="Delay in seconds between events.",
    ),
) -> None:
    """Run a synthetic two-script session through the reporter."""
    hub = EventHub(plugins={"log": None, "watch": None})
    reporter = LifecycleCorrelator(hub, settings=ReporterConfig())

    hub.emit(HostEvent.ATTACH)
    for event, args in demo_events(fail):
        time.sleep(delay)
        hub.emit(event, *args)
    hub.emit(HostEvent.DETACH)

    if not reporter.session.succeeded:
        raise typer.Exit(code=1)
