"""Recorded-session replay.

A recording is a JSON Lines file, one host event per line::

    {"event": "task-start", "args": [[{"main": {"name": "build"}}]]}
    {"event": "task-end", "args": [[{"script": {"name": "build"}, "exitCode": 0}]]}

``replay_session`` feeds the records through a hub between an implicit
``attach`` and ``detach``.  Recorded attach/detach lines are skipped.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from taskecho.core.event_hub import EventHub
from taskecho.models.events import HostEvent

logger = logging.getLogger(__name__)

_LIFECYCLE_EVENTS = {HostEvent.ATTACH, HostEvent.DETACH}


class ReplayError(ValueError):
    """Raised when a recording line cannot be turned into a host event."""


class RecordedEvent(BaseModel):
    """One line of a session recording."""

    model_config = ConfigDict(frozen=True)

    event: HostEvent
    args: list[Any] = []


def parse_records(lines: Iterable[str]) -> Iterator[RecordedEvent]:
    """Parse JSON Lines into ``RecordedEvent`` records, skipping blanks."""
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue

        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ReplayError(f"Line {lineno}: invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ReplayError(
                f"Line {lineno}: record must be a JSON object, got {type(data).__name__}"
            )

        try:
            yield RecordedEvent.model_validate(data)
        except ValidationError as exc:
            raise ReplayError(f"Line {lineno}: invalid record: {exc}") from exc


def load_records(path: Path | str) -> list[RecordedEvent]:
    """Read and parse a recording file.

    Raises
    ------
    ReplayError
        If the file cannot be read, is not UTF-8, or holds a bad record.
    """
    try:
        with Path(path).open(encoding="utf-8") as handle:
            return list(parse_records(handle))
    except UnicodeDecodeError as exc:
        raise ReplayError(f"{path}: not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ReplayError(f"{path}: cannot read recording: {exc}") from exc


def replay_session(records: Iterable[RecordedEvent], hub: EventHub) -> None:
    """Emit *records* through *hub*, wrapped in attach and detach.

    Anything subscribed to the hub's ``attach`` and ``detach`` events
    (typically a ``LifecycleCorrelator``) sees one complete session.
    """
    hub.emit(HostEvent.ATTACH)
    replayed = 0
    for record in records:
        if record.event in _LIFECYCLE_EVENTS:
            logger.debug("Skipping recorded %s event", record.event.value)
            continue
        hub.emit(record.event, *record.args)
        replayed += 1
    hub.emit(HostEvent.DETACH)
    logger.info("Replayed %d recorded events", replayed)
