"""LifecycleCorrelator — turns host lifecycle events into reporter lines.

Attaches to a ``ReporterHost`` and reacts synchronously to its events:

- ``attach``       : startup notices, then subscribe to the events below
- ``log``          : the message parts, verbatim
- ``script-error`` : the error's string form, as a fatal line
- ``task-start``   : task names; subscribes to script events when the
                     task holds more than one script
- ``script-start`` / ``script-end`` : per-script lines (multi-script tasks)
- ``task-end``     : per-script statuses, aggregate exit status, and
                     unsubscription of the script events
- ``watch``        : file change notices
- ``detach``       : closing banner, then unsubscribe everything

The reporter never decides whether anything succeeded.  It only relays
exit codes the host already reported.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from taskecho.config import ReporterConfig
from taskecho.core.elapsed import ElapsedTimeTracker
from taskecho.core.emitter import LineEmitter
from taskecho.core.event_hub import Handler, ReporterHost
from taskecho.core.styles import bold, emphasize, is_failure, statuses, underline
from taskecho.models.events import (
    FINE_GRAINED_EVENTS,
    HostEvent,
    ScriptResult,
    TaskDescriptor,
    coerce_payload,
    flatten_deep,
)
from taskecho.models.session import VALID_TRANSITIONS, ReporterState, Session

logger = logging.getLogger(__name__)

CHEER_MESSAGE = "cheers for good work."
APOLOGY_MESSAGE = "i'm terribly sorry..."


class InvalidTransitionError(RuntimeError):
    """Raised when the reporter is attached or detached out of order."""


def aggregate_exit_status(codes: Iterable[Any]) -> int:
    """Fold exit codes into 1 if any is a failure, else 0 (0 when empty)."""
    return 1 if any(is_failure(code) for code in codes) else 0


def _plugin_name(key: str, plugin: Any) -> str:
    """A plugin's ``name`` (attribute or mapping key), else its id."""
    if isinstance(plugin, Mapping):
        name = plugin.get("name")
    else:
        name = getattr(plugin, "name", None)
    return str(name) if name else str(key)


class LifecycleCorrelator:
    """Reporter attached to a host engine for one session.

    Constructing the reporter subscribes it to the host's ``attach`` and
    ``detach`` events; everything else is subscribed on attach.

    Parameters
    ----------
    host:
        The host engine (anything satisfying ``ReporterHost``).
    settings:
        Reporter configuration.  A fresh ``ReporterConfig`` is read from
        the environment if not provided.
    console:
        Output sink.  Defaults to a stdout console honoring ``no_color``.
    clock:
        Time source in seconds for the elapsed stamps.
    cwd:
        Directory the descriptor path is reported relative to.
    """

    def __init__(
        self,
        host: ReporterHost,
        *,
        settings: ReporterConfig | None = None,
        console: Console | None = None,
        clock: Callable[[], float] | None = None,
        cwd: Path | str | None = None,
    ) -> None:
        self.host = host
        self.settings = settings or ReporterConfig()
        self.session = Session(elapsed=ElapsedTimeTracker(clock))
        self._cwd = Path(cwd) if cwd is not None else None
        if console is None:
            console = Console(highlight=False, emoji=False, no_color=self.settings.no_color)
        self.emitter = LineEmitter(
            self.session.elapsed,
            console,
            icon=self.settings.icon,
            fatal_icon=self.settings.fatal_icon,
        )

        host.on(HostEvent.ATTACH, self.attach)
        host.on(HostEvent.DETACH, self.detach)

    # ------------------------------------------------------------------
    # Handler tables
    # ------------------------------------------------------------------

    def _session_handlers(self) -> list[tuple[HostEvent, Handler]]:
        return [
            (HostEvent.LOG, self.on_log),
            (HostEvent.SCRIPT_ERROR, self.on_script_error),
            (HostEvent.TASK_START, self.on_task_start),
            (HostEvent.TASK_END, self.on_task_end),
            (HostEvent.WATCH, self.on_watch),
        ]

    def _fine_grained_handlers(self) -> list[tuple[HostEvent, Handler]]:
        handlers = {
            HostEvent.SCRIPT_START: self.on_script_start,
            HostEvent.SCRIPT_END: self.on_script_end,
        }
        return [(event, handlers[event]) for event in FINE_GRAINED_EVENTS]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> ReporterState:
        return self.session.state

    def _transition(self, target: ReporterState) -> None:
        current = self.session.state
        if target not in VALID_TRANSITIONS.get(current, set()):
            raise InvalidTransitionError(
                f"Cannot move reporter from {current.value} to {target.value}"
            )
        self.session.state = target

    def attach(self) -> None:
        """Start the session: notices first, then subscriptions."""
        self._transition(ReporterState.ATTACHED)
        self.session.elapsed.reset()

        if self.settings.notify_cwd:
            self._notify_descriptor()
        if self.settings.notify_plugins:
            self._notify_plugins()

        for event, handler in self._session_handlers():
            self.host.on(event, handler)
        logger.debug("Reporter attached to %r", self.host)

    def detach(self) -> None:
        """End the session with a closing banner and drop every subscription.

        Only an aggregate of exactly 0 recorded by a task-end counts as
        success; a session in which no task ended gets the apology.
        """
        self._transition(ReporterState.CLOSED)

        if self.session.succeeded:
            self.emitter.emit(CHEER_MESSAGE)
        else:
            self.emitter.emit_fatal(APOLOGY_MESSAGE)

        self._detach_fine_grained()
        for event, handler in self._session_handlers():
            self.host.off(event, handler)
        self.host.off(HostEvent.ATTACH, self.attach)
        self.host.off(HostEvent.DETACH, self.detach)
        logger.debug(
            "Reporter detached, aggregate exit status %s",
            self.session.aggregate_exit_status,
        )

    def _notify_descriptor(self) -> None:
        path = getattr(self.host, "descriptor_path", None)
        if not path:
            self.emitter.emit(f"missing {escape(self.settings.descriptor_name)}.")
            return
        cwd = self._cwd if self._cwd is not None else Path.cwd()
        relative = os.path.relpath(Path(path), cwd)
        self.emitter.emit(f"use {emphasize(relative)}.")

    def _notify_plugins(self) -> None:
        plugins = getattr(self.host, "plugins", None) or {}
        names = [_plugin_name(key, plugin) for key, plugin in plugins.items()]
        if not names:
            return
        self.emitter.emit(f"plugin enabled {emphasize(names)}.")

    # ------------------------------------------------------------------
    # Fine-grained (script-level) subscriptions
    # ------------------------------------------------------------------

    def _attach_fine_grained(self) -> None:
        if self.session.fine_grained_attached:
            return
        for event, handler in self._fine_grained_handlers():
            self.host.on(event, handler)
        self.session.fine_grained_attached = True

    def _detach_fine_grained(self) -> None:
        for event, handler in self._fine_grained_handlers():
            self.host.off(event, handler)
        self.session.fine_grained_attached = False

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_log(self, *parts: Any) -> None:
        self.emitter.emit(*(escape(str(part)) for part in parts))

    def on_script_error(self, error: Any = None, *_: Any) -> None:
        self.emitter.emit_fatal(escape(str(error)))

    def on_task_start(self, task: Any = None, *_: Any) -> None:
        descriptors = [coerce_payload(TaskDescriptor, item) for item in flatten_deep(task)]
        names = [descriptor.display_name for descriptor in descriptors]
        self.emitter.emit(f"task start {underline(names)}.")

        if len(names) > 1:
            self._attach_fine_grained()

    def on_script_start(self, payload: Any = None, *_: Any) -> None:
        result = coerce_payload(ScriptResult, payload)
        message = f"script start {underline(result.script.name)}"
        if result.script.suffix:
            message += " " + " ".join(escape(part) for part in result.script.suffix)
        self.emitter.emit(f"{message}.")

    def on_script_end(self, payload: Any = None, *_: Any) -> None:
        result = coerce_payload(ScriptResult, payload)
        name = statuses(result.script.display_name, result.exit_code)
        code = statuses(result.exit_code)
        self.emitter.emit(f"script end {name}. exit code {code}.")

    def on_task_end(self, result: Any = None, *_: Any) -> None:
        scripts = [coerce_payload(ScriptResult, item) for item in flatten_deep(result)]
        names = [script.script.display_name for script in scripts]
        codes = [script.exit_code for script in scripts]

        self.session.aggregate_exit_status = aggregate_exit_status(codes)
        self.emitter.emit(f"task end {statuses(names, codes)}. exit code {statuses(codes)}.")

        self._detach_fine_grained()

    def on_watch(self, path: Any = None, event: Any = None, *_: Any) -> None:
        self.emitter.emit(f"file {bold(path)} {escape(str(event))}.")
