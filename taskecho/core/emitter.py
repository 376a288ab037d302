"""LineEmitter — writes one stamped, iconified line per call.

Plain-text shape of every line::

    + <7-char elapsed> <icon> <message>\\n
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

from taskecho.core.elapsed import ElapsedTimeTracker

ELAPSED_STYLE = "bright_black"
ICON_STYLE = "magenta"
FATAL_ICON_STYLE = "reverse magenta"


class LineEmitter:
    """Renders reporter lines onto a Rich console.

    Parameters
    ----------
    tracker:
        Stopwatch read (and reset) once per emitted line.
    console:
        Output sink.  A new stdout console is created if not provided.
    icon, fatal_icon:
        Glyphs for informational and fatal lines.
    """

    def __init__(
        self,
        tracker: ElapsedTimeTracker,
        console: Console | None = None,
        *,
        icon: str = "@_@",
        fatal_icon: str = "@_@;",
    ) -> None:
        self.tracker = tracker
        self.console = console or Console(highlight=False, emoji=False)
        self._icon = f"[{ICON_STYLE}]{escape(icon)}[/{ICON_STYLE}]"
        self._fatal_icon = f"[{FATAL_ICON_STYLE}]{escape(fatal_icon)}[/{FATAL_ICON_STYLE}]"

    def emit(self, *parts: Any) -> None:
        """Write an informational line.  *parts* are Rich markup."""
        self._write(self._icon, parts)

    def emit_fatal(self, *parts: Any) -> None:
        """Write a fatal line.  *parts* are Rich markup."""
        self._write(self._fatal_icon, parts)

    def _write(self, icon: str, parts: tuple[Any, ...]) -> None:
        elapsed = self.tracker.read()
        message = " ".join(str(part) for part in parts)
        self.console.print(
            f"[{ELAPSED_STYLE}]+ {elapsed}[/{ELAPSED_STYLE}] {icon} {message}",
            soft_wrap=True,
            highlight=False,
            emoji=False,
        )
