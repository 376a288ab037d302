"""EventHub — synchronous in-process host event table.

The reporter only needs a narrow slice of its host: a way to register
and deregister handlers by event name, plus two attributes it reads at
attach time.  ``ReporterHost`` captures that slice; ``EventHub`` is a
concrete implementation used by the CLI, replays and tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


@runtime_checkable
class ReporterHost(Protocol):
    """What a host engine must offer for a reporter to attach to it.

    Attributes
    ----------
    descriptor_path : Path | None
        The resolved configuration descriptor, or ``None`` when the host
        could not find one.
    plugins : Mapping[str, Any]
        Active collaborators keyed by id; each may expose a ``name``.
    """

    descriptor_path: Path | None
    plugins: Mapping[str, Any]

    def on(self, event: str, handler: Handler) -> None:
        """Register *handler* for *event*.  Must ignore duplicates."""
        ...

    def off(self, event: str, handler: Handler) -> None:
        """Deregister *handler* from *event*.  Must be idempotent."""
        ...


class EventHub:
    """Routes named events to handlers in registration order.

    Registering the same handler twice for one event is ignored, and
    removing a handler that is not registered is a no-op, so callers can
    (de)register unconditionally.

    Parameters
    ----------
    descriptor_path:
        Path of the configuration descriptor the host resolved, if any.
    plugins:
        Active collaborators keyed by id.
    """

    def __init__(
        self,
        descriptor_path: Path | str | None = None,
        plugins: Mapping[str, Any] | None = None,
    ) -> None:
        self.descriptor_path = Path(descriptor_path) if descriptor_path else None
        self.plugins: Mapping[str, Any] = dict(plugins or {})
        self._handlers: dict[str, list[Handler]] = {}

    # ------------------------------------------------------------------
    # Handler management
    # ------------------------------------------------------------------

    def on(self, event: str, handler: Handler) -> None:
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug("Registered handler for %s: %r", event, handler)

    def off(self, event: str, handler: Handler) -> None:
        try:
            self._handlers.get(event, []).remove(handler)
            logger.debug("Removed handler for %s: %r", event, handler)
        except ValueError:
            pass

    def listeners(self, event: str) -> list[Handler]:
        """Return a copy of the handlers registered for *event*."""
        return list(self._handlers.get(event, []))

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def emit(self, event: str, *args: Any) -> int:
        """Call every handler of *event* with *args*.

        Handlers run over a snapshot of the registration list, so a
        handler added or removed during dispatch takes effect from the
        next ``emit``.  Handler exceptions propagate.

        Returns the number of handlers called.
        """
        handlers = self.listeners(event)
        if not handlers:
            logger.debug("No handlers for %s", event)
        for handler in handlers:
            handler(*args)
        return len(handlers)
