"""Tests for EventHub — registration, idempotent removal, dispatch order."""

from __future__ import annotations

from pathlib import Path

import pytest

from taskecho.core.event_hub import EventHub, ReporterHost
from taskecho.models.events import HostEvent


class TestRegistration:
    def test_duplicate_registration_ignored(self):
        hub = EventHub()
        calls: list[str] = []

        def handler() -> None:
            calls.append("x")

        hub.on("log", handler)
        hub.on("log", handler)
        hub.emit("log")

        assert hub.listener_count("log") == 1
        assert calls == ["x"]

    def test_off_is_idempotent(self):
        hub = EventHub()
        handler = lambda: None  # noqa: E731
        hub.off("log", handler)
        hub.on("log", handler)
        hub.off("log", handler)
        hub.off("log", handler)
        assert hub.listener_count("log") == 0

    def test_bound_methods_compare_equal(self):
        class Listener:
            def handle(self) -> None:
                pass

        hub = EventHub()
        listener = Listener()
        hub.on("log", listener.handle)
        hub.on("log", listener.handle)
        assert hub.listener_count("log") == 1
        hub.off("log", listener.handle)
        assert hub.listener_count("log") == 0

    def test_enum_and_string_names_are_interchangeable(self):
        hub = EventHub()
        handler = lambda: None  # noqa: E731
        hub.on(HostEvent.TASK_START, handler)
        assert hub.listeners("task-start") == [handler]


class TestDispatch:
    def test_handlers_fire_in_registration_order(self):
        hub = EventHub()
        order: list[int] = []
        hub.on("log", lambda msg: order.append(1))
        hub.on("log", lambda msg: order.append(2))
        assert hub.emit("log", "hi") == 2
        assert order == [1, 2]

    def test_args_passed_through(self):
        hub = EventHub()
        received: list[tuple] = []
        hub.on("watch", lambda *args: received.append(args))
        hub.emit("watch", "/tmp/x", "changed")
        assert received == [("/tmp/x", "changed")]

    def test_handler_added_during_dispatch_fires_next_time(self):
        hub = EventHub()
        late: list[str] = []

        def late_handler() -> None:
            late.append("late")

        hub.on("tick", lambda: hub.on("tick", late_handler))
        hub.emit("tick")
        assert late == []
        hub.emit("tick")
        assert late == ["late"]

    def test_emit_without_handlers(self):
        assert EventHub().emit("nothing") == 0

    def test_handler_exceptions_propagate(self):
        hub = EventHub()

        def boom() -> None:
            raise RuntimeError("boom")

        hub.on("log", boom)
        with pytest.raises(RuntimeError, match="boom"):
            hub.emit("log")


class TestHostAttributes:
    def test_satisfies_reporter_host(self):
        assert isinstance(EventHub(), ReporterHost)

    def test_descriptor_path_normalized(self, tmp_path: Path):
        assert EventHub(descriptor_path=str(tmp_path)).descriptor_path == tmp_path
        assert EventHub().descriptor_path is None

    def test_plugins_default_empty(self):
        assert dict(EventHub().plugins) == {}
