"""Shared test fixtures for Taskecho."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from taskecho.config import ReporterConfig
from taskecho.core.correlator import LifecycleCorrelator
from taskecho.core.event_hub import EventHub


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def console() -> Console:
    """A console writing plain text into a StringIO."""
    return Console(
        file=io.StringIO(),
        force_terminal=False,
        color_system=None,
        width=200,
    )


@pytest.fixture
def settings() -> ReporterConfig:
    """Default settings, isolated from TASKECHO_* in the environment."""
    return ReporterConfig(
        _env_file=None,
        notify_cwd=True,
        notify_plugins=True,
        descriptor_name="package.json",
        icon="@_@",
        fatal_icon="@_@;",
    )


@pytest.fixture
def hub(tmp_path: Path) -> EventHub:
    """A hub that resolved a package.json in a temp directory."""
    return EventHub(descriptor_path=tmp_path / "package.json")


@pytest.fixture
def make_reporter(
    hub: EventHub,
    console: Console,
    clock: FakeClock,
    settings: ReporterConfig,
    tmp_path: Path,
) -> Callable[..., LifecycleCorrelator]:
    """Factory fixture: a reporter bound to the test hub and console."""

    def _factory(host: Any = None, **overrides: Any) -> LifecycleCorrelator:
        kwargs: dict[str, Any] = {
            "settings": settings,
            "console": console,
            "clock": clock,
            "cwd": tmp_path,
        }
        kwargs.update(overrides)
        return LifecycleCorrelator(host if host is not None else hub, **kwargs)

    return _factory


@pytest.fixture
def reporter(make_reporter: Callable[..., LifecycleCorrelator]) -> LifecycleCorrelator:
    return make_reporter()


@pytest.fixture
def attached(reporter: LifecycleCorrelator, hub: EventHub) -> LifecycleCorrelator:
    """A reporter whose host already emitted ``attach``."""
    hub.emit("attach")
    return reporter
