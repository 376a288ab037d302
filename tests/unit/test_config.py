"""Tests for reporter config — env-driven settings."""

from __future__ import annotations

import pytest

from taskecho.config import ReporterConfig


class TestReporterConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        for name in ("NOTIFY_CWD", "NOTIFY_PLUGINS", "DESCRIPTOR_NAME", "ICON", "FATAL_ICON"):
            monkeypatch.delenv(f"TASKECHO_{name}", raising=False)
        config = ReporterConfig(_env_file=None)
        assert config.notify_cwd is True
        assert config.notify_plugins is True
        assert config.descriptor_name == "package.json"
        assert config.icon == "@_@"
        assert config.fatal_icon == "@_@;"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TASKECHO_NOTIFY_PLUGINS", "false")
        monkeypatch.setenv("TASKECHO_DESCRIPTOR_NAME", "tasks.toml")
        config = ReporterConfig(_env_file=None)
        assert config.notify_plugins is False
        assert config.descriptor_name == "tasks.toml"

    def test_explicit_values_win(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TASKECHO_NOTIFY_CWD", "false")
        assert ReporterConfig(_env_file=None, notify_cwd=True).notify_cwd is True
