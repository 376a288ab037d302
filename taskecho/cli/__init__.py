"""Taskecho CLI — Typer-based command-line interface."""
