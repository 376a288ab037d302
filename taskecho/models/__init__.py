"""Taskecho data models — host payloads and reporter session state."""

from taskecho.models.events import (
    FINE_GRAINED_EVENTS,
    UNKNOWN_NAME,
    HostEvent,
    MainDescriptor,
    ScriptInfo,
    ScriptMeta,
    ScriptResult,
    TaskDescriptor,
    coerce_payload,
    flatten_deep,
)
from taskecho.models.session import VALID_TRANSITIONS, ReporterState, Session

__all__ = [
    # events
    "HostEvent",
    "FINE_GRAINED_EVENTS",
    "UNKNOWN_NAME",
    "MainDescriptor",
    "TaskDescriptor",
    "ScriptMeta",
    "ScriptInfo",
    "ScriptResult",
    "coerce_payload",
    "flatten_deep",
    # session
    "ReporterState",
    "VALID_TRANSITIONS",
    "Session",
]
