"""Host event names and payload models.

The host emits loosely shaped payloads (mappings or plain objects with
optional nested fields).  Every payload the reporter reads is validated
through one of the frozen models below.  A malformed field falls back to
its own default; a payload that cannot be read at all is replaced by the
model's defaults.  Neither case raises.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "unknown"

_PayloadT = TypeVar("_PayloadT", bound=BaseModel)


class HostEvent(str, Enum):
    """Lifecycle notifications consumed from the host engine."""

    ATTACH = "attach"
    DETACH = "detach"
    LOG = "log"
    SCRIPT_ERROR = "script-error"
    TASK_START = "task-start"
    TASK_END = "task-end"
    SCRIPT_START = "script-start"
    SCRIPT_END = "script-end"
    WATCH = "watch"


# Fine-grained events are only listened to while a multi-script task runs.
FINE_GRAINED_EVENTS: tuple[HostEvent, ...] = (
    HostEvent.SCRIPT_START,
    HostEvent.SCRIPT_END,
)


class _Payload(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        populate_by_name=True,
        extra="ignore",
    )


# Values that can never be a nested descriptor; they fall back to ``None``.
_SCALAR_TYPES = (str, bytes, int, float, bool, list, tuple)


def _nested_or_none(value: Any) -> Any:
    return None if value is None or isinstance(value, _SCALAR_TYPES) else value


def _normalize_exit_code(value: Any) -> int:
    """Coerce a host exit code to an int without losing its pass/fail meaning.

    Integral values are kept.  A fractional value becomes 1 when it is
    above zero and 0 otherwise.  Anything non-numeric becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if value.is_integer():
            return int(value)
        return 1 if value > 0 else 0
    return 0


class MainDescriptor(_Payload):
    """The ``main`` descriptor wrapped by each task element."""

    name: str = UNKNOWN_NAME

    @field_validator("name", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return UNKNOWN_NAME if value is None else str(value)


class TaskDescriptor(_Payload):
    """One element of a task-start payload."""

    main: MainDescriptor | None = None

    @field_validator("main", mode="before")
    @classmethod
    def _drop_malformed_main(cls, value: Any) -> Any:
        return _nested_or_none(value)

    @property
    def display_name(self) -> str:
        return self.main.name if self.main is not None else UNKNOWN_NAME


class ScriptMeta(_Payload):
    """Auxiliary descriptors attached to a script."""

    suffix: list[str] = []

    @field_validator("suffix", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return [str(value)]


class ScriptInfo(_Payload):
    """The ``script`` part of script-start, script-end and task-end payloads."""

    name: str | list[str] = UNKNOWN_NAME
    meta: ScriptMeta | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> str | list[str]:
        if value is None:
            return UNKNOWN_NAME
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return str(value)

    @field_validator("meta", mode="before")
    @classmethod
    def _drop_malformed_meta(cls, value: Any) -> Any:
        return _nested_or_none(value)

    @property
    def display_name(self) -> str:
        if isinstance(self.name, list):
            return ", ".join(self.name)
        return self.name

    @property
    def suffix(self) -> list[str]:
        return list(self.meta.suffix) if self.meta is not None else []


class ScriptResult(_Payload):
    """A script together with its exit code.

    Accepts both the wrapped shape ``{"script": {"name": ...}, "exitCode": 1}``
    and the flat shape ``{"name": ..., "exitCode": 1}``.  A malformed field
    falls back on its own; the rest of the payload is kept.
    """

    script: ScriptInfo = ScriptInfo()
    exit_code: int = Field(default=0, alias="exitCode")

    @model_validator(mode="before")
    @classmethod
    def _unwrap_flat(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        if "exit_code" in data and "exitCode" not in data:
            data["exitCode"] = data.pop("exit_code")
        if "script" not in data and "name" in data:
            data["script"] = {"name": data.pop("name"), "meta": data.pop("meta", None)}
        if isinstance(data.get("script"), str):
            data["script"] = {"name": data["script"]}
        elif "script" in data and _nested_or_none(data["script"]) is None:
            data.pop("script")
        if data.get("exitCode") is None:
            data.pop("exitCode", None)
        return data

    @field_validator("exit_code", mode="before")
    @classmethod
    def _coerce_exit_code(cls, value: Any) -> int:
        return _normalize_exit_code(value)


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def flatten_deep(value: Any) -> list[Any]:
    """Recursively flatten nested lists and tuples into one flat list.

    A top-level ``None`` flattens to an empty list; any other non-sequence
    value (including strings and mappings) is treated as a single element.
    ``None`` elements inside a sequence are kept.
    """
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        return [value]
    flat: list[Any] = []
    for item in value:
        if isinstance(item, (list, tuple)):
            flat.extend(flatten_deep(item))
        else:
            flat.append(item)
    return flat


def coerce_payload(model_cls: type[_PayloadT], raw: Any) -> _PayloadT:
    """Validate *raw* as *model_cls*, falling back to the model's defaults."""
    if isinstance(raw, model_cls):
        return raw
    try:
        return model_cls.model_validate(raw)
    except ValidationError as exc:
        logger.debug(
            "Malformed %s payload %r, using defaults: %s",
            model_cls.__name__,
            raw,
            exc,
        )
        return model_cls()
