"""Status and emphasis styling for reporter messages.

Every helper returns Rich markup.  Labels are escaped before they are
wrapped, so host-supplied text can never inject markup of its own.

Style scheme
------------
- cyan underline   : pass
- yellow underline : fail
- reverse          : emphasis (paths, plugin names)
- underline        : task and script names
- bold             : watched file paths
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.markup import escape

PASS_STYLE = "cyan underline"
FAIL_STYLE = "yellow underline"
EMPHASIS_STYLE = "reverse"
UNDERLINE_STYLE = "underline"
BOLD_STYLE = "bold"

DEFAULT_GLUE = ", "


def styled(style: str, label: Any) -> str:
    """Wrap the string form of *label* in *style* markup."""
    return f"[{style}]{escape(str(label))}[/{style}]"


def passed(label: Any) -> str:
    return styled(PASS_STYLE, label)


def failed(label: Any) -> str:
    return styled(FAIL_STYLE, label)


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _style_all(style: str, items: Any, glue: str) -> str:
    return glue.join(styled(style, item) for item in _as_list(items))


def emphasize(items: Any, glue: str = DEFAULT_GLUE) -> str:
    """Reverse-video every item and join them with *glue*."""
    return _style_all(EMPHASIS_STYLE, items, glue)


def underline(items: Any, glue: str = DEFAULT_GLUE) -> str:
    """Underline every item and join them with *glue*."""
    return _style_all(UNDERLINE_STYLE, items, glue)


def bold(items: Any, glue: str = DEFAULT_GLUE) -> str:
    return _style_all(BOLD_STYLE, items, glue)


def is_failure(code: Any) -> bool:
    """Whether an exit code (or a label standing in for one) is > 0.

    Numeric strings are compared by value; anything else that is not a
    number counts as a pass.
    """
    if isinstance(code, bool):
        return code
    if isinstance(code, (int, float)):
        return code > 0
    if isinstance(code, str):
        try:
            return float(code) > 0
        except ValueError:
            return False
    return False


def statuses(labels: Any, codes: Any = None, glue: str = DEFAULT_GLUE) -> str:
    """Style each label as pass or fail according to its exit code.

    Parameters
    ----------
    labels:
        A single label or a sequence of labels.
    codes:
        A sequence of exit codes parallel to *labels*, a single exit code,
        or ``None``.  When ``None``, each label is classified by its own
        value, so ``statuses(1)`` renders ``"1"`` in the fail style.
        A missing code at some index counts as a pass.
    glue:
        Separator between the styled labels.
    """
    label_list = _as_list(labels)
    if isinstance(codes, Sequence) and not isinstance(codes, str):
        code_list = list(codes)
    elif codes is not None:
        code_list = [codes]
    else:
        code_list = label_list

    rendered: list[str] = []
    for i, label in enumerate(label_list):
        code = code_list[i] if i < len(code_list) else None
        rendered.append(failed(label) if is_failure(code) else passed(label))
    return glue.join(rendered)
