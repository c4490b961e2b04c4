from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

COMMENT_PREFIX = "# "
DEFAULT_LABEL_WIDTH = 8
LOG_FORMAT = "%(name)s: %(message)s"

FieldMapping = Union[Mapping[str, object], Sequence[tuple[str, object]]]


def _coerce_items(fields: FieldMapping) -> list[tuple[str, object]]:
    if isinstance(fields, Mapping):
        return list(fields.items())
    return list(fields)


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(_stringify(item) for item in value)
    return str(value)


def comment_line(text: str = "") -> str:
    """Return ``text`` as a ``# `` diagnostic line."""
    return f"{COMMENT_PREFIX}{text}"


def render_comment_fields(fields: FieldMapping, *, label_width: int = DEFAULT_LABEL_WIDTH) -> list[str]:
    """Render ``label : value`` pairs as aligned diagnostic lines.

    Labels are padded to ``label_width``; longer labels are kept whole.
    Values are written verbatim, never wrapped, so paths stay copyable.
    """
    return [
        comment_line(f"{str(key):<{label_width}} : {_stringify(value)}")
        for key, value in _coerce_items(fields)
    ]


def render_comment_section(title: str, entries: Iterable[str]) -> list[str]:
    """Render ``entries`` between ``TITLE : Start`` and ``TITLE : End`` markers."""
    lines = [comment_line(f"{title} : Start")]
    lines.extend(comment_line(_stringify(entry)) for entry in entries)
    lines.append(comment_line(f"{title} : End"))
    return lines


def configure_logging(verbose: bool = False, *, console: Optional[Console] = None) -> None:
    """Send log records to stderr through rich, keeping stdout for output lines."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
