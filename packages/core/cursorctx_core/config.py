"""Options controlling how a cursor context is built."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


RESOURCE_MANAGER_MAX_LENGTH = 16 * 1024
CURSOR_FONT_NAME = "cursor"


@dataclass
class ContextOptions:
    display: str | None = None
    property_max_length: int = RESOURCE_MANAGER_MAX_LENGTH
    malformed_lines: str = "abort"
    cursor_font: str = CURSOR_FONT_NAME


DEFAULT_OPTIONS = ContextOptions()


def _merge(dataclass_type, raw: Mapping[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    names = {f.name for f in fields(dataclass_type)}
    for k, v in raw.items():
        if k in names:
            setattr(defaults, k, v)
    return defaults


def _normalize(opts: ContextOptions) -> None:
    try:
        opts.property_max_length = max(1, int(opts.property_max_length))
    except (TypeError, ValueError):
        opts.property_max_length = RESOURCE_MANAGER_MAX_LENGTH
    if opts.malformed_lines not in ("abort", "skip"):
        opts.malformed_lines = "abort"
    if not opts.cursor_font:
        opts.cursor_font = CURSOR_FONT_NAME


def build_options(raw: Mapping[str, Any] | None = None) -> ContextOptions:
    opts = _merge(ContextOptions, raw or {})
    _normalize(opts)
    return opts
