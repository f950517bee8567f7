"""Cursor context: resolved theme, size and render format for one connection.

A context is built once per connection with :func:`new_context` and
released with :func:`release_context` (or by leaving a ``with`` block).
Failures from the display server while reading RESOURCE_MANAGER or the
render formats are logged and treated as missing data; only a missing
root screen stops construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from cursorctx_core.config import DEFAULT_OPTIONS, ContextOptions
from cursorctx_core.logging_setup import get_logger
from cursorctx_resources import (
    ResourceTable,
    ScreenGeometry,
    SizeSource,
    explain_size,
    parse_resource_manager,
)

from .models import RenderFormats

_logger = get_logger("display")


class ContextError(RuntimeError):
    pass


class CursorTransport(Protocol):
    def root_geometry(self) -> ScreenGeometry: ...

    def read_property(self, root: int, max_length: int) -> bytes | None: ...

    def query_render_formats(self) -> RenderFormats: ...

    def generate_id(self) -> int: ...

    def open_font(self, fid: int, name: str) -> None: ...


class CursorContext:
    def __init__(
        self,
        resources: ResourceTable,
        format_handle: RenderFormats | None,
        root: int,
        cursor_font: int | None,
        size: int,
        size_source: SizeSource,
    ) -> None:
        self._resources: ResourceTable | None = resources
        self._format_handle = format_handle
        self._root = root
        self._cursor_font = cursor_font
        self._size = size
        self._size_source = size_source

    @property
    def resources(self) -> ResourceTable | None:
        return self._resources

    @property
    def theme_name(self) -> str | None:
        if self._resources is None:
            return None
        return self._resources.cursor_theme

    @property
    def format_handle(self) -> RenderFormats | None:
        return self._format_handle

    @property
    def root(self) -> int:
        return self._root

    @property
    def cursor_font(self) -> int | None:
        return self._cursor_font

    @property
    def size(self) -> int:
        return self._size

    @property
    def size_source(self) -> SizeSource:
        return self._size_source

    @property
    def released(self) -> bool:
        return self._resources is None

    def release(self) -> None:
        self._resources = None
        self._format_handle = None
        _logger.debug("cursor context released", extra={"event": "context_released"})

    def __enter__(self) -> "CursorContext":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.release()

    def __repr__(self) -> str:
        return (
            f"CursorContext(root={self._root:#x}, size={self._size}, "
            f"theme={self.theme_name!r}, released={self.released})"
        )


def _absent_on_failure(what: str, call: Any, *args: Any) -> Any:
    try:
        return call(*args)
    except RuntimeError as exc:
        _logger.warning("%s unavailable: %s", what, exc, extra={"event": "transport_data_absent"})
        return None


def new_context(
    transport: CursorTransport,
    options: ContextOptions | None = None,
    env: Mapping[str, str] | None = None,
) -> CursorContext:
    opts = options or DEFAULT_OPTIONS
    try:
        geometry = transport.root_geometry()
    except RuntimeError as exc:
        raise ContextError("root screen is not available") from exc

    raw = _absent_on_failure("RESOURCE_MANAGER", transport.read_property, geometry.root, opts.property_max_length)
    formats = _absent_on_failure("render formats", transport.query_render_formats)
    cursor_font = _absent_on_failure("cursor font id", transport.generate_id)
    if cursor_font is not None:
        _absent_on_failure("cursor font", transport.open_font, cursor_font, opts.cursor_font)

    try:
        resources = parse_resource_manager(raw, malformed=opts.malformed_lines)
        resolution = explain_size(resources, env, geometry)
        ctx = CursorContext(
            resources=resources,
            format_handle=formats,
            root=geometry.root,
            cursor_font=cursor_font,
            size=resolution.size,
            size_source=resolution.source,
        )
    except MemoryError as exc:
        raise ContextError("cannot allocate cursor context") from exc

    _logger.debug(
        "cursor context created size=%d theme=%r",
        ctx.size,
        ctx.theme_name,
        extra={"event": "context_created"},
    )
    return ctx


def release_context(ctx: CursorContext | None) -> None:
    if ctx is None:
        return
    ctx.release()
