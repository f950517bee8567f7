"""X11 transport abstraction used while building a cursor context."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from cursorctx_core.config import ContextOptions
from cursorctx_resources import ScreenGeometry

from .models import DirectFormat, PictFormatInfo, PictType, RenderFormats

try:
    import xcffib  # type: ignore
    import xcffib.render  # type: ignore
    import xcffib.xproto  # type: ignore
except Exception:  # pragma: no cover
    xcffib = None


_ARGB32 = DirectFormat(
    red_shift=16,
    red_mask=0xFF,
    green_shift=8,
    green_mask=0xFF,
    blue_shift=0,
    blue_mask=0xFF,
    alpha_shift=24,
    alpha_mask=0xFF,
)


class TransportError(RuntimeError):
    pass


def find_standard_format(formats: Iterable[PictFormatInfo]) -> PictFormatInfo | None:
    """Return the first direct depth-32 format laid out as ARGB."""
    for fmt in formats:
        if fmt.type == PictType.DIRECT and fmt.depth == 32 and fmt.direct == _ARGB32:
            return fmt
    return None


def _format_from_reply(info: Any) -> PictFormatInfo:
    d = info.direct
    return PictFormatInfo(
        id=int(info.id),
        type=int(info.type),
        depth=int(info.depth),
        direct=DirectFormat(
            red_shift=d.red_shift,
            red_mask=d.red_mask,
            green_shift=d.green_shift,
            green_mask=d.green_mask,
            blue_shift=d.blue_shift,
            blue_mask=d.blue_mask,
            alpha_shift=d.alpha_shift,
            alpha_mask=d.alpha_mask,
        ),
    )


class X11Transport:
    """Thin wrapper over an xcffib connection exposing only what the cursor context needs."""

    def __init__(self) -> None:
        self._conn: Any | None = None
        self.display: str | None = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self, display: str | None = None) -> None:
        if xcffib is None:
            raise RuntimeError("xcffib is required")
        if self.is_open:
            return
        try:
            self._conn = xcffib.connect(display=display)
        except xcffib.ConnectionException as exc:
            raise TransportError(f"cannot connect to display {display or '$DISPLAY'}") from exc
        self.display = display

    @classmethod
    def from_options(cls, options: ContextOptions) -> "X11Transport":
        transport = cls()
        transport.open(display=options.display)
        return transport

    def close(self) -> None:
        if self._conn is not None:
            self._conn.disconnect()
            self._conn = None

    def __enter__(self) -> "X11Transport":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def _require(self) -> Any:
        if self._conn is None:
            raise TransportError("X11 connection is not open")
        return self._conn

    def root_geometry(self) -> ScreenGeometry:
        conn = self._require()
        roots = conn.get_setup().roots
        if not roots:
            raise TransportError("display has no screens")
        screen = roots[0]
        return ScreenGeometry(
            root=int(screen.root),
            width=int(screen.width_in_pixels),
            height=int(screen.height_in_pixels),
        )

    def read_property(self, root: int, max_length: int) -> bytes | None:
        """Read RESOURCE_MANAGER from ``root``; ``max_length`` is in 32-bit units."""
        conn = self._require()
        try:
            reply = conn.core.GetProperty(
                False,
                root,
                xcffib.xproto.Atom.RESOURCE_MANAGER,
                xcffib.xproto.Atom.STRING,
                0,
                max_length,
            ).reply()
        except xcffib.XcffibException as exc:
            raise TransportError("RESOURCE_MANAGER read failed") from exc
        if reply is None or reply.format == 0 or reply.value_len == 0:
            return None
        length = reply.value_len * (reply.format // 8)
        return bytes(reply.value.buf())[:length]

    def query_render_formats(self) -> RenderFormats:
        conn = self._require()
        try:
            reply = conn(xcffib.render.key).QueryPictFormats().reply()
        except xcffib.XcffibException as exc:
            raise TransportError("render format query failed") from exc
        formats = tuple(_format_from_reply(info) for info in reply.formats)
        return RenderFormats(formats=formats, argb32=find_standard_format(formats))

    def generate_id(self) -> int:
        conn = self._require()
        try:
            return int(conn.generate_id())
        except xcffib.XcffibException as exc:
            raise TransportError("cannot allocate resource id") from exc

    def open_font(self, fid: int, name: str) -> None:
        conn = self._require()
        try:
            conn.core.OpenFont(fid, len(name), name)
        except xcffib.XcffibException as exc:
            raise TransportError(f"cannot open font {name!r}") from exc
