"""X11 display access and cursor context construction."""

from .context import ContextError, CursorContext, new_context, release_context
from .models import PictFormatInfo, PictType, RenderFormats
from .transport import TransportError, X11Transport, find_standard_format

__all__ = [
    "ContextError",
    "CursorContext",
    "PictFormatInfo",
    "PictType",
    "RenderFormats",
    "TransportError",
    "X11Transport",
    "find_standard_format",
    "new_context",
    "release_context",
]
