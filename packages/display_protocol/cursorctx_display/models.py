"""Typed models for X Render picture formats."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class PictType(IntEnum):
    INDEXED = 0
    DIRECT = 1


@dataclass(frozen=True)
class DirectFormat:
    red_shift: int = 0
    red_mask: int = 0
    green_shift: int = 0
    green_mask: int = 0
    blue_shift: int = 0
    blue_mask: int = 0
    alpha_shift: int = 0
    alpha_mask: int = 0


@dataclass(frozen=True)
class PictFormatInfo:
    id: int
    type: int
    depth: int
    direct: DirectFormat = field(default_factory=DirectFormat)


@dataclass(frozen=True)
class RenderFormats:
    """Formats advertised by the server and the selected ARGB32 format."""

    formats: tuple[PictFormatInfo, ...] = ()
    argb32: PictFormatInfo | None = None
