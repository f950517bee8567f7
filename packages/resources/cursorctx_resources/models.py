"""Typed models for recognized resources, screen geometry and size results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RecognizedKey(str, Enum):
    CURSOR_THEME = "Xcursor.theme"
    CURSOR_SIZE = "Xcursor.size"
    FONT_DPI = "Xft.dpi"


_FIELDS: dict[RecognizedKey, str] = {
    RecognizedKey.CURSOR_THEME: "cursor_theme",
    RecognizedKey.CURSOR_SIZE: "cursor_size",
    RecognizedKey.FONT_DPI: "font_dpi",
}


@dataclass(frozen=True)
class ResourceTable:
    """The three RESOURCE_MANAGER values we care about.

    ``None`` means the key was never seen; an empty string means it was
    present with an empty value.
    """

    cursor_theme: str | None = None
    cursor_size: str | None = None
    font_dpi: str | None = None

    @classmethod
    def parse(cls, raw: bytes | None) -> "ResourceTable":
        from .parser import parse_resource_manager

        return parse_resource_manager(raw)

    def get(self, key: RecognizedKey) -> str | None:
        return getattr(self, _FIELDS[RecognizedKey(key)])

    @property
    def is_empty(self) -> bool:
        return all(self.get(key) is None for key in RecognizedKey)

    def as_dict(self) -> dict[str, str | None]:
        return {key.value: self.get(key) for key in RecognizedKey}

    @staticmethod
    def field_for(key: RecognizedKey) -> str:
        return _FIELDS[RecognizedKey(key)]


@dataclass(frozen=True)
class ScreenGeometry:
    root: int
    width: int
    height: int


class SizeSource(str, Enum):
    ENVIRONMENT = "environment"
    RESOURCE = "resource"
    DPI = "dpi"
    SCREEN = "screen"


@dataclass(frozen=True)
class SizeResolution:
    size: int
    source: SizeSource
