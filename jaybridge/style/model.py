"""Structured, vendor-agnostic style record."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional


class LayoutMode(str, Enum):
    ROW = "row"
    COLUMN = "column"
    NONE = "none"


class AxisAlignment(str, Enum):
    MIN = "MIN"
    CENTER = "CENTER"
    MAX = "MAX"
    SPACE_BETWEEN = "SPACE_BETWEEN"
    STRETCH = "STRETCH"


@dataclass(frozen=True)
class Padding:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


@dataclass(frozen=True)
class ImportIRStyle:
    """Geometry, layout, color and typography resolved from inline CSS."""

    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    min_width: Optional[float] = None
    min_height: Optional[float] = None
    max_width: Optional[float] = None
    max_height: Optional[float] = None
    layout_mode: Optional[LayoutMode] = None
    gap: Optional[float] = None
    padding: Optional[Padding] = None
    justify_content: Optional[AxisAlignment] = None
    align_items: Optional[AxisAlignment] = None
    background_color: Optional[str] = None
    border_width: Optional[float] = None
    border_color: Optional[str] = None
    border_style: Optional[str] = None
    border_radius: Optional[float] = None
    opacity: Optional[float] = None
    text_color: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[int] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def merged_with(self, defaults: "ImportIRStyle") -> "ImportIRStyle":
        """Fill unset fields from ``defaults``."""
        values = {}
        for style_field in fields(self):
            own = getattr(self, style_field.name)
            values[style_field.name] = own if own is not None else getattr(defaults, style_field.name)
        return ImportIRStyle(**values)


__all__ = ["LayoutMode", "AxisAlignment", "Padding", "ImportIRStyle"]
