"""Numeric and color helpers shared by both conversion directions."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

_PX_RE = re.compile(r"^([\d.]+)px$")
_UNITLESS_RE = re.compile(r"^\s*([+-]?\d*\.?\d+)")


def parse_px(value: Optional[str]) -> Optional[float]:
    """Return the number in a plain ``<n>px`` value, else ``None``."""
    if not value:
        return None
    match = _PX_RE.match(value.strip())
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def parse_unitless(value: Optional[str]) -> Optional[float]:
    """Leading-number parse, like ``parseFloat`` (``"1.5em"`` gives 1.5)."""
    if not value:
        return None
    match = _UNITLESS_RE.match(value)
    return float(match.group(1)) if match else None


def format_number(value: Any) -> str:
    """Render a number the way it should appear in CSS (``10`` not ``10.0``)."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.4f}".rstrip("0").rstrip(".")
    return str(value)


def _channel(value: Any) -> int:
    return max(0, min(255, int(round(float(value or 0) * 255))))


def rgb_to_hex(color: Mapping[str, Any]) -> str:
    return "#{:02x}{:02x}{:02x}".format(
        _channel(color.get("r")), _channel(color.get("g")), _channel(color.get("b"))
    )


def rgba_string(color: Mapping[str, Any], alpha: float) -> str:
    return "rgba({}, {}, {}, {})".format(
        _channel(color.get("r")),
        _channel(color.get("g")),
        _channel(color.get("b")),
        format_number(float(alpha)),
    )


def paint_color(paint: Mapping[str, Any]) -> Optional[str]:
    """CSS color for a SOLID paint, honoring paint opacity."""
    color = paint.get("color")
    if paint.get("type") != "SOLID" or not color:
        return None
    opacity = paint.get("opacity")
    if opacity is None:
        opacity = color.get("a", 1)
    if opacity is not None and float(opacity) < 1:
        return rgba_string(color, float(opacity))
    return rgb_to_hex(color)


__all__ = [
    "parse_px",
    "parse_unitless",
    "format_number",
    "rgb_to_hex",
    "rgba_string",
    "paint_color",
]
