"""Unified error model for jaybridge.

Only fatal conditions are raised. Everything recoverable (unresolved
bindings, unsupported styles, ambiguous variants) travels as a
:class:`jaybridge.diagnostics.Diagnostic` value instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    node_id: Optional[str] = None
    node_name: Optional[str] = None

    def describe(self) -> str:
        parts = []
        if self.path:
            parts.append(self.path)
        if self.node_name and self.node_id:
            parts.append(f'node "{self.node_name}" ({self.node_id})')
        elif self.node_id:
            parts.append(f"node {self.node_id}")
        elif self.node_name:
            parts.append(f'node "{self.node_name}"')
        if not parts:
            return "unknown location"
        return ", ".join(parts)


class JayBridgeError(Exception):
    """Base class for all conversion errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        node_id: Optional[str] = None,
        node_name: Optional[str] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, node_id=node_id, node_name=node_name)
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class NotAPageError(JayBridgeError):
    """Raised when an exported document root is not marked as a page."""

    code = "EXPORT_NOT_A_PAGE"


class ContentFrameError(JayBridgeError):
    """Raised when a page section has no content frame to export."""

    code = "EXPORT_NO_CONTENT_FRAME"


class RepeaterConversionError(JayBridgeError):
    """Raised when a repeater node lacks auto-layout or a template child."""

    code = "EXPORT_INVALID_REPEATER"


class VariantSynthesisError(JayBridgeError):
    """Raised when a variant node or group yields zero permutations."""

    code = "VARIANT_NO_PERMUTATIONS"


class ContractError(JayBridgeError):
    """Raised when a contract or page configuration cannot be parsed."""

    code = "CONTRACT_INVALID"


class ConfigError(JayBridgeError):
    """Raised when converter configuration is invalid."""

    code = "CONFIG_INVALID"


__all__ = [
    "ErrorLocation",
    "JayBridgeError",
    "NotAPageError",
    "ContentFrameError",
    "RepeaterConversionError",
    "VariantSynthesisError",
    "ContractError",
    "ConfigError",
]
