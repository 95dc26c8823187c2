"""Diagnostics collected during a conversion.

Every recoverable problem is returned to the caller as a :class:`Diagnostic`
value. Callers aggregate them; nothing in the conversion core logs as its only
channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class DiagnosticSeverity(str, Enum):
    """Severity level for diagnostics."""
    WARNING = "warning"
    INFO = "info"


class DiagnosticCode(str, Enum):
    """Machine-readable codes for conversion diagnostics."""
    BINDING_UNRESOLVED = "BINDING_UNRESOLVED"
    BINDING_INVALID_MIX = "BINDING_INVALID_MIX"
    PLUGIN_NOT_FOUND = "PLUGIN_NOT_FOUND"
    CONTRACT_NOT_FOUND = "CONTRACT_NOT_FOUND"
    COMPONENT_NOT_USED = "COMPONENT_NOT_USED"
    BINDINGS_MALFORMED = "BINDINGS_MALFORMED"
    CSS_DYNAMIC_VALUE = "CSS_DYNAMIC_VALUE"
    CSS_UNSUPPORTED_UNIT = "CSS_UNSUPPORTED_UNIT"
    CSS_UNSUPPORTED_PROPERTY = "CSS_UNSUPPORTED_PROPERTY"
    VARIANT_SYNTHETIC_DIMENSION = "VARIANT_SYNTHETIC_DIMENSION"
    VARIANT_NO_MATCH = "VARIANT_NO_MATCH"
    VARIANT_UNMATCHED_MEMBER = "VARIANT_UNMATCHED_MEMBER"
    IMAGE_NO_SOURCE = "IMAGE_NO_SOURCE"
    IMAGE_NOT_EXPORTED = "IMAGE_NOT_EXPORTED"
    MULTIPLE_CONTENT_FRAMES = "MULTIPLE_CONTENT_FRAMES"
    IMPORT_EMPTY_BODY = "IMPORT_EMPTY_BODY"


@dataclass(frozen=True)
class Diagnostic:
    """A single warning produced while converting."""
    code: DiagnosticCode
    message: str
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    node_id: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "severity": self.severity.value,
            "code": self.code.value,
            "message": self.message,
        }
        if self.node_id is not None:
            result["nodeId"] = self.node_id
        return result


def warning(code: DiagnosticCode, message: str, node_id: Optional[str] = None) -> Diagnostic:
    return Diagnostic(code=code, message=message, node_id=node_id)


def format_diagnostics(diagnostics: Iterable[Diagnostic]) -> List[str]:
    """Render diagnostics as ``CODE: message`` strings."""
    return [str(d) for d in diagnostics]


def has_code(diagnostics: Iterable[Diagnostic], code: DiagnosticCode) -> bool:
    return any(d.code is code for d in diagnostics)


__all__ = [
    "DiagnosticSeverity",
    "DiagnosticCode",
    "Diagnostic",
    "warning",
    "format_diagnostics",
    "has_code",
]
