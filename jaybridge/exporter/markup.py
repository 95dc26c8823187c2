"""Markup snippets shared by the node converters."""

from __future__ import annotations

import html
from typing import Collection

from ..bindings.analysis import BindingAnalysis


def escape_text(text: str) -> str:
    """Escape text content; newlines become ``<br>``."""
    return html.escape(text, quote=True).replace("\n", "<br>")


def escape_attribute(value: str) -> str:
    return html.escape(value, quote=True)


def ref_attribute(analysis: BindingAnalysis) -> str:
    return f' ref="{analysis.ref}"' if analysis.ref else ""


def binding_attributes(analysis: BindingAnalysis, skip: Collection[str] = ()) -> str:
    """`` attr="{path}"`` for every attribute binding not in ``skip``."""
    return "".join(
        f' {attribute}="{{{path}}}"' for attribute, path in analysis.attributes if attribute not in skip
    )


def comment(text: str) -> str:
    return f"<!-- {text.replace('--', '- -')} -->"


__all__ = ["escape_text", "escape_attribute", "ref_attribute", "binding_attributes", "comment"]
