"""Centralised logging helpers for jaybridge."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from .diagnostics import Diagnostic

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = "jaybridge") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def log_diagnostics(
    diagnostics: Iterable[Diagnostic],
    *,
    direction: str,
    page_url: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Replay collected diagnostics as structured warning log entries."""

    target_logger = logger or get_logger(f"jaybridge.{direction}")
    for diagnostic in diagnostics:
        payload: Dict[str, Any] = diagnostic.to_dict()
        payload["direction"] = direction
        if page_url:
            payload["pageUrl"] = page_url
        if extras:
            payload.update(extras)
        target_logger.warning(
            str(diagnostic),
            extra={"jaybridge_event": "conversion_diagnostic", "jaybridge_data": payload},
        )


__all__ = ["get_logger", "log_diagnostics"]
