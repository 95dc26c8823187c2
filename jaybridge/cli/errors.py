"""
Top-level error handling for the jaybridge CLI.

Conversion failures surface as :class:`~jaybridge.errors.JayBridgeError`
and are printed in their formatted form; anything else gets a short
``error:`` line. Set ``JAYBRIDGE_RERAISE=1`` to see the original traceback.
"""

from __future__ import annotations

import os
import sys
from typing import NoReturn

from ..errors import JayBridgeError


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def cli_reraise_enabled() -> bool:
    return _env_flag("JAYBRIDGE_RERAISE")


def format_cli_error(exc: BaseException) -> str:
    if isinstance(exc, JayBridgeError):
        return f"error: {exc.format()}"
    return f"error: {exc}"


def handle_cli_exception(exc: BaseException, *, exit_code: int = 1) -> NoReturn:
    """Print ``exc`` to stderr and exit; re-raise when requested via the environment."""
    if cli_reraise_enabled():
        raise exc
    print(format_cli_error(exc), file=sys.stderr)
    sys.exit(exit_code)


__all__ = ["cli_reraise_enabled", "format_cli_error", "handle_cli_exception"]
