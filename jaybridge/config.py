"""Converter configuration support for jaybridge."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

ENV_PREFIX = "JAYBRIDGE_"


@dataclass(frozen=True)
class ConverterConfig:
    """Settings applied to export and import conversions."""

    indent: str = "  "
    id_hash_length: int = 16
    placeholder_image: str = "/placeholder-image.png"
    default_section_width: float = 1440.0
    default_section_height: float = 900.0
    fonts_base_url: str = "https://fonts.googleapis.com/css2"
    page_title: str = "Page"
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)


DEFAULT_CONFIG = ConverterConfig()


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _coerce(name: str, raw: Any, default: Any) -> Any:
    try:
        if isinstance(default, bool):
            if isinstance(raw, str):
                return raw.strip().lower() in {"1", "true", "yes", "on"}
            return bool(raw)
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Invalid value for '{name}': {raw!r}",
            hint=f"Expected a value of type {type(default).__name__}.",
        ) from exc
    return str(raw)


def _parse_section(section: Mapping[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for config_field in fields(ConverterConfig):
        if config_field.name == "raw" or config_field.name not in section:
            continue
        values[config_field.name] = _coerce(
            config_field.name, section[config_field.name], config_field.default
        )
    return values


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for config_field in fields(ConverterConfig):
        if config_field.name == "raw":
            continue
        env_name = f"{ENV_PREFIX}{config_field.name.upper()}"
        if env_name in environ:
            values[config_field.name] = _coerce(
                config_field.name, environ[env_name], config_field.default
            )
    return values


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in ("jaybridge.toml", ".jaybridgerc"):
        path = root / candidate
        if path.exists():
            return path
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        try:
            data = _read_toml_config(pyproject)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Cannot parse configuration: {exc}", path=str(pyproject)) from exc
        if "jaybridge" in (data.get("tool") or {}):
            return pyproject
    return None


def load_config(
    root: Optional[Path] = None,
    explicit: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConverterConfig:
    """Resolve configuration from file, then environment overrides."""
    root = (root or Path.cwd()).resolve()
    environ = os.environ if environ is None else environ
    config_path = locate_config_file(root, explicit)

    data: Dict[str, Any] = {}
    if config_path is not None:
        try:
            if config_path.name == "pyproject.toml":
                data = dict((_read_toml_config(config_path).get("tool") or {}).get("jaybridge") or {})
            elif config_path.suffix == ".toml":
                data = _read_toml_config(config_path)
            else:
                data = _read_json_config(config_path)
        except (OSError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot parse configuration: {exc}", path=str(config_path)) from exc
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a table of settings", path=str(config_path))

    values = _parse_section(data)
    values.update(_env_overrides(environ))
    return ConverterConfig(raw=data, **values)


__all__ = ["ConverterConfig", "DEFAULT_CONFIG", "load_config", "locate_config_file"]
