"""Load and merge configuration from .diffsplit.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from diffsplit.config.schema import (
    OUTPUT_FORMATS,
    DiffSplitConfig,
    OutputConfig,
    ParseConfig,
    SplitConfig,
    parse_strip,
)

CONFIG_FILENAME = ".diffsplit.toml"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _env_flag(name: str) -> Optional[bool]:
    val = os.environ.get(name, "").strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    return None


def _merge_env_overrides(cfg: DiffSplitConfig) -> None:
    """Apply DIFFSPLIT_* environment variable overrides. Invalid values are ignored."""
    if val := os.environ.get("DIFFSPLIT_STRIP"):
        try:
            parse_strip(val)
        except ValueError:
            pass
        else:
            cfg.split.strip = val.strip().lower()
    if (flag := _env_flag("DIFFSPLIT_HIDE_LINENUM")) is not None:
        cfg.split.hide_linenum = flag
    if (flag := _env_flag("DIFFSPLIT_SKIP_HEADER")) is not None:
        cfg.split.skip_header = flag
    if val := os.environ.get("DIFFSPLIT_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("DIFFSPLIT_EXCLUDE"):
        sep = ":" if os.name != "nt" else ";"
        cfg.split.exclude.extend(p.strip() for p in val.split(sep) if p.strip())


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: DiffSplitConfig) -> None:
    try:
        parse_strip(cfg.split.strip)
    except ValueError as exc:
        raise ConfigError(f"Invalid [split] strip: {cfg.split.strip!r}") from exc
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid [output] format: {cfg.output.format!r}")
    if not isinstance(cfg.split.exclude, list) or not all(
        isinstance(p, str) for p in cfg.split.exclude
    ):
        raise ConfigError("[split] exclude must be a list of glob strings")
    name = cfg.split.binary_list
    if not isinstance(name, str) or not name or "/" in name:
        raise ConfigError(f"Invalid [split] binary_list: {cfg.split.binary_list!r}")
    for section, key in (
        ("split", "hide_linenum"),
        ("split", "skip_header"),
        ("parse", "extended_headers"),
        ("output", "show_summary"),
    ):
        value = getattr(getattr(cfg, section), key)
        if not isinstance(value, bool):
            raise ConfigError(f"[{section}] {key} must be true or false, got {value!r}")


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> DiffSplitConfig:
    """Load, validate, and return a DiffSplitConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = DiffSplitConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = DiffSplitConfig(
            version=raw.get("version", "1.0"),
            split=_build_section(raw, SplitConfig, "split"),
            parse=_build_section(raw, ParseConfig, "parse"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
