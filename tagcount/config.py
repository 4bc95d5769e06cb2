"""Configuration loading for tagcount (.tagcount.yml)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".tagcount.yml"


@dataclass
class GoConfig:
    """Go toolchain settings used to resolve and locate packages."""

    binary: str = "go"
    timeout: Optional[float] = None
    goroot: Optional[Path] = None
    gopath: List[Path] = field(default_factory=list)
    extra_roots: List[Path] = field(default_factory=list)


@dataclass
class TagCountConfig:
    """Represents the settings defined in .tagcount.yml."""

    root: Path
    go: GoConfig = field(default_factory=GoConfig)


def load_config(config_path: Path) -> TagCountConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TagCountConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    go_data = _as_dict(data.get("go"))
    go = GoConfig()
    if go_data:
        go.binary = _as_str(go_data.get("binary")) or go.binary
        go.timeout = _as_float(go_data.get("timeout"))
        goroot = _as_str(go_data.get("goroot"))
        go.goroot = Path(goroot).expanduser() if goroot else None
        go.gopath = [Path(entry).expanduser() for entry in _as_str_list(go_data.get("gopath"))]
        go.extra_roots = [
            _anchor(root, Path(entry).expanduser())
            for entry in _as_str_list(go_data.get("extra_roots"))
        ]

    if go.timeout is not None and (not math.isfinite(go.timeout) or go.timeout <= 0):
        raise ConfigError("go.timeout must be a positive, finite number of seconds")

    return TagCountConfig(root=root, go=go)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _anchor(root: Path, path: Path) -> Path:
    return path if path.is_absolute() else (root / path)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "GoConfig", "TagCountConfig", "load_config"]
