"""Configuration loading for mermaidgen (.mermaidgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".mermaidgen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ParserConfig:
    """Parser backend enablement."""

    enabled: List[str] = field(default_factory=list)
    sourcekitten_path: Optional[str] = None


@dataclass
class DiagramConfig:
    """Toggles for optional diagram statements."""

    notes: bool = True
    enum_cases: bool = True


@dataclass
class MermaidGenConfig:
    """Represents the settings defined in .mermaidgen.yml."""

    root: Path
    title: Optional[str] = None
    jobs: Optional[int] = None
    parsers: ParserConfig = field(default_factory=ParserConfig)
    diagram: DiagramConfig = field(default_factory=DiagramConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> MermaidGenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MermaidGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    parser_data = _as_dict(data.get("parsers"))
    parsers = ParserConfig()
    if parser_data:
        parsers.enabled = _as_str_list(parser_data.get("enabled"))
        parsers.sourcekitten_path = _as_str(parser_data.get("sourcekitten_path"))

    diagram_data = _as_dict(data.get("diagram"))
    diagram = DiagramConfig()
    if diagram_data:
        notes = _as_bool(diagram_data.get("notes"))
        if notes is not None:
            diagram.notes = notes
        enum_cases = _as_bool(diagram_data.get("enum_cases"))
        if enum_cases is not None:
            diagram.enum_cases = enum_cases

    jobs = _as_int(data.get("jobs"))
    if jobs is not None and jobs < 1:
        raise ConfigError("jobs must be a positive integer")

    return MermaidGenConfig(
        root=root,
        title=_as_str(data.get("title")),
        jobs=jobs,
        parsers=parsers,
        diagram=diagram,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
