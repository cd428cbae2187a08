"""Source parser backends and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Set

from ..config import MermaidGenConfig
from .base import ParseError, SourceParser
from .sourcekitten import SourceKittenParser
from .tree_sitter import TreeSitterPythonParser

_ENTRY_POINT_GROUP = "mermaidgen.parsers"

ParserFactory = Callable[[Optional[MermaidGenConfig]], SourceParser]


def _sourcekitten_factory(config: Optional[MermaidGenConfig]) -> SourceParser:
    binary = config.parsers.sourcekitten_path if config is not None else None
    return SourceKittenParser(binary=binary)


def _python_factory(config: Optional[MermaidGenConfig]) -> SourceParser:
    return TreeSitterPythonParser()


_BUILTIN_FACTORIES: dict[str, ParserFactory] = {
    "sourcekitten": _sourcekitten_factory,
    "python": _python_factory,
}


def discover_parsers(
    enabled: Sequence[str] | None = None, config: MermaidGenConfig | None = None
) -> List[SourceParser]:
    """Return instantiated parsers, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    parsers: List[SourceParser] = []
    seen: Set[str] = set()

    def _add(name: str, factory: ParserFactory) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory(config)
        if not isinstance(instance, SourceParser):
            raise TypeError(f"Parser factory for '{name}' did not return a SourceParser instance")
        parsers.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - depends on installed plugins
            raise RuntimeError(f"Failed to load parser entry point '{name}': {exc}") from exc

        def _factory(config: Optional[MermaidGenConfig], obj: object = loaded) -> SourceParser:
            return _coerce_parser(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown parsers requested: {missing}")

    return parsers


def parser_for(path: Path, parsers: Iterable[SourceParser]) -> Optional[SourceParser]:
    """Return the first parser that supports ``path``."""
    for parser in parsers:
        if parser.supports(path):
            return parser
    return None


def _coerce_parser(obj: object) -> SourceParser:
    if isinstance(obj, SourceParser):
        return obj
    if isinstance(obj, type) and issubclass(obj, SourceParser):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, SourceParser):
            return instance
    raise TypeError("Parser entry point must be a SourceParser subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ParseError",
    "SourceKittenParser",
    "SourceParser",
    "TreeSitterPythonParser",
    "discover_parsers",
    "parser_for",
]
