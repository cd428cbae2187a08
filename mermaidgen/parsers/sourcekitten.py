"""Swift declaration trees via the SourceKitten command line tool."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..models import DeclarationKind, DeclarationNode
from .base import ParseError, SourceParser

KEY_KIND = "key.kind"
KEY_NAME = "key.name"
KEY_SUBSTRUCTURE = "key.substructure"
KEY_INHERITED_TYPES = "key.inheritedtypes"
KEY_DOC_COMMENT = "key.doc.comment"

_STRUCTURAL_KEYS = {KEY_KIND, KEY_NAME, KEY_SUBSTRUCTURE, KEY_INHERITED_TYPES, KEY_DOC_COMMENT}

CommandRunner = Callable[[Sequence[str]], str]


class SourceKittenParser(SourceParser):
    """Runs ``sourcekitten structure`` and converts its JSON into declaration nodes."""

    name = "sourcekitten"
    language = "Swift"

    def __init__(
        self, binary: str | None = None, runner: CommandRunner | None = None
    ) -> None:
        self._binary = binary or "sourcekitten"
        self._runner = runner or self._default_runner

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() == ".swift"

    def parse(self, path: Path) -> DeclarationNode:
        try:
            output = self._runner([self._binary, "structure", "--file", str(path)])
        except FileNotFoundError as exc:
            raise ParseError(path, f"{self._binary} not found: {exc}") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise ParseError(path, f"{self._binary} failed: {detail}") from exc
        except OSError as exc:
            raise ParseError(path, str(exc)) from exc

        try:
            payload = json.loads(output)
        except json.JSONDecodeError as exc:
            raise ParseError(path, f"invalid structure JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ParseError(path, "structure JSON must be an object")
        return node_from_structure(payload, name=path.stem)

    @staticmethod
    def _default_runner(args: Sequence[str]) -> str:
        completed = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


def node_from_structure(
    payload: Mapping[str, Any], name: Optional[str] = None
) -> DeclarationNode:
    """Convert one SourceKitten structure dictionary (and its substructure).

    The top-level dictionary of a file carries no ``key.kind``; it becomes a module
    node named ``name``.
    """
    raw_kind = payload.get(KEY_KIND)
    if raw_kind is None:
        kind = DeclarationKind.MODULE
        node_name = _as_str(payload.get(KEY_NAME)) or name
    else:
        kind = DeclarationKind.from_raw(raw_kind)
        node_name = _as_str(payload.get(KEY_NAME))

    children = tuple(
        node_from_structure(child)
        for child in _as_list(payload.get(KEY_SUBSTRUCTURE))
        if isinstance(child, dict)
    )
    inherited = tuple(
        inherited_name
        for inherited_name in (
            _as_str(entry.get(KEY_NAME))
            for entry in _as_list(payload.get(KEY_INHERITED_TYPES))
            if isinstance(entry, dict)
        )
        if inherited_name
    )
    attributes: Dict[str, Any] = {
        key: value for key, value in payload.items() if key not in _STRUCTURAL_KEYS
    }
    if raw_kind is not None and kind is DeclarationKind.UNKNOWN:
        attributes[KEY_KIND] = raw_kind

    return DeclarationNode(
        kind=kind,
        name=node_name,
        children=children,
        inherited_types=inherited,
        documentation=_as_str(payload.get(KEY_DOC_COMMENT)),
        attributes=attributes,
    )


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


__all__ = ["SourceKittenParser", "node_from_structure"]
