"""Depth-first traversal of declaration trees into ordered statements."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from ..models import DeclarationNode
from .emitter import EmitterOptions, declares_type, emit


def iter_statements(
    node: DeclarationNode,
    enclosing_name: Optional[str] = None,
    options: Optional[EmitterOptions] = None,
) -> Iterator[str]:
    """Yield statements in pre-order: a node's own before any of its descendants'.

    A node that declares a named type becomes the enclosing name for its children,
    which is how enum cases find the enum they belong to.
    """
    stack: List[Tuple[DeclarationNode, Optional[str]]] = [(node, enclosing_name)]
    while stack:
        current, enclosing = stack.pop()
        yield from emit(current, enclosing, options)
        child_enclosing = current.name if declares_type(current) else enclosing
        # Reversed so the first child is popped (and emitted) first.
        for child in reversed(current.children):
            stack.append((child, child_enclosing))


def walk(
    node: DeclarationNode,
    enclosing_name: Optional[str] = None,
    options: Optional[EmitterOptions] = None,
) -> List[str]:
    """Return every statement contributed by ``node`` and its subtree."""
    return list(iter_statements(node, enclosing_name, options))


__all__ = ["iter_statements", "walk"]
