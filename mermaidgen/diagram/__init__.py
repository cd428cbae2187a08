"""Declaration-tree to Mermaid class-diagram transformation."""

from .accumulator import ClassDiagram, render_diagram
from .emitter import EmitterOptions, emit
from .relationships import Relationship, quote, relate
from .walker import iter_statements, walk

__all__ = [
    "ClassDiagram",
    "EmitterOptions",
    "Relationship",
    "emit",
    "iter_statements",
    "quote",
    "relate",
    "render_diagram",
    "walk",
]
