"""Mermaid class diagrams from source declaration trees."""

from .diagram import ClassDiagram, EmitterOptions, walk
from .generator import DiagramGenerator, GenerationResult
from .models import DeclarationKind, DeclarationNode

__all__ = [
    "ClassDiagram",
    "DeclarationKind",
    "DeclarationNode",
    "DiagramGenerator",
    "EmitterOptions",
    "GenerationResult",
    "walk",
]
