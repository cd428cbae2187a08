"""Mermaid class-diagram relationship operators."""

from __future__ import annotations

from enum import Enum


class Relationship(str, Enum):
    """Edge operators understood by Mermaid class diagrams."""

    INHERITANCE = "<|--"
    INHERITANCE_REVERSED = "--|>"
    INHERITANCE_BIDIRECTIONAL = "<|--|>"
    COMPOSITION = "*--"
    COMPOSITION_REVERSED = "--*"
    COMPOSITION_BIDIRECTIONAL = "*--*"
    AGGREGATION = "o--"
    AGGREGATION_REVERSED = "--o"
    AGGREGATION_BIDIRECTIONAL = "o--o"
    ASSOCIATION = "-->"
    ASSOCIATION_REVERSED = "<--"
    ASSOCIATION_BIDIRECTIONAL = "<-->"
    LINK = "--"
    DEPENDENCY = "<.."
    DEPENDENCY_REVERSED = "..>"
    DEPENDENCY_BIDIRECTIONAL = "<..>"
    REALIZATION = "<|.."
    REALIZATION_REVERSED = "..|>"
    REALIZATION_BIDIRECTIONAL = "<|..|>"
    DASHED_LINK = ".."


def quote(name: str) -> str:
    """Wrap an identifier in back-ticks so Mermaid accepts any characters in it."""
    return f"`{name}`"


def relate(lhs: str, relationship: Relationship | str, rhs: str) -> str:
    """Join two already formatted entity identifiers with an edge operator."""
    symbol = Relationship(relationship).value
    return f"{lhs} {symbol} {rhs}"


def inherits(lhs: str, rhs: str) -> str:
    return relate(lhs, Relationship.INHERITANCE, rhs)


def composes(lhs: str, rhs: str) -> str:
    return relate(lhs, Relationship.COMPOSITION, rhs)


def aggregates(lhs: str, rhs: str) -> str:
    return relate(lhs, Relationship.AGGREGATION, rhs)


def associates(lhs: str, rhs: str) -> str:
    return relate(lhs, Relationship.ASSOCIATION, rhs)


def depends_on(lhs: str, rhs: str) -> str:
    return relate(lhs, Relationship.DEPENDENCY_REVERSED, rhs)


def realizes(lhs: str, rhs: str) -> str:
    return relate(lhs, Relationship.REALIZATION_REVERSED, rhs)


__all__ = [
    "Relationship",
    "aggregates",
    "associates",
    "composes",
    "depends_on",
    "inherits",
    "quote",
    "realizes",
    "relate",
]
