"""Tests for the relationship operator vocabulary."""

from __future__ import annotations

import pytest

from mermaidgen.diagram.relationships import (
    Relationship,
    aggregates,
    associates,
    composes,
    depends_on,
    inherits,
    quote,
    realizes,
    relate,
)


def test_quote_wraps_in_backticks() -> None:
    assert quote("Animal") == "`Animal`"


@pytest.mark.parametrize(
    ("relationship", "expected"),
    [
        (Relationship.INHERITANCE, "A <|-- B"),
        (Relationship.INHERITANCE_BIDIRECTIONAL, "A <|--|> B"),
        (Relationship.COMPOSITION_REVERSED, "A --* B"),
        (Relationship.AGGREGATION_BIDIRECTIONAL, "A o--o B"),
        (Relationship.ASSOCIATION_BIDIRECTIONAL, "A <--> B"),
        (Relationship.LINK, "A -- B"),
        (Relationship.DEPENDENCY_BIDIRECTIONAL, "A <..> B"),
        (Relationship.REALIZATION, "A <|.. B"),
        (Relationship.DASHED_LINK, "A .. B"),
    ],
)
def test_relate_is_single_line(relationship: Relationship, expected: str) -> None:
    text = relate("A", relationship, "B")
    assert text == expected
    assert "\n" not in text


def test_relate_accepts_symbol_strings() -> None:
    assert relate("`Dog`", "--|>", "`Animal`") == "`Dog` --|> `Animal`"


def test_relate_rejects_unknown_symbols() -> None:
    with pytest.raises(ValueError):
        relate("A", "~~>", "B")


def test_named_helpers() -> None:
    assert inherits("`Shape`", "Codable") == "`Shape` <|-- Codable"
    assert composes("A", "B") == "A *-- B"
    assert aggregates("A", "B") == "A o-- B"
    assert associates("A", "B") == "A --> B"
    assert depends_on("A", "B") == "A ..> B"
    assert realizes("A", "B") == "A ..|> B"


def test_vocabulary_has_twenty_operators() -> None:
    assert len({member.value for member in Relationship}) == 20
