"""Tests for the tree-sitter Python backend."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from mermaidgen.diagram.walker import walk
from mermaidgen.models import DeclarationKind, DeclarationNode
from mermaidgen.parsers.base import ParseError
from mermaidgen.parsers.tree_sitter import TreeSitterPythonParser

_SOURCE = textwrap.dedent(
    '''
    """Drawing primitives."""
    import enum
    from dataclasses import dataclass
    from enum import Enum
    from typing import Generic, Protocol, TypeVar

    T = TypeVar("T")


    class Color(Enum):
        """Primary colors."""

        RED = 1
        GREEN = 2
        _ignore_ = []


    class Mode(str, enum.Enum):
        FAST = "fast"


    class Drawable(Protocol):
        def draw(self) -> None: ...


    @dataclass
    class Point:
        x: int
        y: int = 0


    class Canvas(Drawable, Generic[T], metaclass=Registry):
        scale = 2

        def __init__(self, width, height=10):
            self.width = width

        @staticmethod
        def create():
            return Canvas(1)

        @classmethod
        def blank(cls):
            return cls(0)

        @property
        def area(self):
            return 0


    def helper(value: int, *args, **kwargs) -> int:
        return value
    '''
).encode("utf-8")


def _by_name(nodes: tuple[DeclarationNode, ...]) -> dict[str | None, DeclarationNode]:
    return {node.name: node for node in nodes}


@pytest.fixture(scope="module")
def module_tree() -> DeclarationNode:
    return TreeSitterPythonParser().parse_source(_SOURCE, name="drawing")


def test_module_node_wraps_top_level_declarations(module_tree: DeclarationNode) -> None:
    assert module_tree.kind is DeclarationKind.MODULE
    assert module_tree.name == "drawing"
    names = [child.name for child in module_tree.children]
    assert names == ["T", "Color", "Mode", "Drawable", "Point", "Canvas", "helper"]
    assert module_tree.children[0].kind is DeclarationKind.VAR_GLOBAL


def test_enum_classes(module_tree: DeclarationNode) -> None:
    declarations = _by_name(module_tree.children)
    color = declarations["Color"]

    assert color.kind is DeclarationKind.ENUM
    assert color.inherited_types == ("Enum",)
    assert color.documentation == "Primary colors."
    assert [case.kind for case in color.children] == [DeclarationKind.ENUM_CASE] * 2
    assert [case.children[0].name for case in color.children] == ["RED", "GREEN"]

    mode = declarations["Mode"]
    assert mode.kind is DeclarationKind.ENUM
    assert mode.inherited_types == ("str", "enum.Enum")


def test_protocol_and_dataclass(module_tree: DeclarationNode) -> None:
    declarations = _by_name(module_tree.children)

    drawable = declarations["Drawable"]
    assert drawable.kind is DeclarationKind.PROTOCOL
    assert drawable.children[0].kind is DeclarationKind.FUNCTION_METHOD_INSTANCE

    point = declarations["Point"]
    assert point.kind is DeclarationKind.STRUCT
    assert [(field.kind, field.name) for field in point.children] == [
        (DeclarationKind.VAR_INSTANCE, "x"),
        (DeclarationKind.VAR_INSTANCE, "y"),
    ]


def test_class_members_and_bases(module_tree: DeclarationNode) -> None:
    canvas = _by_name(module_tree.children)["Canvas"]

    assert canvas.kind is DeclarationKind.CLASS
    assert canvas.inherited_types == ("Drawable", "Generic")
    members = [(member.kind, member.name) for member in canvas.children]
    assert members == [
        (DeclarationKind.VAR_STATIC, "scale"),
        (DeclarationKind.FUNCTION_CONSTRUCTOR, "__init__"),
        (DeclarationKind.FUNCTION_METHOD_STATIC, "create"),
        (DeclarationKind.FUNCTION_METHOD_CLASS, "blank"),
        (DeclarationKind.VAR_INSTANCE, "area"),
    ]
    constructor = canvas.children[1]
    assert [param.name for param in constructor.children] == ["self", "width", "height"]


def test_free_function_parameters(module_tree: DeclarationNode) -> None:
    helper = _by_name(module_tree.children)["helper"]

    assert helper.kind is DeclarationKind.FUNCTION_FREE
    assert [param.name for param in helper.children] == ["value", "args", "kwargs"]
    assert all(param.kind is DeclarationKind.VAR_PARAMETER for param in helper.children)


def test_nodes_carry_source_positions(module_tree: DeclarationNode) -> None:
    color = _by_name(module_tree.children)["Color"]
    assert color.attributes["line"] == 11
    assert color.attributes["length"] > 0


def test_python_module_renders_statements(module_tree: DeclarationNode) -> None:
    statements = walk(module_tree)

    assert statements[:6] == [
        "class `Color`",
        "<<enum>> `Color`",
        "`Color` <|-- Enum",
        'note for `Color` "Primary colors."',
        "`Color` : RED",
        "`Color` : GREEN",
    ]
    assert "<<protocol>> `Drawable`" in statements
    assert "<<struct>> `Point`" in statements
    assert "`Canvas` <|-- Drawable" in statements


def test_docstring_escapes_are_decoded() -> None:
    source = textwrap.dedent(
        r'''
        class Quote:
            """Don\'t stop.\tTabbed \"quoted\"."""


        class Formatted:
            f"""Not a {docstring}."""
        '''
    ).encode("utf-8")

    tree = TreeSitterPythonParser().parse_source(source, name="quotes")
    quote, formatted = tree.children

    assert quote.documentation == "Don't stop.\tTabbed \"quoted\".".expandtabs()
    assert formatted.documentation is None

    note = next(statement for statement in walk(tree) if statement.startswith("note for"))
    assert "#quot;quoted#quot;" in note
    assert "\\" not in note


def test_declarations_inside_conditional_blocks() -> None:
    source = textwrap.dedent(
        """
        import sys

        if sys.version_info >= (3, 11):
            class Modern:
                pass
        elif sys.platform == "win32":
            class Windows:
                pass
        else:
            class Legacy:
                pass

        try:
            class Fast:
                pass
        except ImportError:
            Fast = None
        finally:
            LOADED = True

        with open(__file__) as handle:
            def reader():
                return handle

        class Holder:
            if True:
                def method(self):
                    pass
        """
    ).encode("utf-8")

    tree = TreeSitterPythonParser().parse_source(source, name="compat")
    names = [child.name for child in tree.children]

    assert names == [
        "Modern",
        "Windows",
        "Legacy",
        "Fast",
        "Fast",
        "LOADED",
        "reader",
        "Holder",
    ]
    holder = tree.children[-1]
    assert [(member.kind, member.name) for member in holder.children] == [
        (DeclarationKind.FUNCTION_METHOD_INSTANCE, "method")
    ]
    statements = walk(tree)
    assert "class `Modern`" in statements
    assert "class `Fast`" in statements


def test_parse_reads_files(tmp_path: Path) -> None:
    source = tmp_path / "models.py"
    source.write_text("class Base:\n    pass\n", encoding="utf-8")

    tree = TreeSitterPythonParser().parse(source)

    assert tree.name == "models"
    assert tree.children[0].name == "Base"


def test_syntax_errors_raise_parse_error(tmp_path: Path) -> None:
    source = tmp_path / "broken.py"
    source.write_text("class Broken(:\n", encoding="utf-8")

    with pytest.raises(ParseError) as excinfo:
        TreeSitterPythonParser().parse(source)
    assert excinfo.value.path == source


def test_unreadable_file_raises_parse_error(tmp_path: Path) -> None:
    with pytest.raises(ParseError):
        TreeSitterPythonParser().parse(tmp_path / "missing.py")


def test_supports_python_suffixes() -> None:
    parser = TreeSitterPythonParser()
    assert parser.supports(Path("a.py"))
    assert parser.supports(Path("a.pyi"))
    assert not parser.supports(Path("a.swift"))
