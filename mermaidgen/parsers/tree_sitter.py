"""Python declaration trees built with tree-sitter."""

from __future__ import annotations

import ast
import inspect
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import tree_sitter
import tree_sitter_python

from ..models import DeclarationKind, DeclarationNode
from .base import ParseError, SourceParser

_PYTHON_LANGUAGE = tree_sitter.Language(tree_sitter_python.language())

_ENUM_BASES = {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag", "ReprEnum"}
_PROTOCOL_BASES = {"Protocol"}
_STRUCT_DECORATORS = {"dataclass"}

_PARAMETER_TYPES = {
    "identifier",
    "typed_parameter",
    "default_parameter",
    "typed_default_parameter",
    "list_splat_pattern",
    "dictionary_splat_pattern",
}

# Declarations nested under these are still module or class members.
_COMPOUND_STATEMENTS = {"if_statement", "try_statement", "with_statement"}
_BRANCH_CLAUSES = {
    "elif_clause",
    "else_clause",
    "except_clause",
    "except_group_clause",
    "finally_clause",
}


class TreeSitterPythonParser(SourceParser):
    """Maps Python classes, functions and assignments onto declaration kinds.

    Classes become ``enum`` when they derive from an Enum family type, ``protocol``
    when they derive from ``typing.Protocol``, ``struct`` when decorated with
    ``@dataclass`` and ``class`` otherwise. Function bodies are not descended into.
    """

    name = "python"
    language = "Python"

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in {".py", ".pyi"}

    def parse(self, path: Path) -> DeclarationNode:
        try:
            source = path.read_bytes()
        except OSError as exc:
            raise ParseError(path, str(exc)) from exc
        return self.parse_source(source, name=path.stem, path=path)

    def parse_source(
        self, source: bytes, *, name: str, path: Path | None = None
    ) -> DeclarationNode:
        tree = tree_sitter.Parser(_PYTHON_LANGUAGE).parse(source)
        root = tree.root_node
        if root.has_error:
            raise ParseError(path or Path(name), "syntax error")
        return DeclarationNode(
            kind=DeclarationKind.MODULE,
            name=name,
            children=tuple(_Converter(source).block(root, scope="module")),
            attributes=_span(root),
        )


class _Converter:
    def __init__(self, source: bytes) -> None:
        self._source = source

    def text(self, node: tree_sitter.Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def block(self, node: tree_sitter.Node, *, scope: str, enum: bool = False) -> List[DeclarationNode]:
        declarations: List[DeclarationNode] = []
        for child in node.named_children:
            if child.type == "class_definition":
                declarations.append(self.class_definition(child, decorators=()))
            elif child.type == "function_definition":
                declarations.append(self.function_definition(child, decorators=(), scope=scope))
            elif child.type == "decorated_definition":
                declaration = self.decorated_definition(child, scope=scope)
                if declaration is not None:
                    declarations.append(declaration)
            elif child.type == "expression_statement":
                declarations.extend(self.assignments(child, scope=scope, enum=enum))
            elif child.type in _COMPOUND_STATEMENTS:
                for branch in _branches(child):
                    declarations.extend(self.block(branch, scope=scope, enum=enum))
            elif child.type == "type_alias_statement":
                left = child.child_by_field_name("left")
                if left is not None:
                    declarations.append(
                        DeclarationNode(
                            kind=DeclarationKind.TYPEALIAS,
                            name=self.text(left),
                            attributes=_span(child),
                        )
                    )
        return declarations

    def decorated_definition(
        self, node: tree_sitter.Node, *, scope: str
    ) -> Optional[DeclarationNode]:
        decorators = tuple(
            self.decorator_name(child) for child in node.named_children if child.type == "decorator"
        )
        definition = node.child_by_field_name("definition")
        if definition is None:
            return None
        if definition.type == "class_definition":
            return self.class_definition(definition, decorators=decorators)
        if definition.type == "function_definition":
            return self.function_definition(definition, decorators=decorators, scope=scope)
        return None

    def decorator_name(self, node: tree_sitter.Node) -> str:
        expression = node.named_children[0] if node.named_children else node
        if expression.type == "call":
            function = expression.child_by_field_name("function")
            if function is not None:
                expression = function
        return _last_component(self.text(expression))

    def class_definition(
        self, node: tree_sitter.Node, *, decorators: Sequence[str]
    ) -> DeclarationNode:
        name_node = node.child_by_field_name("name")
        bases = self.bases(node.child_by_field_name("superclasses"))
        base_names = {_last_component(base) for base in bases}
        if base_names & _ENUM_BASES:
            kind = DeclarationKind.ENUM
        elif base_names & _PROTOCOL_BASES:
            kind = DeclarationKind.PROTOCOL
        elif set(decorators) & _STRUCT_DECORATORS:
            kind = DeclarationKind.STRUCT
        else:
            kind = DeclarationKind.CLASS

        body = node.child_by_field_name("body")
        children: Tuple[DeclarationNode, ...] = ()
        if body is not None:
            children = tuple(
                self.block(body, scope="class", enum=kind is DeclarationKind.ENUM)
            )
        return DeclarationNode(
            kind=kind,
            name=self.text(name_node) if name_node is not None else None,
            children=children,
            inherited_types=tuple(bases),
            documentation=self.docstring(body),
            attributes=_span(node),
        )

    def bases(self, node: Optional[tree_sitter.Node]) -> List[str]:
        if node is None:
            return []
        names: List[str] = []
        for child in node.named_children:
            if child.type in {"identifier", "attribute"}:
                names.append(self.text(child))
            elif child.type == "subscript":
                value = child.child_by_field_name("value")
                names.append(self.text(value if value is not None else child))
        return names

    def function_definition(
        self, node: tree_sitter.Node, *, decorators: Sequence[str], scope: str
    ) -> DeclarationNode:
        name_node = node.child_by_field_name("name")
        name = self.text(name_node) if name_node is not None else None
        return DeclarationNode(
            kind=_function_kind(name, decorators, scope),
            name=name,
            children=tuple(self.parameters(node.child_by_field_name("parameters"))),
            documentation=self.docstring(node.child_by_field_name("body")),
            attributes=_span(node),
        )

    def parameters(self, node: Optional[tree_sitter.Node]) -> Iterable[DeclarationNode]:
        if node is None:
            return
        for child in node.named_children:
            if child.type not in _PARAMETER_TYPES:
                continue
            identifier: Optional[tree_sitter.Node] = child
            if child.type != "identifier":
                identifier = child.child_by_field_name("name")
                if identifier is None:
                    identifier = next(
                        (item for item in child.named_children if item.type == "identifier"),
                        None,
                    )
            if identifier is None:
                continue
            yield DeclarationNode(
                kind=DeclarationKind.VAR_PARAMETER,
                name=self.text(identifier),
                attributes=_span(child),
            )

    def assignments(
        self, node: tree_sitter.Node, *, scope: str, enum: bool
    ) -> List[DeclarationNode]:
        declarations: List[DeclarationNode] = []
        for child in node.named_children:
            if child.type != "assignment":
                continue
            left = child.child_by_field_name("left")
            if left is None or left.type != "identifier":
                continue
            name = self.text(left)
            if enum:
                if name.startswith("_"):
                    continue
                element = DeclarationNode(
                    kind=DeclarationKind.ENUM_ELEMENT, name=name, attributes=_span(left)
                )
                declarations.append(
                    DeclarationNode(
                        kind=DeclarationKind.ENUM_CASE,
                        children=(element,),
                        attributes=_span(child),
                    )
                )
                continue
            if scope == "module":
                kind = DeclarationKind.VAR_GLOBAL
            elif child.child_by_field_name("type") is not None:
                kind = DeclarationKind.VAR_INSTANCE
            else:
                kind = DeclarationKind.VAR_STATIC
            declarations.append(DeclarationNode(kind=kind, name=name, attributes=_span(child)))
        return declarations

    def docstring(self, body: Optional[tree_sitter.Node]) -> Optional[str]:
        if body is None or not body.named_children:
            return None
        first = body.named_children[0]
        if first.type != "expression_statement" or not first.named_children:
            return None
        literal = first.named_children[0]
        if literal.type != "string" or any(
            part.type == "interpolation" for part in literal.named_children
        ):
            return None
        try:
            value = ast.literal_eval(self.text(literal))
        except (SyntaxError, ValueError):
            return None
        if not isinstance(value, str):
            return None
        cleaned = inspect.cleandoc(value)
        return cleaned or None


def _branches(node: tree_sitter.Node) -> Iterable[tree_sitter.Node]:
    for child in node.named_children:
        if child.type == "block":
            yield child
        elif child.type in _BRANCH_CLAUSES:
            yield from (part for part in child.named_children if part.type == "block")


def _function_kind(
    name: Optional[str], decorators: Sequence[str], scope: str
) -> DeclarationKind:
    if scope != "class":
        return DeclarationKind.FUNCTION_FREE
    if name == "__init__":
        return DeclarationKind.FUNCTION_CONSTRUCTOR
    if name == "__del__":
        return DeclarationKind.FUNCTION_DESTRUCTOR
    if "staticmethod" in decorators:
        return DeclarationKind.FUNCTION_METHOD_STATIC
    if "classmethod" in decorators:
        return DeclarationKind.FUNCTION_METHOD_CLASS
    if "property" in decorators or "cached_property" in decorators:
        return DeclarationKind.VAR_INSTANCE
    return DeclarationKind.FUNCTION_METHOD_INSTANCE


def _last_component(dotted: str) -> str:
    return dotted.rsplit(".", 1)[-1].strip()


def _span(node: tree_sitter.Node) -> dict:
    return {
        "offset": node.start_byte,
        "length": node.end_byte - node.start_byte,
        "line": node.start_point.row + 1,
    }


__all__ = ["TreeSitterPythonParser"]
