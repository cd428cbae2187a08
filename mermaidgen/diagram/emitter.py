"""Per-kind translation of declaration nodes into Mermaid statements.

Every :class:`DeclarationKind` is listed in exactly one of the dispatch groups below.
Kinds that have no class-diagram rendering map to :func:`_no_statements`, so the
emitter is total: any node, including an ``UNKNOWN`` one, yields a (possibly empty)
sequence of statements and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ..models import DeclarationKind, DeclarationNode
from .relationships import inherits, quote

Statements = Sequence[str]

NO_STATEMENTS: Statements = ()


@dataclass(frozen=True)
class EmitterOptions:
    """Switches for optional statements."""

    include_notes: bool = True
    include_cases: bool = True


_DEFAULT_OPTIONS = EmitterOptions()

Handler = Callable[[DeclarationNode, Optional[str], EmitterOptions], Statements]


def emit(
    node: DeclarationNode,
    enclosing_name: Optional[str] = None,
    options: Optional[EmitterOptions] = None,
) -> Statements:
    """Return the statements contributed by ``node`` itself (children excluded)."""
    handler = _HANDLERS.get(node.kind, _no_statements)
    return handler(node, enclosing_name, options or _DEFAULT_OPTIONS)


def declares_type(node: DeclarationNode) -> bool:
    """True when ``node`` opens a diagram entity that its children refer back to."""
    return node.kind in _TYPE_STEREOTYPES and bool(node.name)


def type_statements(
    name: str,
    *,
    stereotype: Optional[str] = None,
    inherited_types: Sequence[str] = (),
    documentation: Optional[str] = None,
) -> List[str]:
    """Declaration, stereotype, inheritance edges and note for one named type."""
    entity = quote(name)
    statements = [f"class {entity}"]
    if stereotype:
        statements.append(f"<<{stereotype}>> {entity}")
    for inherited in inherited_types:
        if inherited:
            statements.append(inherits(entity, inherited))
    if documentation:
        statements.append(note_for(name, documentation))
    return statements


def note_for(name: str, text: str) -> str:
    # Mermaid notes are single-line; "\n" inside the quotes renders as a line break.
    body = "\\n".join(text.splitlines()).replace('"', "#quot;")
    return f'note for {quote(name)} "{body}"'


def member_for(name: str, member: str) -> str:
    return f"{quote(name)} : {member}"


def _no_statements(
    node: DeclarationNode, enclosing_name: Optional[str], options: EmitterOptions
) -> Statements:
    return NO_STATEMENTS


def _emit_type(
    node: DeclarationNode, enclosing_name: Optional[str], options: EmitterOptions
) -> Statements:
    if not node.name:
        return NO_STATEMENTS
    return type_statements(
        node.name,
        stereotype=_TYPE_STEREOTYPES[node.kind],
        inherited_types=node.inherited_types,
        documentation=node.documentation if options.include_notes else None,
    )


def _emit_enum_case(
    node: DeclarationNode, enclosing_name: Optional[str], options: EmitterOptions
) -> Statements:
    if not options.include_cases or not enclosing_name:
        return NO_STATEMENTS
    return [
        member_for(enclosing_name, element.name)
        for element in node.children
        if element.kind is DeclarationKind.ENUM_ELEMENT and element.name
    ]


_TYPE_STEREOTYPES: Dict[DeclarationKind, Optional[str]] = {
    DeclarationKind.CLASS: None,
    DeclarationKind.ENUM: "enum",
    DeclarationKind.PROTOCOL: "protocol",
    DeclarationKind.STRUCT: "struct",
}

# Kinds with no class-diagram rendering yet.
_SILENT_KINDS = frozenset(
    {
        DeclarationKind.ASSOCIATED_TYPE,
        DeclarationKind.ENUM_ELEMENT,
        DeclarationKind.EXTENSION,
        DeclarationKind.EXTENSION_CLASS,
        DeclarationKind.EXTENSION_ENUM,
        DeclarationKind.EXTENSION_PROTOCOL,
        DeclarationKind.EXTENSION_STRUCT,
        DeclarationKind.FUNCTION_ACCESSOR_ADDRESS,
        DeclarationKind.FUNCTION_ACCESSOR_DIDSET,
        DeclarationKind.FUNCTION_ACCESSOR_GETTER,
        DeclarationKind.FUNCTION_ACCESSOR_MODIFY,
        DeclarationKind.FUNCTION_ACCESSOR_MUTABLEADDRESS,
        DeclarationKind.FUNCTION_ACCESSOR_READ,
        DeclarationKind.FUNCTION_ACCESSOR_SETTER,
        DeclarationKind.FUNCTION_ACCESSOR_WILLSET,
        DeclarationKind.FUNCTION_CONSTRUCTOR,
        DeclarationKind.FUNCTION_DESTRUCTOR,
        DeclarationKind.FUNCTION_FREE,
        DeclarationKind.FUNCTION_METHOD_CLASS,
        DeclarationKind.FUNCTION_METHOD_INSTANCE,
        DeclarationKind.FUNCTION_METHOD_STATIC,
        DeclarationKind.FUNCTION_OPERATOR,
        DeclarationKind.FUNCTION_OPERATOR_INFIX,
        DeclarationKind.FUNCTION_OPERATOR_POSTFIX,
        DeclarationKind.FUNCTION_OPERATOR_PREFIX,
        DeclarationKind.FUNCTION_SUBSCRIPT,
        DeclarationKind.GENERIC_TYPE_PARAM,
        DeclarationKind.MODULE,
        DeclarationKind.OPAQUE_TYPE,
        DeclarationKind.PRECEDENCE_GROUP,
        DeclarationKind.TYPEALIAS,
        DeclarationKind.VAR_CLASS,
        DeclarationKind.VAR_GLOBAL,
        DeclarationKind.VAR_INSTANCE,
        DeclarationKind.VAR_LOCAL,
        DeclarationKind.VAR_PARAMETER,
        DeclarationKind.VAR_STATIC,
        DeclarationKind.UNKNOWN,
    }
)

_HANDLERS: Dict[DeclarationKind, Handler] = {kind: _no_statements for kind in _SILENT_KINDS}
_HANDLERS.update({kind: _emit_type for kind in _TYPE_STEREOTYPES})
_HANDLERS[DeclarationKind.ENUM_CASE] = _emit_enum_case


__all__ = [
    "EmitterOptions",
    "NO_STATEMENTS",
    "declares_type",
    "emit",
    "member_for",
    "note_for",
    "type_statements",
]
