"""Core data models shared across mermaidgen components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

_DECL_PREFIX = "source.lang.swift.decl."


class DeclarationKind(str, Enum):
    """Closed set of declaration kinds a parser may report.

    Values are SourceKit kind strings, which the SourceKitten backend reads verbatim.
    Other backends map their own constructs onto the same set.
    """

    ASSOCIATED_TYPE = _DECL_PREFIX + "associatedtype"
    CLASS = _DECL_PREFIX + "class"
    ENUM = _DECL_PREFIX + "enum"
    ENUM_CASE = _DECL_PREFIX + "enumcase"
    ENUM_ELEMENT = _DECL_PREFIX + "enumelement"
    EXTENSION = _DECL_PREFIX + "extension"
    EXTENSION_CLASS = _DECL_PREFIX + "extension.class"
    EXTENSION_ENUM = _DECL_PREFIX + "extension.enum"
    EXTENSION_PROTOCOL = _DECL_PREFIX + "extension.protocol"
    EXTENSION_STRUCT = _DECL_PREFIX + "extension.struct"
    FUNCTION_ACCESSOR_ADDRESS = _DECL_PREFIX + "function.accessor.address"
    FUNCTION_ACCESSOR_DIDSET = _DECL_PREFIX + "function.accessor.didset"
    FUNCTION_ACCESSOR_GETTER = _DECL_PREFIX + "function.accessor.getter"
    FUNCTION_ACCESSOR_MODIFY = _DECL_PREFIX + "function.accessor.modify"
    FUNCTION_ACCESSOR_MUTABLEADDRESS = _DECL_PREFIX + "function.accessor.mutableaddress"
    FUNCTION_ACCESSOR_READ = _DECL_PREFIX + "function.accessor.read"
    FUNCTION_ACCESSOR_SETTER = _DECL_PREFIX + "function.accessor.setter"
    FUNCTION_ACCESSOR_WILLSET = _DECL_PREFIX + "function.accessor.willset"
    FUNCTION_CONSTRUCTOR = _DECL_PREFIX + "function.constructor"
    FUNCTION_DESTRUCTOR = _DECL_PREFIX + "function.destructor"
    FUNCTION_FREE = _DECL_PREFIX + "function.free"
    FUNCTION_METHOD_CLASS = _DECL_PREFIX + "function.method.class"
    FUNCTION_METHOD_INSTANCE = _DECL_PREFIX + "function.method.instance"
    FUNCTION_METHOD_STATIC = _DECL_PREFIX + "function.method.static"
    FUNCTION_OPERATOR = _DECL_PREFIX + "function.operator"
    FUNCTION_OPERATOR_INFIX = _DECL_PREFIX + "function.operator.infix"
    FUNCTION_OPERATOR_POSTFIX = _DECL_PREFIX + "function.operator.postfix"
    FUNCTION_OPERATOR_PREFIX = _DECL_PREFIX + "function.operator.prefix"
    FUNCTION_SUBSCRIPT = _DECL_PREFIX + "function.subscript"
    GENERIC_TYPE_PARAM = _DECL_PREFIX + "generic_type_param"
    MODULE = _DECL_PREFIX + "module"
    OPAQUE_TYPE = _DECL_PREFIX + "opaquetype"
    PRECEDENCE_GROUP = _DECL_PREFIX + "precedencegroup"
    PROTOCOL = _DECL_PREFIX + "protocol"
    STRUCT = _DECL_PREFIX + "struct"
    TYPEALIAS = _DECL_PREFIX + "typealias"
    VAR_CLASS = _DECL_PREFIX + "var.class"
    VAR_GLOBAL = _DECL_PREFIX + "var.global"
    VAR_INSTANCE = _DECL_PREFIX + "var.instance"
    VAR_LOCAL = _DECL_PREFIX + "var.local"
    VAR_PARAMETER = _DECL_PREFIX + "var.parameter"
    VAR_STATIC = _DECL_PREFIX + "var.static"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, value: Any) -> "DeclarationKind":
        """Map a raw kind string onto the closed set; anything else is UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def short_name(self) -> str:
        if self is DeclarationKind.UNKNOWN:
            return self.value
        return self.value[len(_DECL_PREFIX) :]


@dataclass(frozen=True)
class DeclarationNode:
    """One declaration in a parsed source file and its lexical substructure."""

    kind: DeclarationKind
    name: Optional[str] = None
    children: Tuple["DeclarationNode", ...] = ()
    inherited_types: Tuple[str, ...] = ()
    documentation: Optional[str] = None
    attributes: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def iter_nodes(self) -> Iterator["DeclarationNode"]:
        """Yield this node and all descendants in pre-order."""
        stack: List[DeclarationNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"kind": self.kind.short_name}
        if self.name is not None:
            payload["name"] = self.name
        if self.inherited_types:
            payload["inherited_types"] = list(self.inherited_types)
        if self.documentation is not None:
            payload["documentation"] = self.documentation
        if self.attributes:
            payload["attributes"] = dict(self.attributes)
        if self.children:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


@dataclass
class SourceFile:
    """A discovered source file, relative to the manifest root."""

    path: str
    language: Optional[str]


@dataclass
class SourceManifest:
    """Files selected for diagram generation."""

    root: str
    files: List[SourceFile]
