#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/ast/nodes.py
"""AST node classes for resolved IDL libraries.

This module defines the node hierarchy consumed by the JSON IR generator. The
nodes are produced by the front end (parser and resolving pass) and are only
read here, so every node is a frozen dataclass and every sequence is stored as
a tuple.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Identifiers:
    - Name, Ordinal

Types (``TypeNode``, discriminated by ``kind``):
    - ArrayType, VectorType, StringType, HandleType, RequestType,
      PrimitiveType, IdentifierType

Literals (``LiteralNode``):
    - StringLiteral, NumericLiteral, TrueLiteral, FalseLiteral, DefaultLiteral

Constants (``ConstantNode``):
    - IdentifierConstant, LiteralConstant

Declarations (``Declaration``):
    - Const, Enum (EnumMember), Interface (Method, Parameter),
      Struct (StructMember), Union (UnionMember)

Root:
    - Library

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import Enum as _PyEnum
from typing import Any, ClassVar, Iterator, Optional


class PrimitiveSubtype(_PyEnum):
    """Primitive scalar types of the IDL."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    BOOL = "bool"
    STATUS = "status"
    FLOAT32 = "float32"
    FLOAT64 = "float64"


class HandleSubtype(_PyEnum):
    """Kernel object types a handle may refer to."""

    HANDLE = "handle"
    PROCESS = "process"
    THREAD = "thread"
    VMO = "vmo"
    CHANNEL = "channel"
    EVENT = "event"
    PORT = "port"
    INTERRUPT = "interrupt"
    IOMAP = "iomap"
    PCI = "pci"
    LOG = "log"
    SOCKET = "socket"
    RESOURCE = "resource"
    EVENTPAIR = "eventpair"
    JOB = "job"
    VMAR = "vmar"
    FIFO = "fifo"
    HYPERVISOR = "hypervisor"
    GUEST = "guest"
    TIMER = "timer"


class Nullability(_PyEnum):
    """Whether a reference-like type may be absent at runtime."""

    NULLABLE = "nullable"
    NONNULLABLE = "nonnullable"


def primitive_subtype_name(subtype: PrimitiveSubtype) -> str:
    """Return the IR spelling of a primitive subtype.

    Raises
    ------
    ValueError
        If ``subtype`` is not a PrimitiveSubtype member

    """
    if not isinstance(subtype, PrimitiveSubtype):
        raise ValueError(f"Unknown primitive subtype: {subtype!r}")
    return subtype.value


def handle_subtype_name(subtype: HandleSubtype) -> str:
    """Return the IR spelling of a handle subtype.

    Raises
    ------
    ValueError
        If ``subtype`` is not a HandleSubtype member

    """
    if not isinstance(subtype, HandleSubtype):
        raise ValueError(f"Unknown handle subtype: {subtype!r}")
    return subtype.value


def is_nullable(nullability: Nullability) -> bool:
    """Map a Nullability to the boolean written under the ``nullable`` key."""
    if nullability is Nullability.NULLABLE:
        return True
    if nullability is Nullability.NONNULLABLE:
        return False
    raise ValueError(f"Unknown nullability: {nullability!r}")


def _freeze_sequences(node: Any, *names: str) -> None:
    # Store sequence fields as tuples so nodes stay immutable after construction
    for name in names:
        value = getattr(node, name)
        if value is not None and not isinstance(value, tuple):
            object.__setattr__(node, name, tuple(value))


class Node(ABC):
    """Base class for all AST nodes.

    All nodes support the visitor pattern for traversal and rendering.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Identifiers
# ============================================================================


@dataclass(frozen=True)
class Name(Node):
    """Qualified identifier of a declaration.

    Parameters
    ----------
    value : str
        Library-relative or fully qualified name, e.g. ``"fidl.test/Point"``

    """

    value: str

    def __str__(self) -> str:
        return self.value

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_name(self)


@dataclass(frozen=True)
class Ordinal(Node):
    """Method discriminant, a 32-bit unsigned integer unique within its interface."""

    value: int

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_ordinal(self)


# ============================================================================
# Literals
# ============================================================================


class LiteralNode(Node):
    """Base class for literal variants; ``kind`` is the IR discriminant."""

    kind: ClassVar[str]


@dataclass(frozen=True)
class StringLiteral(LiteralNode):
    """String literal holding its original source text, quotes included.

    Parameters
    ----------
    text : str
        Source text exactly as written, e.g. ``'"hello"'``

    """

    kind: ClassVar[str] = "string"
    text: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_string_literal(self)


@dataclass(frozen=True)
class NumericLiteral(LiteralNode):
    """Numeric literal holding its original source text (``"0x2A"`` stays ``"0x2A"``)."""

    kind: ClassVar[str] = "numeric"
    text: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_numeric_literal(self)


@dataclass(frozen=True)
class TrueLiteral(LiteralNode):
    """The ``true`` literal."""

    kind: ClassVar[str] = "true"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_true_literal(self)


@dataclass(frozen=True)
class FalseLiteral(LiteralNode):
    """The ``false`` literal."""

    kind: ClassVar[str] = "false"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_false_literal(self)


@dataclass(frozen=True)
class DefaultLiteral(LiteralNode):
    """The ``default`` literal."""

    kind: ClassVar[str] = "default"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_default_literal(self)


LITERAL_NODES: tuple[type[LiteralNode], ...] = (
    StringLiteral,
    NumericLiteral,
    TrueLiteral,
    FalseLiteral,
    DefaultLiteral,
)


# ============================================================================
# Constants
# ============================================================================


class ConstantNode(Node):
    """Base class for constant variants; ``kind`` is the IR discriminant."""

    kind: ClassVar[str]


@dataclass(frozen=True)
class IdentifierConstant(ConstantNode):
    """Constant referring to another named constant."""

    kind: ClassVar[str] = "identifier"
    identifier: Name

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_identifier_constant(self)


@dataclass(frozen=True)
class LiteralConstant(ConstantNode):
    """Constant given directly as a literal."""

    kind: ClassVar[str] = "literal"
    literal: LiteralNode

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_literal_constant(self)


CONSTANT_NODES: tuple[type[ConstantNode], ...] = (IdentifierConstant, LiteralConstant)


# ============================================================================
# Types
# ============================================================================


class TypeNode(Node):
    """Base class for type variants; ``kind`` is the IR discriminant."""

    kind: ClassVar[str]


@dataclass(frozen=True)
class ArrayType(TypeNode):
    """Fixed-size array.

    Parameters
    ----------
    element_type : TypeNode
        Type of each element
    element_count : ConstantNode
        Number of elements, as a literal or a named constant

    """

    kind: ClassVar[str] = "array"
    element_type: TypeNode
    element_count: ConstantNode

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_array_type(self)


@dataclass(frozen=True)
class VectorType(TypeNode):
    """Variable-size sequence with an optional upper bound."""

    kind: ClassVar[str] = "vector"
    element_type: TypeNode
    maybe_element_count: Optional[ConstantNode] = None
    nullability: Nullability = Nullability.NONNULLABLE

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_vector_type(self)


@dataclass(frozen=True)
class StringType(TypeNode):
    """String with an optional maximum length."""

    kind: ClassVar[str] = "string"
    maybe_element_count: Optional[ConstantNode] = None
    nullability: Nullability = Nullability.NONNULLABLE

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_string_type(self)


@dataclass(frozen=True)
class HandleType(TypeNode):
    """Handle to a kernel object."""

    kind: ClassVar[str] = "handle"
    subtype: HandleSubtype = HandleSubtype.HANDLE
    nullability: Nullability = Nullability.NONNULLABLE

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_handle_type(self)


@dataclass(frozen=True)
class RequestType(TypeNode):
    """Server end of an interface channel."""

    kind: ClassVar[str] = "request"
    subtype: HandleSubtype = HandleSubtype.CHANNEL
    nullability: Nullability = Nullability.NONNULLABLE

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_request_type(self)


@dataclass(frozen=True)
class PrimitiveType(TypeNode):
    """Primitive scalar type."""

    kind: ClassVar[str] = "primitive"
    subtype: PrimitiveSubtype

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_primitive_type(self)


@dataclass(frozen=True)
class IdentifierType(TypeNode):
    """Reference to a declared type by name."""

    kind: ClassVar[str] = "identifier"
    identifier: Name
    nullability: Nullability = Nullability.NONNULLABLE

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_identifier_type(self)


TYPE_NODES: tuple[type[TypeNode], ...] = (
    ArrayType,
    VectorType,
    StringType,
    HandleType,
    RequestType,
    PrimitiveType,
    IdentifierType,
)


# ============================================================================
# Declarations
# ============================================================================


class Declaration(Node):
    """Base class for named top-level declarations.

    ``kind`` is the string written into the library's declaration index.
    """

    kind: ClassVar[str]
    name: Name


@dataclass(frozen=True)
class Const(Declaration):
    """Named constant declaration."""

    kind: ClassVar[str] = "const"
    name: Name
    type: TypeNode
    value: ConstantNode

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_const(self)


@dataclass(frozen=True)
class EnumMember(Node):
    """Single enum member."""

    name: str
    value: ConstantNode

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_enum_member(self)


@dataclass(frozen=True)
class Enum(Declaration):
    """Enum declaration.

    Parameters
    ----------
    name : Name
        Qualified enum name
    type : TypeNode or None
        Declared underlying type. Only a PrimitiveType is written to the IR;
        any other type (or None) leaves the ``type`` key out.
    members : tuple of EnumMember
        Members in source order

    """

    kind: ClassVar[str] = "enum"
    name: Name
    type: Optional[TypeNode] = None
    members: tuple[EnumMember, ...] = ()

    def __post_init__(self) -> None:
        _freeze_sequences(self, "members")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_enum(self)


@dataclass(frozen=True)
class Parameter(Node):
    """Method parameter with its byte offset inside the message payload."""

    type: TypeNode
    name: str
    offset: int

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_parameter(self)


@dataclass(frozen=True)
class Method(Node):
    """Interface method.

    The request parameters and size are present exactly when ``has_request``
    is set; the same holds for the response.

    Raises
    ------
    ValueError
        If the optional request/response fields disagree with their flags

    """

    ordinal: Ordinal
    name: str
    has_request: bool
    maybe_request: Optional[tuple[Parameter, ...]] = None
    maybe_request_size: Optional[int] = None
    has_response: bool = False
    maybe_response: Optional[tuple[Parameter, ...]] = None
    maybe_response_size: Optional[int] = None

    def __post_init__(self) -> None:
        _freeze_sequences(self, "maybe_request", "maybe_response")
        for prefix in ("request", "response"):
            flag = getattr(self, f"has_{prefix}")
            params = getattr(self, f"maybe_{prefix}")
            size = getattr(self, f"maybe_{prefix}_size")
            if flag and (params is None or size is None):
                raise ValueError(f"Method {self.name!r} has a {prefix} but no {prefix} parameters or size")
            if not flag and (params is not None or size is not None):
                raise ValueError(f"Method {self.name!r} has {prefix} fields but has_{prefix} is false")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_method(self)


@dataclass(frozen=True)
class Interface(Declaration):
    """Interface declaration."""

    kind: ClassVar[str] = "interface"
    name: Name
    methods: tuple[Method, ...] = ()

    def __post_init__(self) -> None:
        _freeze_sequences(self, "methods")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_interface(self)


@dataclass(frozen=True)
class StructMember(Node):
    """Struct member with optional default value and its byte offset."""

    type: TypeNode
    name: str
    offset: int
    maybe_default_value: Optional[ConstantNode] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_struct_member(self)


@dataclass(frozen=True)
class Struct(Declaration):
    """Struct declaration with its total byte size."""

    kind: ClassVar[str] = "struct"
    name: Name
    members: tuple[StructMember, ...] = ()
    size: int = 0

    def __post_init__(self) -> None:
        _freeze_sequences(self, "members")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_struct(self)


@dataclass(frozen=True)
class UnionMember(Node):
    """Union member with its byte offset."""

    type: TypeNode
    name: str
    offset: int

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_union_member(self)


@dataclass(frozen=True)
class Union(Declaration):
    """Union declaration with its total byte size."""

    kind: ClassVar[str] = "union"
    name: Name
    members: tuple[UnionMember, ...] = ()
    size: int = 0

    def __post_init__(self) -> None:
        _freeze_sequences(self, "members")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_union(self)


# ============================================================================
# Root
# ============================================================================


@dataclass(frozen=True)
class Library(Node):
    """A fully resolved IDL library.

    Parameters
    ----------
    name : str
        Dotted library name, e.g. ``"fidl.examples.echo"``
    const_declarations, enum_declarations, interface_declarations,
    struct_declarations, union_declarations : tuple
        Declarations of each kind, in source order
    declaration_order : tuple of Name
        Every declaration's name, in dependency-safe order for code generators

    """

    name: str
    const_declarations: tuple[Const, ...] = ()
    enum_declarations: tuple[Enum, ...] = ()
    interface_declarations: tuple[Interface, ...] = ()
    struct_declarations: tuple[Struct, ...] = ()
    union_declarations: tuple[Union, ...] = ()
    declaration_order: tuple[Name, ...] = ()

    def __post_init__(self) -> None:
        _freeze_sequences(self, *(f.name for f in fields(self) if f.name != "name"))

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_library(self)

    def iter_declarations(self) -> Iterator[Declaration]:
        """Yield every declaration, by kind in const/enum/interface/struct/union order."""
        yield from self.const_declarations
        yield from self.enum_declarations
        yield from self.interface_declarations
        yield from self.struct_declarations
        yield from self.union_declarations
