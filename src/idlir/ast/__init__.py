#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/ast/__init__.py
"""Abstract Syntax Tree (AST) module for resolved IDL libraries.

The module consists of several components:

- nodes: frozen node classes for libraries, declarations, types, literals and constants
- visitors: visitor pattern base class and the literal precondition validator
- loader: builds a Library from a JSON/YAML/TOML library description

Examples
--------
Basic usage:

    >>> from idlir.ast import Library, Name, Struct
    >>> from idlir.renderers.json_ir import JsonIrRenderer
    >>>
    >>> library = Library(
    ...     name="fidl.test",
    ...     struct_declarations=[Struct(name=Name("fidl.test/Empty"), size=1)],
    ...     declaration_order=[Name("fidl.test/Empty")],
    ... )
    >>> text = JsonIrRenderer().render_to_string(library)

"""

from idlir.ast.nodes import (
    CONSTANT_NODES,
    LITERAL_NODES,
    TYPE_NODES,
    ArrayType,
    Const,
    ConstantNode,
    Declaration,
    DefaultLiteral,
    Enum,
    EnumMember,
    FalseLiteral,
    HandleSubtype,
    HandleType,
    IdentifierConstant,
    IdentifierType,
    Interface,
    Library,
    LiteralConstant,
    LiteralNode,
    Method,
    Name,
    Node,
    Nullability,
    NumericLiteral,
    Ordinal,
    Parameter,
    PrimitiveSubtype,
    PrimitiveType,
    RequestType,
    StringLiteral,
    StringType,
    Struct,
    StructMember,
    TrueLiteral,
    TypeNode,
    Union,
    UnionMember,
    VectorType,
)
from idlir.ast.visitors import LiteralValidationVisitor, NodeVisitor

__all__ = [
    # Base classes
    "Node",
    "TypeNode",
    "LiteralNode",
    "ConstantNode",
    "Declaration",
    # Enumerations
    "PrimitiveSubtype",
    "HandleSubtype",
    "Nullability",
    # Identifiers
    "Name",
    "Ordinal",
    # Types
    "ArrayType",
    "VectorType",
    "StringType",
    "HandleType",
    "RequestType",
    "PrimitiveType",
    "IdentifierType",
    "TYPE_NODES",
    # Literals
    "StringLiteral",
    "NumericLiteral",
    "TrueLiteral",
    "FalseLiteral",
    "DefaultLiteral",
    "LITERAL_NODES",
    # Constants
    "IdentifierConstant",
    "LiteralConstant",
    "CONSTANT_NODES",
    # Declarations
    "Const",
    "Enum",
    "EnumMember",
    "Interface",
    "Method",
    "Parameter",
    "Struct",
    "StructMember",
    "Union",
    "UnionMember",
    # Root
    "Library",
    # Visitors
    "NodeVisitor",
    "LiteralValidationVisitor",
]
