#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class used to walk resolved libraries.
Every node kind has its own abstract ``visit_*`` method, so a visitor that
forgets a kind cannot be instantiated. Adding a node kind therefore forces every
visitor, the JSON IR renderer included, to be updated.

"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import Any

from idlir.ast.nodes import (
    CONSTANT_NODES,
    LITERAL_NODES,
    TYPE_NODES,
    ArrayType,
    Const,
    DefaultLiteral,
    Enum,
    EnumMember,
    FalseLiteral,
    HandleType,
    IdentifierConstant,
    IdentifierType,
    Interface,
    Library,
    LiteralConstant,
    Method,
    Name,
    NumericLiteral,
    Ordinal,
    Parameter,
    PrimitiveType,
    RequestType,
    StringLiteral,
    StringType,
    Struct,
    StructMember,
    TrueLiteral,
    Union,
    UnionMember,
    VectorType,
)
from idlir.exceptions import LiteralPreconditionError, UnhandledNodeKindError

# Optional sign, then hex, binary or decimal digits with optional fraction and exponent
NUMERIC_LITERAL_PATTERN = re.compile(
    r"^[-+]?(?:0[xX][0-9a-fA-F]+|0[bB][01]+|(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][-+]?\d+)?)$"
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node kind. All visit
    methods accept a node and return Any (typically None for side-effect
    visitors such as renderers).

    Examples
    --------
    Collect every declared name:

        >>> class NameCollector(NodeVisitor):
        ...     def __init__(self):
        ...         self.names = []
        ...
        ...     def visit_name(self, node):
        ...         self.names.append(node.value)
        ...     # ... remaining visit_* methods ...

    """

    # Root and identifiers

    @abstractmethod
    def visit_library(self, node: Library) -> Any:
        """Visit a Library node.

        Parameters
        ----------
        node : Library
            The library to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_name(self, node: Name) -> Any:
        """Visit a Name node."""
        pass

    @abstractmethod
    def visit_ordinal(self, node: Ordinal) -> Any:
        """Visit an Ordinal node."""
        pass

    # Literals

    @abstractmethod
    def visit_string_literal(self, node: StringLiteral) -> Any:
        """Visit a StringLiteral node."""
        pass

    @abstractmethod
    def visit_numeric_literal(self, node: NumericLiteral) -> Any:
        """Visit a NumericLiteral node."""
        pass

    @abstractmethod
    def visit_true_literal(self, node: TrueLiteral) -> Any:
        """Visit a TrueLiteral node."""
        pass

    @abstractmethod
    def visit_false_literal(self, node: FalseLiteral) -> Any:
        """Visit a FalseLiteral node."""
        pass

    @abstractmethod
    def visit_default_literal(self, node: DefaultLiteral) -> Any:
        """Visit a DefaultLiteral node."""
        pass

    # Constants

    @abstractmethod
    def visit_identifier_constant(self, node: IdentifierConstant) -> Any:
        """Visit an IdentifierConstant node."""
        pass

    @abstractmethod
    def visit_literal_constant(self, node: LiteralConstant) -> Any:
        """Visit a LiteralConstant node."""
        pass

    # Types

    @abstractmethod
    def visit_array_type(self, node: ArrayType) -> Any:
        """Visit an ArrayType node."""
        pass

    @abstractmethod
    def visit_vector_type(self, node: VectorType) -> Any:
        """Visit a VectorType node."""
        pass

    @abstractmethod
    def visit_string_type(self, node: StringType) -> Any:
        """Visit a StringType node."""
        pass

    @abstractmethod
    def visit_handle_type(self, node: HandleType) -> Any:
        """Visit a HandleType node."""
        pass

    @abstractmethod
    def visit_request_type(self, node: RequestType) -> Any:
        """Visit a RequestType node."""
        pass

    @abstractmethod
    def visit_primitive_type(self, node: PrimitiveType) -> Any:
        """Visit a PrimitiveType node."""
        pass

    @abstractmethod
    def visit_identifier_type(self, node: IdentifierType) -> Any:
        """Visit an IdentifierType node."""
        pass

    # Declarations

    @abstractmethod
    def visit_const(self, node: Const) -> Any:
        """Visit a Const declaration."""
        pass

    @abstractmethod
    def visit_enum(self, node: Enum) -> Any:
        """Visit an Enum declaration."""
        pass

    @abstractmethod
    def visit_enum_member(self, node: EnumMember) -> Any:
        """Visit an EnumMember node."""
        pass

    @abstractmethod
    def visit_interface(self, node: Interface) -> Any:
        """Visit an Interface declaration."""
        pass

    @abstractmethod
    def visit_method(self, node: Method) -> Any:
        """Visit a Method node."""
        pass

    @abstractmethod
    def visit_parameter(self, node: Parameter) -> Any:
        """Visit a Parameter node."""
        pass

    @abstractmethod
    def visit_struct(self, node: Struct) -> Any:
        """Visit a Struct declaration."""
        pass

    @abstractmethod
    def visit_struct_member(self, node: StructMember) -> Any:
        """Visit a StructMember node."""
        pass

    @abstractmethod
    def visit_union(self, node: Union) -> Any:
        """Visit a Union declaration."""
        pass

    @abstractmethod
    def visit_union_member(self, node: UnionMember) -> Any:
        """Visit a UnionMember node."""
        pass


class LiteralValidationVisitor(NodeVisitor):
    """Visitor that checks literal source text before it is emitted.

    The JSON IR renderer copies string literal text into the output without
    escaping it, so the text must already be a single well-formed JSON string
    token. Numeric literal text must be a plain numeric token. This visitor
    walks a whole library and reports every literal that breaks these rules.
    Children are checked against their node category on the way down, so an
    unknown kind raises UnhandledNodeKindError just as the renderer would.

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise on the first violation

    Examples
    --------
        >>> validator = LiteralValidationVisitor()
        >>> library.accept(validator)  # Raises LiteralPreconditionError on bad text

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str, literal_kind: str, text: Any) -> None:
        self.errors.append(message)
        if self.strict:
            raise LiteralPreconditionError(message, literal_kind=literal_kind, text=str(text))

    def _walk(self, node: Any, allowed: tuple[type, ...], category: str) -> None:
        if type(node) not in allowed:
            raise UnhandledNodeKindError(category, type(node).__name__)
        node.accept(self)

    def _type(self, node: Any) -> None:
        self._walk(node, TYPE_NODES, "type")

    def _constant(self, node: Any) -> None:
        self._walk(node, CONSTANT_NODES, "constant")

    def _each(self, items: Any, allowed: type, category: str) -> None:
        for item in items:
            self._walk(item, (allowed,), category)

    def visit_library(self, node: Library) -> None:
        """Validate every declaration of a Library."""
        self._each(node.const_declarations, Const, "const declaration")
        self._each(node.enum_declarations, Enum, "enum declaration")
        self._each(node.interface_declarations, Interface, "interface declaration")
        self._each(node.struct_declarations, Struct, "struct declaration")
        self._each(node.union_declarations, Union, "union declaration")

    def visit_name(self, node: Name) -> None:
        pass

    def visit_ordinal(self, node: Ordinal) -> None:
        pass

    def visit_string_literal(self, node: StringLiteral) -> None:
        """Check that the text is exactly one JSON string token."""
        text = node.text
        if not isinstance(text, str) or len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
            self._add_error(f"String literal is not double-quoted: {str(text)[:50]}", "string", text)
            return
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            self._add_error(f"String literal is not a valid JSON string: {text[:50]}", "string", text)
            return
        if not isinstance(decoded, str):
            self._add_error(f"String literal does not decode to a string: {text[:50]}", "string", text)

    def visit_numeric_literal(self, node: NumericLiteral) -> None:
        """Check that the text is a numeric token."""
        if not isinstance(node.text, str) or not NUMERIC_LITERAL_PATTERN.match(node.text):
            self._add_error(f"Numeric literal has unexpected text: {str(node.text)[:50]}", "numeric", node.text)

    def visit_true_literal(self, node: TrueLiteral) -> None:
        pass

    def visit_false_literal(self, node: FalseLiteral) -> None:
        pass

    def visit_default_literal(self, node: DefaultLiteral) -> None:
        pass

    def visit_identifier_constant(self, node: IdentifierConstant) -> None:
        pass

    def visit_literal_constant(self, node: LiteralConstant) -> None:
        self._walk(node.literal, LITERAL_NODES, "literal")

    def visit_array_type(self, node: ArrayType) -> None:
        self._type(node.element_type)
        self._constant(node.element_count)

    def visit_vector_type(self, node: VectorType) -> None:
        self._type(node.element_type)
        if node.maybe_element_count is not None:
            self._constant(node.maybe_element_count)

    def visit_string_type(self, node: StringType) -> None:
        if node.maybe_element_count is not None:
            self._constant(node.maybe_element_count)

    def visit_handle_type(self, node: HandleType) -> None:
        pass

    def visit_request_type(self, node: RequestType) -> None:
        pass

    def visit_primitive_type(self, node: PrimitiveType) -> None:
        pass

    def visit_identifier_type(self, node: IdentifierType) -> None:
        pass

    def visit_const(self, node: Const) -> None:
        self._type(node.type)
        self._constant(node.value)

    def visit_enum(self, node: Enum) -> None:
        # Non-primitive enum types are left out of the document, so not walked
        self._each(node.members, EnumMember, "enum member")

    def visit_enum_member(self, node: EnumMember) -> None:
        self._constant(node.value)

    def visit_interface(self, node: Interface) -> None:
        self._each(node.methods, Method, "method")

    def visit_method(self, node: Method) -> None:
        if node.has_request:
            self._each(node.maybe_request or (), Parameter, "parameter")
        if node.has_response:
            self._each(node.maybe_response or (), Parameter, "parameter")

    def visit_parameter(self, node: Parameter) -> None:
        self._type(node.type)

    def visit_struct(self, node: Struct) -> None:
        self._each(node.members, StructMember, "struct member")

    def visit_struct_member(self, node: StructMember) -> None:
        self._type(node.type)
        if node.maybe_default_value is not None:
            self._constant(node.maybe_default_value)

    def visit_union(self, node: Union) -> None:
        self._each(node.members, UnionMember, "union member")

    def visit_union_member(self, node: UnionMember) -> None:
        self._type(node.type)
