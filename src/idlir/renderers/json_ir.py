#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/renderers/json_ir.py
"""JSON IR rendering from resolved libraries.

This module provides the JsonIrRenderer class which turns a resolved Library
into the JSON intermediate representation read by the per-language binding
generators.

The output is written token by token through a JsonEmitter rather than via
``json.dumps`` for two reasons. String literal source text is copied verbatim,
and key order is fixed per node kind. The layout is byte-stable:

- every object and array opens a new indentation level when non-empty;
- empty containers are written as ``{}`` and ``[]``;
- optional fields are left out entirely when absent, never written as ``null``;
- sequences keep the order of the AST;
- the document ends with exactly one newline.

Top-level document keys, in order: ``name``, ``library_dependencies``,
``const_declarations``, ``enum_declarations``, ``interface_declarations``,
``struct_declarations``, ``union_declarations``, ``declaration_order`` and
``declarations`` (a name to declaration-kind index).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Callable, Iterator, Sequence, Union

from idlir.ast.nodes import (
    CONSTANT_NODES,
    LITERAL_NODES,
    TYPE_NODES,
    ArrayType,
    Const,
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
    Method,
    Name,
    Node,
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
    UnionMember,
    VectorType,
    handle_subtype_name,
    is_nullable,
    primitive_subtype_name,
)
from idlir.ast.nodes import Union as UnionDecl
from idlir.ast.visitors import LiteralValidationVisitor, NodeVisitor
from idlir.constants import DECLARATION_SECTIONS
from idlir.emitter import JsonEmitter
from idlir.exceptions import RenderingError, UnhandledNodeKindError
from idlir.options.json_ir import JsonIrRendererOptions
from idlir.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)

ORDINAL_MAX = 2**32 - 1

_DECLARATION_CLASSES: dict[str, type[Declaration]] = {
    "const": Const,
    "enum": Enum,
    "interface": Interface,
    "struct": Struct,
    "union": UnionDecl,
}


class JsonIrRenderer(NodeVisitor, BaseRenderer):
    """Render resolved libraries to the JSON IR.

    Parameters
    ----------
    options : JsonIrRendererOptions or None, default = None
        JSON IR rendering options

    Examples
    --------
    Basic usage:
        >>> from idlir.ast import Library, Name, Struct
        >>> library = Library(
        ...     name="fidl.test",
        ...     struct_declarations=[Struct(name=Name("fidl.test/Empty"), size=1)],
        ...     declaration_order=[Name("fidl.test/Empty")],
        ... )
        >>> text = JsonIrRenderer().render_to_string(library)

    Tab indentation:
        >>> renderer = JsonIrRenderer(JsonIrRendererOptions(indent="\\t"))

    """

    def __init__(self, options: JsonIrRendererOptions | None = None):
        """Initialize the JSON IR renderer with options."""
        BaseRenderer._validate_options_type(options, JsonIrRendererOptions, "json_ir")
        options = options or JsonIrRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: JsonIrRendererOptions = options
        self._emitter = self._new_emitter()
        # One counter per open object: members written so far
        self._member_counts: list[int] = []

    def _new_emitter(self) -> JsonEmitter:
        return JsonEmitter(
            indent=self.options.indent,
            escape_control_characters=self.options.escape_control_characters,
        )

    def render_to_string(self, library: Library) -> str:
        """Render a Library to its JSON IR document.

        Parameters
        ----------
        library : Library
            The resolved library to render

        Returns
        -------
        str
            JSON document terminated by a single newline

        Raises
        ------
        LiteralPreconditionError
            If ``validate_literals`` is set and a literal's source text is unsafe
        UnhandledNodeKindError
            If the tree contains a node kind the renderer does not know
        RenderingError
            If generation leaves the document unbalanced

        """
        if type(library) is not Library:
            raise UnhandledNodeKindError("library", type(library).__name__)

        if self.options.validate_literals:
            library.accept(LiteralValidationVisitor(strict=True))

        self._emitter = self._new_emitter()
        self._member_counts = []

        logger.debug(
            "Generating JSON IR for library %s (%d const, %d enum, %d interface, %d struct, %d union)",
            library.name,
            len(library.const_declarations),
            len(library.enum_declarations),
            len(library.interface_declarations),
            len(library.struct_declarations),
            len(library.union_declarations),
        )

        library.accept(self)

        if self._emitter.indent_level != 0 or self._member_counts:
            raise RenderingError(
                f"Unbalanced document: indentation level {self._emitter.indent_level} after generation",
                rendering_stage="document",
            )
        self._emitter.write_eof()

        text = self._emitter.getvalue()
        logger.debug("Generated %d characters of JSON IR for library %s", len(text), library.name)
        return text

    def render(self, library: Library, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render a Library and write the JSON IR to ``output``.

        Parameters
        ----------
        library : Library
            The resolved library to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination (file path or file-like object)

        """
        self.write_text_output(self.render_to_string(library), output)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @contextmanager
    def _object(self) -> Iterator[None]:
        self._emitter.begin_object()
        self._member_counts.append(0)
        yield
        if self._member_counts.pop():
            self._emitter.pop_indent()
        self._emitter.end_object()

    def _key(self, key: str) -> None:
        if self._member_counts[-1] == 0:
            self._emitter.push_indent()
        else:
            self._emitter.write_separator()
        self._member_counts[-1] += 1
        self._emitter.write_key(key)

    def _member(self, key: str, value: Any, render: Callable[[Any], None] | None = None) -> None:
        self._key(key)
        (render or self._generate)(value)

    def _array(self, items: Sequence[Any], render: Callable[[Any], None]) -> None:
        self._emitter.begin_array()
        if items:
            self._emitter.push_indent()
        for i, item in enumerate(items):
            if i:
                self._emitter.write_separator()
            render(item)
        if items:
            self._emitter.pop_indent()
        self._emitter.end_array()

    def _generate(self, value: Any) -> None:
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            self._emitter.write_boolean(value)
        elif isinstance(value, int):
            self._emitter.write_uint(value)
        elif isinstance(value, str):
            self._emitter.write_string(value)
        else:
            raise UnhandledNodeKindError("value", type(value).__name__)

    # ------------------------------------------------------------------
    # Category dispatch
    # ------------------------------------------------------------------

    @staticmethod
    def _expect(node: Any, allowed: tuple[type, ...], category: str) -> Node:
        if type(node) not in allowed:
            raise UnhandledNodeKindError(category, type(node).__name__)
        return node

    def _type(self, node: Any) -> None:
        self._expect(node, TYPE_NODES, "type").accept(self)

    def _literal(self, node: Any) -> None:
        self._expect(node, LITERAL_NODES, "literal").accept(self)

    def _constant(self, node: Any) -> None:
        self._expect(node, CONSTANT_NODES, "constant").accept(self)

    def _name(self, node: Any) -> None:
        self._expect(node, (Name,), "name").accept(self)

    def _ordinal(self, node: Any) -> None:
        self._expect(node, (Ordinal,), "ordinal").accept(self)

    def _children(self, allowed: type[Node], category: str) -> Callable[[Sequence[Any]], None]:
        def render(items: Sequence[Any]) -> None:
            self._array(items, lambda item: self._expect(item, (allowed,), category).accept(self))

        return render

    def _primitive_subtype(self, subtype: PrimitiveSubtype) -> None:
        try:
            name = primitive_subtype_name(subtype)
        except ValueError as e:
            raise UnhandledNodeKindError("primitive subtype", repr(subtype)) from e
        self._emitter.write_string(name)

    def _handle_subtype(self, subtype: HandleSubtype) -> None:
        try:
            name = handle_subtype_name(subtype)
        except ValueError as e:
            raise UnhandledNodeKindError("handle subtype", repr(subtype)) from e
        self._emitter.write_string(name)

    def _nullable(self, node: Any) -> None:
        try:
            value = is_nullable(node.nullability)
        except ValueError as e:
            raise UnhandledNodeKindError("nullability", repr(node.nullability)) from e
        self._member("nullable", value)

    # ------------------------------------------------------------------
    # Root and identifiers
    # ------------------------------------------------------------------

    def visit_library(self, node: Library) -> None:
        """Render the top-level document."""
        with self._object():
            self._member("name", node.name)
            self._member("library_dependencies", (), lambda dependencies: self._array(dependencies, self._generate))
            for key, kind in DECLARATION_SECTIONS:
                self._member(key, getattr(node, key), self._children(_DECLARATION_CLASSES[kind], f"{kind} declaration"))
            self._member("declaration_order", node.declaration_order, lambda names: self._array(names, self._name))

            self._key("declarations")
            with self._object():
                for declaration in node.iter_declarations():
                    self._member(str(declaration.name), declaration.kind)

    def visit_name(self, node: Name) -> None:
        self._emitter.write_string(node.value)

    def visit_ordinal(self, node: Ordinal) -> None:
        if isinstance(node.value, int) and node.value > ORDINAL_MAX:
            raise RenderingError(f"Ordinal {node.value} does not fit in 32 bits", rendering_stage="ordinal")
        self._emitter.write_uint(node.value)

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def visit_string_literal(self, node: StringLiteral) -> None:
        with self._object():
            self._member("kind", node.kind)
            # Source text is already a quoted string token; copied as-is
            self._key("value")
            self._emitter.write_literal(node.text)

    def visit_numeric_literal(self, node: NumericLiteral) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("value", node.text)

    def visit_true_literal(self, node: TrueLiteral) -> None:
        with self._object():
            self._member("kind", node.kind)

    def visit_false_literal(self, node: FalseLiteral) -> None:
        with self._object():
            self._member("kind", node.kind)

    def visit_default_literal(self, node: DefaultLiteral) -> None:
        with self._object():
            self._member("kind", node.kind)

    # ------------------------------------------------------------------
    # Constants
    # ------------------------------------------------------------------

    def visit_identifier_constant(self, node: IdentifierConstant) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("identifier", node.identifier, self._name)

    def visit_literal_constant(self, node: LiteralConstant) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("literal", node.literal, self._literal)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def visit_array_type(self, node: ArrayType) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("element_type", node.element_type, self._type)
            self._member("element_count", node.element_count, self._constant)

    def visit_vector_type(self, node: VectorType) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("element_type", node.element_type, self._type)
            if node.maybe_element_count is not None:
                self._member("maybe_element_count", node.maybe_element_count, self._constant)
            self._nullable(node)

    def visit_string_type(self, node: StringType) -> None:
        with self._object():
            self._member("kind", node.kind)
            if node.maybe_element_count is not None:
                self._member("maybe_element_count", node.maybe_element_count, self._constant)
            self._nullable(node)

    def visit_handle_type(self, node: HandleType) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("subtype", node.subtype, self._handle_subtype)
            self._nullable(node)

    def visit_request_type(self, node: RequestType) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("subtype", node.subtype, self._handle_subtype)
            self._nullable(node)

    def visit_primitive_type(self, node: PrimitiveType) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("subtype", node.subtype, self._primitive_subtype)

    def visit_identifier_type(self, node: IdentifierType) -> None:
        with self._object():
            self._member("kind", node.kind)
            self._member("identifier", node.identifier, self._name)
            self._nullable(node)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def visit_const(self, node: Const) -> None:
        with self._object():
            self._member("name", node.name, self._name)
            self._member("type", node.type, self._type)
            self._member("value", node.value, self._constant)

    def visit_enum(self, node: Enum) -> None:
        with self._object():
            self._member("name", node.name, self._name)
            if type(node.type) is PrimitiveType:
                self._member("type", node.type.subtype, self._primitive_subtype)
            else:
                logger.debug("Enum %s has non-primitive type %s; omitting 'type'", node.name, type(node.type).__name__)
            self._member("members", node.members, self._children(EnumMember, "enum member"))

    def visit_enum_member(self, node: EnumMember) -> None:
        with self._object():
            self._member("name", node.name)
            self._member("value", node.value, self._constant)

    def visit_interface(self, node: Interface) -> None:
        with self._object():
            self._member("name", node.name, self._name)
            self._member("methods", node.methods, self._children(Method, "method"))

    def visit_method(self, node: Method) -> None:
        parameters = self._children(Parameter, "parameter")
        with self._object():
            self._member("ordinal", node.ordinal, self._ordinal)
            self._member("name", node.name)
            self._member("has_request", node.has_request)
            if node.has_request:
                self._member("maybe_request", node.maybe_request, parameters)
                self._member("maybe_request_size", node.maybe_request_size)
            self._member("has_response", node.has_response)
            if node.has_response:
                self._member("maybe_response", node.maybe_response, parameters)
                self._member("maybe_response_size", node.maybe_response_size)

    def visit_parameter(self, node: Parameter) -> None:
        with self._object():
            self._member("type", node.type, self._type)
            self._member("name", node.name)
            self._member("offset", node.offset)

    def visit_struct(self, node: Struct) -> None:
        with self._object():
            self._member("name", node.name, self._name)
            self._member("members", node.members, self._children(StructMember, "struct member"))
            self._member("size", node.size)

    def visit_struct_member(self, node: StructMember) -> None:
        with self._object():
            self._member("type", node.type, self._type)
            self._member("name", node.name)
            if node.maybe_default_value is not None:
                self._member("maybe_default_value", node.maybe_default_value, self._constant)
            self._member("offset", node.offset)

    def visit_union(self, node: UnionDecl) -> None:
        with self._object():
            self._member("name", node.name, self._name)
            self._member("members", node.members, self._children(UnionMember, "union member"))
            self._member("size", node.size)

    def visit_union_member(self, node: UnionMember) -> None:
        with self._object():
            self._member("type", node.type, self._type)
            self._member("name", node.name)
            self._member("offset", node.offset)
