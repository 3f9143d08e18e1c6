#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/ast/loader.py
"""Build resolved libraries from library descriptions.

A library description is a plain mapping (read from JSON, YAML or TOML) that
mirrors the node classes one-to-one. It is how the command line receives the
output of the front end. Tagged mappings select the variant of types, literals
and constants:

.. code-block:: yaml

    name: fidl.examples.echo
    struct_declarations:
      - name: fidl.examples.echo/Point
        size: 8
        members:
          - name: x
            offset: 0
            type: {kind: primitive, subtype: int32}
            maybe_default_value:
              kind: literal
              literal: {kind: numeric, value: "0x2A"}
    declaration_order: [fidl.examples.echo/Point]

Errors carry the path of the offending entry, for example
``struct_declarations[0].members[1].type``.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from idlir.ast.nodes import (
    ArrayType,
    Const,
    ConstantNode,
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
from idlir.exceptions import MalformedFileError
from idlir.utils.io_utils import read_structured_file

logger = logging.getLogger(__name__)


class _Reader:
    """Typed accessors over one mapping, tracking its location for error messages."""

    def __init__(self, data: Any, location: str):
        if not isinstance(data, dict):
            raise MalformedFileError(f"expected a mapping, got {type(data).__name__}", location=location or "<root>")
        self.data = data
        self.location = location

    def at(self, key: str) -> str:
        return f"{self.location}.{key}" if self.location else key

    def require(self, key: str) -> Any:
        if key not in self.data:
            raise MalformedFileError(f"missing required key '{key}'", location=self.location or "<root>")
        return self.data[key]

    def string(self, key: str) -> str:
        value = self.require(key)
        if not isinstance(value, str):
            raise MalformedFileError(f"expected a string, got {type(value).__name__}", location=self.at(key))
        return value

    def uint(self, key: str, default: Optional[int] = None) -> int:
        if default is not None and key not in self.data:
            return default
        value = self.require(key)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise MalformedFileError(f"expected a non-negative integer, got {value!r}", location=self.at(key))
        return value

    def boolean(self, key: str, default: bool = False) -> bool:
        value = self.data.get(key, default)
        if not isinstance(value, bool):
            raise MalformedFileError(f"expected a boolean, got {value!r}", location=self.at(key))
        return value

    def items(self, key: str, build: Callable[[Any, str], Any]) -> list[Any]:
        values = self.data.get(key) or []
        if not isinstance(values, list):
            raise MalformedFileError(f"expected a list, got {type(values).__name__}", location=self.at(key))
        return [build(value, f"{self.at(key)}[{i}]") for i, value in enumerate(values)]

    def nullability(self) -> Nullability:
        return Nullability.NULLABLE if self.boolean("nullable") else Nullability.NONNULLABLE

    def enum(self, key: str, enum_cls: Any, default: Any = None) -> Any:
        if default is not None and key not in self.data:
            return default
        value = self.require(key)
        try:
            return enum_cls(value)
        except ValueError as e:
            allowed = ", ".join(member.value for member in enum_cls)
            raise MalformedFileError(
                f"unknown value {value!r} (expected one of: {allowed})", location=self.at(key), original_error=e
            ) from e


def _name(value: Any, location: str) -> Name:
    if not isinstance(value, str):
        raise MalformedFileError(f"expected a name string, got {type(value).__name__}", location=location)
    return Name(value)


# ----------------------------------------------------------------------------
# Literals, constants and types
# ----------------------------------------------------------------------------


def _literal(data: Any, location: str) -> LiteralNode:
    reader = _Reader(data, location)
    kind = reader.string("kind")
    if kind == "string":
        return StringLiteral(reader.string("value"))
    if kind == "numeric":
        return NumericLiteral(reader.string("value"))
    if kind == "true":
        return TrueLiteral()
    if kind == "false":
        return FalseLiteral()
    if kind == "default":
        return DefaultLiteral()
    raise MalformedFileError(f"unknown literal kind '{kind}'", location=reader.at("kind"))


def _constant(data: Any, location: str) -> ConstantNode:
    reader = _Reader(data, location)
    kind = reader.string("kind")
    if kind == "identifier":
        return IdentifierConstant(_name(reader.require("identifier"), reader.at("identifier")))
    if kind == "literal":
        return LiteralConstant(_literal(reader.require("literal"), reader.at("literal")))
    raise MalformedFileError(f"unknown constant kind '{kind}'", location=reader.at("kind"))


def _optional_constant(reader: _Reader, key: str) -> Optional[ConstantNode]:
    if reader.data.get(key) is None:
        return None
    return _constant(reader.data[key], reader.at(key))


def _type(data: Any, location: str) -> TypeNode:
    reader = _Reader(data, location)
    kind = reader.string("kind")
    if kind == "array":
        return ArrayType(
            element_type=_type(reader.require("element_type"), reader.at("element_type")),
            element_count=_constant(reader.require("element_count"), reader.at("element_count")),
        )
    if kind == "vector":
        return VectorType(
            element_type=_type(reader.require("element_type"), reader.at("element_type")),
            maybe_element_count=_optional_constant(reader, "maybe_element_count"),
            nullability=reader.nullability(),
        )
    if kind == "string":
        return StringType(
            maybe_element_count=_optional_constant(reader, "maybe_element_count"),
            nullability=reader.nullability(),
        )
    if kind == "handle":
        return HandleType(
            subtype=reader.enum("subtype", HandleSubtype, HandleSubtype.HANDLE),
            nullability=reader.nullability(),
        )
    if kind == "request":
        return RequestType(
            subtype=reader.enum("subtype", HandleSubtype, HandleSubtype.CHANNEL),
            nullability=reader.nullability(),
        )
    if kind == "primitive":
        return PrimitiveType(subtype=reader.enum("subtype", PrimitiveSubtype))
    if kind == "identifier":
        return IdentifierType(
            identifier=_name(reader.require("identifier"), reader.at("identifier")),
            nullability=reader.nullability(),
        )
    raise MalformedFileError(f"unknown type kind '{kind}'", location=reader.at("kind"))


# ----------------------------------------------------------------------------
# Declarations
# ----------------------------------------------------------------------------


def _const(data: Any, location: str) -> Const:
    reader = _Reader(data, location)
    return Const(
        name=_name(reader.require("name"), reader.at("name")),
        type=_type(reader.require("type"), reader.at("type")),
        value=_constant(reader.require("value"), reader.at("value")),
    )


def _enum_member(data: Any, location: str) -> EnumMember:
    reader = _Reader(data, location)
    return EnumMember(name=reader.string("name"), value=_constant(reader.require("value"), reader.at("value")))


def _enum(data: Any, location: str) -> Enum:
    reader = _Reader(data, location)
    enum_type = reader.data.get("type")
    return Enum(
        name=_name(reader.require("name"), reader.at("name")),
        type=_type(enum_type, reader.at("type")) if enum_type is not None else None,
        members=reader.items("members", _enum_member),
    )


def _parameter(data: Any, location: str) -> Parameter:
    reader = _Reader(data, location)
    return Parameter(
        type=_type(reader.require("type"), reader.at("type")),
        name=reader.string("name"),
        offset=reader.uint("offset"),
    )


def _method(data: Any, location: str) -> Method:
    reader = _Reader(data, location)
    has_request = reader.boolean("has_request")
    has_response = reader.boolean("has_response")
    return Method(
        ordinal=Ordinal(reader.uint("ordinal")),
        name=reader.string("name"),
        has_request=has_request,
        maybe_request=reader.items("maybe_request", _parameter) if has_request else None,
        maybe_request_size=reader.uint("maybe_request_size") if has_request else None,
        has_response=has_response,
        maybe_response=reader.items("maybe_response", _parameter) if has_response else None,
        maybe_response_size=reader.uint("maybe_response_size") if has_response else None,
    )


def _interface(data: Any, location: str) -> Interface:
    reader = _Reader(data, location)
    return Interface(name=_name(reader.require("name"), reader.at("name")), methods=reader.items("methods", _method))


def _struct_member(data: Any, location: str) -> StructMember:
    reader = _Reader(data, location)
    return StructMember(
        type=_type(reader.require("type"), reader.at("type")),
        name=reader.string("name"),
        offset=reader.uint("offset"),
        maybe_default_value=_optional_constant(reader, "maybe_default_value"),
    )


def _struct(data: Any, location: str) -> Struct:
    reader = _Reader(data, location)
    return Struct(
        name=_name(reader.require("name"), reader.at("name")),
        members=reader.items("members", _struct_member),
        size=reader.uint("size"),
    )


def _union_member(data: Any, location: str) -> UnionMember:
    reader = _Reader(data, location)
    return UnionMember(
        type=_type(reader.require("type"), reader.at("type")),
        name=reader.string("name"),
        offset=reader.uint("offset"),
    )


def _union(data: Any, location: str) -> Union:
    reader = _Reader(data, location)
    return Union(
        name=_name(reader.require("name"), reader.at("name")),
        members=reader.items("members", _union_member),
        size=reader.uint("size"),
    )


def library_from_dict(data: dict[str, Any]) -> Library:
    """Build a Library from a library description mapping.

    Parameters
    ----------
    data : dict
        Library description

    Returns
    -------
    Library
        The resolved library

    Raises
    ------
    MalformedFileError
        If the description is missing keys or has values of the wrong shape

    """
    reader = _Reader(data, "")
    return Library(
        name=reader.string("name"),
        const_declarations=reader.items("const_declarations", _const),
        enum_declarations=reader.items("enum_declarations", _enum),
        interface_declarations=reader.items("interface_declarations", _interface),
        struct_declarations=reader.items("struct_declarations", _struct),
        union_declarations=reader.items("union_declarations", _union),
        declaration_order=reader.items("declaration_order", _name),
    )


def load_library(path: Path | str) -> Library:
    """Load a library description file (.json, .yaml, .yml or .toml).

    Parameters
    ----------
    path : Path or str
        Path to the description file

    Returns
    -------
    Library
        The resolved library

    Raises
    ------
    FileError
        If the file does not exist or cannot be read
    MalformedFileError
        If the file cannot be decoded or describes an invalid library

    """
    path = Path(path)
    data = read_structured_file(path, "library description")

    logger.debug("Loaded library description from %s", path)
    try:
        return library_from_dict(data)
    except MalformedFileError as e:
        e.file_path = str(path)
        raise
    except ValueError as e:
        # Node-level consistency checks (e.g. Method request/response flags)
        raise MalformedFileError(str(e), file_path=str(path), original_error=e) from e
