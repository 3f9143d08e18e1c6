"""idlir - JSON intermediate representation emitter for an IDL compiler.

idlir takes a fully resolved IDL library (the output of the parser and the
resolving pass) and writes the canonical JSON document that the per-language
binding generators read. The document layout is byte-stable, so two runs over
the same library give identical output and diffs of generated IR stay small.

Key Features
------------
- Fixed key order per node kind, declaration order preserved
- Optional fields omitted, never written as ``null``
- Literal source text kept exactly as written (``0x2A`` stays ``0x2A``)
- Loud failure on node kinds the generator does not know
- Command line driver reading JSON/YAML/TOML library descriptions

Examples
--------
Generate the IR for a library built in-process:

    >>> from idlir import generate_json
    >>> from idlir.ast import Enum, EnumMember, Library, LiteralConstant, Name, NumericLiteral
    >>> from idlir.ast import PrimitiveSubtype, PrimitiveType
    >>> direction = Enum(
    ...     name=Name("Direction"),
    ...     type=PrimitiveType(PrimitiveSubtype.UINT32),
    ...     members=[
    ...         EnumMember("Up", LiteralConstant(NumericLiteral("0"))),
    ...         EnumMember("Down", LiteralConstant(NumericLiteral("1"))),
    ...     ],
    ... )
    >>> text = generate_json(Library(name="demo", enum_declarations=[direction]))

"""

from idlir.api import generate_json, write_json
from idlir.ast.loader import library_from_dict, load_library
from idlir.exceptions import (
    FileError,
    IdlIrError,
    InvalidOptionsError,
    LiteralPreconditionError,
    MalformedFileError,
    OutputWriteError,
    RenderingError,
    UnhandledNodeKindError,
    ValidationError,
)
from idlir.options.json_ir import JsonIrRendererOptions
from idlir.renderers.json_ir import JsonIrRenderer

__version__ = "0.1.0"

__all__ = [
    "generate_json",
    "write_json",
    "library_from_dict",
    "load_library",
    "JsonIrRenderer",
    "JsonIrRendererOptions",
    # Exceptions
    "IdlIrError",
    "ValidationError",
    "InvalidOptionsError",
    "LiteralPreconditionError",
    "FileError",
    "MalformedFileError",
    "RenderingError",
    "UnhandledNodeKindError",
    "OutputWriteError",
]
