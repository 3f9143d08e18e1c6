"""Pytest configuration and shared fixtures for the idlir test suite.

This module provides shared fixtures, test configuration, and a small example
library used across the suite.
"""

import logging
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from idlir.ast import (
    ArrayType,
    Const,
    Enum,
    EnumMember,
    HandleSubtype,
    HandleType,
    IdentifierConstant,
    IdentifierType,
    Interface,
    Library,
    LiteralConstant,
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
    Union,
    UnionMember,
    VectorType,
)

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "golden: Byte-for-byte snapshot comparisons")
    config.addinivalue_line("markers", "property: Hypothesis property-based tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


def numeric(text: str) -> LiteralConstant:
    """Shorthand for a numeric literal constant."""
    return LiteralConstant(NumericLiteral(text))


def build_example_library() -> Library:
    """Return the example library mirrored by ``fixtures/example_library.yaml``."""
    name = "fidl.test.json"

    max_size = Const(
        name=Name(f"{name}/kMaxSize"),
        type=PrimitiveType(PrimitiveSubtype.UINT32),
        value=numeric("0x2A"),
    )
    greeting = Const(
        name=Name(f"{name}/kGreeting"),
        type=StringType(),
        value=LiteralConstant(StringLiteral('"hello"')),
    )
    direction = Enum(
        name=Name(f"{name}/Direction"),
        type=PrimitiveType(PrimitiveSubtype.UINT32),
        members=[
            EnumMember("Up", numeric("0")),
            EnumMember("Down", numeric("1")),
        ],
    )
    point = Struct(
        name=Name(f"{name}/Point"),
        members=[
            StructMember(type=PrimitiveType(PrimitiveSubtype.INT32), name="x", offset=0, maybe_default_value=numeric("0")),
            StructMember(type=PrimitiveType(PrimitiveSubtype.INT32), name="y", offset=4),
        ],
        size=8,
    )
    shape = Union(
        name=Name(f"{name}/Shape"),
        members=[
            UnionMember(type=IdentifierType(Name(f"{name}/Point")), name="point", offset=4),
            UnionMember(
                type=ArrayType(PrimitiveType(PrimitiveSubtype.UINT8), IdentifierConstant(Name(f"{name}/kMaxSize"))),
                name="raw",
                offset=4,
            ),
        ],
        size=48,
    )
    canvas = Interface(
        name=Name(f"{name}/Canvas"),
        methods=[
            Method(
                ordinal=Ordinal(1),
                name="Draw",
                has_request=True,
                maybe_request=[
                    Parameter(type=IdentifierType(Name(f"{name}/Shape")), name="shape", offset=16),
                    Parameter(
                        type=VectorType(
                            PrimitiveType(PrimitiveSubtype.BOOL),
                            maybe_element_count=numeric("16"),
                            nullability=Nullability.NULLABLE,
                        ),
                        name="flags",
                        offset=64,
                    ),
                ],
                maybe_request_size=80,
                has_response=False,
            ),
            Method(
                ordinal=Ordinal(2),
                name="Attach",
                has_request=True,
                maybe_request=[
                    Parameter(type=HandleType(HandleSubtype.VMO, Nullability.NONNULLABLE), name="buffer", offset=16),
                    Parameter(type=RequestType(HandleSubtype.CHANNEL, Nullability.NULLABLE), name="listener", offset=20),
                ],
                maybe_request_size=24,
                has_response=True,
                maybe_response=[
                    Parameter(type=PrimitiveType(PrimitiveSubtype.STATUS), name="status", offset=16),
                ],
                maybe_response_size=24,
            ),
        ],
    )
    config = Struct(
        name=Name(f"{name}/Config"),
        members=[
            StructMember(
                type=StringType(maybe_element_count=IdentifierConstant(Name(f"{name}/kMaxSize"))),
                name="label",
                offset=0,
                maybe_default_value=LiteralConstant(StringLiteral('"say \\"hi\\""')),
            ),
            StructMember(
                type=PrimitiveType(PrimitiveSubtype.BOOL),
                name="enabled",
                offset=16,
                maybe_default_value=LiteralConstant(TrueLiteral()),
            ),
        ],
        size=24,
    )

    return Library(
        name=name,
        const_declarations=[max_size, greeting],
        enum_declarations=[direction],
        interface_declarations=[canvas],
        struct_declarations=[point, config],
        union_declarations=[shape],
        declaration_order=[
            Name(f"{name}/kMaxSize"),
            Name(f"{name}/kGreeting"),
            Name(f"{name}/Direction"),
            Name(f"{name}/Point"),
            Name(f"{name}/Config"),
            Name(f"{name}/Shape"),
            Name(f"{name}/Canvas"),
        ],
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding library descriptions."""
    return FIXTURES_DIR


@pytest.fixture
def example_library() -> Library:
    """Provide the example library covering every node kind."""
    return build_example_library()


@pytest.fixture
def empty_library() -> Library:
    """Provide a library with no declarations."""
    return Library(name="fidl.empty")


@pytest.fixture(autouse=True)
def reset_idlir_logger():
    """Undo handlers and settings the command line puts on the idlir logger."""
    yield
    package_logger = logging.getLogger("idlir")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
