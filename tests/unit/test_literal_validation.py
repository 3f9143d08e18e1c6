#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for literal source text validation."""

import pytest

from idlir.ast import (
    Const,
    Library,
    LiteralConstant,
    LiteralValidationVisitor,
    Name,
    NumericLiteral,
    PrimitiveSubtype,
    PrimitiveType,
    StringLiteral,
    StringType,
    Struct,
    StructMember,
)
from idlir.exceptions import LiteralPreconditionError, UnhandledNodeKindError, ValidationError


def _library_with_literal(literal) -> Library:
    const = Const(name=Name("a/C"), type=StringType(), value=LiteralConstant(literal))
    return Library(name="a", const_declarations=[const], declaration_order=[Name("a/C")])


@pytest.mark.unit
class TestStringLiteralValidation:
    """Tests for string literal text checks."""

    @pytest.mark.parametrize("text", ['"hello"', '""', '"say \\"hi\\""', '"tab\\t"', '"\\u00e9"'])
    def test_valid_string_literals(self, text: str) -> None:
        """Test well-formed string tokens pass."""
        validator = LiteralValidationVisitor()
        _library_with_literal(StringLiteral(text)).accept(validator)

        assert validator.errors == []

    @pytest.mark.parametrize(
        "text",
        [
            "hello",
            '"unterminated',
            '"',
            '"a" + "b"',
            '"bad \\q escape"',
            '"raw\nnewline"',
        ],
    )
    def test_invalid_string_literals(self, text: str) -> None:
        """Test malformed string tokens are rejected."""
        with pytest.raises(LiteralPreconditionError) as exc_info:
            _library_with_literal(StringLiteral(text)).accept(LiteralValidationVisitor())

        assert exc_info.value.literal_kind == "string"
        assert exc_info.value.text == text

    def test_precondition_error_is_validation_error(self) -> None:
        """Test the exception hierarchy."""
        with pytest.raises(ValidationError):
            _library_with_literal(StringLiteral("x")).accept(LiteralValidationVisitor())


@pytest.mark.unit
class TestNumericLiteralValidation:
    """Tests for numeric literal text checks."""

    @pytest.mark.parametrize("text", ["0", "42", "-7", "0x2A", "0XFF", "0b101", "3.14", "1e10", "-2.5E-3", ".5"])
    def test_valid_numeric_literals(self, text: str) -> None:
        """Test numeric tokens pass."""
        validator = LiteralValidationVisitor()
        _library_with_literal(NumericLiteral(text)).accept(validator)

        assert validator.errors == []

    @pytest.mark.parametrize("text", ["", "abc", "1 2", "0x", '"1"', "1,000"])
    def test_invalid_numeric_literals(self, text: str) -> None:
        """Test non-numeric text is rejected."""
        with pytest.raises(LiteralPreconditionError) as exc_info:
            _library_with_literal(NumericLiteral(text)).accept(LiteralValidationVisitor())

        assert exc_info.value.literal_kind == "numeric"


@pytest.mark.unit
class TestNonStrictMode:
    """Tests for error collection without raising."""

    def test_collects_all_errors(self) -> None:
        """Test that non-strict mode reports every bad literal in nested positions."""
        struct = Struct(
            name=Name("a/S"),
            members=[
                StructMember(
                    type=PrimitiveType(PrimitiveSubtype.INT32),
                    name="x",
                    offset=0,
                    maybe_default_value=LiteralConstant(NumericLiteral("nope")),
                ),
                StructMember(
                    type=StringType(),
                    name="s",
                    offset=8,
                    maybe_default_value=LiteralConstant(StringLiteral("unquoted")),
                ),
            ],
            size=24,
        )
        library = Library(name="a", struct_declarations=[struct], declaration_order=[Name("a/S")])
        validator = LiteralValidationVisitor(strict=False)

        library.accept(validator)

        assert len(validator.errors) == 2
        assert "Numeric literal" in validator.errors[0]
        assert "String literal" in validator.errors[1]

    def test_example_library_is_clean(self, example_library: Library) -> None:
        """Test the shared example passes validation."""
        validator = LiteralValidationVisitor(strict=False)
        example_library.accept(validator)

        assert validator.errors == []


@pytest.mark.unit
class TestNodeKindChecks:
    """Tests that the walk rejects nodes in the wrong slot."""

    def test_non_node_type(self) -> None:
        """Test a plain string where a type node belongs."""
        struct = Struct(name=Name("a/S"), members=[StructMember(type="uint32", name="m", offset=0)])  # type: ignore[arg-type]
        library = Library(name="a", struct_declarations=[struct], declaration_order=[Name("a/S")])

        with pytest.raises(UnhandledNodeKindError) as exc_info:
            library.accept(LiteralValidationVisitor(strict=False))

        assert exc_info.value.category == "type"
        assert exc_info.value.kind == "str"

    def test_wrong_constant_kind(self) -> None:
        """Test a literal used directly as a constant."""
        const = Const(name=Name("a/C"), type=StringType(), value=StringLiteral('"x"'))  # type: ignore[arg-type]
        library = Library(name="a", const_declarations=[const], declaration_order=[Name("a/C")])

        with pytest.raises(UnhandledNodeKindError) as exc_info:
            library.accept(LiteralValidationVisitor())

        assert exc_info.value.category == "constant"

    def test_wrong_declaration_section(self) -> None:
        """Test a struct placed among interface declarations."""
        library = Library(name="a", interface_declarations=[Struct(name=Name("a/S"))])  # type: ignore[list-item]

        with pytest.raises(UnhandledNodeKindError) as exc_info:
            library.accept(LiteralValidationVisitor())

        assert exc_info.value.category == "interface declaration"

    def test_non_string_literal_text(self) -> None:
        """Test literal text that is not a string is reported, not crashed on."""
        validator = LiteralValidationVisitor(strict=False)
        _library_with_literal(NumericLiteral(42)).accept(validator)  # type: ignore[arg-type]

        assert len(validator.errors) == 1
