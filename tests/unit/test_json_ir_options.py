#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for JSON IR options and the top-level API."""

import dataclasses
from io import StringIO

import pytest

from idlir import generate_json, write_json
from idlir.ast import Library
from idlir.options import JsonIrRendererOptions


@pytest.mark.unit
class TestJsonIrRendererOptions:
    """Tests for option defaults and validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        options = JsonIrRendererOptions()

        assert options.indent == "  "
        assert options.escape_control_characters is True
        assert options.validate_literals is True

    @pytest.mark.parametrize("indent", ["", " ", "\t", " \t "])
    def test_whitespace_indent_accepted(self, indent: str) -> None:
        """Test spaces and tabs are allowed."""
        assert JsonIrRendererOptions(indent=indent).indent == indent

    @pytest.mark.parametrize("indent", ["-", "\n", "  x"])
    def test_other_indent_rejected(self, indent: str) -> None:
        """Test indentation that would break the document."""
        with pytest.raises(ValueError, match="spaces and tabs"):
            JsonIrRendererOptions(indent=indent)

    def test_frozen(self) -> None:
        """Test options cannot be mutated."""
        options = JsonIrRendererOptions()

        with pytest.raises(dataclasses.FrozenInstanceError):
            options.indent = "\t"  # type: ignore[misc]

    def test_create_updated(self) -> None:
        """Test cloning with changes leaves the original alone."""
        options = JsonIrRendererOptions()
        updated = options.create_updated(validate_literals=False)

        assert updated.validate_literals is False
        assert options.validate_literals is True
        assert updated.indent == options.indent

    def test_create_updated_validates(self) -> None:
        """Test that clones are validated too."""
        with pytest.raises(ValueError):
            JsonIrRendererOptions().create_updated(indent="x")

    def test_every_field_has_help(self) -> None:
        """Test field metadata carries only the help text the command line reads."""
        for field in dataclasses.fields(JsonIrRendererOptions):
            assert set(field.metadata) == {"help"}
            assert field.metadata["help"]


@pytest.mark.unit
class TestApi:
    """Tests for generate_json and write_json."""

    def test_generate_json_kwargs(self, empty_library: Library) -> None:
        """Test option overrides given as keyword arguments."""
        text = generate_json(empty_library, indent="\t")

        assert text.startswith('{\n\t"name": "fidl.empty",')

    def test_generate_json_options_and_kwargs(self, empty_library: Library) -> None:
        """Test keyword arguments override an options object."""
        options = JsonIrRendererOptions(indent="\t")

        assert generate_json(empty_library, options, indent=" ").startswith('{\n "name"')

    def test_write_json_stream(self, empty_library: Library) -> None:
        """Test writing to a stream."""
        buffer = StringIO()
        write_json(empty_library, buffer)

        assert buffer.getvalue() == generate_json(empty_library)
