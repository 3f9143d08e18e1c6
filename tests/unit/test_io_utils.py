#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for structured file input and output destination handling."""

from io import BytesIO, StringIO
from pathlib import Path

import pytest

from idlir.exceptions import FileError, MalformedFileError, OutputWriteError, RenderingError
from idlir.utils.io_utils import read_structured_file, write_text


@pytest.mark.unit
class TestWriteText:
    """Tests for write_text."""

    def test_path(self, tmp_path: Path) -> None:
        """Test writing to a Path."""
        output = tmp_path / "doc.json"
        write_text("{}\n", output)

        assert output.read_bytes() == b"{}\n"

    def test_str_path(self, tmp_path: Path) -> None:
        """Test writing to a path given as str."""
        output = tmp_path / "doc.json"
        write_text("{}\n", str(output))

        assert output.read_text(encoding="utf-8") == "{}\n"

    def test_utf8_encoding(self, tmp_path: Path) -> None:
        """Test non-ASCII text is stored as UTF-8."""
        output = tmp_path / "doc.json"
        write_text('"café"', output)

        assert output.read_bytes() == '"café"'.encode("utf-8")

    def test_string_io(self) -> None:
        """Test writing to a text buffer."""
        buffer = StringIO()
        write_text("abc", buffer)

        assert buffer.getvalue() == "abc"

    def test_bytes_io(self) -> None:
        """Test writing to a binary buffer."""
        buffer = BytesIO()
        write_text("é", buffer)

        assert buffer.getvalue() == "é".encode("utf-8")

    def test_binary_file(self, tmp_path: Path) -> None:
        """Test writing to a file opened in binary mode."""
        output = tmp_path / "doc.json"
        with open(output, "wb") as f:
            write_text("[]", f)

        assert output.read_bytes() == b"[]"

    def test_text_file(self, tmp_path: Path) -> None:
        """Test writing to a file opened in text mode."""
        output = tmp_path / "doc.json"
        with open(output, "w", encoding="utf-8") as f:
            write_text("[]", f)

        assert output.read_text(encoding="utf-8") == "[]"

    def test_directory_path(self, tmp_path: Path) -> None:
        """Test that OS errors become OutputWriteError."""
        with pytest.raises(OutputWriteError) as exc_info:
            write_text("{}", tmp_path)

        assert isinstance(exc_info.value, RenderingError)
        assert exc_info.value.file_path == str(tmp_path)
        assert isinstance(exc_info.value.original_error, OSError)

    def test_unsupported_output(self) -> None:
        """Test an object that is neither a path nor a stream."""
        with pytest.raises(TypeError, match="Unsupported output type"):
            write_text("{}", 42)  # type: ignore[arg-type]


@pytest.mark.unit
class TestReadStructuredFile:
    """Tests for read_structured_file."""

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("doc.json", '{"name": "fidl.t", "size": 4}'),
            ("doc.yaml", "name: fidl.t\nsize: 4\n"),
            ("doc.yml", "{name: fidl.t, size: 4}\n"),
            ("doc.toml", 'name = "fidl.t"\nsize = 4\n'),
        ],
    )
    def test_formats_by_suffix(self, tmp_path: Path, filename: str, content: str) -> None:
        """Test each supported suffix decodes to the same mapping."""
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")

        assert read_structured_file(path) == {"name": "fidl.t", "size": 4}

    def test_suffix_is_case_insensitive(self, tmp_path: Path) -> None:
        """Test an upper-case suffix."""
        path = tmp_path / "DOC.JSON"
        path.write_text("[]", encoding="utf-8")

        assert read_structured_file(path) == []

    def test_missing_file_names_what(self, tmp_path: Path) -> None:
        """Test the description of the file appears in the message."""
        with pytest.raises(FileError, match="^Widget list does not exist") as exc_info:
            read_structured_file(tmp_path / "none.json", "widget list")

        assert not isinstance(exc_info.value, MalformedFileError)

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        """Test a directory path."""
        with pytest.raises(FileError, match="does not exist"):
            read_structured_file(tmp_path)

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        """Test a file without a known suffix."""
        path = tmp_path / "doc"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(MalformedFileError, match=r"Unsupported file format: \(none\)"):
            read_structured_file(path)

    @pytest.mark.parametrize("filename,content", [("doc.json", "{"), ("doc.yaml", "a: [1"), ("doc.toml", "a = ")])
    def test_undecodable(self, tmp_path: Path, filename: str, content: str) -> None:
        """Test content that does not decode."""
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")

        with pytest.raises(MalformedFileError, match="Cannot decode") as exc_info:
            read_structured_file(path)

        assert exc_info.value.file_path == str(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Test bytes that are not UTF-8."""
        path = tmp_path / "doc.yaml"
        path.write_bytes(b"name: \xff\xfe\n")

        with pytest.raises(MalformedFileError, match="Cannot decode"):
            read_structured_file(path)
