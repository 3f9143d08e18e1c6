#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/utils/io_utils.py
"""I/O utilities for structured input files and output destinations.

Library descriptions and configuration files are both JSON, YAML or TOML
mappings and are decoded by ``read_structured_file``. Rendered documents leave
memory through ``write_text``, which handles file paths, text streams and
binary streams.

"""

from __future__ import annotations

import io
import json
import sys
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Any, Union, cast

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from idlir.exceptions import FileError, MalformedFileError, OutputWriteError

STRUCTURED_SUFFIXES = (".json", ".yaml", ".yml", ".toml")


def read_structured_file(path: Union[str, Path], what: str = "file") -> Any:
    """Decode a JSON, YAML or TOML file chosen by its suffix.

    Parameters
    ----------
    path : str or Path
        File to read
    what : str, default "file"
        Description of the file used in error messages,
        e.g. ``"library description"``

    Returns
    -------
    Any
        The decoded document. An empty YAML file decodes to ``None``.

    Raises
    ------
    FileError
        If the file does not exist or cannot be read
    MalformedFileError
        If the suffix is not supported or the content cannot be decoded

    """
    path = Path(path)
    if not path.is_file():
        raise FileError(f"{what.capitalize()} does not exist: {path}", file_path=str(path))

    ext = path.suffix.lower()
    if ext not in STRUCTURED_SUFFIXES:
        raise MalformedFileError(
            f"Unsupported {what} format: {ext or '(none)'}. Use .json, .yaml or .toml", file_path=str(path)
        )

    try:
        if ext == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f) if ext == ".json" else yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise MalformedFileError(f"Cannot decode {path}: {e}", file_path=str(path), original_error=e) from e
    except OSError as e:
        raise FileError(f"Cannot read {path}: {e}", file_path=str(path), original_error=e) from e


def write_text(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write text content to a path or a file-like object.

    Parameters
    ----------
    content : str
        Text to write. Encoded as UTF-8 for paths and binary streams.
    output : str, Path, IO[bytes], or IO[str]
        Output destination

    Raises
    ------
    OutputWriteError
        If the file at ``output`` cannot be written
    TypeError
        If output type is not supported

    Examples
    --------
    Write to file path:
        >>> write_text('{}\\n', "library.json")

    Write to a binary buffer:
        >>> buffer = BytesIO()
        >>> write_text("{}", buffer)
        >>> buffer.getvalue()
        b'{}'

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(output_path), original_error=e) from e
        return

    if hasattr(output, "write"):
        # Detect binary or text mode: concrete types first, then io base classes, then mode
        if isinstance(output, BytesIO):
            is_binary_mode = True
        elif isinstance(output, StringIO):
            is_binary_mode = False
        elif isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        elif hasattr(output, "mode"):
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode
        else:
            is_binary_mode = False

        if is_binary_mode:
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["read_structured_file", "write_text"]
