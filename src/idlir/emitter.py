#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/emitter.py
"""Low-level JSON text emission.

JsonEmitter writes JSON surface syntax into an in-memory buffer. It knows
nothing about the IDL: it offers delimiters, keys, separators, scalars and
indentation, and keeps the current indentation level as its only state.

Indentation contract: callers raise the level with ``push_indent()`` before the
first member of a non-empty container and lower it with ``pop_indent()`` after
the last one. Empty containers are written as ``{}`` or ``[]``.

Examples
--------
    >>> emitter = JsonEmitter()
    >>> emitter.begin_object()
    >>> emitter.push_indent()
    >>> emitter.write_key("name")
    >>> emitter.write_string("Point")
    >>> emitter.pop_indent()
    >>> emitter.end_object()
    >>> emitter.getvalue()
    '{\\n  "name": "Point"\\n}'

"""

from __future__ import annotations

from idlir.constants import DEFAULT_JSON_IR_INDENT, JSON_SHORT_ESCAPES
from idlir.exceptions import RenderingError


class JsonEmitter:
    """Stateful writer of JSON tokens.

    Parameters
    ----------
    indent : str, default = "  "
        Text written once per indentation level after each newline
    escape_control_characters : bool, default = True
        Escape characters below U+0020 inside strings. When False only ``"``
        and ``\\`` are escaped.

    """

    def __init__(self, indent: str = DEFAULT_JSON_IR_INDENT, escape_control_characters: bool = True):
        self.indent = indent
        self.escape_control_characters = escape_control_characters
        self._indent_level = 0
        self._output: list[str] = []

    @property
    def indent_level(self) -> int:
        """Current indentation level."""
        return self._indent_level

    def getvalue(self) -> str:
        """Return everything written so far."""
        return "".join(self._output)

    # Structure

    def begin_object(self) -> None:
        self._output.append("{")

    def end_object(self) -> None:
        self._output.append("}")

    def begin_array(self) -> None:
        self._output.append("[")

    def end_array(self) -> None:
        self._output.append("]")

    def write_key(self, name: str) -> None:
        """Write an object key followed by ``": "``."""
        self.write_string(name)
        self._output.append(": ")

    def write_separator(self) -> None:
        """Write a member separator and the indentation of the next member."""
        self._output.append(",")
        self.write_newline_and_indent()

    def write_newline_and_indent(self) -> None:
        self._output.append("\n")
        self._output.append(self.indent * self._indent_level)

    def push_indent(self) -> None:
        """Enter a non-empty container: raise the level, then break the line."""
        self._indent_level += 1
        self.write_newline_and_indent()

    def pop_indent(self) -> None:
        """Leave a non-empty container: lower the level, then break the line.

        Raises
        ------
        RenderingError
            If the level is already zero

        """
        if self._indent_level == 0:
            raise RenderingError("Indentation level would drop below zero", rendering_stage="emit")
        self._indent_level -= 1
        self.write_newline_and_indent()

    def write_eof(self) -> None:
        """Terminate the document with a single newline."""
        self._output.append("\n")

    # Scalars

    def write_boolean(self, value: bool) -> None:
        self._output.append("true" if value else "false")

    def write_string(self, value: str) -> None:
        """Write ``value`` as a quoted, escaped JSON string."""
        self._output.append('"')
        self._output.append(self.escape(value))
        self._output.append('"')

    def write_uint(self, value: int) -> None:
        """Write an unsigned integer in decimal.

        Raises
        ------
        RenderingError
            If ``value`` is negative, a bool or not an int

        """
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise RenderingError(f"Expected an unsigned integer, got {value!r}", rendering_stage="emit")
        self._output.append(str(value))

    def write_literal(self, text: str) -> None:
        """Copy pre-formatted text verbatim, without quoting or validation."""
        self._output.append(text)

    def escape(self, value: str) -> str:
        """Escape string content for use between double quotes."""
        parts: list[str] = []
        for char in value:
            if char == '"':
                parts.append('\\"')
            elif char == "\\":
                parts.append("\\\\")
            elif self.escape_control_characters and char < " ":
                parts.append(JSON_SHORT_ESCAPES.get(char) or f"\\u{ord(char):04x}")
            else:
                parts.append(char)
        return "".join(parts)
