#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/options/json_ir.py
"""Options for JSON IR rendering.

This module provides configuration options for rendering resolved IDL
libraries to the JSON intermediate representation.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from idlir.constants import (
    DEFAULT_JSON_IR_ESCAPE_CONTROL_CHARACTERS,
    DEFAULT_JSON_IR_INDENT,
    DEFAULT_JSON_IR_VALIDATE_LITERALS,
)
from idlir.options.base import BaseRendererOptions


@dataclass(frozen=True)
class JsonIrRendererOptions(BaseRendererOptions):
    """Options for rendering libraries to the JSON IR.

    Parameters
    ----------
    indent : str, default = "  "
        Text written once per indentation level. Only spaces and tabs are
        allowed so the output stays valid JSON.
    escape_control_characters : bool, default = True
        Escape control characters (``\\n``, ``\\t``, ...) inside strings. When
        False only ``"`` and ``\\`` are escaped.
    validate_literals : bool, default = True
        Check literal source text before generation. String literal text is
        written verbatim and must already be a valid JSON string.

    Examples
    --------
    Four-space indentation:
        >>> options = JsonIrRendererOptions(indent="    ")

    Skip the literal precondition check:
        >>> options = JsonIrRendererOptions(validate_literals=False)

    """

    indent: str = field(
        default=DEFAULT_JSON_IR_INDENT,
        metadata={"help": "Indentation unit written per nesting level (spaces or tabs)"},
    )
    escape_control_characters: bool = field(
        default=DEFAULT_JSON_IR_ESCAPE_CONTROL_CHARACTERS,
        metadata={"help": "Escape control characters inside JSON strings"},
    )
    validate_literals: bool = field(
        default=DEFAULT_JSON_IR_VALIDATE_LITERALS,
        metadata={"help": "Check literal source text before writing it verbatim"},
    )

    def __post_init__(self) -> None:
        """Validate the indentation unit.

        Raises
        ------
        ValueError
            If ``indent`` contains characters other than spaces and tabs.

        """
        super().__post_init__()
        if not isinstance(self.indent, str) or self.indent.strip(" \t"):
            raise ValueError(f"indent must contain only spaces and tabs, got {self.indent!r}")
