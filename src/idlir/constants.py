#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the idlir library.

Constants are organized by category:
1. Type Definitions - Literal types for declaration kinds
2. JSON IR Rendering - Defaults for the JSON IR renderer
3. Document Schema - Fixed key layout of the top-level document
4. Configuration - Config file discovery
5. Logging - Command line log levels
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DeclarationKind = Literal["const", "enum", "interface", "struct", "union"]

# =============================================================================
# JSON IR Rendering
# =============================================================================

DEFAULT_JSON_IR_INDENT = "  "
DEFAULT_JSON_IR_ESCAPE_CONTROL_CHARACTERS = True
DEFAULT_JSON_IR_VALIDATE_LITERALS = True

# Short escapes JSON defines for control characters; the rest use \u00XX
JSON_SHORT_ESCAPES = {
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# =============================================================================
# Document Schema
# =============================================================================

# Per-kind declaration arrays, in document order, with their index kind string
DECLARATION_SECTIONS: tuple[tuple[str, DeclarationKind], ...] = (
    ("const_declarations", "const"),
    ("enum_declarations", "enum"),
    ("interface_declarations", "interface"),
    ("struct_declarations", "struct"),
    ("union_declarations", "union"),
)

# =============================================================================
# Configuration
# =============================================================================

CONFIG_ENV_VAR = "IDLIR_CONFIG"
CONFIG_FILENAMES = [".idlir.toml", ".idlir.yaml", ".idlir.yml", ".idlir.json"]
PYPROJECT_TOOL_SECTION = "idlir"

# =============================================================================
# Logging
# =============================================================================

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
