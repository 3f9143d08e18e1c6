#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/api.py
"""Top-level entry points for JSON IR generation."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Union

from idlir.ast.nodes import Library
from idlir.options.json_ir import JsonIrRendererOptions
from idlir.renderers.json_ir import JsonIrRenderer


def _resolve_options(options: JsonIrRendererOptions | None, overrides: dict[str, Any]) -> JsonIrRendererOptions:
    options = options or JsonIrRendererOptions()
    return options.create_updated(**overrides) if overrides else options


def generate_json(library: Library, options: JsonIrRendererOptions | None = None, **kwargs: Any) -> str:
    """Generate the JSON IR document for a resolved library.

    Parameters
    ----------
    library : Library
        The resolved library
    options : JsonIrRendererOptions, optional
        Rendering options
    **kwargs
        Individual option overrides, e.g. ``indent="    "``

    Returns
    -------
    str
        One JSON document terminated by a single newline

    Examples
    --------
        >>> from idlir import generate_json
        >>> from idlir.ast import Library
        >>> print(generate_json(Library(name="fidl.empty")), end="")
        {
          "name": "fidl.empty",
          "library_dependencies": [],
          "const_declarations": [],
          "enum_declarations": [],
          "interface_declarations": [],
          "struct_declarations": [],
          "union_declarations": [],
          "declaration_order": [],
          "declarations": {}
        }

    """
    return JsonIrRenderer(_resolve_options(options, kwargs)).render_to_string(library)


def write_json(
    library: Library,
    output: Union[str, Path, IO[bytes], IO[str]],
    options: JsonIrRendererOptions | None = None,
    **kwargs: Any,
) -> None:
    """Generate the JSON IR document and write it to a path or stream.

    Parameters
    ----------
    library : Library
        The resolved library
    output : str, Path, IO[bytes], or IO[str]
        Output destination
    options : JsonIrRendererOptions, optional
        Rendering options
    **kwargs
        Individual option overrides

    """
    JsonIrRenderer(_resolve_options(options, kwargs)).render(library, output)
