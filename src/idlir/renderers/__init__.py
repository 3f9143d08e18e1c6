#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/idlir/renderers/__init__.py
"""Renderers turning resolved libraries into output documents.

Available renderers:
- JsonIrRenderer: the JSON intermediate representation read by binding generators

Examples
--------
    >>> from idlir.renderers import JsonIrRenderer
    >>> text = JsonIrRenderer().render_to_string(library)

"""

from idlir.renderers.base import BaseRenderer
from idlir.renderers.json_ir import JsonIrRenderer

__all__ = ["BaseRenderer", "JsonIrRenderer"]
