"""Renderer options for idlir."""

from idlir.options.base import BaseRendererOptions, CloneFrozenMixin
from idlir.options.json_ir import JsonIrRendererOptions

__all__ = ["BaseRendererOptions", "CloneFrozenMixin", "JsonIrRendererOptions"]
