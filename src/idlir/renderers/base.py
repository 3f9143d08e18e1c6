#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/idlir/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that all library renderers inherit
from. The BaseRenderer provides a consistent interface for turning a resolved
Library into an output document.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from idlir.ast.nodes import Library
from idlir.exceptions import InvalidOptionsError
from idlir.options.base import BaseRendererOptions
from idlir.utils.io_utils import write_text


class BaseRenderer(ABC):
    """Abstract base class for all library renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class NameListRenderer(BaseRenderer):
        ...     def render_to_string(self, library):
        ...         return "\\n".join(str(name) for name in library.declaration_order)
        ...
        ...     def render(self, library, output):
        ...         self.write_text_output(self.render_to_string(library), output)

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, library: Library, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the library and write it to ``output``.

        Parameters
        ----------
        library : Library
            Resolved library to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination. Can be:
            - File path (str or Path)
            - File-like object in binary or text mode

        Raises
        ------
        RenderingError
            If rendering fails
        OutputWriteError
            If output cannot be written

        """
        pass

    @abstractmethod
    def render_to_string(self, library: Library) -> str:
        """Render the library to a string.

        Parameters
        ----------
        library : Library
            Resolved library to render

        Returns
        -------
        str
            Rendered document

        """
        pass

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                renderer_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to file or IO stream.

        Examples
        --------
        Write to StringIO:
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("{}\\n", buffer)
            >>> buffer.getvalue()
            '{}\\n'

        """
        write_text(text, output)
