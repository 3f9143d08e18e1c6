#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the idlir library.

This module defines specialized exception classes for the error conditions
that can occur while loading a library description and generating its JSON
intermediate representation.

Exception Hierarchy
-------------------
- IdlIrError (base exception)

  - ValidationError (parameter/option/input validation)
    - InvalidOptionsError (wrong options class for a renderer)
    - LiteralPreconditionError (literal source text unsafe for verbatim output)

  - FileError (file access and I/O)
    - MalformedFileError (library description cannot be decoded)

  - RenderingError (output generation failures)
    - UnhandledNodeKindError (node kind outside the known set)
    - OutputWriteError (file write failures)

"""

from typing import Any


class IdlIrError(Exception):
    """Base exception class for all idlir-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(IdlIrError):
    """Exception raised for invalid input parameters, options or input nodes.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided to a renderer.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        renderer_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error with type information."""
        if message is None:
            message = (
                f"Renderer '{renderer_name}' expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type, original_error=original_error)
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class LiteralPreconditionError(ValidationError):
    """Exception raised when literal source text cannot be emitted safely.

    String literal text is copied verbatim into the output document, so it must
    already be a well-formed JSON string token. Numeric literal text must be a
    plain numeric token.

    Parameters
    ----------
    message : str
        Description of the violation
    literal_kind : str
        Kind of the offending literal (``"string"`` or ``"numeric"``)
    text : str
        The offending source text

    """

    def __init__(self, message: str, literal_kind: str, text: str):
        """Initialize the literal precondition error."""
        super().__init__(message, parameter_name="text", parameter_value=text)
        self.literal_kind = literal_kind
        self.text = text


class FileError(IdlIrError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class MalformedFileError(FileError):
    """Exception raised when a library description cannot be decoded.

    Parameters
    ----------
    message : str
        Description of the problem
    file_path : str, optional
        Path to the offending file
    location : str, optional
        Path within the document, e.g. ``struct_declarations[0].members[1].type``

    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        location: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the malformed file error."""
        if location:
            message = f"{location}: {message}"
        super().__init__(message, file_path=file_path, original_error=original_error)
        self.location = location


class RenderingError(IdlIrError):
    """Exception raised when output generation fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class UnhandledNodeKindError(RenderingError):
    """Exception raised when the generator meets a node kind it does not know.

    Parameters
    ----------
    category : str
        Node category that was being rendered (``"type"``, ``"literal"``, ...)
    kind : str
        Name of the unhandled kind (usually the Python class name)

    """

    def __init__(self, category: str, kind: str):
        """Initialize the unhandled node kind error."""
        super().__init__(f"Unhandled {category} node kind: {kind}", rendering_stage=category)
        self.category = category
        self.kind = kind


class OutputWriteError(RenderingError):
    """Exception raised when writing the output document fails.

    Parameters
    ----------
    file_path : str
        Path to the output file that failed to write
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path
