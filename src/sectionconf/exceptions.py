#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the sectionconf library.

This module defines specialized exception classes for the error conditions
that can occur while building, parsing, serializing and decoding
configuration documents.

Exception Hierarchy
-------------------
- SectionConfError (base exception)

  - ValidationError (argument/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - StructureError (document invariant violations, e.g. removing the global section)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, locked files)

  - ParsingError (text grammar failures, carries the 1-based line number)

  - DecodeError (malformed binary data)
    - TruncatedDataError (short read)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

Positional access out of range raises the built-in ``IndexError``.

"""

from typing import Any


class SectionConfError(Exception):
    """Base exception class for all sectionconf-specific errors.

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


class ValidationError(SectionConfError):
    """Exception raised for invalid arguments or options.

    This covers empty or ``None`` names, values of the wrong type, and
    option values outside their allowed range.

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
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    component_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class StructureError(SectionConfError):
    """Exception raised when an operation would break a document invariant.

    The only structurally protected entity is the implicit global section,
    which may be cleared but never removed or replaced.
    """


class FileError(SectionConfError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when a configuration file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"Configuration file not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when a configuration file cannot be read."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(SectionConfError):
    """Exception raised when configuration text violates the line grammar.

    Parsing stops at the first failure; no partial document is returned.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    line_number : int, optional
        1-based source line where the failure was detected
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    line_number : int or None
        1-based source line of the failure
    reason : str
        The message without the line suffix

    """

    def __init__(self, message: str, line_number: int | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        full_message = f"{message} (line {line_number})" if line_number is not None else message
        super().__init__(full_message, original_error)
        self.reason = message
        self.line_number = line_number


class DecodeError(SectionConfError):
    """Exception raised when binary configuration data is malformed.

    Parameters
    ----------
    message : str
        Description of the decoding failure
    offset : int, optional
        Byte offset at which the failure was detected

    """

    def __init__(self, message: str, offset: int | None = None, original_error: Exception | None = None):
        """Initialize the decode error."""
        full_message = f"{message} (offset {offset})" if offset is not None else message
        super().__init__(full_message, original_error)
        self.offset = offset


class TruncatedDataError(DecodeError):
    """Exception raised when binary data ends before the layout is complete."""

    def __init__(self, expected: int, available: int, offset: int):
        """Initialize the truncation error."""
        super().__init__(f"Unexpected end of data: needed {expected} byte(s), {available} available", offset=offset)
        self.expected = expected
        self.available = available


class RenderingError(SectionConfError):
    """Exception raised when a configuration cannot be serialized.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing an output file fails."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path
