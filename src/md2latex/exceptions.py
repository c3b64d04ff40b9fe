#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the md2latex library.

This module defines specialized exception classes for the error conditions
that can occur while converting Markdown to LaTeX and compiling the result.
These exceptions provide more specific error information than generic
built-ins.

Exception Hierarchy
-------------------
- Md2LatexError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a component)

  - FileError (file access and I/O)

  - RenderingError (output generation failures)

  - CompilationError (LaTeX engine failures)

  - DependencyError (missing LaTeX engine or other external tool)

"""

from typing import Any


class Md2LatexError(Exception):
    """Base exception class for all md2latex-specific errors.

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


class ValidationError(Md2LatexError):
    """Exception raised for invalid input parameters or options.

    Raised before any output is produced when a document or table option is
    outside its recognized set of values.

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

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

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
    """Exception raised when an incorrect options class is provided to a component.

    Parameters
    ----------
    component_name : str
        Name of the component that received invalid options
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


class FileError(Md2LatexError):
    """Exception raised when an input or output file cannot be read or written.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class RenderingError(Md2LatexError):
    """Exception raised when LaTeX output cannot be produced.

    Parameters
    ----------
    message : str
        Description of the failure
    rendering_stage : str, optional
        Pipeline step that failed (``"tokenizing"`` or ``"rendering"``)
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error with the failing stage."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


class CompilationError(Md2LatexError):
    """Exception raised when the LaTeX engine fails to produce a PDF.

    Parameters
    ----------
    message : str
        Description of the failure
    log : str, optional
        Engine log output, when one was produced

    """

    def __init__(self, message: str, log: str | None = None, original_error: Exception | None = None):
        """Initialize the compilation error with the engine log."""
        super().__init__(message, original_error=original_error)
        self.log = log


class DependencyError(Md2LatexError):
    """Exception raised when a required external tool is not available.

    Parameters
    ----------
    tool_name : str
        Name of the missing executable (e.g. ``xelatex``)
    message : str, optional
        Custom error message

    """

    def __init__(self, tool_name: str, message: str | None = None):
        """Initialize the dependency error with the missing tool name."""
        if message is None:
            message = f"'{tool_name}' was not found on PATH. Install a TeX distribution that provides it."
        super().__init__(message)
        self.tool_name = tool_name
