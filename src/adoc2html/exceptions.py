#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the adoc2html library.

This module defines specialized exception classes for the error conditions
that can occur while reading AsciiDoc, rendering HTML and serving documents
from an upstream repository.

Non-fatal conditions (missing renderer for a node kind, unparseable link
targets, images without a target) are logged and never raised.

Exception Hierarchy
-------------------
- Adoc2HtmlError (base exception)

  - ValidationError (parameter/option validation)

  - FormatError (unknown backend)

  - ParsingError (AsciiDoc reading failures)

  - RenderingError (HTML generation failures)

  - ConfigError (configuration file problems)

  - UpstreamError (failures talking to the upstream document source)

"""

from typing import Any


class Adoc2HtmlError(Exception):
    """Base exception class for all adoc2html-specific errors.

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


class ValidationError(Adoc2HtmlError):
    """Exception raised for invalid input parameters or options.

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


class FormatError(Adoc2HtmlError):
    """Exception raised when an unknown backend is requested.

    Parameters
    ----------
    message : str, optional
        Custom error message
    format_type : str, optional
        The backend identifier that was requested
    supported_formats : list[str], optional
        Backend identifiers that are available

    """

    def __init__(
        self,
        message: str | None = None,
        format_type: str | None = None,
        supported_formats: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the format error."""
        if message is None:
            message = f"Unknown backend: {format_type!r}"
            if supported_formats:
                message += f". Supported backends: {', '.join(supported_formats)}"
        super().__init__(message, original_error=original_error)
        self.format_type = format_type
        self.supported_formats = supported_formats or []


class ParsingError(Adoc2HtmlError):
    """Exception raised when AsciiDoc source cannot be read.

    Parameters
    ----------
    message : str
        Description of the parsing error
    parsing_stage : str, optional
        Stage of reading that failed (e.g., "lexing", "table")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parsing_stage: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class RenderingError(Adoc2HtmlError):
    """Exception raised when HTML output cannot be produced.

    Parameters
    ----------
    message : str
        Description of the rendering error
    rendering_stage : str, optional
        Stage of rendering that failed (e.g., "postprocess")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        rendering_stage: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the rendering error."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


class ConfigError(Adoc2HtmlError):
    """Exception raised for unreadable or malformed configuration files.

    Parameters
    ----------
    message : str
        Description of the configuration error
    config_path : str, optional
        Path of the offending configuration file

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class UpstreamError(Adoc2HtmlError):
    """Exception raised when the upstream document source cannot be reached.

    HTTP error statuses are not raised: a 404 is reported as "not found" and
    other failure statuses are passed through to the caller. This exception
    covers transport failures only.

    Parameters
    ----------
    message : str
        Description of the failure
    url : str, optional
        The upstream URL that was requested
    status_code : int, optional
        HTTP status code, if a response was received

    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the upstream error."""
        super().__init__(message, original_error=original_error)
        self.url = url
        self.status_code = status_code


__all__ = [
    "Adoc2HtmlError",
    "ValidationError",
    "FormatError",
    "ParsingError",
    "RenderingError",
    "ConfigError",
    "UpstreamError",
]
