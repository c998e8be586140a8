#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the htmlremark library.

This module defines the exception classes raised by htmlremark. Structural
problems in the input HTML are never reported through exceptions; handlers
recover locally and keep walking. Exceptions are reserved for invalid
configuration, unreadable inputs and failures of the output sink.

Exception Hierarchy
-------------------
- HtmlRemarkError (base exception)

  - ValidationError (options, preset names, config files, charsets)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, undecodable content)

  - NetworkError (URL fetch failures)

  - RenderingError (output generation failures)
    - OutputWriteError (sink write failures)

"""

from __future__ import annotations

from typing import Any


class HtmlRemarkError(Exception):
    """Base exception class for all htmlremark-specific errors.

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


class ValidationError(HtmlRemarkError):
    """Exception raised for invalid options, preset names or config values.

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


class FileError(HtmlRemarkError):
    """Base exception for file access and I/O errors.

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


class FileNotFoundError(FileError):
    """Exception raised when an input file does not exist."""

    def __init__(self, file_path: str, original_error: Exception | None = None):
        """Initialize with the missing path."""
        super().__init__(f"File not found: {file_path}", file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when an input file exists but cannot be read or decoded."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize with the unreadable path."""
        if message is None:
            message = f"Unable to read input file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class NetworkError(HtmlRemarkError):
    """Exception raised when an HTML document cannot be fetched from a URL.

    Parameters
    ----------
    url : str
        The URL that failed
    message : str, optional
        Custom error message
    original_error : Exception, optional
        The underlying network exception

    """

    def __init__(self, url: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the network error."""
        if message is None:
            message = f"Failed to fetch {url}"
        super().__init__(message, original_error=original_error)
        self.url = url


class RenderingError(HtmlRemarkError):
    """Exception raised when output rendering fails.

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


class OutputWriteError(RenderingError):
    """Exception raised when the backing stream of a BlockWriter fails.

    Parameters
    ----------
    target : str
        Description of the stream that failed (file name or repr)
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, target: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output to {target}"
        super().__init__(message, rendering_stage="stream_write", original_error=original_error)
        self.target = target
