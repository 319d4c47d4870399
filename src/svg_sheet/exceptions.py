"""Custom exception hierarchy for the SVG sprite sheet builder.

This module defines domain-specific exceptions to provide better error handling,
clearer intent, and improved debugging capabilities throughout the application.
Every exception carries a human-readable message and a ``details`` dictionary
holding the offending file path and values, so callers can report errors
without parsing message text.

Exception Hierarchy:
    SvgSheetError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   └── ConfigFileNotFoundError
    ├── FileSystemError
    │   ├── DirectoryReadError
    │   ├── FileReadError
    │   └── FileWriteError
    ├── SvgInputError
    │   ├── NoSvgFilesError
    │   ├── SvgParseError
    │   ├── InvalidDimensionError
    │   ├── InvalidViewBoxError
    │   ├── InvalidIdAfterSanitizeError
    │   └── RootIdReferencedError
    ├── IdCollisionError
    └── WarningsPresentError
"""

from typing import Any


# Base Exception
class SvgSheetError(Exception):
    """Base exception for all sprite sheet builder errors.

    This is the root exception that all custom exceptions inherit from,
    allowing for broad exception handling when needed.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(SvgSheetError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values.

    Example:
        raise InvalidConfigError(
            "Invalid configuration file",
            {"path": "svg-sheet.yaml", "error": "debounce_ms: Input should be a valid integer"}
        )
    """
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when an explicitly requested configuration file cannot be found.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found: /etc/svg-sheet.yaml",
            {"path": "/etc/svg-sheet.yaml", "cwd": "/home/user/icons"}
        )
    """
    pass


# File system Exceptions
class FileSystemError(SvgSheetError):
    """Base exception for file system access errors."""
    pass


class DirectoryReadError(FileSystemError):
    """Raised when the input directory cannot be listed.

    Example:
        raise DirectoryReadError(
            "failed to read directory: svgs",
            {"path": "svgs", "error": "No such file or directory"}
        )
    """
    pass


class FileReadError(FileSystemError):
    """Raised when an input file cannot be read or decoded.

    Example:
        raise FileReadError(
            "failed to read file: svgs/a.svg",
            {"path": "svgs/a.svg", "error": "Permission denied"}
        )
    """
    pass


class FileWriteError(FileSystemError):
    """Raised when the sprite cannot be written.

    Example:
        raise FileWriteError(
            "failed to write file: sprite.svg",
            {"path": "sprite.svg", "error": "Read-only file system"}
        )
    """
    pass


# Input Exceptions
class SvgInputError(SvgSheetError):
    """Base exception for invalid or unusable SVG input."""
    pass


class NoSvgFilesError(SvgInputError):
    """Raised when the input directory holds no candidate SVG files.

    Example:
        raise NoSvgFilesError(
            "no SVG files found in directory: svgs",
            {"path": "svgs"}
        )
    """
    pass


class SvgParseError(SvgInputError):
    """Raised when the root <svg> tag of a file cannot be parsed.

    Example:
        raise SvgParseError(
            "failed to parse svg (a.svg): missing closing </svg>",
            {"path": "a.svg", "reason": "missing closing </svg>"}
        )
    """
    pass


class InvalidDimensionError(SvgInputError):
    """Raised when a root width or height has an unsupported value.

    Example:
        raise InvalidDimensionError(
            "invalid width='50%' in a.svg; expected positive number (optionally 'px')",
            {"path": "a.svg", "attribute": "width", "value": "50%"}
        )
    """
    pass


class InvalidViewBoxError(SvgInputError):
    """Raised when a root viewBox is malformed or has non-positive dimensions.

    Example:
        raise InvalidViewBoxError(
            "invalid viewBox='0 0 0 0' in a.svg; expected four numbers ...",
            {"path": "a.svg", "value": "0 0 0 0"}
        )
    """
    pass


class InvalidIdAfterSanitizeError(SvgInputError):
    """Raised when a root id sanitizes to an empty string.

    Example:
        raise InvalidIdAfterSanitizeError(
            "id '123' in a.svg is empty after sanitization",
            {"path": "a.svg", "original": "123"}
        )
    """
    pass


class RootIdReferencedError(SvgInputError):
    """Raised when the root id is referenced from the file's own content.

    Moving such an id to data-id would break the reference.

    Example:
        raise RootIdReferencedError(
            "root <svg> id 'root' in a.svg is referenced inside the document; ...",
            {"path": "a.svg", "id": "root"}
        )
    """
    pass


class IdCollisionError(SvgSheetError):
    """Raised when two input files emit the same data-id.

    Example:
        raise IdCollisionError(
            "duplicate id 'dup' found in b.svg; already defined in a.svg",
            {"id": "dup", "first_path": "a.svg", "second_path": "b.svg"}
        )
    """
    pass


class WarningsPresentError(SvgSheetError):
    """Raised after a successful write when warnings occurred and fail-on-warn is set.

    Example:
        raise WarningsPresentError(
            "aborting due to 3 warning(s) (use --no-fail-on-warn to ignore)",
            {"count": 3}
        )
    """
    pass


# Utility function for exception chaining
def chain_exception(new_exception: SvgSheetError, cause: Exception) -> SvgSheetError:
    """Chain a new exception with its underlying cause.

    This utility function ensures proper exception chaining for better
    debugging and error tracking.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            text = read_text(path)
        except OSError as e:
            raise chain_exception(
                FileReadError(f"failed to read file: {path}", {"path": str(path)}),
                e
            )
    """
    new_exception.__cause__ = cause
    return new_exception
