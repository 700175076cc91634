"""Custom error classes for CSS::Tiny."""

from typing import Optional, Dict, Any


class CssTinyError(Exception):
    """Base exception class for CSS::Tiny."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MissingInputError(CssTinyError):
    """Exception raised when a required argument is missing or empty."""

    pass


class ConfigurationError(CssTinyError):
    """Exception raised when configuration is invalid."""

    pass


class ParseError(CssTinyError):
    """Exception raised when stylesheet text cannot be parsed."""

    pass


class MalformedBlockError(ParseError):
    """Exception raised when a block does not have the ``selector { body }`` shape."""

    def __init__(self, message: str, block: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.block = block


class MalformedDeclarationError(ParseError):
    """Exception raised when a declaration is not of the form ``name: value``."""

    def __init__(
        self,
        message: str,
        fragment: str,
        selector: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.fragment = fragment
        self.selector = selector


class StorageError(CssTinyError):
    """Exception raised when reading or writing a stylesheet file fails."""

    def __init__(self, message: str, path: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.path = path


class NotFoundError(StorageError):
    pass


class NotAFileError(StorageError):
    pass


class PermissionDeniedError(StorageError):
    pass


class LockFailedError(StorageError):
    pass


class OpenFailedError(StorageError):
    pass


class ReadFailedError(StorageError):
    pass


class WriteFailedError(StorageError):
    pass


class CloseFailedError(StorageError):
    pass


def format_error(error: CssTinyError) -> str:
    """Format an error into a readable single line."""
    parts = []

    if isinstance(error, StorageError):
        parts.append(f"File: {error.path}")

    if isinstance(error, MalformedDeclarationError):
        parts.append(f"Selector: {error.selector}")

    location = ", ".join(parts)
    if location:
        return f"{location}: {error.message}"
    return error.message
