"""Utility modules for CSS::Tiny."""

from .errors import (
    CssTinyError,
    MissingInputError,
    ConfigurationError,
    ParseError,
    MalformedBlockError,
    MalformedDeclarationError,
    StorageError,
    format_error,
)

__all__ = [
    "CssTinyError",
    "MissingInputError",
    "ConfigurationError",
    "ParseError",
    "MalformedBlockError",
    "MalformedDeclarationError",
    "StorageError",
    "format_error",
]
