"""CSS::Tiny - read and write simple CSS stylesheets with as little code as possible."""

__version__ = "0.1.0"

from .stylesheet import Stylesheet
from .parser import parse, parse_declarations
from .serializer import serialize
from .storage import StylesheetStorage, load, store
from .utils.errors import (
    CssTinyError,
    MissingInputError,
    ParseError,
    MalformedBlockError,
    MalformedDeclarationError,
    StorageError,
)

__all__ = [
    "Stylesheet",
    "parse",
    "parse_declarations",
    "serialize",
    "StylesheetStorage",
    "load",
    "store",
    "CssTinyError",
    "MissingInputError",
    "ParseError",
    "MalformedBlockError",
    "MalformedDeclarationError",
    "StorageError",
    "__version__",
]
