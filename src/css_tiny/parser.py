"""Stylesheet text parser.

The accepted grammar is deliberately small::

    stylesheet  := block*
    block       := selectors "{" body "}"
    selectors   := selector ("," selector)*
    body        := declaration (";" declaration)* [";"]
    declaration := name ":" " " value

Newlines and tabs are flattened to spaces and ``/* ... */`` comments are
removed before the text is split into blocks. Exactly one space must
follow the colon; values are opaque strings with surrounding whitespace
trimmed.
"""

import re
from typing import List, Tuple

from .stylesheet import Declarations, Stylesheet
from .utils.errors import (
    MalformedBlockError,
    MalformedDeclarationError,
    MissingInputError,
)

_FLATTEN = str.maketrans("\n\t", "  ")
_WHITESPACE_RUN = re.compile(r"\s{2,}")
_PROPERTY_NAME = re.compile(r"[\w.-]+")


def parse(text: str) -> Stylesheet:
    """
    Parse stylesheet text into a new Stylesheet.

    Parsing is all-or-nothing: the first malformed block or declaration
    aborts the parse and nothing is returned. A selector that appears in
    several blocks collects the properties of all of them, later values
    overwriting earlier ones.

    Args:
        text: The stylesheet source

    Returns:
        The parsed Stylesheet

    Raises:
        MissingInputError: If no text was given
        MalformedBlockError: If a block is not of the form ``selectors { body }``
            or a comment is never closed
        MalformedDeclarationError: If a declaration is not of the form ``name: value``
    """
    if text is None:
        raise MissingInputError("No stylesheet text was given")

    sheet = Stylesheet()
    contents = _strip_comments(text.translate(_FLATTEN))

    for block in _split_blocks(contents):
        group, body = _split_block(block)
        targets = [sheet.declarations_for(selector) for selector in _split_selectors(group, block)]

        for fragment in body.split(";"):
            if not fragment.strip():
                continue
            name, value = _split_declaration(fragment, group)
            for declarations in targets:
                declarations[name] = value

    return sheet


def parse_declarations(text: str, selector: str = "") -> Declarations:
    """Parse the body of a single block, e.g. ``"color: red; margin: 0"``."""
    if text is None:
        raise MissingInputError("No declaration text was given")

    declarations: Declarations = {}
    for fragment in _strip_comments(text.translate(_FLATTEN)).split(";"):
        if not fragment.strip():
            continue
        name, value = _split_declaration(fragment, selector)
        declarations[name] = value
    return declarations


def _strip_comments(text: str) -> str:
    pieces = []
    position = 0
    while True:
        start = text.find("/*", position)
        if start == -1:
            pieces.append(text[position:])
            return "".join(pieces)

        end = text.find("*/", start + 2)
        if end == -1:
            raise MalformedBlockError(
                f"Unterminated comment '{text[start:]}'", block=text[start:]
            )

        pieces.append(text[position:start])
        position = end + 2


def _split_blocks(text: str) -> List[str]:
    # Every block keeps its closing brace; trailing blank text is dropped.
    parts = text.split("}")
    blocks = [part + "}" for part in parts[:-1]]
    blocks.append(parts[-1])
    return [block for block in blocks if block.strip()]


def _split_block(block: str) -> Tuple[str, str]:
    stripped = block.strip()
    open_at = stripped.find("{")
    if open_at == -1 or not stripped.endswith("}"):
        raise MalformedBlockError(f"Invalid or unexpected style data '{block}'", block=block)

    group = stripped[:open_at].strip()
    if not group:
        raise MalformedBlockError(f"Missing selector in style data '{block}'", block=block)

    return _WHITESPACE_RUN.sub(" ", group), stripped[open_at + 1 : -1]


def _split_selectors(group: str, block: str) -> List[str]:
    selectors = [selector.strip() for selector in group.split(",")]
    selectors = [selector for selector in selectors if selector]
    if not selectors:
        raise MalformedBlockError(f"Missing selector in style data '{block}'", block=block)
    # Repeats inside one group would alias the same declarations.
    return list(dict.fromkeys(selectors))


def _split_declaration(fragment: str, group: str) -> Tuple[str, str]:
    name, colon, value = fragment.partition(":")
    name = name.strip()
    if not colon or not _PROPERTY_NAME.fullmatch(name) or value[:1] != " ":
        raise MalformedDeclarationError(
            f"Invalid or unexpected style data '{fragment}' in style '{group}'",
            fragment=fragment,
            selector=group,
        )
    return name, value.strip()
