"""Stylesheet serializer."""

from collections.abc import Mapping
from typing import List


def serialize(sheet: Mapping) -> str:
    """
    Render a stylesheet as text.

    Selectors are written in ascending order, and so are the properties of
    each selector, so the output for a given stylesheet is always the same.
    Grouped selectors from the source are written out as separate blocks.

    Args:
        sheet: A Stylesheet, or any mapping of selector to declarations

    Returns:
        The stylesheet text, e.g. ``"H1 {\\n\\tcolor: blue;\\n}\\n"``
    """
    lines: List[str] = []

    for selector in sorted(sheet):
        declarations = sheet[selector]
        lines.append(f"{selector} {{")
        lines.extend(f"\t{name}: {declarations[name]};" for name in sorted(declarations))
        lines.append("}")

    return "".join(f"{line}\n" for line in lines)
