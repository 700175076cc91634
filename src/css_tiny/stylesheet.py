"""In-memory stylesheet model."""

import os
from collections.abc import Mapping, MutableMapping
from typing import Dict, Iterator, List, Optional, Union

from .utils.errors import MissingInputError

Declarations = Dict[str, str]


class Stylesheet(MutableMapping[str, Declarations]):
    """
    Mapping from selector to its declarations.

    Each selector maps to its own plain ``dict`` of property name to value.
    Declarations assigned to a selector are copied on the way in, so two
    selectors never share one dict, and an emptied selector is kept until it
    is deleted explicitly.

    Example:
        sheet = Stylesheet({"H1": {"color": "blue"}})
        sheet["H1"]["color"] = "black"
        sheet[".newstyle"] = {"color": "#FFFFFF"}
        del sheet["H1"]
    """

    def __init__(self, styles: Optional[Mapping] = None):
        self._styles: Dict[str, Declarations] = {}
        if styles is not None:
            self.update(styles)

    def __getitem__(self, selector: str) -> Declarations:
        return self._styles[selector]

    def __setitem__(self, selector: str, declarations: Mapping) -> None:
        _require(selector, "selector")
        copied: Declarations = {}
        for name, value in declarations.items():
            _require(name, "property name")
            copied[name] = value
        self._styles[selector] = copied

    def __delitem__(self, selector: str) -> None:
        del self._styles[selector]

    def __iter__(self) -> Iterator[str]:
        return iter(self._styles)

    def __len__(self) -> int:
        return len(self._styles)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._styles!r})"

    def selectors(self) -> List[str]:
        """Selectors in ascending order."""
        return sorted(self._styles)

    def properties(self, selector: str) -> List[str]:
        """Property names of ``selector`` in ascending order."""
        return sorted(self._styles[selector])

    def get_property(
        self, selector: str, name: str, default: Optional[str] = None
    ) -> Optional[str]:
        declarations = self._styles.get(selector)
        if declarations is None:
            return default
        return declarations.get(name, default)

    def set_property(self, selector: str, name: str, value: str) -> None:
        """Set one property, creating the selector if needed."""
        _require(selector, "selector")
        _require(name, "property name")
        self._styles.setdefault(selector, {})[name] = value

    def delete_property(self, selector: str, name: str) -> None:
        """Delete one property. The selector itself is kept, even if left empty."""
        del self._styles[selector][name]

    def declarations_for(self, selector: str) -> Declarations:
        """Return the declarations of ``selector``, creating an empty entry if needed."""
        _require(selector, "selector")
        return self._styles.setdefault(selector, {})

    @classmethod
    def from_string(cls, text: str) -> "Stylesheet":
        """Parse stylesheet text. See :func:`css_tiny.parser.parse`."""
        from .parser import parse

        return parse(text)

    def to_string(self) -> str:
        """Render the stylesheet. See :func:`css_tiny.serializer.serialize`."""
        from .serializer import serialize

        return serialize(self)

    @classmethod
    def read(cls, path: Union[str, os.PathLike]) -> "Stylesheet":
        """Load a stylesheet file with the default storage settings."""
        from .storage import load

        return load(path)

    def write(self, path: Union[str, os.PathLike], mode: Optional[int] = None) -> None:
        """Write the stylesheet to a file with the default storage settings."""
        from .storage import store

        store(path, self, mode)


def _require(value: str, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise MissingInputError(f"A non-empty {what} is required, got {value!r}")
