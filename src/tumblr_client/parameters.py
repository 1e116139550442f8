"""
Request parameter collection for Tumblr API calls.

``MethodParameterSet`` keeps parameters in insertion order for transmission
and computes the canonical (sorted) order only when a request is signed, so
the signature never depends on the order callers added values in.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Tuple
from urllib.parse import urlencode

from .converters import BoolConverter, TimestampConverter
from .enums import to_wire
from .exceptions import ArgumentError

_NO_DEFAULT = object()


def format_parameter_value(value: Any) -> str:
    """Render a single parameter value the way the platform expects it."""
    if isinstance(value, bool):
        return BoolConverter.encode(value, as_string=True)
    if isinstance(value, Enum):
        return to_wire(value)
    if isinstance(value, datetime):
        return str(TimestampConverter.encode(value))
    return str(value)


class MethodParameterSet:
    """
    Ordered collection of ``(name, value)`` pairs for one API call.

    - ``add(name, value, default)`` skips the value when it equals ``default``
      or is ``None``, so unchanged defaults are never sent.
    - A list or tuple value expands into ``name[0]``, ``name[1]``, ...
    - Names are unique; repeated values must use the bracketed form.

    Example:
        >>> params = MethodParameterSet()
        >>> params.add("offset", 0, 0)
        >>> params.add("limit", 10, 20)
        >>> params.add("types", ["like", "reply"])
        >>> list(params)
        [('limit', '10'), ('types[0]', 'like'), ('types[1]', 'reply')]
    """

    def __init__(self, items: Optional[Iterable[Tuple[str, Any]]] = None):
        self._entries: List[Tuple[str, str]] = []
        if items:
            for name, value in items:
                self.add(name, value)

    def add(self, name: str, value: Any, default: Any = _NO_DEFAULT) -> None:
        """
        Add a parameter.

        Args:
            name: Parameter name
            value: Parameter value; None is omitted
            default: Value the platform assumes when the parameter is absent

        Raises:
            ArgumentError: If the name is empty or already present
        """
        if not name:
            raise ArgumentError("Parameter name cannot be empty.", argument="name")

        if value is None:
            return

        if default is not _NO_DEFAULT and self._equals_default(value, default):
            return

        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                self.add(f"{name}[{index}]", item)
            return

        if name in self:
            raise ArgumentError(
                f"Parameter '{name}' was already added.",
                details="use a list value for repeated parameters",
                argument="name",
            )

        self._entries.append((name, format_parameter_value(value)))

    @staticmethod
    def _equals_default(value: Any, default: Any) -> bool:
        # bool is an int subclass: False must not match a default of 0
        if isinstance(value, bool) != isinstance(default, bool):
            return False
        return value == default

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return any(entry_name == name for entry_name, _ in self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MethodParameterSet):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"MethodParameterSet({self._entries!r})"

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for entry_name, value in self._entries:
            if entry_name == name:
                return value
        return default

    def canonical_pairs(self) -> List[Tuple[str, str]]:
        """Pairs sorted by name, then value."""
        return sorted(self._entries)

    def copy(self) -> "MethodParameterSet":
        clone = MethodParameterSet()
        clone._entries = list(self._entries)
        return clone

    def to_query_string(self) -> str:
        """Encode the parameters as a URL query string, in insertion order."""
        return urlencode(self._entries)

    def to_form_body(self) -> bytes:
        """Encode the parameters as an ``application/x-www-form-urlencoded`` body."""
        return self.to_query_string().encode('utf-8')
