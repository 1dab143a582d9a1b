"""Ordered, bijective symbolic name -> stored value mapping."""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from enumbind.core.errors import (
    ConfigurationError,
    DuplicateStoredValueError,
    DuplicateSymbolicNameError,
)
from enumbind.core.naming import format_name


class ValueMapping(Mapping[str, Any]):
    """
    Read-only mapping of symbolic names to stored values.

    Iteration order is the order the raw values were declared in. Both sides
    are unique, so the mapping can be read in either direction.
    """

    def __init__(self, pairs: Iterable[tuple[str, Any]]):
        self._pairs: tuple[tuple[str, Any], ...] = tuple(pairs)
        self._by_name: dict[str, Any] = dict(self._pairs)

    def __getitem__(self, name: str) -> Any:
        return self._by_name[name]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"ValueMapping({dict(self._pairs)!r})"

    @property
    def names(self) -> tuple[str, ...]:
        """Symbolic names in declaration order."""
        return tuple(name for name, _ in self._pairs)

    @property
    def stored_values(self) -> tuple[Any, ...]:
        """Stored values, index-aligned with names."""
        return tuple(value for _, value in self._pairs)

    def name_for(self, stored_value: Any) -> str:
        """Reverse lookup. Raises KeyError for unknown values."""
        for name, value in self._pairs:
            if value == stored_value:
                return name
        raise KeyError(stored_value)


def build_mapping(raw_values: Iterable[Any], prefix: str = "", suffix: str = "") -> ValueMapping:
    """
    Build the symbolic -> stored mapping for a declaration.

    Args:
        raw_values: Candidate stored values, in declaration order
        prefix: Rendered prefix ('status_' or '')
        suffix: Rendered suffix ('_status' or '')

    Returns:
        ValueMapping with one entry per raw value

    Raises:
        ConfigurationError: If the list is empty or holds None
        DuplicateSymbolicNameError: If two values normalize to the same name
        DuplicateStoredValueError: If a stored value appears twice
    """
    values = list(raw_values)
    if not values:
        raise ConfigurationError("An enum needs at least one value")

    pairs: list[tuple[str, Any]] = []
    seen_names: dict[str, Any] = {}

    for value in values:
        if value is None:
            raise ConfigurationError("None cannot be an enum value")

        name = format_name(value, prefix, suffix)

        # Equality scan; stored values need not be hashable
        for other_name, other_value in pairs:
            if other_value == value:
                raise DuplicateStoredValueError(value, [other_name, name])

        if name in seen_names:
            raise DuplicateSymbolicNameError(name, seen_names[name], value)

        seen_names[name] = value
        pairs.append((name, value))

    return ValueMapping(pairs)
