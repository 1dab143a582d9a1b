"""Listing accessors and named constants for an enum declaration."""

from enumbind.core.bindings import Binding
from enumbind.core.conflicts import ConflictGuard
from enumbind.core.mapping import ValueMapping
from enumbind.core.naming import constant_name
from enumbind.models.enums import BindingKind


def listing_bindings(mapping: ValueMapping, column: str, guard: ConflictGuard) -> list[Binding]:
    """
    <column>_names() and <column>_stored_values() class methods.

    Both return tuples in declaration order, index-aligned.
    """
    names = mapping.names
    stored_values = mapping.stored_values

    names_method = guard.check(f"{column}_names", class_level=True)
    values_method = guard.check(f"{column}_stored_values", class_level=True)

    def list_names(cls) -> tuple:
        return names

    def list_stored_values(cls) -> tuple:
        return stored_values

    list_names.__name__ = names_method
    list_names.__doc__ = f"Symbolic names of the {column} enum."
    list_stored_values.__name__ = values_method
    list_stored_values.__doc__ = f"Stored values of the {column} enum."

    return [
        Binding(BindingKind.LISTING, names_method, column, target=list_names),
        Binding(BindingKind.LISTING, values_method, column, target=list_stored_values),
    ]


def constant_bindings(mapping: ValueMapping, column: str, guard: ConflictGuard) -> list[Binding]:
    # STATUS_ACTIVE = "active"
    return [
        Binding(
            BindingKind.CONSTANT,
            guard.check(constant_name(name), class_level=True),
            column,
            name,
            value,
            value,
        )
        for name, value in mapping.items()
    ]
