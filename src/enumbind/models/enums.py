"""
Enums for binding metadata.
Modes select the synthesis strategy; kinds label each generated member.
"""

import enum


class BindingMode(str, enum.Enum):
    """Binding synthesis strategies."""

    DEFAULT = "default"
    SINGLE_TABLE_INHERITANCE = "single_table_inheritance"
    POLYMORPHIC = "polymorphic"


class BindingKind(str, enum.Enum):
    """Generated member kinds."""

    PREDICATE = "predicate"
    MUTATOR = "mutator"
    SCOPE = "scope"
    NEGATED_SCOPE = "negated_scope"
    CONSTANT = "constant"
    LISTING = "listing"
