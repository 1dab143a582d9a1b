"""Declarative enum bindings for SQLAlchemy models."""

from enumbind.core.bindings import Binding
from enumbind.core.declaration import EnumDeclaration, bind_enum, declarations, enum_binding
from enumbind.core.errors import (
    ConfigurationError,
    DeclarationError,
    DuplicateStoredValueError,
    DuplicateSymbolicNameError,
    EnumBindingError,
    MethodConflictError,
    PersistenceError,
    ValidationViolation,
)
from enumbind.core.host import RecordHost, SQLAlchemyHost
from enumbind.core.mapping import ValueMapping, build_mapping
from enumbind.core.validation import record_errors, validate_record
from enumbind.models import BindingKind, BindingMode, EnumOptions

__all__ = [
    "Binding",
    "BindingKind",
    "BindingMode",
    "ConfigurationError",
    "DeclarationError",
    "DuplicateStoredValueError",
    "DuplicateSymbolicNameError",
    "EnumBindingError",
    "EnumDeclaration",
    "EnumOptions",
    "MethodConflictError",
    "PersistenceError",
    "RecordHost",
    "SQLAlchemyHost",
    "ValidationViolation",
    "ValueMapping",
    "bind_enum",
    "build_mapping",
    "declarations",
    "enum_binding",
    "record_errors",
    "validate_record",
]
