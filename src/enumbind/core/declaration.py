"""The enum declaration call: options -> mapping -> bindings -> validations."""

from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, TypeVar

import structlog

from enumbind.core.bindings import Binding, generate_bindings
from enumbind.core.conflicts import ConflictGuard
from enumbind.core.errors import ConfigurationError
from enumbind.core.host import RecordHost, SQLAlchemyHost
from enumbind.core.logging import get_logger
from enumbind.core.mapping import ValueMapping, build_mapping
from enumbind.core.naming import resolve_affixes
from enumbind.core.publish import constant_bindings, listing_bindings
from enumbind.core.validation import InclusionRule, install_validations
from enumbind.models.enum_options import EnumOptions
from enumbind.models.enums import BindingMode

logger = get_logger(__name__)

DECLARATIONS_ATTR = "__enum_declarations__"

ModelT = TypeVar("ModelT", bound=type)


@dataclass(frozen=True)
class EnumDeclaration:
    """What one declaration produced. Kept on the model for introspection."""

    model: type
    column: str
    mapping: ValueMapping
    options: EnumOptions
    bindings: tuple[Binding, ...]
    rule: Optional[InclusionRule] = None

    @property
    def mode(self) -> BindingMode:
        return self.options.mode

    def binding_names(self) -> list[str]:
        return [binding.name for binding in self.bindings]


def bind_enum(
    model: type,
    column: str,
    values: Iterable[Any],
    *,
    host: Optional[RecordHost] = None,
    **options: Any,
) -> EnumDeclaration:
    """
    Declare an enum on a model column and attach its generated members.

    Runs once, at class-definition time. Every generated name is checked
    before anything is attached, so a failed declaration leaves the model
    untouched.

    Args:
        model: Mapped record class
        column: Attribute holding the stored value
        values: Stored values, in order
        host: Adapter for the record framework (SQLAlchemy by default)
        **options: prefix, suffix, constants, validations,
            single_table_inheritance, polymorphic (any key spelling)

    Returns:
        EnumDeclaration describing the mapping and the generated members

    Raises:
        ConfigurationError: Bad options, empty values, unknown column
        DuplicateSymbolicNameError: Two values normalize to one name
        DuplicateStoredValueError: A stored value is listed twice
        MethodConflictError: A generated name is already taken
    """
    enum_options = EnumOptions.build(options)
    host = host or SQLAlchemyHost(model)

    with structlog.contextvars.bound_contextvars(model=host.model_name, column=column):
        if not host.has_attribute(column):
            raise ConfigurationError(
                f"{host.model_name} has no attribute {column!r}",
                details={"model": host.model_name, "column": column},
            )

        prefix, suffix = resolve_affixes(enum_options.prefix, enum_options.suffix, column)
        mapping = build_mapping(values, prefix, suffix)

        guard = ConflictGuard(host, column)
        plan = listing_bindings(mapping, column, guard)
        if enum_options.constants:
            plan += constant_bindings(mapping, column, guard)
        plan += generate_bindings(host, mapping, column, enum_options.mode, guard)
        logger.debug("enum.bindings_planned", names=[binding.name for binding in plan])

        for binding in plan:
            host.attach(binding)

        rule = None
        if enum_options.validations:
            rule = install_validations(host, column, mapping)

        declaration = EnumDeclaration(model, column, mapping, enum_options, tuple(plan), rule)
        _remember(model, declaration)

        logger.info(
            "enum.declared",
            mode=enum_options.mode.value,
            names=list(mapping.names),
            bindings=len(plan),
            validations=rule is not None,
        )

    return declaration


def enum_binding(column: str, values: Iterable[Any], **options: Any) -> Callable[[ModelT], ModelT]:
    """Class decorator form of bind_enum.

    @enum_binding("status", ["active", "archived"], single_table_inheritance=True)
    class Account(Base): ...
    """

    def decorator(model: ModelT) -> ModelT:
        bind_enum(model, column, values, **options)
        return model

    return decorator


def declarations(model: type) -> Mapping[str, EnumDeclaration]:
    """Enum declarations visible on a model, own and inherited, by column."""
    return MappingProxyType(dict(getattr(model, DECLARATIONS_ATTR, {})))


def _remember(model: type, declaration: EnumDeclaration) -> None:
    known = dict(getattr(model, DECLARATIONS_ATTR, {}))
    known[declaration.column] = declaration
    setattr(model, DECLARATIONS_ATTR, known)
