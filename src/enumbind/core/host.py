"""Host-type adapter: the only place that touches the record framework."""

from types import MappingProxyType
from typing import Any, Callable, Optional, Protocol

from sqlalchemy import event, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapper, object_session

from enumbind.core.bindings import (
    Binding,
    mutator_binding,
    negated_scope_binding,
    predicate_binding,
    scope_binding,
)
from enumbind.core.conflicts import ConflictGuard, MemberOwner
from enumbind.core.errors import ConfigurationError, PersistenceError
from enumbind.core.logging import get_logger
from enumbind.core.mapping import ValueMapping
from enumbind.core.validation import VALIDATIONS_ATTR, InclusionRule, validate_record
from enumbind.models.enums import BindingKind

logger = get_logger(__name__)

ENUM_MEMBERS_ATTR = "__enum_members__"


class RecordHost(Protocol):
    """Capabilities the binding engine needs from a record type."""

    model: type

    @property
    def model_name(self) -> str: ...

    def has_attribute(self, column: str) -> bool: ...

    def read(self, record: Any, column: str) -> Any: ...

    def persist(self, record: Any, column: str, value: Any) -> None: ...

    def register_instance_method(self, name: str, func: Callable) -> None: ...

    def register_class_method(self, name: str, func: Callable) -> None: ...

    def register_scope(self, name: str, column: str, value: Any, negate: bool = False) -> None: ...

    def register_constant(self, name: str, value: Any) -> None: ...

    def lookup(self, name: str, class_level: bool) -> Optional[MemberOwner]: ...

    def native_enum(
        self, column: str, mapping: ValueMapping, guard: ConflictGuard
    ) -> list[Binding]: ...

    def install_validation(self, rule: InclusionRule) -> None: ...

    def attach(self, binding: Binding) -> None: ...


def _validate_on_flush(mapper: Mapper, connection: Any, target: Any) -> None:
    validate_record(target)


class SQLAlchemyHost:
    """RecordHost for SQLAlchemy declarative models."""

    def __init__(self, model: type):
        mapper = inspect(model, raiseerr=False)
        if not isinstance(mapper, Mapper):
            raise ConfigurationError(
                f"{getattr(model, '__name__', model)!r} is not a mapped SQLAlchemy class",
                details={"model": repr(model)},
            )
        self.model = model
        self.mapper = mapper

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def has_attribute(self, column: str) -> bool:
        return column in self.mapper.attrs

    # Record access

    def read(self, record: Any, column: str) -> Any:
        return getattr(record, column)

    def persist(self, record: Any, column: str, value: Any) -> None:
        """Assign and flush through the record's own session.

        Commit stays with the caller's unit of work.
        """
        session = object_session(record)
        if session is None:
            raise PersistenceError(
                f"{self.model_name} is not attached to a session",
                details={"model": self.model_name, "column": column},
            )

        setattr(record, column, value)
        try:
            session.flush()
        except SQLAlchemyError as e:
            logger.error(
                "enum.persist_failed",
                model=self.model_name,
                column=column,
                value=repr(value),
                error=str(e),
            )
            raise PersistenceError(
                f"Could not save {column}={value!r} on {self.model_name}",
                details={"model": self.model_name, "column": column, "value": repr(value)},
            ) from e

    # Registration

    def register_instance_method(self, name: str, func: Callable) -> None:
        setattr(self.model, name, func)

    def register_class_method(self, name: str, func: Callable) -> None:
        setattr(self.model, name, classmethod(func))

    def register_scope(self, name: str, column: str, value: Any, negate: bool = False) -> None:
        def scope(cls, stmt=None):
            attribute = getattr(cls, column)
            criterion = attribute != value if negate else attribute == value
            return (select(cls) if stmt is None else stmt).where(criterion)

        scope.__name__ = name
        scope.__qualname__ = f"{self.model_name}.{name}"
        scope.__doc__ = (
            f"Select {self.model_name} rows where {column} "
            f"{'is not' if negate else 'is'} {value!r}; narrows stmt when given."
        )
        self.register_class_method(name, scope)

    def register_constant(self, name: str, value: Any) -> None:
        setattr(self.model, name, value)

    def attach(self, binding: Binding) -> None:
        kind = binding.kind
        if kind in (BindingKind.PREDICATE, BindingKind.MUTATOR):
            self.register_instance_method(binding.name, binding.target)
        elif kind in (BindingKind.SCOPE, BindingKind.NEGATED_SCOPE):
            self.register_scope(
                binding.name,
                binding.column,
                binding.stored_value,
                negate=kind is BindingKind.NEGATED_SCOPE,
            )
        elif kind is BindingKind.CONSTANT:
            self.register_constant(binding.name, binding.target)
        else:
            self.register_class_method(binding.name, binding.target)

        # Names attached to this class only, never copied from a parent
        members = dict(vars(self.model).get(ENUM_MEMBERS_ATTR, {}))
        members[binding.name] = binding.column
        setattr(self.model, ENUM_MEMBERS_ATTR, members)

    # Introspection

    def lookup(self, name: str, class_level: bool) -> Optional[MemberOwner]:
        """Find who defines name on the model, own or inherited."""
        for klass in self.model.__mro__:
            if name in vars(klass):
                # Own registry only; a parent's does not describe klass
                members = vars(klass).get(ENUM_MEMBERS_ATTR, {})
                return MemberOwner(klass.__name__, members.get(name))

        if not class_level and name in self.mapper.attrs:
            return MemberOwner(f"mapped attribute of {self.model_name}")

        if class_level and hasattr(type(self.model), name):
            return MemberOwner(f"metaclass {type(self.model).__name__}")

        return None

    # Default mode

    def native_enum(self, column: str, mapping: ValueMapping, guard: ConflictGuard) -> list[Binding]:
        """Framework-style enum: predicate, mutator, scope and negated scope per
        value, plus a <column>_mapping() class method."""
        bindings: list[Binding] = []
        for name, value in mapping.items():
            for make in (predicate_binding, mutator_binding, scope_binding, negated_scope_binding):
                bindings.append(make(self, column, name, value, guard))

        frozen = MappingProxyType(dict(mapping))
        mapping_method = guard.check(f"{column}_mapping", class_level=True)

        def enum_mapping(cls) -> MappingProxyType:
            return frozen

        enum_mapping.__name__ = mapping_method
        enum_mapping.__doc__ = f"Symbolic name -> stored value for {column}."
        bindings.append(Binding(BindingKind.LISTING, mapping_method, column, target=enum_mapping))
        return bindings

    # Validation

    def install_validation(self, rule: InclusionRule) -> None:
        rules = tuple(r for r in getattr(self.model, VALIDATIONS_ATTR, ()) if r.column != rule.column)
        setattr(self.model, VALIDATIONS_ATTR, rules + (rule,))

        for identifier in ("before_insert", "before_update"):
            if not event.contains(self.model, identifier, _validate_on_flush):
                event.listen(self.model, identifier, _validate_on_flush, propagate=True)
