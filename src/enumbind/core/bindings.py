"""Binding synthesis: one set of generated members per mapping entry, by mode."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from enumbind.core.conflicts import ConflictGuard
from enumbind.core.mapping import ValueMapping
from enumbind.models.enums import BindingKind, BindingMode

if TYPE_CHECKING:
    from enumbind.core.host import RecordHost

CLASS_LEVEL_KINDS = frozenset(
    {BindingKind.SCOPE, BindingKind.NEGATED_SCOPE, BindingKind.CONSTANT, BindingKind.LISTING}
)


@dataclass(frozen=True)
class Binding:
    """
    A generated member, tied to one mapping entry (or to the whole mapping
    for listings).

    target is the callable for predicates, mutators and listings, and the
    value for constants. Scopes carry no target; the host builds the query.
    """

    kind: BindingKind
    name: str
    column: str
    symbolic_name: Optional[str] = None
    stored_value: Any = None
    target: Any = None

    @property
    def class_level(self) -> bool:
        return self.kind in CLASS_LEVEL_KINDS


def predicate_binding(
    host: "RecordHost", column: str, name: str, value: Any, guard: ConflictGuard
) -> Binding:
    """is_<name>(): True when the record's column holds the stored value."""
    method_name = guard.check(f"is_{name}", class_level=False)

    def predicate(self) -> bool:
        return host.read(self, column) == value

    _label(predicate, method_name, f"Return True when {column} is {value!r}.")
    return Binding(BindingKind.PREDICATE, method_name, column, name, value, predicate)


def mutator_binding(
    host: "RecordHost", column: str, name: str, value: Any, guard: ConflictGuard
) -> Binding:
    """mark_<name>(): write the stored value durably; raises PersistenceError."""
    method_name = guard.check(f"mark_{name}", class_level=False)

    def mutator(self) -> None:
        host.persist(self, column, value)

    _label(mutator, method_name, f"Set {column} to {value!r} and flush it.")
    return Binding(BindingKind.MUTATOR, method_name, column, name, value, mutator)


def scope_binding(
    host: "RecordHost", column: str, name: str, value: Any, guard: ConflictGuard
) -> Binding:
    """<name>(): query for records whose column holds the stored value."""
    method_name = guard.check(name, class_level=True)
    return Binding(BindingKind.SCOPE, method_name, column, name, value)


def negated_scope_binding(
    host: "RecordHost", column: str, name: str, value: Any, guard: ConflictGuard
) -> Binding:
    """not_<name>(): query for records whose column holds anything else."""
    method_name = guard.check(f"not_{name}", class_level=True)
    return Binding(BindingKind.NEGATED_SCOPE, method_name, column, name, value)


BindingFactory = Callable[["RecordHost", str, str, Any, ConflictGuard], Binding]

# Polymorphic type columns move together with their id column, so no mutator
STRATEGIES: dict[BindingMode, tuple[BindingFactory, ...]] = {
    BindingMode.SINGLE_TABLE_INHERITANCE: (predicate_binding, mutator_binding, scope_binding),
    BindingMode.POLYMORPHIC: (predicate_binding, scope_binding),
}


def generate_bindings(
    host: "RecordHost",
    mapping: ValueMapping,
    column: str,
    mode: BindingMode,
    guard: ConflictGuard,
) -> list[Binding]:
    """
    Synthesize the bindings for a mode.

    Default mode hands the whole mapping to the host's native enum facility.
    The other modes build their members here. Every name goes through the
    guard first, so a conflict aborts before anything is attached.
    """
    if mode is BindingMode.DEFAULT:
        return host.native_enum(column, mapping, guard)

    factories = STRATEGIES[mode]
    return [
        make(host, column, name, value, guard)
        for name, value in mapping.items()
        for make in factories
    ]


def _label(func: Callable, name: str, doc: str) -> None:
    func.__name__ = name
    func.__qualname__ = name
    func.__doc__ = doc
