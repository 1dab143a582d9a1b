"""Guard generated names against members the model already has."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from enumbind.core.errors import MethodConflictError
from enumbind.core.logging import get_logger

if TYPE_CHECKING:
    from enumbind.core.host import RecordHost

logger = get_logger(__name__)


@dataclass(frozen=True)
class MemberOwner:
    """Who already defines a name. enum_column is set when an enum binding did."""

    source: str
    enum_column: Optional[str] = None


def check_conflict(host: "RecordHost", column: str, method_name: str, class_level: bool) -> None:
    """
    Fail if method_name is already bound on the model.

    Names bound by an earlier enum declaration on the same column are allowed,
    so a subclass may redeclare the enum it inherits.

    Raises:
        MethodConflictError: If the name is taken by anything else
    """
    owner = host.lookup(method_name, class_level)
    if owner is None or owner.enum_column == column:
        return

    source = owner.source
    if owner.enum_column is not None:
        source = f"{owner.source} (enum on {owner.enum_column!r})"

    logger.warning(
        "enum.conflict",
        method_name=method_name,
        class_level=class_level,
        source=source,
    )
    raise MethodConflictError(host.model_name, column, method_name, source)


class ConflictGuard:
    """Checks every name of one declaration, including clashes between its own values."""

    def __init__(self, host: "RecordHost", column: str):
        self.host = host
        self.column = column
        self._planned: set[str] = set()

    def check(self, method_name: str, class_level: bool = False) -> str:
        if method_name in self._planned:
            logger.warning("enum.conflict", method_name=method_name, source="same declaration")
            raise MethodConflictError(
                self.host.model_name,
                self.column,
                method_name,
                f"another value of the {self.column!r} enum",
            )

        check_conflict(self.host, self.column, method_name, class_level)
        self._planned.add(method_name)
        return method_name

    @property
    def planned(self) -> frozenset[str]:
        return frozenset(self._planned)
