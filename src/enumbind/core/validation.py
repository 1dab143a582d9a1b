"""Presence + inclusion rules for enum columns, checked at flush or on demand."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from enumbind.core.errors import ValidationViolation
from enumbind.core.logging import get_logger
from enumbind.core.mapping import ValueMapping

if TYPE_CHECKING:
    from enumbind.core.host import RecordHost

logger = get_logger(__name__)

VALIDATIONS_ATTR = "__enum_validations__"


@dataclass(frozen=True)
class InclusionRule:
    """The column must be present and hold one of the accepted values."""

    column: str
    accepted: tuple[Any, ...]

    def errors_for(self, value: Any) -> list[str]:
        if value is None or value == "":
            return [f"{self.column} can't be blank"]
        if value not in self.accepted:
            return [f"{value} is not a valid {self.column}"]
        return []


def accepted_values(mapping: ValueMapping) -> tuple[Any, ...]:
    """The record attribute always holds stored values, in every mode."""
    return mapping.stored_values


def rules_for(model: type) -> tuple[InclusionRule, ...]:
    return getattr(model, VALIDATIONS_ATTR, ())


def record_errors(record: Any) -> dict[str, list[str]]:
    """Collect enum validation errors for a record without raising."""
    errors: dict[str, list[str]] = {}
    for rule in rules_for(type(record)):
        messages = rule.errors_for(getattr(record, rule.column, None))
        if messages:
            errors.setdefault(rule.column, []).extend(messages)
    return errors


def validate_record(record: Any) -> None:
    """
    Check every enum rule installed on the record's model.

    Raises:
        ValidationViolation: If any enum column is blank or out of range
    """
    errors = record_errors(record)
    if errors:
        model = type(record).__name__
        logger.info("enum.validation_failed", model=model, errors=errors)
        raise ValidationViolation(model, errors)


def install_validations(host: "RecordHost", column: str, mapping: ValueMapping) -> InclusionRule:
    """Register the rule for column; violations surface when the record is flushed."""
    rule = InclusionRule(column, accepted_values(mapping))
    host.install_validation(rule)
    return rule
