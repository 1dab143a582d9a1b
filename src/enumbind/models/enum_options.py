"""Options schema for an enum declaration."""

import re
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from enumbind.core.errors import ConfigurationError
from enumbind.models.enums import BindingMode

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def canonical_key(key: Any) -> str:
    """Normalize an option key: singleTableInheritance -> single_table_inheritance."""
    text = key.value if hasattr(key, "value") else str(key)
    text = _CAMEL_BOUNDARY.sub("_", str(text).strip())
    return text.replace("-", "_").replace(" ", "_").lower()


class EnumOptions(BaseModel):
    """
    Declaration options.

    prefix/suffix accept None, True (use the column name) or a string.
    single_table_inheritance and polymorphic are mutually exclusive.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    prefix: Optional[Union[bool, str]] = None
    suffix: Optional[Union[bool, str]] = None
    constants: bool = True
    validations: bool = True
    single_table_inheritance: bool = False
    polymorphic: bool = False

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Make option keys case- and separator-agnostic."""
        if not isinstance(data, dict):
            return data

        normalized: dict[str, Any] = {}
        for key, value in data.items():
            name = canonical_key(key)
            if name in normalized:
                raise ValueError(f"Option {name!r} given more than once")
            normalized[name] = value
        return normalized

    @model_validator(mode="after")
    def check_exclusive_modes(self) -> "EnumOptions":
        """Reject single_table_inheritance together with polymorphic."""
        if self.single_table_inheritance and self.polymorphic:
            raise ValueError("single_table_inheritance and polymorphic are mutually exclusive")
        return self

    @property
    def mode(self) -> BindingMode:
        if self.single_table_inheritance:
            return BindingMode.SINGLE_TABLE_INHERITANCE
        if self.polymorphic:
            return BindingMode.POLYMORPHIC
        return BindingMode.DEFAULT

    @classmethod
    def build(cls, options: Optional[dict[Any, Any]] = None, **kwargs: Any) -> "EnumOptions":
        """Build options, reporting bad input as ConfigurationError."""
        raw: dict[Any, Any] = dict(options or {})
        raw.update(kwargs)
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            errors = [
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in e.errors(include_url=False)
            ]
            raise ConfigurationError(
                "; ".join(err["msg"] for err in errors),
                details={"errors": errors},
            ) from e
