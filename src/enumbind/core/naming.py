"""Symbolic name formatting: prefix/suffix policy and value normalization."""

import enum
import re
from typing import Any, Optional, Union

Affix = Optional[Union[bool, str]]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-.]+")
# billing.models.Invoice; not gmail.com or 1.5
_DOTTED_CLASS_PATH = re.compile(r"^(?:[A-Za-z_]\w*\.)+[A-Z]\w*$")


def resolve_nfix(nfix: Affix, column: str) -> str:
    """Return the bare affix: the column name for True, the string itself, or ''."""
    if nfix is True:
        return column
    if isinstance(nfix, str) and nfix:
        return nfix
    return ""


def resolve_affixes(prefix: Affix, suffix: Affix, column: str) -> tuple[str, str]:
    """Render prefix as '{value}_' and suffix as '_{value}' (empty when unset)."""
    enum_prefix = resolve_nfix(prefix, column)
    enum_suffix = resolve_nfix(suffix, column)
    return (
        f"{enum_prefix}_" if enum_prefix else "",
        f"_{enum_suffix}" if enum_suffix else "",
    )


def demodulize(text: str) -> str:
    """Strip namespace qualifiers: 'Admin::User' -> 'User'.

    Dots only qualify class-like paths ('billing.models.Invoice'); other dotted
    values keep every segment.
    """
    text = text.split("::")[-1]
    if _DOTTED_CLASS_PATH.match(text):
        return text.rsplit(".", 1)[-1]
    return text


def underscore(text: str) -> str:
    """CamelCase to snake_case: 'HTTPStatus' -> 'http_status'."""
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _WORD_BOUNDARY.sub(r"\1_\2", text)
    return _SEPARATORS.sub("_", text).lower()


def base_token(value: Any) -> str:
    """Symbolic token for a raw value, before prefix/suffix decoration."""
    if isinstance(value, enum.Enum):
        text = value.name
    else:
        text = str(value)
    return underscore(demodulize(text.strip()))


def format_name(value: Any, prefix: str = "", suffix: str = "") -> str:
    """Full symbolic name for a raw value.

    Names need not be Python identifiers (0 -> '0'); generated members are
    attached with setattr and read back with getattr.
    """
    return f"{prefix}{base_token(value)}{suffix}"


def constant_name(symbolic_name: str) -> str:
    return symbolic_name.upper()
