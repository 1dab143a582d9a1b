"""Option and metadata models."""

from enumbind.models.enum_options import EnumOptions
from enumbind.models.enums import BindingKind, BindingMode

__all__ = [
    "BindingKind",
    "BindingMode",
    "EnumOptions",
]
