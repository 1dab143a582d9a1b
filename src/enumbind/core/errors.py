"""Custom exceptions and error response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Standardized error response."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(None, description="Additional context")


class EnumBindingError(Exception):
    """Base exception for all enum binding errors."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorDetail:
        """Convert to response schema."""
        return ErrorDetail(
            code=self.code,
            message=self.message,
            details=self.details if self.details else None,
        )


class DeclarationError(EnumBindingError):
    """Raised while declaring an enum. Programmer error, never retried."""


class ConfigurationError(DeclarationError):
    """Raised when enum options are invalid or contradictory."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="CONFIGURATION_ERROR",
            message=message,
            details=details,
        )


class DuplicateSymbolicNameError(DeclarationError):
    """Raised when two raw values normalize to the same symbolic name."""

    def __init__(self, name: str, first: Any, second: Any):
        super().__init__(
            code="DUPLICATE_SYMBOLIC_NAME",
            message=f"Values {first!r} and {second!r} both map to the name {name!r}",
            details={"name": name, "values": [repr(first), repr(second)]},
        )
        self.name = name


class DuplicateStoredValueError(DeclarationError):
    """Raised when the same stored value is listed twice."""

    def __init__(self, value: Any, names: list[str]):
        super().__init__(
            code="DUPLICATE_STORED_VALUE",
            message=f"Stored value {value!r} is listed more than once ({', '.join(names)})",
            details={"value": repr(value), "names": names},
        )
        self.value = value


class MethodConflictError(DeclarationError):
    """Raised when a generated name is already defined on the model."""

    def __init__(self, model: str, column: str, method_name: str, source: str):
        super().__init__(
            code="METHOD_CONFLICT",
            message=(
                f"You tried to define an enum on {column!r} of {model}, but this would "
                f"generate {method_name!r}, which is already defined by {source}"
            ),
            details={
                "model": model,
                "column": column,
                "method_name": method_name,
                "source": source,
            },
        )
        self.column = column
        self.method_name = method_name


class ValidationViolation(EnumBindingError):
    """Raised at save/validate time when a record holds an invalid enum value."""

    def __init__(self, model: str, errors: dict[str, list[str]]):
        messages = "; ".join(
            message for column_errors in errors.values() for message in column_errors
        )
        super().__init__(
            code="VALIDATION_ERROR",
            message=f"{model} is invalid: {messages}",
            status_code=422,
            details={"model": model, "errors": errors},
        )
        self.errors = errors


class PersistenceError(EnumBindingError):
    """Raised when a generated mutator cannot write the record."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="DATABASE_ERROR",
            message=message,
            status_code=500,
            details=details,
        )
