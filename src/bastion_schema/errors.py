"""Validation diagnostics and engine exceptions.

Diagnostics (``MissingField``, ``NullValue``, ``InvalidType``,
``RuleViolation``) are data returned by ``validate``; they are never raised.
Exceptions are reserved for the edges: decoding schemas and payloads, and
callers that opt into ``ValidationResult.raise_for_errors``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Annotated, Any, Literal, Self

from bastion_utils import WireModel
from pydantic import Field, StrictStr, TypeAdapter

from bastion_schema.types import FieldType, ValidationRule

if TYPE_CHECKING:
    from pydantic import ValidationError as PydanticValidationError

    from bastion_schema.validate import ValidationResult


class ErrorCode(StrEnum):
    """Standardized error codes, shared by diagnostics and exceptions."""

    MISSING_FIELD = "missing_field"
    NULL_VALUE = "null_value"
    INVALID_TYPE = "invalid_type"
    RULE_VIOLATION = "rule_violation"
    INVALID_SCHEMA = "invalid_schema"
    INVALID_PAYLOAD = "invalid_payload"
    PAYLOAD_REJECTED = "payload_rejected"


# =============================================================================
# Diagnostics
# =============================================================================


class ValidationError(WireModel):
    """A single way in which a payload violates a schema.

    Every variant names the offending field. Variants are frozen and
    hashable, so a report can be compared as a set.
    """

    field: StrictStr

    @property
    def code(self) -> ErrorCode:
        """The variant tag as an ``ErrorCode``."""
        return ErrorCode(self.error)  # type: ignore[attr-defined]


class MissingField(ValidationError):
    """Required field absent from the payload."""

    error: Literal["missing_field"] = "missing_field"

    def __str__(self) -> str:
        return f"Missing Field: Field '{self.field}' is required"


class NullValue(ValidationError):
    """Field present with an explicit null, but not nullable."""

    error: Literal["null_value"] = "null_value"

    def __str__(self) -> str:
        return f"Null Value: Field '{self.field}' cannot be null"


class InvalidType(ValidationError):
    """Value's kind does not match the expected kind."""

    error: Literal["invalid_type"] = "invalid_type"
    expected: FieldType
    actual: FieldType

    def __str__(self) -> str:
        return (
            f"Invalid Type: Field '{self.field}', "
            f"expected '{self.expected}', got '{self.actual}'"
        )


class RuleViolation(ValidationError):
    """A rule's predicate rejected the value."""

    error: Literal["rule_violation"] = "rule_violation"
    rule: ValidationRule
    message: StrictStr

    def __str__(self) -> str:
        return f"Rule Violation: Field '{self.field}', {self.message}"


AnyValidationError = Annotated[
    MissingField | NullValue | InvalidType | RuleViolation,
    Field(discriminator="error"),
]

_error_adapter: TypeAdapter[AnyValidationError] = TypeAdapter(AnyValidationError)


def parse_validation_error(data: Any) -> AnyValidationError:
    """Decode a diagnostic from its wire form (``error.model_dump(mode="json")``)."""
    return _error_adapter.validate_python(data)


# =============================================================================
# Exceptions
# =============================================================================


class BastionError(Exception):
    """Engine error with a standardized error code."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        """Initialize engine error.

        Args:
            code: Standardized error code.
            message: Human-readable error message.
        """
        super().__init__(message)
        self.code = code
        self.message = message

    def is_code(self, code: ErrorCode) -> bool:
        """Check if this error matches a specific code."""
        return self.code == code


class SchemaDecodeError(BastionError):
    """Schema document could not be decoded."""

    def __init__(self, message: str, *, details: list[str] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_SCHEMA, message)
        self.details = details or []

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> Self:
        """Create from a Pydantic error, keeping one line per problem."""
        details = [
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        ]
        return cls(f"Invalid schema: {len(details)} problem(s)", details=details)

    @classmethod
    def malformed_json(cls, details: str) -> Self:
        """Create malformed schema JSON error."""
        return cls(f"Schema is not valid JSON: {details}")


class PayloadDecodeError(BastionError):
    """Payload text is not valid JSON."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_PAYLOAD, message)

    @classmethod
    def malformed_json(cls, details: str) -> Self:
        """Create malformed payload JSON error."""
        return cls(f"Payload is not valid JSON: {details}")


class PayloadValidationError(BastionError):
    """Raised by callers that want a failed validation as an exception."""

    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        lines = "\n".join(f"- {error}" for error in result.errors)
        count = len(result.errors)
        super().__init__(
            ErrorCode.PAYLOAD_REJECTED,
            f"Payload failed schema '{result.schema_name}' with {count} error(s):\n{lines}",
        )

    @property
    def errors(self) -> list[AnyValidationError]:
        """Diagnostics carried by the failed result."""
        return list(self.result.errors)
