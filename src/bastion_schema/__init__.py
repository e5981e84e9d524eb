"""Schema-driven validation for JSON-like payloads.

A ``Schema`` maps field names to ``FieldDefinition``s (kind, presence,
nullability, rules). ``validate`` checks a decoded payload against it and
returns every violation at once:

    >>> result = validate(schema, {"user_id": "x"})
    >>> [str(error) for error in result.errors]
"""

from bastion_schema.errors import (
    AnyValidationError,
    BastionError,
    ErrorCode,
    InvalidType,
    MissingField,
    NullValue,
    PayloadDecodeError,
    PayloadValidationError,
    RuleViolation,
    SchemaDecodeError,
    ValidationError,
    parse_validation_error,
)
from bastion_schema.rules import check_rule
from bastion_schema.schema import FieldDefinition, Schema, load_schema
from bastion_schema.types import (
    DateTimeFormat,
    DateTimeFormatRule,
    FieldType,
    MaxLengthRule,
    MaxValueRule,
    MinLengthRule,
    MinValueRule,
    PatternRule,
    ValidationRule,
    classify,
    matches,
    parse_rule,
)
from bastion_schema.validate import (
    ValidationResult,
    check_field,
    check_type,
    validate,
    validate_json,
)

__all__ = [
    # Errors
    "AnyValidationError",
    "BastionError",
    # Types
    "DateTimeFormat",
    "DateTimeFormatRule",
    "ErrorCode",
    # Schema
    "FieldDefinition",
    "FieldType",
    "InvalidType",
    "MaxLengthRule",
    "MaxValueRule",
    "MinLengthRule",
    "MinValueRule",
    "MissingField",
    "NullValue",
    "PatternRule",
    "PayloadDecodeError",
    "PayloadValidationError",
    "RuleViolation",
    "Schema",
    "SchemaDecodeError",
    "ValidationError",
    # Validation
    "ValidationResult",
    "ValidationRule",
    "check_field",
    "check_rule",
    "check_type",
    "classify",
    "load_schema",
    "matches",
    "parse_rule",
    "parse_validation_error",
    "validate",
    "validate_json",
]
