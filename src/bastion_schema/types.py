"""Field kinds, date-time formats and the rule catalogue.

The wire tokens are the enum values: field types are lowercase, rules are
tagged objects like ``{"rule": "min_length", "value": 3}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Any, Literal, assert_never

from bastion_utils import WireModel
from pydantic import Field, StrictFloat, StrictInt, StrictStr, TypeAdapter

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


class FieldType(StrEnum):
    """Kinds a schema field can expect."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    OBJECT = "object"
    ARRAY = "array"


class DateTimeFormat(StrEnum):
    """Formats accepted by the ``date_time_format`` rule."""

    ISO8601 = "iso8601"
    UNIX_TIMESTAMP = "unix_timestamp"


# =============================================================================
# Rule catalogue
# =============================================================================


class PatternRule(WireModel):
    """String must match this regex (searched anywhere; anchor explicitly)."""

    rule: Literal["pattern"] = "pattern"
    value: StrictStr


class MinLengthRule(WireModel):
    """String minimum length in code points (inclusive)."""

    rule: Literal["min_length"] = "min_length"
    value: StrictInt = Field(ge=0)


class MaxLengthRule(WireModel):
    """String maximum length in code points (inclusive)."""

    rule: Literal["max_length"] = "max_length"
    value: StrictInt = Field(ge=0)


class MinValueRule(WireModel):
    """Numeric minimum value (inclusive)."""

    rule: Literal["min_value"] = "min_value"
    value: StrictFloat


class MaxValueRule(WireModel):
    """Numeric maximum value (inclusive)."""

    rule: Literal["max_value"] = "max_value"
    value: StrictFloat


class DateTimeFormatRule(WireModel):
    """String must parse under the given date-time format."""

    rule: Literal["date_time_format"] = "date_time_format"
    value: DateTimeFormat


ValidationRule = Annotated[
    PatternRule | MinLengthRule | MaxLengthRule | MinValueRule | MaxValueRule | DateTimeFormatRule,
    Field(discriminator="rule"),
]

_rule_adapter: TypeAdapter[ValidationRule] = TypeAdapter(ValidationRule)


def parse_rule(data: Any) -> ValidationRule:
    """Decode a rule from its wire form.

    Raises:
        pydantic.ValidationError: If the tag is unknown or the payload has the wrong type.
    """
    return _rule_adapter.validate_python(data)


# =============================================================================
# Type lattice
# =============================================================================


def _is_whole(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_integer(value: object) -> bool:
    # Signed or unsigned 64-bit; wider ints only fit a float
    return _is_whole(value) and INT64_MIN <= value <= UINT64_MAX  # type: ignore[operator]


def _is_real(value: object) -> bool:
    return isinstance(value, float | Decimal) or (_is_whole(value) and not _is_integer(value))


def classify(value: object) -> FieldType:
    """Kind of a payload value, as reported in ``InvalidType`` diagnostics.

    Null never reaches here (the driver handles it first); it and any
    value outside the JSON tree map to ``string``.
    """
    # bool is a subclass of int, so it goes first
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, str):
        return FieldType.STRING
    if _is_integer(value):
        return FieldType.INTEGER
    if _is_real(value):
        return FieldType.FLOAT
    if isinstance(value, Mapping):
        return FieldType.OBJECT
    if isinstance(value, list | tuple):
        return FieldType.ARRAY
    return FieldType.STRING


def matches(expected: FieldType, value: object) -> bool:
    """Check a value against an expected kind.

    Integers widen to ``float``; ``datetime`` is a string whose format is
    checked by a rule, never here. Nothing else is coerced.
    """
    match expected:
        case FieldType.STRING | FieldType.DATETIME:
            return isinstance(value, str)
        case FieldType.INTEGER:
            return _is_integer(value)
        case FieldType.FLOAT:
            return _is_whole(value) or _is_real(value)
        case FieldType.BOOLEAN:
            return isinstance(value, bool)
        case FieldType.OBJECT:
            return isinstance(value, Mapping)
        case FieldType.ARRAY:
            return isinstance(value, list | tuple)
        case _:
            assert_never(expected)
