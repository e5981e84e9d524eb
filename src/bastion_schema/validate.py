"""Validation driver.

Walks every field of a schema against a payload through four gates:

    presence -> nullability -> type -> rules

A failing gate stops the remaining gates for that field only. Every field is
checked, so one call reports every problem with the payload. Payload keys the
schema does not declare are ignored, and object/array values are not
descended into.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from bastion_utils import StrictModel, get_logger

from bastion_schema.errors import (
    AnyValidationError,
    InvalidType,
    MissingField,
    NullValue,
    PayloadDecodeError,
    PayloadValidationError,
    RuleViolation,
)
from bastion_schema.rules import check_rule
from bastion_schema.types import FieldType, classify, matches
from bastion_schema.wire import DECODE_ERRORS, decode_json

if TYPE_CHECKING:
    from bastion_schema.schema import FieldDefinition, Schema

log = get_logger("bastion_schema.validate")

_ABSENT = object()


class ValidationResult(StrictModel):
    """Outcome of one validation: success when ``errors`` is empty.

    Errors come out in schema field order, then rule order, but only the
    set of errors is meaningful.
    """

    schema_name: str
    errors: tuple[AnyValidationError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def errors_for(self, field: str) -> list[AnyValidationError]:
        """Diagnostics reported for one field."""
        return [error for error in self.errors if error.field == field]

    def raise_for_errors(self) -> None:
        """Raise ``PayloadValidationError`` if the payload was rejected."""
        if self.errors:
            raise PayloadValidationError(self)

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ``{"schema": ..., "valid": ..., "errors": [...]}``."""
        return {
            "schema": self.schema_name,
            "valid": self.is_valid,
            "errors": [error.model_dump(mode="json") for error in self.errors],
        }


def check_type(field: str, expected: FieldType, value: object) -> InvalidType | None:
    """Type gate for a present, non-null value."""
    if matches(expected, value):
        return None
    return InvalidType(field=field, expected=expected, actual=classify(value))


def check_field(
    name: str,
    definition: FieldDefinition,
    value: object = _ABSENT,
) -> list[AnyValidationError]:
    """Run the four gates for one field.

    Args:
        name: Field name, copied into every diagnostic.
        definition: The field's definition.
        value: The payload value; leave unset when the key is absent.

    Returns:
        At most one presence/null/type error, or any number of rule violations.
    """
    if value is _ABSENT:
        return [MissingField(field=name)] if definition.required else []

    if value is None:
        return [] if definition.nullable else [NullValue(field=name)]

    type_error = check_type(name, definition.field_type, value)
    if type_error is not None:
        # Rules against a wrongly-typed value would only add noise
        return [type_error]

    errors: list[AnyValidationError] = []
    for rule in definition.rules:
        message = check_rule(rule, value)
        if message is not None:
            errors.append(RuleViolation(field=name, rule=rule, message=message))
    return errors


def validate(schema: Schema, payload: Any) -> ValidationResult:
    """Validate a decoded payload against a schema.

    Never raises and never mutates its arguments. A payload that is not a
    JSON object has no fields, so only missing required fields are reported.

    Args:
        schema: The schema to check against.
        payload: A decoded JSON value, normally a mapping.

    Returns:
        ValidationResult holding every violation found.
    """
    fields: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}

    errors: list[AnyValidationError] = []
    for name, definition in schema.fields.items():
        errors.extend(check_field(name, definition, fields.get(name, _ABSENT)))

    log.debug(
        "payload_validated",
        schema=schema.name,
        fields=len(schema.fields),
        error_count=len(errors),
    )
    return ValidationResult(schema_name=schema.name, errors=tuple(errors))


def validate_json(schema: Schema, raw: str | bytes) -> ValidationResult:
    """Decode a JSON payload and validate it.

    Raises:
        PayloadDecodeError: If ``raw`` is not standard JSON, or nests or
            counts beyond what the decoder can hold.
    """
    try:
        payload = decode_json(raw)
    except DECODE_ERRORS as exc:
        raise PayloadDecodeError.malformed_json(str(exc)) from exc
    return validate(schema, payload)
