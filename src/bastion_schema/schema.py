"""Schema and field-definition model.

Schemas are built incrementally and then shared read-only across
validations:

    >>> schema = Schema.named("user").field(
    ...     "email", FieldDefinition.of(FieldType.STRING).require().pattern(r"^[^@]+@[^@]+$")
    ... )

They travel as JSON documents with lowercase field types and tagged rules;
``Schema.from_json(schema.to_json()) == schema`` always holds.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Self

from bastion_utils import MutableModel, get_logger
from pydantic import Field, StrictBool, StrictStr, ValidationError, field_validator

from bastion_schema.errors import SchemaDecodeError
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
    parse_rule,
)
from bastion_schema.wire import DECODE_ERRORS, decode_json

log = get_logger("bastion_schema.schema")


class FieldDefinition(MutableModel):
    """Expected kind, presence, nullability and rules of one field.

    ``required`` and ``nullable`` are independent: a required field may
    still be null (``deleted_at``), an optional one may refuse null.
    """

    field_type: FieldType
    required: StrictBool = False
    nullable: StrictBool = False
    rules: list[ValidationRule] = Field(default_factory=list)

    @classmethod
    def of(cls, field_type: FieldType | str) -> Self:
        """Start a definition with defaults: optional, non-null, no rules."""
        return cls(field_type=field_type)  # type: ignore[arg-type]

    def require(self) -> Self:
        self.required = True
        return self

    def optional(self) -> Self:
        self.required = False
        return self

    def allow_null(self) -> Self:
        self.nullable = True
        return self

    def disallow_null(self) -> Self:
        self.nullable = False
        return self

    def rule(self, rule: ValidationRule | dict[str, Any]) -> Self:
        """Append a rule; rules run in insertion order.

        Raises:
            pydantic.ValidationError: If ``rule`` is not a rule or its wire form.
        """
        self.rules.append(parse_rule(rule))
        return self

    def with_rules(self, *rules: ValidationRule | dict[str, Any]) -> Self:
        self.rules.extend([parse_rule(rule) for rule in rules])
        return self

    def pattern(self, source: str) -> Self:
        return self.rule(PatternRule(value=source))

    def min_length(self, length: int) -> Self:
        return self.rule(MinLengthRule(value=length))

    def max_length(self, length: int) -> Self:
        return self.rule(MaxLengthRule(value=length))

    def min_value(self, bound: float) -> Self:
        return self.rule(MinValueRule(value=bound))

    def max_value(self, bound: float) -> Self:
        return self.rule(MaxValueRule(value=bound))

    def date_time_format(self, fmt: DateTimeFormat | str) -> Self:
        return self.rule(DateTimeFormatRule(value=fmt))  # type: ignore[arg-type]


class Schema(MutableModel):
    """Named mapping from field name to field definition."""

    name: StrictStr = ""
    fields: dict[str, FieldDefinition] = Field(default_factory=dict)

    @field_validator("fields")
    @classmethod
    def check_field_names(cls, fields: dict[str, FieldDefinition]) -> dict[str, FieldDefinition]:
        if any(not name for name in fields):
            msg = "field names must be non-empty"
            raise ValueError(msg)
        return fields

    @classmethod
    def named(cls, name: str) -> Self:
        """Start an empty schema."""
        return cls(name=name)

    def field(self, name: str, definition: FieldDefinition | dict[str, Any]) -> Self:
        """Attach a field definition; an existing definition is replaced.

        Raises:
            ValueError: If ``name`` is empty.
            pydantic.ValidationError: If ``definition`` is not a field definition.
        """
        if not name:
            msg = "field names must be non-empty"
            raise ValueError(msg)
        checked = FieldDefinition.model_validate(definition)
        if name in self.fields:
            log.debug("field_replaced", schema=self.name, field=name)
        self.fields[name] = checked
        return self

    def field_names(self) -> list[str]:
        return list(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    # -------------------------------------------------------------------------
    # Wire format
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible data."""
        return self.model_dump(mode="json")

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        """Decode a schema from plain data.

        Raises:
            SchemaDecodeError: On unknown field types or rule tags, wrong
                payload types, empty field names, or unknown keys.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise SchemaDecodeError.from_pydantic(exc) from exc

    @classmethod
    def from_json(cls, text: str | bytes) -> Self:
        try:
            data = decode_json(text)
        except DECODE_ERRORS as exc:
            raise SchemaDecodeError.malformed_json(str(exc)) from exc
        return cls.from_dict(data)


def load_schema(path: Path | str) -> Schema:
    """Read and decode a schema document from disk.

    Raises:
        SchemaDecodeError: If the file is not a valid schema document.
    """
    path = Path(path)
    schema = Schema.from_json(path.read_text(encoding="utf-8"))
    log.debug("schema_loaded", schema=schema.name, path=str(path), fields=len(schema))
    return schema
