"""Base Pydantic models with strict validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model for values built in-process from other models.

    - No type coercion (strict=True)
    - Immutable after creation (frozen=True)
    - Fail on unknown fields (extra="forbid")
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
    )


class WireModel(BaseModel):
    """Base model for immutable values that are also decoded from JSON data.

    Strict mode would refuse nested dicts from Python input, so strictness
    is declared per field with ``StrictStr``/``StrictInt``/``StrictBool``
    instead. Enum fields accept their wire token.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


class MutableModel(BaseModel):
    """Base model for data built up incrementally, like schemas.

    Assignments are validated, so toggling a flag with a non-bool fails
    the same way a bad wire document does.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )
