"""Rule predicates.

Each rule is checked by a pure function that returns ``None`` when the value
passes, or a human-readable message quoting the value and the bound.
Applying a rule to a value of a kind it does not cover is a no-op; the
driver's type gate keeps that from happening in practice.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from decimal import Decimal
from functools import lru_cache
from typing import assert_never, cast

from bastion_utils import get_logger, get_settings

from bastion_schema.types import (
    INT64_MAX,
    INT64_MIN,
    DateTimeFormat,
    DateTimeFormatRule,
    MaxLengthRule,
    MaxValueRule,
    MinLengthRule,
    MinValueRule,
    PatternRule,
    ValidationRule,
)

log = get_logger("bastion_schema.rules")

# Past this many bits str(int) can hit the interpreter's digit limit
_MAX_EXACT_BITS = 12_000

_RFC3339 = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt ](?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.\d+)?"
    r"(?:[Zz]|[+-](?P<off_hour>\d{2}):(?P<off_minute>\d{2}))",
    re.ASCII,
)
_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+", re.ASCII)


@lru_cache(maxsize=get_settings().pattern_cache_size)
def compile_pattern(source: str) -> re.Pattern[str] | None:
    """Compile a regex source once per process.

    Returns:
        The compiled pattern, or ``None`` if the source is not a valid regex.
    """
    try:
        return re.compile(source)
    except re.error as exc:
        log.warning("invalid_pattern", pattern=source, error=str(exc))
        return None


def _scientific(value: int) -> str:
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    exponent = int(magnitude.bit_length() * math.log10(2))
    while 10 ** (exponent + 1) <= magnitude:
        exponent += 1
    while 10**exponent > magnitude:
        exponent -= 1
    head = str(magnitude // 10 ** (exponent - 6))
    return f"{sign}{head[0]}.{head[1:]}e+{exponent}"


def format_number(value: float | int | Decimal) -> str:
    """Render a number the way it reads in a message: ``120``, not ``120.0``.

    Integers too long to print in full are shown as ``1.000000e+5000``.
    """
    if isinstance(value, int) and value.bit_length() > _MAX_EXACT_BITS:
        return _scientific(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_rfc3339(text: str) -> bool:
    """Check for a complete RFC 3339 timestamp with a zone designator."""
    found = _RFC3339.fullmatch(text)
    if found is None:
        return False

    parts = found.groupdict()
    second = int(parts["second"])
    if second > 60:
        return False
    # Leap seconds are valid on the wire but not in datetime
    second = min(second, 59)
    try:
        datetime(
            int(parts["year"]),
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"]),
            int(parts["minute"]),
            second,
        )
    except ValueError:
        return False

    if parts["off_hour"] is not None:
        return int(parts["off_hour"]) <= 23 and int(parts["off_minute"]) <= 59
    return True


def is_unix_timestamp(text: str) -> bool:
    """Check for a base-10 signed integer that fits in 64 bits."""
    if _SIGNED_DIGITS.fullmatch(text) is None:
        return False
    return INT64_MIN <= int(text) <= INT64_MAX


def _is_number(value: object) -> bool:
    if isinstance(value, Decimal):
        return not value.is_nan()
    return isinstance(value, int | float) and not isinstance(value, bool)


def check_pattern(rule: PatternRule, value: object) -> str | None:
    if not isinstance(value, str):
        return None
    compiled = compile_pattern(rule.value)
    if compiled is None or compiled.search(value) is not None:
        return None
    return f"value '{value}' does not match pattern '{rule.value}'"


def check_min_length(rule: MinLengthRule, value: object) -> str | None:
    if not isinstance(value, str) or len(value) >= rule.value:
        return None
    return f"value '{value}' has length {len(value)}, less than minimum {rule.value}"


def check_max_length(rule: MaxLengthRule, value: object) -> str | None:
    if not isinstance(value, str) or len(value) <= rule.value:
        return None
    return f"value '{value}' has length {len(value)}, exceeds maximum {rule.value}"


def check_min_value(rule: MinValueRule, value: object) -> str | None:
    if not _is_number(value):
        return None
    number = cast("float | int | Decimal", value)
    # Compared natively: exact for big ints, and NaN never trips the bound
    if number < rule.value:
        return f"value {format_number(number)} is less than minimum {format_number(rule.value)}"
    return None


def check_max_value(rule: MaxValueRule, value: object) -> str | None:
    if not _is_number(value):
        return None
    number = cast("float | int | Decimal", value)
    if number > rule.value:
        return f"value {format_number(number)} exceeds maximum {format_number(rule.value)}"
    return None


def check_date_time_format(rule: DateTimeFormatRule, value: object) -> str | None:
    if not isinstance(value, str):
        return None

    match rule.value:
        case DateTimeFormat.ISO8601:
            valid = is_rfc3339(value)
        case DateTimeFormat.UNIX_TIMESTAMP:
            valid = is_unix_timestamp(value)
        case _:
            assert_never(rule.value)

    if valid:
        return None
    return f"value '{value}' is not a valid {rule.value}"


def check_rule(rule: ValidationRule, value: object) -> str | None:
    """Evaluate one rule against a value.

    Args:
        rule: Any variant of the rule catalogue.
        value: A payload value that already passed the type gate.

    Returns:
        None if the value satisfies the rule, otherwise the violation message.
    """
    match rule:
        case PatternRule():
            return check_pattern(rule, value)
        case MinLengthRule():
            return check_min_length(rule, value)
        case MaxLengthRule():
            return check_max_length(rule, value)
        case MinValueRule():
            return check_min_value(rule, value)
        case MaxValueRule():
            return check_max_value(rule, value)
        case DateTimeFormatRule():
            return check_date_time_format(rule, value)
        case _:
            assert_never(rule)
