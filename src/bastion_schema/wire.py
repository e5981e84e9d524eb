"""Strict JSON decoding for schema documents and payloads."""

from __future__ import annotations

import json
from typing import Any

# ValueError covers JSONDecodeError, UnicodeDecodeError and the int/str digit limit
DECODE_ERRORS = (ValueError, RecursionError)


def _reject_constant(token: str) -> Any:
    msg = f"{token} is not a valid JSON number"
    raise ValueError(msg)


def decode_json(raw: str | bytes) -> Any:
    """Decode standard JSON only; ``NaN`` and ``Infinity`` are refused.

    Raises:
        ValueError: If ``raw`` is not standard JSON.
        RecursionError: If ``raw`` nests too deeply to decode.
    """
    return json.loads(raw, parse_constant=_reject_constant)
