#!/usr/bin/env python3
"""Validate JSON payloads against a schema document.

Usage:
    uv run python scripts/validate_payload.py schema.json payload.json [more.json ...]

    # Machine-readable report
    uv run python scripts/validate_payload.py schema.json payload.json --json

Exit status is 0 when every payload passes, 1 when any payload is rejected,
and 2 when the schema or a payload cannot be decoded.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from bastion_schema import BastionError, load_schema, validate_json
from bastion_utils import get_logger

log = get_logger("scripts.validate_payload")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate JSON payloads against a schema")
    parser.add_argument("schema", type=Path, help="Schema document (JSON)")
    parser.add_argument("payloads", type=Path, nargs="+", help="Payload files (JSON)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON report per payload instead of text",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run validation over every payload file."""
    args = build_parser().parse_args(argv)

    try:
        schema = load_schema(args.schema)
    except (BastionError, OSError) as exc:
        print(f"Cannot load schema {args.schema}: {exc}", file=sys.stderr)
        return 2

    status = 0
    for path in args.payloads:
        try:
            result = validate_json(schema, path.read_bytes())
        except (BastionError, OSError) as exc:
            print(f"Cannot read payload {path}: {exc}", file=sys.stderr)
            status = 2
            continue

        log.info("payload_checked", path=str(path), valid=result.is_valid)

        if args.json:
            print(json.dumps({"payload": str(path), **result.to_dict()}))
        elif result.is_valid:
            print(f"{path}: Validation passed!")
        else:
            print(f"{path}: Validation failed with the following errors:")
            for error in result.errors:
                print(f"- {error}")

        if not result.is_valid and status == 0:
            status = 1

    return status


if __name__ == "__main__":
    sys.exit(main())
