"""Pytest fixtures and configuration for engine tests."""

from __future__ import annotations

import os

# Set environment variables BEFORE any imports that might load settings
# This is necessary because settings are cached at import time
os.environ.setdefault("APP_MODE", "development")
os.environ.setdefault("LOG_LEVEL", "silent")

import pytest
from bastion_schema import DateTimeFormat, FieldDefinition, FieldType, Schema


@pytest.fixture
def user_schema() -> Schema:
    """Schema `user` with required id/email/username and a nullable age."""
    return (
        Schema.named("user")
        .field("user_id", FieldDefinition.of(FieldType.INTEGER).require())
        .field(
            "email",
            FieldDefinition.of(FieldType.STRING).require().pattern(r"^[^@]+@[^@]+$"),
        )
        .field(
            "username",
            FieldDefinition.of(FieldType.STRING).require().min_length(3).max_length(20),
        )
        .field(
            "age",
            FieldDefinition.of(FieldType.INTEGER).allow_null().min_value(0).max_value(120),
        )
    )


@pytest.fixture
def event_schema() -> Schema:
    """Schema `event` with a required ISO 8601 `created_at`."""
    return Schema.named("event").field(
        "created_at",
        FieldDefinition.of(FieldType.DATETIME).require().date_time_format(DateTimeFormat.ISO8601),
    )


@pytest.fixture
def valid_user() -> dict:
    """Payload that satisfies the `user` schema."""
    return {"user_id": 1, "email": "a@b", "username": "carlos", "age": 30}


@pytest.fixture
def user_schema_document() -> dict:
    """Wire form of the `user` schema."""
    return {
        "name": "user",
        "fields": {
            "user_id": {"field_type": "integer", "required": True, "nullable": False, "rules": []},
            "email": {
                "field_type": "string",
                "required": True,
                "nullable": False,
                "rules": [{"rule": "pattern", "value": "^[^@]+@[^@]+$"}],
            },
            "username": {
                "field_type": "string",
                "required": True,
                "nullable": False,
                "rules": [
                    {"rule": "min_length", "value": 3},
                    {"rule": "max_length", "value": 20},
                ],
            },
            "age": {
                "field_type": "integer",
                "required": False,
                "nullable": True,
                "rules": [
                    {"rule": "min_value", "value": 0},
                    {"rule": "max_value", "value": 120},
                ],
            },
        },
    }
