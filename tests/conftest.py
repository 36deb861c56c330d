"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from runtimeproto.schema import FieldDescriptor, ScalarKind, Schema


@pytest.fixture
def address_schema() -> Schema:
    """Address with a single city field."""
    return Schema(
        "Address",
        [FieldDescriptor.scalar("city", 1, ScalarKind.STRING)],
        type_identity="tests.model.Address",
    )


@pytest.fixture
def person_schema(address_schema: Schema) -> Schema:
    """Person referencing Address."""
    return Schema(
        "Person",
        [
            FieldDescriptor.scalar("name", 1, ScalarKind.STRING),
            FieldDescriptor.scalar("id", 2, ScalarKind.INT32),
            FieldDescriptor.message("address", 3, address_schema),
            FieldDescriptor.scalar("tags", 4, ScalarKind.STRING, repeated=True),
        ],
        type_identity="tests.model.Person",
    )


@pytest.fixture
def uuid_schema() -> Schema:
    """Message-shaped schema for uuid.UUID."""
    return Schema(
        "UUID",
        [
            FieldDescriptor.scalar("msb", 1, ScalarKind.FIXED64),
            FieldDescriptor.scalar("lsb", 2, ScalarKind.FIXED64),
        ],
        type_identity="uuid.UUID",
    )
