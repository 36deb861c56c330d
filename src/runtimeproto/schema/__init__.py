"""Schema descriptors and Pydantic model introspection for runtimeproto."""

from __future__ import annotations

from .descriptor import (
    COLLECTION_MARKER,
    FieldCategory,
    FieldDescriptor,
    ScalarKind,
    Schema,
    SchemaLike,
    is_schema_like,
)
from .fields import ProtoField
from .introspect import UUID_SCHEMA, SchemaBuilder, schema_for, type_identity

__all__ = [
    "COLLECTION_MARKER",
    "FieldCategory",
    "FieldDescriptor",
    "ProtoField",
    "ScalarKind",
    "Schema",
    "SchemaBuilder",
    "SchemaLike",
    "UUID_SCHEMA",
    "is_schema_like",
    "schema_for",
    "type_identity",
]
