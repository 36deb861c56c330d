"""runtimeproto: .proto schemas from runtime schema graphs

Generates Protocol Buffers IDL documents from schemas discovered at runtime,
such as Pydantic models, so the same message definitions can be shared with
code generators for other languages.

Key Features:
- Every nested message reachable from the root is emitted exactly once
- Cyclic and diamond-shaped message graphs are handled
- Known types (e.g. ``uuid.UUID``) are referenced, never expanded
- Field names, numbers and order are written exactly as declared

Quick Start:
    >>> from pydantic import BaseModel
    >>> from runtimeproto import to_proto_schema
    >>>
    >>> class Address(BaseModel):
    ...     city: str
    >>>
    >>> class Person(BaseModel):
    ...     name: str
    ...     address: Address
    >>>
    >>> print(to_proto_schema(Person, package_name="people"))
"""

from __future__ import annotations

from .exceptions import (
    ClassificationError,
    ConfigurationError,
    IntrospectionError,
    RuntimeProtoError,
)
from .generator import (
    DEFAULT_KNOWN_TYPES,
    GraphWalker,
    HeaderConfig,
    KnownTypeRegistry,
    ProtoGenerator,
    to_proto_schema,
)
from .schema import (
    FieldCategory,
    FieldDescriptor,
    ProtoField,
    ScalarKind,
    Schema,
    SchemaBuilder,
    schema_for,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "to_proto_schema",
    "ProtoGenerator",
    "GraphWalker",
    # Schema model
    "Schema",
    "FieldDescriptor",
    "FieldCategory",
    "ScalarKind",
    # Pydantic introspection
    "SchemaBuilder",
    "schema_for",
    "ProtoField",
    # Configuration
    "HeaderConfig",
    "KnownTypeRegistry",
    "DEFAULT_KNOWN_TYPES",
    # Exceptions
    "RuntimeProtoError",
    "ClassificationError",
    "IntrospectionError",
    "ConfigurationError",
    # Version
    "__version__",
]
