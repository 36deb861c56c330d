"""Protobuf schema generation from Schema graphs and Pydantic models.

This module ties the header and the message graph together into a complete
.proto document.
"""

from __future__ import annotations

from typing import Any, Optional, Type, Union

from pydantic import BaseModel

from ..exceptions import ConfigurationError
from ..schema.descriptor import SchemaLike, is_schema_like
from ..schema.introspect import SchemaBuilder
from .classifier import TypeClassifier
from .header import HeaderConfig, render_header
from .registry import DEFAULT_KNOWN_TYPES, KnownTypeRegistry
from .walker import GraphWalker

Root = Union[SchemaLike, Type[BaseModel]]


def _resolve_root(root: Any) -> SchemaLike:
    if isinstance(root, type) and issubclass(root, BaseModel):
        return SchemaBuilder().schema_for(root)
    if is_schema_like(root):
        return root
    raise ConfigurationError(
        f"root must be a Schema or a Pydantic model class, got {type(root).__name__}"
    )


def _namespace_of(schema: SchemaLike) -> str:
    """Return the module path used for the default package names."""
    namespace = getattr(schema, "namespace", None)
    if namespace:
        return namespace
    identity = getattr(schema, "type_identity", None) or schema.message_name
    return identity.rpartition(".")[0] or identity


class ProtoGenerator:
    """Generates a .proto document for a root schema.

    Each call to :meth:`generate` starts from scratch, so repeated calls on an
    unchanged graph return identical text. Errors abort the call without
    returning partial output.

    Example:
        >>> generator = ProtoGenerator(Person, package_name="people")
        >>> proto = generator.generate()
    """

    def __init__(
        self,
        root: Root,
        *,
        package_name: Optional[str] = None,
        language_package: Optional[str] = None,
        outer_classname: Optional[str] = None,
        known_types: KnownTypeRegistry = DEFAULT_KNOWN_TYPES,
    ) -> None:
        """Initialize the generator.

        Args:
            root: Root Schema, or a Pydantic model class to introspect
            package_name: Proto package; derived from the root type by default
            language_package: Language package option; derived by default
            outer_classname: Optional outer class name option
            known_types: Types rendered as references and never expanded

        Raises:
            ConfigurationError: If root is not a supported schema kind
            ClassificationError: If a Pydantic field has no proto mapping
            IntrospectionError: If a Pydantic model cannot be introspected
        """
        self.schema = _resolve_root(root)
        try:
            self.config = HeaderConfig.for_namespace(
                _namespace_of(self.schema),
                package_name=package_name,
                language_package=language_package,
                outer_classname=outer_classname,
            )
        except ValueError as e:
            raise ConfigurationError(str(e), message_name=self.schema.message_name) from e
        self.walker = GraphWalker(TypeClassifier(known_types))

    def generate(self) -> str:
        """Generate the complete .proto document.

        Returns:
            Header followed by every reachable message block
        """
        body = self.walker.generate(self.schema)
        return render_header(self.config) + body


def to_proto_schema(
    root: Root,
    *,
    package_name: Optional[str] = None,
    language_package: Optional[str] = None,
    outer_classname: Optional[str] = None,
    known_types: KnownTypeRegistry = DEFAULT_KNOWN_TYPES,
) -> str:
    """Generate a .proto document from a Schema or Pydantic model class.

    Args:
        root: Root Schema, or a Pydantic model class
        package_name: Proto package name
        language_package: Language package option
        outer_classname: Optional outer class name option
        known_types: Types rendered as references and never expanded

    Returns:
        .proto document as a string

    Raises:
        RuntimeProtoError: If the schema graph cannot be converted

    Example:
        >>> class Address(BaseModel):
        ...     city: str
        >>> class Person(BaseModel):
        ...     name: str
        ...     address: Address
        >>> print(to_proto_schema(Person, package_name="people"))
        package people;
        ...
        message Person {
          optional string name = 1;
          optional Address address = 2;
        }
        ...
    """
    return ProtoGenerator(
        root,
        package_name=package_name,
        language_package=language_package,
        outer_classname=outer_classname,
        known_types=known_types,
    ).generate()
