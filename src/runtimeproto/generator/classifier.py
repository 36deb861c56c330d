"""Mapping of field descriptors to IDL type tokens."""

from __future__ import annotations

from typing import NamedTuple, Optional

from ..exceptions import ClassificationError, IntrospectionError
from ..schema.descriptor import (
    COLLECTION_MARKER,
    FieldCategory,
    FieldDescriptor,
    ScalarKind,
    SchemaLike,
)
from .registry import DEFAULT_KNOWN_TYPES, KnownTypeRegistry
from .session import GenerationSession

# Token emitted for unconstrained collections
ARRAY_OBJECT = "ArrayObject"


class Classification(NamedTuple):
    """Result of classifying one field.

    Attributes:
        type_token: IDL type written in the field line
        to_enqueue: Nested schema that still has to be emitted, if any
    """

    type_token: str
    to_enqueue: Optional[SchemaLike] = None


class TypeClassifier:
    """Classifies fields against a known-type registry.

    Rules, in order of precedence:

    1. SCALAR fields use the scalar kind's token (``int32``, ``string``, ...).
    2. MESSAGE fields whose schema identity is a known type use the message
       name and are never expanded.
    3. Other MESSAGE fields use the message name and enqueue the schema unless
       it is already visited or pending in the session.
    4. COLLECTION fields use ``ArrayObject``; elements are not inspected.

    Anything else raises :class:`ClassificationError`.
    """

    def __init__(self, known_types: KnownTypeRegistry = DEFAULT_KNOWN_TYPES) -> None:
        self.known_types = known_types

    def classify(
        self,
        field: FieldDescriptor,
        session: GenerationSession,
        *,
        message_name: Optional[str] = None,
    ) -> Classification:
        """Classify a field.

        Args:
            field: Field to classify
            session: Current session, only read to decide whether to enqueue
            message_name: Name of the owning message, used in error messages

        Returns:
            Classification with the type token and the schema to enqueue

        Raises:
            ClassificationError: If the field matches no rule
            IntrospectionError: If the field's metadata cannot be read
        """
        try:
            name = field.name
            category = field.category
        except AttributeError as e:
            raise IntrospectionError(
                f"cannot read field metadata: {e}", message_name=message_name
            ) from e

        if category is FieldCategory.SCALAR:
            kind = getattr(field, "scalar_kind", None)
            if not isinstance(kind, ScalarKind):
                raise ClassificationError(
                    f"scalar field has no scalar kind (got {kind!r})",
                    message_name=message_name,
                    field_name=name,
                )
            return Classification(kind.value)

        if category is FieldCategory.MESSAGE:
            return self._classify_message(field, session, message_name, name)

        if category is FieldCategory.COLLECTION:
            element = getattr(field, "element", None)
            if element is not COLLECTION_MARKER:
                raise ClassificationError(
                    f"collection field has no collection marker (got {element!r})",
                    message_name=message_name,
                    field_name=name,
                )
            return Classification(ARRAY_OBJECT)

        raise ClassificationError(
            f"unknown field category {category!r}",
            message_name=message_name,
            field_name=name,
        )

    def _classify_message(
        self,
        field: FieldDescriptor,
        session: GenerationSession,
        message_name: Optional[str],
        name: str,
    ) -> Classification:
        schema = getattr(field, "schema", None)
        if schema is None:
            raise ClassificationError(
                "message field has no referenced schema",
                message_name=message_name,
                field_name=name,
            )

        try:
            token = schema.message_name
        except AttributeError as e:
            raise IntrospectionError(
                f"cannot read referenced schema name: {e}",
                message_name=message_name,
                field_name=name,
            ) from e
        if not isinstance(token, str) or not token:
            raise ClassificationError(
                f"referenced schema has no message name (got {token!r})",
                message_name=message_name,
                field_name=name,
            )

        identity = getattr(schema, "type_identity", None)
        if identity is not None and self.known_types.is_known(identity):
            return Classification(token)

        if session.is_scheduled(token):
            return Classification(token)
        return Classification(token, schema)
