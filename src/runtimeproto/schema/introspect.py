"""Schema introspection for Pydantic models.

This module builds :class:`~runtimeproto.schema.descriptor.Schema` graphs from
Pydantic model classes, extracting each field's number, category, scalar kind
and nested message references.
"""

from __future__ import annotations

import collections.abc
import enum
import logging
import types
import uuid
from typing import Annotated, Any, Dict, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import ClassificationError, IntrospectionError
from .descriptor import FieldDescriptor, Schema, ScalarKind
from .fields import KIND_KEY, NUMBER_KEY

_log = logging.getLogger(__name__)

# Built-in leaf schema for uuid.UUID, laid out as two 64-bit halves.
UUID_SCHEMA = Schema(
    "UUID",
    [
        FieldDescriptor.scalar("msb", 1, ScalarKind.FIXED64),
        FieldDescriptor.scalar("lsb", 2, ScalarKind.FIXED64),
    ],
    type_identity="uuid.UUID",
)

_SIMPLE_SCALARS: Dict[Any, ScalarKind] = {
    bool: ScalarKind.BOOL,
    float: ScalarKind.DOUBLE,
    str: ScalarKind.STRING,
    bytes: ScalarKind.BYTES,
}

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)

_UNION_ORIGINS = (Union, types.UnionType)


def type_identity(tp: type) -> str:
    """Return the fully-qualified identity of a type (``module.qualname``)."""
    return f"{tp.__module__}.{tp.__qualname__}"


def _strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _annotated_metadata(annotation: Any) -> List[Any]:
    """Collect constraint metadata from every ``Annotated`` layer."""
    metadata: List[Any] = []
    while get_origin(annotation) is Annotated:
        for item in get_args(annotation)[1:]:
            # Field(...) inside Annotated carries its constraints in .metadata
            if isinstance(item, FieldInfo):
                metadata.extend(item.metadata)
            else:
                metadata.append(item)
        annotation = get_args(annotation)[0]
    return metadata


def _is_sequence(annotation: Any) -> bool:
    if annotation in _SEQUENCE_ORIGINS:
        return True
    return get_origin(annotation) in _SEQUENCE_ORIGINS


def _int_kind(min_value: Optional[float], max_value: Optional[float]) -> ScalarKind:
    """Pick the smallest proto integer type covering the bounds."""
    if min_value is None or max_value is None:
        return ScalarKind.INT32

    min_val = int(min_value)
    max_val = int(max_value)

    # Unsigned types
    if min_val >= 0:
        if max_val <= 2**32 - 1:
            return ScalarKind.UINT32
        return ScalarKind.UINT64

    # Signed types
    if min_val >= -(2**31) and max_val <= 2**31 - 1:
        return ScalarKind.INT32
    return ScalarKind.INT64


class SchemaBuilder:
    """Builds Schema graphs from Pydantic models.

    Schemas are cached per model class, so a model referenced from several
    fields maps to one Schema object, and mutually referencing models produce
    a cyclic Schema graph instead of infinite recursion.

    Example:
        >>> builder = SchemaBuilder()
        >>> schema = builder.schema_for(Person)
        >>> [f.name for f in schema.fields]
        ['name', 'id', 'address', 'tags']
    """

    def __init__(self) -> None:
        self._cache: Dict[Type[BaseModel], Schema] = {}
        self._depth = 0

    def schema_for(self, model_class: Type[BaseModel]) -> Schema:
        """Return the Schema describing a Pydantic model class.

        Args:
            model_class: Pydantic model class to introspect

        Returns:
            Schema with one FieldDescriptor per model field, in declaration order

        Raises:
            ClassificationError: If a field's annotation has no proto mapping
            IntrospectionError: If a field's annotation cannot be read or resolved
        """
        cached = self._cache.get(model_class)
        if cached is not None:
            return cached

        snapshot = dict(self._cache) if self._depth == 0 else None
        self._depth += 1
        try:
            schema = self._introspect(model_class)
        except Exception:
            # A failed build must not leave half-bound schemas behind
            if snapshot is not None:
                self._cache = snapshot
            raise
        finally:
            self._depth -= 1
        return schema

    def _introspect(self, model_class: Type[BaseModel]) -> Schema:
        name = model_class.__name__
        if not model_class.__pydantic_complete__:
            try:
                model_class.model_rebuild()
            except Exception as e:
                raise IntrospectionError(
                    f"cannot resolve forward references: {e}", message_name=name
                ) from e

        schema = Schema(
            name, type_identity=type_identity(model_class), namespace=model_class.__module__
        )
        self._cache[model_class] = schema

        fields: List[FieldDescriptor] = []
        for position, (field_name, field_info) in enumerate(
            model_class.model_fields.items(), start=1
        ):
            fields.append(self._extract_field(name, field_name, position, field_info))

        schema.bind_fields(fields)
        _log.debug("Introspected %s with %d fields", schema.type_identity, len(fields))
        return schema

    def _extract_field(
        self, message_name: str, name: str, position: int, field_info: FieldInfo
    ) -> FieldDescriptor:
        annotation = field_info.annotation
        if annotation is None:
            raise IntrospectionError(
                "field has no type annotation", message_name=message_name, field_name=name
            )

        extra = field_info.json_schema_extra if isinstance(field_info.json_schema_extra, dict) else {}
        number = extra.get(NUMBER_KEY, position)
        kind_override = extra.get(KIND_KEY)

        annotation = self._unwrap_optional(annotation, message_name, name)
        constraints = list(field_info.metadata) + _annotated_metadata(annotation)
        annotation = _strip_annotated(annotation)

        # Extract numeric bounds from metadata
        min_value = None
        max_value = None
        for constraint in constraints:
            if getattr(constraint, "ge", None) is not None:
                min_value = constraint.ge
            if getattr(constraint, "gt", None) is not None:
                min_value = constraint.gt + 1
            if getattr(constraint, "le", None) is not None:
                max_value = constraint.le
            if getattr(constraint, "lt", None) is not None:
                max_value = constraint.lt - 1

        repeated = False
        if _is_sequence(annotation):
            element = self._element_type(annotation)
            if element is None:
                return FieldDescriptor.collection(name, number)
            annotation = element
            repeated = True
            # Bounds constrain the collection length, not its elements
            min_value = max_value = None

        if kind_override is not None:
            return FieldDescriptor.scalar(
                name, number, ScalarKind(kind_override), repeated=repeated
            )

        return self._describe(
            message_name, name, number, annotation, repeated, min_value, max_value
        )

    def _describe(
        self,
        message_name: str,
        name: str,
        number: int,
        annotation: Any,
        repeated: bool,
        min_value: Optional[float],
        max_value: Optional[float],
    ) -> FieldDescriptor:
        if annotation in _SIMPLE_SCALARS:
            return FieldDescriptor.scalar(
                name, number, _SIMPLE_SCALARS[annotation], repeated=repeated
            )

        if annotation is int:
            return FieldDescriptor.scalar(
                name, number, _int_kind(min_value, max_value), repeated=repeated
            )

        if isinstance(annotation, type):
            # Enums are written by ordinal
            if issubclass(annotation, enum.Enum):
                return FieldDescriptor.scalar(name, number, ScalarKind.INT32, repeated=repeated)

            if annotation is uuid.UUID:
                return FieldDescriptor.message(name, number, UUID_SCHEMA, repeated=repeated)

            if issubclass(annotation, BaseModel):
                return FieldDescriptor.message(
                    name, number, self.schema_for(annotation), repeated=repeated
                )

        raise ClassificationError(
            f"cannot convert type {annotation!r} to a proto type",
            message_name=message_name,
            field_name=name,
        )

    @staticmethod
    def _unwrap_optional(annotation: Any, message_name: str, name: str) -> Any:
        """Return ``T`` for ``Optional[T]``, keeping any ``Annotated`` wrapper on ``T``."""
        annotation = _strip_annotated(annotation)
        if get_origin(annotation) in _UNION_ORIGINS:
            non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(non_none_args) == 1:
                return non_none_args[0]
            raise ClassificationError(
                "complex Union types not supported", message_name=message_name, field_name=name
            )
        return annotation

    @staticmethod
    def _element_type(annotation: Any) -> Optional[Any]:
        """Return the single element type of a collection annotation.

        Returns None when the elements are unconstrained or heterogeneous.
        """
        args = get_args(annotation)
        if get_origin(annotation) is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                args = args[:1]
            elif len(set(args)) == 1:
                args = args[:1]
        if len(args) != 1:
            return None

        element = _strip_annotated(args[0])
        if get_origin(element) in _UNION_ORIGINS:
            non_none_args = [arg for arg in get_args(element) if arg is not type(None)]
            if len(non_none_args) != 1:
                return None
            element = _strip_annotated(non_none_args[0])

        if element is Any or element is object or _is_sequence(element):
            return None
        return element


def schema_for(model_class: Type[BaseModel]) -> Schema:
    """Build a Schema graph for a single Pydantic model class.

    Args:
        model_class: Pydantic model class

    Returns:
        Root Schema of the model's graph
    """
    return SchemaBuilder().schema_for(model_class)
