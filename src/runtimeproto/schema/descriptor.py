"""Field and schema descriptors consumed by the proto generator.

A ``Schema`` is a named, ordered collection of ``FieldDescriptor`` objects.
Each descriptor carries its category (scalar, nested message or opaque
collection) decided once when it is built, so the generator never needs to
inspect runtime class names.
"""

from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, Tuple


class FieldCategory(enum.Enum):
    """Representation style of a field."""

    SCALAR = "scalar"
    MESSAGE = "message"
    COLLECTION = "collection"


class ScalarKind(enum.Enum):
    """Scalar kinds, valued by their proto reserved token."""

    DOUBLE = "double"
    FLOAT = "float"
    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    SINT32 = "sint32"
    SINT64 = "sint64"
    FIXED32 = "fixed32"
    FIXED64 = "fixed64"
    SFIXED32 = "sfixed32"
    SFIXED64 = "sfixed64"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"


class _CollectionMarker:
    """Payload of an unconstrained (heterogeneous) collection field."""

    _instance: Optional[_CollectionMarker] = None

    def __new__(cls) -> _CollectionMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "COLLECTION_MARKER"


COLLECTION_MARKER = _CollectionMarker()


class SchemaLike(Protocol):
    """Input boundary accepted by the generator."""

    @property
    def message_name(self) -> str: ...

    @property
    def fields(self) -> Sequence[FieldDescriptor]: ...


@dataclass(frozen=True)
class FieldDescriptor:
    """Description of a single field.

    Exactly one of ``scalar_kind``, ``schema`` or ``element`` is expected to be
    set, matching ``category``. The combination is checked when the field is
    classified, not here.

    Attributes:
        name: Field name, emitted verbatim
        number: Field number, emitted verbatim (uniqueness is not checked)
        category: Representation style
        repeated: Whether the field is repeated
        scalar_kind: Scalar kind for SCALAR fields
        schema: Referenced schema for MESSAGE fields
        element: ``COLLECTION_MARKER`` for COLLECTION fields
    """

    name: str
    number: int
    category: FieldCategory
    repeated: bool = False
    scalar_kind: Optional[ScalarKind] = None
    schema: Optional[SchemaLike] = None
    element: Optional[_CollectionMarker] = None

    @classmethod
    def scalar(
        cls, name: str, number: int, kind: ScalarKind, *, repeated: bool = False
    ) -> FieldDescriptor:
        """Create a scalar field."""
        return cls(name, number, FieldCategory.SCALAR, repeated, scalar_kind=kind)

    @classmethod
    def message(
        cls, name: str, number: int, schema: SchemaLike, *, repeated: bool = False
    ) -> FieldDescriptor:
        """Create a field referencing a nested message schema."""
        return cls(name, number, FieldCategory.MESSAGE, repeated, schema=schema)

    @classmethod
    def collection(cls, name: str, number: int) -> FieldDescriptor:
        """Create an unconstrained collection field (always repeated)."""
        return cls(name, number, FieldCategory.COLLECTION, True, element=COLLECTION_MARKER)


class Schema:
    """A named, ordered list of fields describing one message type.

    Fields may be passed to the constructor or bound once later through
    :meth:`bind_fields`, which lets builders create cyclic graphs (a schema
    must exist before a field can reference it).

    Example:
        >>> address = Schema("Address", [FieldDescriptor.scalar("city", 1, ScalarKind.STRING)])
        >>> person = Schema("Person", [FieldDescriptor.message("address", 1, address)])
    """

    def __init__(
        self,
        message_name: str,
        fields: Optional[Sequence[FieldDescriptor]] = None,
        *,
        type_identity: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> None:
        self._message_name = message_name
        self._type_identity = type_identity or message_name
        if namespace is None and "." in self._type_identity:
            namespace = self._type_identity.rpartition(".")[0]
        self._namespace = namespace
        self._fields: Optional[Tuple[FieldDescriptor, ...]] = None
        if fields is not None:
            self.bind_fields(fields)

    @property
    def message_name(self) -> str:
        return self._message_name

    @property
    def type_identity(self) -> str:
        """Fully-qualified identity of the type this schema describes."""
        return self._type_identity

    @property
    def namespace(self) -> Optional[str]:
        """Module path the type is declared in, if known."""
        return self._namespace

    @property
    def fields(self) -> Tuple[FieldDescriptor, ...]:
        if self._fields is None:
            raise AttributeError(f"fields of schema {self._message_name} were never bound")
        return self._fields

    def bind_fields(self, fields: Sequence[FieldDescriptor]) -> None:
        """Set the field list. Allowed exactly once."""
        if self._fields is not None:
            raise ValueError(f"fields of schema {self._message_name} are already bound")
        self._fields = tuple(fields)

    def __repr__(self) -> str:
        return f"Schema({self._message_name!r}, type_identity={self._type_identity!r})"


_MISSING = object()


def is_schema_like(obj: Any) -> bool:
    """Return True if ``obj`` exposes ``message_name`` and ``fields``.

    Attributes are looked up statically so that reading them (for example
    fields that were never bound) cannot fail here.
    """
    if isinstance(obj, type):
        return False
    return all(
        inspect.getattr_static(obj, attr, _MISSING) is not _MISSING
        for attr in ("message_name", "fields")
    )
