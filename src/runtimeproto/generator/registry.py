"""Registry of known types rendered as opaque references."""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Tuple, Union

TypeRef = Union[str, type]


def _identity(tp: TypeRef) -> str:
    if isinstance(tp, str):
        return tp
    return f"{tp.__module__}.{tp.__qualname__}"


class KnownTypeRegistry:
    """Immutable sorted set of fully-qualified type identities.

    A message field whose schema's ``type_identity`` is registered here is
    rendered as a plain reference to the message name and never expanded.

    Example:
        >>> registry = KnownTypeRegistry([uuid.UUID])
        >>> registry.is_known("uuid.UUID")
        True
        >>> registry.is_known("UUID")
        False
    """

    __slots__ = ("_identities",)

    def __init__(self, types: Iterable[TypeRef] = ()) -> None:
        self._identities: Tuple[str, ...] = tuple(sorted({_identity(tp) for tp in types}))

    def is_known(self, tp: TypeRef) -> bool:
        """Return True if the type (or identity string) is registered."""
        identity = _identity(tp)
        index = bisect_left(self._identities, identity)
        return index < len(self._identities) and self._identities[index] == identity

    def with_types(self, *types: TypeRef) -> KnownTypeRegistry:
        """Return a new registry containing these types as well."""
        return KnownTypeRegistry(self._identities + tuple(types))

    def __contains__(self, tp: object) -> bool:
        return isinstance(tp, (str, type)) and self.is_known(tp)

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self._identities)

    def __len__(self) -> int:
        return len(self._identities)

    def __repr__(self) -> str:
        return f"KnownTypeRegistry({list(self._identities)!r})"


DEFAULT_KNOWN_TYPES = KnownTypeRegistry(["uuid.UUID"])
