"""Field helpers for Pydantic models.

This module provides a convenience function for attaching proto-specific
metadata (field number, scalar kind) to Pydantic model fields.
"""

from __future__ import annotations

from typing import Any, Optional, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from .descriptor import ScalarKind

NUMBER_KEY = "proto_number"
KIND_KEY = "proto_kind"


def ProtoField(
    *,
    number: Optional[int] = None,
    kind: Optional[ScalarKind] = None,
    **kwargs: Any,
) -> FieldInfo:
    """Create a field carrying proto metadata.

    Without ``number`` the field is numbered by its declaration position.
    Without ``kind`` the scalar token is derived from the annotation.

    Args:
        number: Explicit proto field number (positive)
        kind: Explicit scalar kind, e.g. ``ScalarKind.FIXED64``
        **kwargs: Additional Field() arguments (default, ge, le, description, ...)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Raises:
        ValueError: If number is not a positive integer

    Example:
        >>> class Person(BaseModel):
        ...     id: int = ProtoField(number=7, kind=ScalarKind.FIXED64)
    """
    extra: dict[str, Any] = {}
    if number is not None:
        if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
            raise ValueError(f"number must be a positive integer, got {number!r}")
        extra[NUMBER_KEY] = number
    if kind is not None:
        extra[KIND_KEY] = ScalarKind(kind).value

    if extra:
        merged = dict(kwargs.pop("json_schema_extra", None) or {})
        merged.update(extra)
        kwargs["json_schema_extra"] = merged
    return cast(FieldInfo, Field(**kwargs))
