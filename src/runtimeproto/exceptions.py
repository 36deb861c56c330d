"""Exception hierarchy for runtimeproto.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from RuntimeProtoError for easy catching of any
runtimeproto-specific error.
"""

from __future__ import annotations

from typing import Optional


class RuntimeProtoError(Exception):
    """Base exception for all runtimeproto errors.

    Attributes:
        message_name: Name of the message being processed, if known
        field_name: Name of the offending field, if known
    """

    def __init__(
        self,
        detail: str,
        *,
        message_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ) -> None:
        self.detail = detail
        self.message_name = message_name
        self.field_name = field_name
        super().__init__(self._format())

    def _format(self) -> str:
        if self.message_name is None:
            return self.detail
        location = self.message_name
        if self.field_name is not None:
            location = f"{location}.{self.field_name}"
        return f"{location}: {self.detail}"


class ClassificationError(RuntimeProtoError):
    """Raised when a field cannot be mapped to an IDL type token.

    Examples:
        - SCALAR field without a scalar kind
        - MESSAGE field without a referenced schema
        - Unsupported Python annotation (dict, complex Union, arbitrary class)
    """

    pass


class IntrospectionError(RuntimeProtoError):
    """Raised when reading a schema's or field's structural metadata fails.

    Examples:
        - Schema object missing ``message_name`` or ``fields``
        - Field annotation missing or unresolvable
    """

    pass


class ConfigurationError(RuntimeProtoError):
    """Raised when the generator is given an unsupported root or options.

    Examples:
        - Root object is neither a Schema nor a Pydantic model class
    """

    pass
