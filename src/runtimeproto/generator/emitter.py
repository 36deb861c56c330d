"""Rendering of a single ``message`` block."""

from __future__ import annotations

from typing import Sequence, TextIO

from ..exceptions import IntrospectionError
from ..schema.descriptor import FieldDescriptor, SchemaLike


class MessageEmitter:
    """Writes one schema's fields as a ``message <Name> { ... }`` block.

    Fields are written in declaration order, with their names and numbers
    unchanged. Cardinality is ``repeated`` or ``optional``.

    Example output::

        message Address {
          optional string city = 1;
        }

    """

    indent = "  "

    def emit(self, schema: SchemaLike, buffer: TextIO, type_tokens: Sequence[str]) -> None:
        """Append the message block to ``buffer``.

        Nothing is written if any field cannot be rendered.

        Args:
            schema: Schema to render
            buffer: Output buffer
            type_tokens: Type token of each field, aligned with ``schema.fields``

        Raises:
            IntrospectionError: If a field's name, number or cardinality cannot be read
        """
        message_name = schema.message_name
        lines = [f"message {message_name} {{"]
        for field, type_token in zip(schema.fields, type_tokens):
            lines.append(self._field_line(message_name, field, type_token))
        lines.append("}")
        buffer.write("\n".join(lines))
        buffer.write("\n\n")

    def _field_line(self, message_name: str, field: FieldDescriptor, type_token: str) -> str:
        field_name = getattr(field, "name", None)
        try:
            cardinality = "repeated" if field.repeated else "optional"
            return f"{self.indent}{cardinality} {type_token} {field.name} = {field.number};"
        except AttributeError as e:
            raise IntrospectionError(
                f"cannot read field metadata: {e}",
                message_name=message_name,
                field_name=field_name,
            ) from e
