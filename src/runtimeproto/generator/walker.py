"""Discovery and emission of every message reachable from a root schema."""

from __future__ import annotations

from typing import Dict, Iterator, List

from ..exceptions import ConfigurationError, IntrospectionError
from ..schema.descriptor import SchemaLike, is_schema_like
from .classifier import TypeClassifier
from .emitter import MessageEmitter
from .session import GenerationSession


class GraphWalker:
    """Emits the root message followed by every nested message it reaches.

    Each message is written exactly once per document. After a message block
    is written, the schemas first discovered while scanning it are marked
    visited and then processed in discovery order, each one unfolding its own
    discoveries before the next sibling is processed. Marking before
    descending is what keeps cyclic graphs finite.

    Example:
        >>> walker = GraphWalker()
        >>> print(walker.generate(person_schema))
        message Person {
          optional string name = 1;
          optional Address address = 2;
        }
        <BLANKLINE>
        message Address {
          optional string city = 1;
        }
    """

    def __init__(
        self,
        classifier: TypeClassifier | None = None,
        emitter: MessageEmitter | None = None,
    ) -> None:
        self.classifier = classifier or TypeClassifier()
        self.emitter = emitter or MessageEmitter()

    def generate(self, root: SchemaLike) -> str:
        """Render all message blocks reachable from ``root``.

        Args:
            root: Root schema

        Returns:
            Message blocks, each followed by a blank line

        Raises:
            ConfigurationError: If root is not a schema
            ClassificationError: If any field cannot be classified
            IntrospectionError: If any schema or field metadata cannot be read
        """
        if not is_schema_like(root):
            raise ConfigurationError(f"unsupported root schema type {type(root).__name__}")

        session = GenerationSession()
        session.visited.add(self._message_name(root))

        stack: List[Iterator[SchemaLike]] = [iter([root])]
        while stack:
            schema = next(stack[-1], None)
            if schema is None:
                stack.pop()
                continue
            batch = self._process(schema, session)
            session.visited.update(batch)
            stack.append(iter(list(batch.values())))

        return session.buffer.getvalue()

    def _process(self, schema: SchemaLike, session: GenerationSession) -> Dict[str, SchemaLike]:
        """Emit one message and return the schemas it newly discovered."""
        name = self._message_name(schema)
        try:
            fields = list(schema.fields)
        except (AttributeError, TypeError) as e:
            raise IntrospectionError(f"cannot read fields: {e}", message_name=name) from e

        tokens = []
        for field in fields:
            classification = self.classifier.classify(field, session, message_name=name)
            tokens.append(classification.type_token)
            if classification.to_enqueue is not None:
                session.pending[classification.type_token] = classification.to_enqueue

        self.emitter.emit(schema, session.buffer, tokens)

        batch = dict(session.pending)
        session.pending.clear()
        return batch

    @staticmethod
    def _message_name(schema: SchemaLike) -> str:
        try:
            name = schema.message_name
        except AttributeError as e:
            raise IntrospectionError(f"cannot read message name: {e}") from e
        if not isinstance(name, str) or not name:
            raise IntrospectionError(f"invalid message name {name!r}")
        return name
