"""Mutable state of a single generation run."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Dict, Set

from ..schema.descriptor import SchemaLike


@dataclass
class GenerationSession:
    """State owned by one ``generate()`` call and discarded afterwards.

    Attributes:
        visited: Names of messages already emitted or scheduled for emission
        pending: Schemas discovered while scanning the current message, keyed
            by message name in first-discovery order
        buffer: Accumulated message blocks
    """

    visited: Set[str] = field(default_factory=set)
    pending: Dict[str, SchemaLike] = field(default_factory=dict)
    buffer: io.StringIO = field(default_factory=io.StringIO)

    def is_scheduled(self, message_name: str) -> bool:
        """Return True if the message is already visited or pending."""
        return message_name in self.visited or message_name in self.pending
