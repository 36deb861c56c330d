"""Proto document generation for runtimeproto.

This module provides the graph walker that emits every message reachable from
a root schema, and the top-level API that prepends the document header.
"""

from __future__ import annotations

from .classifier import ARRAY_OBJECT, Classification, TypeClassifier
from .convert import ProtoGenerator, to_proto_schema
from .emitter import MessageEmitter
from .header import HeaderConfig, render_header
from .registry import DEFAULT_KNOWN_TYPES, KnownTypeRegistry
from .session import GenerationSession
from .walker import GraphWalker

__all__ = [
    "ARRAY_OBJECT",
    "Classification",
    "DEFAULT_KNOWN_TYPES",
    "GenerationSession",
    "GraphWalker",
    "HeaderConfig",
    "KnownTypeRegistry",
    "MessageEmitter",
    "ProtoGenerator",
    "TypeClassifier",
    "render_header",
    "to_proto_schema",
]
