"""Unit tests for the schema graph walker."""

from __future__ import annotations

import re

import pytest

from runtimeproto.exceptions import ClassificationError, ConfigurationError, IntrospectionError
from runtimeproto.generator import GraphWalker, KnownTypeRegistry, TypeClassifier
from runtimeproto.schema import FieldCategory, FieldDescriptor, ScalarKind, Schema


def message_names(proto: str) -> list[str]:
    """Return message names in output order."""
    return re.findall(r"^message (\w+) \{", proto, flags=re.MULTILINE)


def leaf(name: str) -> Schema:
    return Schema(name, [FieldDescriptor.scalar("value", 1, ScalarKind.INT32)])


class TestScenarios:
    """Test documented generation scenarios."""

    def test_person_with_address(self, person_schema: Schema) -> None:
        """Test root message first, then its nested message."""
        proto = GraphWalker().generate(person_schema)

        assert proto == (
            "message Person {\n"
            "  optional string name = 1;\n"
            "  optional int32 id = 2;\n"
            "  optional Address address = 3;\n"
            "  repeated string tags = 4;\n"
            "}\n"
            "\n"
            "message Address {\n"
            "  optional string city = 1;\n"
            "}\n"
            "\n"
        )

    def test_known_type_not_expanded(self, uuid_schema: Schema) -> None:
        """Test known types are referenced but never emitted."""
        root = Schema("Order", [FieldDescriptor.message("id", 5, uuid_schema)])
        proto = GraphWalker().generate(root)

        assert "  optional UUID id = 5;\n" in proto
        assert "message UUID" not in proto
        assert message_names(proto) == ["Order"]

    def test_collection_uses_array_object(self) -> None:
        """Test unconstrained collections emit ArrayObject and discover nothing."""
        root = Schema("Bag", [FieldDescriptor.collection("items", 1)])
        proto = GraphWalker().generate(root)

        assert "  repeated ArrayObject items = 1;\n" in proto
        assert message_names(proto) == ["Bag"]


class TestDeduplication:
    """Test each message is emitted exactly once."""

    def test_two_fields_same_message(self, address_schema: Schema) -> None:
        """Test two fields referencing one message in the same scan."""
        root = Schema(
            "Person",
            [
                FieldDescriptor.message("home", 1, address_schema),
                FieldDescriptor.message("work", 2, address_schema, repeated=True),
            ],
        )
        proto = GraphWalker().generate(root)

        assert message_names(proto) == ["Person", "Address"]
        assert "optional Address home = 1;" in proto
        assert "repeated Address work = 2;" in proto

    def test_diamond(self) -> None:
        """Test a message reachable through two paths."""
        shared = leaf("Shared")
        left = Schema("Left", [FieldDescriptor.message("shared", 1, shared)])
        right = Schema("Right", [FieldDescriptor.message("shared", 1, shared)])
        root = Schema(
            "Root",
            [FieldDescriptor.message("left", 1, left), FieldDescriptor.message("right", 2, right)],
        )
        proto = GraphWalker().generate(root)

        assert message_names(proto) == ["Root", "Left", "Shared", "Right"]

    def test_distinct_objects_same_name_collapse(self) -> None:
        """Test dedup is keyed by message name."""
        root = Schema(
            "Root",
            [
                FieldDescriptor.message("a", 1, leaf("Point")),
                FieldDescriptor.message("b", 2, leaf("Point")),
            ],
        )
        proto = GraphWalker().generate(root)

        assert message_names(proto) == ["Root", "Point"]


class TestCycles:
    """Test cyclic graphs terminate."""

    def test_mutual_reference(self) -> None:
        """Test A -> B -> A yields one block each."""
        a = Schema("A")
        b = Schema("B")
        a.bind_fields([FieldDescriptor.message("b", 1, b)])
        b.bind_fields([FieldDescriptor.message("a", 1, a)])

        proto = GraphWalker().generate(a)

        assert message_names(proto) == ["A", "B"]
        assert "optional A a = 1;" in proto

    def test_self_reference(self) -> None:
        """Test a message referencing itself."""
        node = Schema("Node")
        node.bind_fields(
            [
                FieldDescriptor.scalar("value", 1, ScalarKind.INT64),
                FieldDescriptor.message("children", 2, node, repeated=True),
            ]
        )
        proto = GraphWalker().generate(node)

        assert message_names(proto) == ["Node"]
        assert "repeated Node children = 2;" in proto

    def test_long_chain(self) -> None:
        """Test a deep chain does not hit the recursion limit."""
        schemas = [Schema(f"M{i}") for i in range(3000)]
        for current, following in zip(schemas, schemas[1:]):
            current.bind_fields([FieldDescriptor.message("next", 1, following)])
        schemas[-1].bind_fields([FieldDescriptor.message("first", 1, schemas[0])])

        proto = GraphWalker().generate(schemas[0])

        assert message_names(proto) == [f"M{i}" for i in range(3000)]


class TestOrdering:
    """Test discovery-order unfolding."""

    def test_discovery_order_not_breadth_first(self) -> None:
        """Test each message's dependents follow it before the next sibling."""
        d = leaf("D")
        e = leaf("E")
        b = Schema("B", [FieldDescriptor.message("d", 1, d)])
        c = Schema("C", [FieldDescriptor.message("d", 1, d), FieldDescriptor.message("e", 2, e)])
        a = Schema("A", [FieldDescriptor.message("b", 1, b), FieldDescriptor.message("c", 2, c)])

        proto = GraphWalker().generate(a)

        assert message_names(proto) == ["A", "B", "D", "C", "E"]

    def test_siblings_marked_before_descending(self) -> None:
        """Test a sibling referenced by an earlier sibling is not pulled forward."""
        c = leaf("C")
        b = Schema("B", [FieldDescriptor.message("c", 1, c)])
        a = Schema("A", [FieldDescriptor.message("b", 1, b), FieldDescriptor.message("c", 2, c)])

        proto = GraphWalker().generate(a)

        assert message_names(proto) == ["A", "B", "C"]

    def test_field_order_preserved(self) -> None:
        """Test fields keep declaration order regardless of numbers."""
        root = Schema(
            "Unordered",
            [
                FieldDescriptor.scalar("z", 9, ScalarKind.BOOL),
                FieldDescriptor.scalar("a", 1, ScalarKind.BYTES),
                FieldDescriptor.scalar("m", 4, ScalarKind.DOUBLE),
            ],
        )
        proto = GraphWalker().generate(root)

        assert proto.splitlines()[1:4] == [
            "  optional bool z = 9;",
            "  optional bytes a = 1;",
            "  optional double m = 4;",
        ]

    def test_idempotent(self, person_schema: Schema) -> None:
        """Test repeated generation yields identical output."""
        walker = GraphWalker()
        assert walker.generate(person_schema) == walker.generate(person_schema)


class TestKnownTypes:
    """Test known-type registry integration."""

    def test_custom_registry(self, address_schema: Schema, person_schema: Schema) -> None:
        """Test registering a type suppresses its message block."""
        registry = KnownTypeRegistry(["tests.model.Address"])
        proto = GraphWalker(TypeClassifier(registry)).generate(person_schema)

        assert "optional Address address = 3;" in proto
        assert message_names(proto) == ["Person"]

    def test_short_name_is_not_identity(self) -> None:
        """Test a same-named type from another namespace is still expanded."""
        own_uuid = Schema(
            "UUID",
            [FieldDescriptor.scalar("text", 1, ScalarKind.STRING)],
            type_identity="myapp.ids.UUID",
        )
        root = Schema("Order", [FieldDescriptor.message("id", 1, own_uuid)])
        proto = GraphWalker().generate(root)

        assert message_names(proto) == ["Order", "UUID"]


class TestErrors:
    """Test failures abort generation."""

    def test_unsupported_root(self) -> None:
        """Test a non-schema root is rejected."""
        with pytest.raises(ConfigurationError):
            GraphWalker().generate(42)  # type: ignore[arg-type]

    def test_schema_class_is_not_a_root(self) -> None:
        """Test passing the Schema class itself is rejected."""
        with pytest.raises(ConfigurationError):
            GraphWalker().generate(Schema)  # type: ignore[arg-type]

    def test_unbound_root(self) -> None:
        """Test a root whose fields were never bound fails as introspection."""
        with pytest.raises(IntrospectionError) as exc_info:
            GraphWalker().generate(Schema("Later"))

        assert exc_info.value.message_name == "Later"

    def test_plain_object_root(self) -> None:
        """Test any object exposing message_name and fields is accepted."""

        class PlainSchema:
            def __init__(self) -> None:
                self.message_name = "Plain"
                self.fields = [FieldDescriptor.scalar("flag", 1, ScalarKind.BOOL)]

        proto = GraphWalker().generate(PlainSchema())  # type: ignore[arg-type]

        assert proto == "message Plain {\n  optional bool flag = 1;\n}\n\n"

    def test_error_in_nested_message_names_location(self) -> None:
        """Test errors identify the message and field."""
        broken = Schema("Broken", [FieldDescriptor("bad", 1, FieldCategory.SCALAR)])
        root = Schema("Root", [FieldDescriptor.message("broken", 1, broken)])

        with pytest.raises(ClassificationError) as exc_info:
            GraphWalker().generate(root)

        assert exc_info.value.message_name == "Broken"
        assert exc_info.value.field_name == "bad"
        assert "Broken.bad" in str(exc_info.value)

    def test_unbound_fields(self) -> None:
        """Test a schema whose fields cannot be read."""
        root = Schema("Root", [FieldDescriptor.message("later", 1, Schema("Later"))])

        with pytest.raises(IntrospectionError) as exc_info:
            GraphWalker().generate(root)

        assert exc_info.value.message_name == "Later"

    def test_field_missing_attributes(self) -> None:
        """Test a field object without cardinality metadata."""

        class PartialField:
            name = "partial"
            category = FieldCategory.SCALAR
            scalar_kind = ScalarKind.INT32
            number = 1

        root = Schema("Root", [PartialField()])  # type: ignore[list-item]

        with pytest.raises(IntrospectionError) as exc_info:
            GraphWalker().generate(root)

        assert exc_info.value.message_name == "Root"
        assert exc_info.value.field_name == "partial"
        assert "Root.partial" in str(exc_info.value)
