#!/usr/bin/env python3
"""Proto schema generation example for runtimeproto.

This example demonstrates:
1. Generating a .proto document from nested Pydantic models
2. Known types (uuid.UUID) rendered as references
3. Cyclic references and opaque collections

Run it directly, or through the CLI:
    runtimeproto examples/person_schema.py:Person --package people
"""

from __future__ import annotations

import uuid
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from runtimeproto import ProtoField, ScalarKind, to_proto_schema


class Address(BaseModel):
    """Postal address."""

    city: str
    zip_code: Optional[str] = None


class Department(BaseModel):
    """Department with a back-reference to its manager."""

    title: str
    manager: Optional[Person] = None


class Person(BaseModel):
    """Person record."""

    name: str
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    age: int = Field(ge=0, le=150)
    address: Address
    previous_addresses: List[Address] = []
    department: Optional[Department] = None
    tags: List[str] = []
    attributes: List[Any] = []
    checksum: int = ProtoField(number=16, kind=ScalarKind.FIXED32, default=0)


Department.model_rebuild()


def main() -> None:
    """Run the proto schema generation example."""
    print("=" * 70)
    print("runtimeproto: .proto Schema Generation Example")
    print("=" * 70)
    print()
    print(to_proto_schema(Person, package_name="people", outer_classname="PeopleProtos"))
    print("Notes:")
    print("  - Address is emitted once although two fields reference it")
    print("  - UUID is a known type and has no message block of its own")
    print("  - attributes has unconstrained elements and uses ArrayObject")


if __name__ == "__main__":
    main()
