"""Read-only views over a protobuf schema graph.

The views are built by `proto_rbi_types.loader` and consumed by the namespace and type
resolvers. Entities only reference their parent, so every parent chain ends at a top-level
message or enum.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from proto_rbi_types.proto_types import ElementCategory, FieldShape


@dataclass(frozen=True)
class SchemaFile:
    """A `.proto` file, reduced to what the namespace derivation needs.

    Attributes:
        name: The proto path of the file (e.g., "acme/billing/invoice.proto")
        package: The dot separated protobuf package, possibly empty
        ruby_package: The `ruby_package` file option, empty if not set
    """

    name: str
    package: str = ""
    ruby_package: str = ""


@dataclass(frozen=True, eq=False)
class Message:
    """A protobuf message. Nested messages reference their enclosing message as parent.

    Messages and enums compare and hash by identity.
    """

    name: str
    file: SchemaFile
    parent: Message | None = field(default=None, repr=False)
    map_entry: bool = False
    fields: list[Field] = field(default_factory=list, repr=False)

    @property
    def full_name(self) -> str:
        """The fully-qualified protobuf name, without leading dot."""
        return _full_name(self)


@dataclass(frozen=True, eq=False)
class Enum:
    """A protobuf enum, either top-level or nested in a message."""

    name: str
    file: SchemaFile
    parent: Message | None = field(default=None, repr=False)

    @property
    def full_name(self) -> str:
        """The fully-qualified protobuf name, without leading dot."""
        return _full_name(self)


Entity = Message | Enum


@dataclass(frozen=True)
class FieldElement:
    """The element type of a field: the field type itself, a list element, a map key or map value."""

    category: ElementCategory
    proto_type: int
    entity: Entity | None = None


@dataclass(frozen=True)
class Field:
    """A field of a message.

    For map fields `element` is the map value and `key` the map key; `key` is None otherwise.
    """

    name: str
    shape: FieldShape
    element: FieldElement
    key: FieldElement | None = None
    message: Message | None = field(default=None, repr=False, compare=False)


def _full_name(entity: Entity) -> str:
    names: list[str] = []
    outer: Message | Enum | None = entity
    while outer is not None:
        names.append(outer.name)
        outer = outer.parent
    if entity.file.package:
        names.append(entity.file.package)
    return ".".join(reversed(names))
