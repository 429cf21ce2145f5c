"""Exceptions raised while resolving Ruby types of protobuf fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from proto_rbi_types.schema import Field


class ProtoRbiTypesError(Exception):
    """Base class of all errors raised by this package."""

    pass


class UnsupportedTypeError(ProtoRbiTypesError):
    """Raised when the element type of a field is outside the supported taxonomy."""

    def __init__(self, field: Field, proto_type: int):
        self.field = field
        self.proto_type = proto_type
        super().__init__(f"Unsupported field type for field: {field.name}")


class UnresolvedReferenceError(ProtoRbiTypesError):
    """Raised when a field references a message or enum that was never loaded."""

    def __init__(self, field_name: str, type_name: str):
        self.field_name = field_name
        self.type_name = type_name
        super().__init__(f"Field {field_name} references unknown type {type_name}")
