"""Types definitions that are common in protobuf schemas and their Ruby renditions."""

from __future__ import annotations

from enum import Enum

from google.protobuf.descriptor_pb2 import FieldDescriptorProto

INTEGER_TAG = ":integer"
FLOAT_TAG = ":float"
STRING_TAG = ":string"
BOOLEAN_TAG = ":boolean"

# The generated setters only accept the native protobuf containers.
UNTYPED_MAP = "Google::Protobuf::Map"
UNTYPED_REPEATED = "Google::Protobuf::RepeatedField"

HASH_TEMPLATE = "T::Hash[{key}, {value}]"
ARRAY_TEMPLATE = "T::Array[{element}]"

NAMESPACE_SEPARATOR = "::"

MAP_KEY_FIELD_NUMBER = 1
MAP_VALUE_FIELD_NUMBER = 2


class FieldShape(Enum):
    """Shape modifiers of protobuf fields."""

    SINGULAR = "singular"
    REPEATED = "repeated"
    MAP = "map"


class ElementCategory(Enum):
    """Categories of the element type of a protobuf field."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    ENUM = "enum"
    MESSAGE = "message"
    UNSUPPORTED = "unsupported"


class UsageContext(Enum):
    """The generated accessor that a type expression annotates."""

    GETTER = "getter"
    SETTER = "setter"
    INITIALIZER = "initializer"


PROTO_TYPE_TO_CATEGORY: dict[int, ElementCategory] = {
    FieldDescriptorProto.TYPE_INT32: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_INT64: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_UINT32: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_UINT64: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_SINT32: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_SINT64: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_FIXED32: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_FIXED64: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_SFIXED32: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_SFIXED64: ElementCategory.INTEGER,
    FieldDescriptorProto.TYPE_FLOAT: ElementCategory.FLOAT,
    FieldDescriptorProto.TYPE_DOUBLE: ElementCategory.FLOAT,
    FieldDescriptorProto.TYPE_STRING: ElementCategory.STRING,
    FieldDescriptorProto.TYPE_BYTES: ElementCategory.STRING,
    FieldDescriptorProto.TYPE_BOOL: ElementCategory.BOOLEAN,
    FieldDescriptorProto.TYPE_ENUM: ElementCategory.ENUM,
    FieldDescriptorProto.TYPE_MESSAGE: ElementCategory.MESSAGE,
}


def category_of(proto_type: int) -> ElementCategory:
    """Classify a `FieldDescriptorProto.Type` code.

    Groups and codes this module does not know about are `UNSUPPORTED`.

    Args:
        proto_type (int): The protobuf type code.

    Returns:
        ElementCategory: The category of the code.
    """
    return PROTO_TYPE_TO_CATEGORY.get(proto_type, ElementCategory.UNSUPPORTED)
