"""Pytest configuration and descriptor builders for the type resolver tests."""

from __future__ import annotations

import pytest
from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    FieldDescriptorProto,
    FileDescriptorProto,
    FileDescriptorSet,
)

from proto_rbi_types.loader import DescriptorLoader

LABEL_OPTIONAL = FieldDescriptorProto.LABEL_OPTIONAL
LABEL_REPEATED = FieldDescriptorProto.LABEL_REPEATED


def add_field(
    message: DescriptorProto,
    name: str,
    number: int,
    proto_type: int,
    type_name: str = "",
    repeated: bool = False,
) -> FieldDescriptorProto:
    """Append a field to a message descriptor."""
    field = message.field.add()
    field.name = name
    field.number = number
    field.type = proto_type
    field.label = LABEL_REPEATED if repeated else LABEL_OPTIONAL
    if type_name:
        field.type_name = type_name
    return field


def add_map_field(
    message: DescriptorProto,
    scope: str,
    name: str,
    number: int,
    key_type: int,
    value_type: int,
    value_type_name: str = "",
) -> FieldDescriptorProto:
    """Append a map field and its synthetic entry message, the way protoc lays them out."""
    entry_name = "".join(part.capitalize() for part in name.split("_")) + "Entry"
    entry = message.nested_type.add()
    entry.name = entry_name
    entry.options.map_entry = True
    add_field(entry, "key", 1, key_type)
    add_field(entry, "value", 2, value_type, value_type_name)
    return add_field(message, name, number, FieldDescriptorProto.TYPE_MESSAGE, f".{scope}.{entry_name}", repeated=True)


def contacts_file() -> FileDescriptorProto:
    """A file with scalar, enum, nested message, repeated and map fields in package `acme.contacts`."""
    file = FileDescriptorProto(name="acme/contacts/person.proto", package="acme.contacts", syntax="proto3")

    status = file.enum_type.add()
    status.name = "Status"
    status.value.add(name="STATUS_UNSPECIFIED", number=0)

    person = file.message_type.add()
    person.name = "Person"

    phone_type = person.enum_type.add()
    phone_type.name = "PhoneType"
    phone_type.value.add(name="MOBILE", number=0)

    phone_number = person.nested_type.add()
    phone_number.name = "PhoneNumber"
    add_field(phone_number, "number", 1, FieldDescriptorProto.TYPE_STRING)
    add_field(phone_number, "type", 2, FieldDescriptorProto.TYPE_ENUM, ".acme.contacts.Person.PhoneType")

    add_field(person, "id", 1, FieldDescriptorProto.TYPE_INT32)
    add_field(person, "name", 2, FieldDescriptorProto.TYPE_STRING)
    add_field(person, "avatar", 3, FieldDescriptorProto.TYPE_BYTES)
    add_field(person, "active", 4, FieldDescriptorProto.TYPE_BOOL)
    add_field(person, "score", 5, FieldDescriptorProto.TYPE_DOUBLE)
    add_field(person, "status", 6, FieldDescriptorProto.TYPE_ENUM, ".acme.contacts.Status")
    add_field(person, "primary_phone", 7, FieldDescriptorProto.TYPE_MESSAGE, ".acme.contacts.Person.PhoneNumber")
    add_field(person, "phones", 8, FieldDescriptorProto.TYPE_MESSAGE, "PhoneNumber", repeated=True)
    add_field(person, "emails", 9, FieldDescriptorProto.TYPE_STRING, repeated=True)
    add_map_field(
        person, "acme.contacts.Person", "tags", 10, FieldDescriptorProto.TYPE_INT32, FieldDescriptorProto.TYPE_STRING
    )
    add_map_field(
        person,
        "acme.contacts.Person",
        "phones_by_label",
        11,
        FieldDescriptorProto.TYPE_STRING,
        FieldDescriptorProto.TYPE_MESSAGE,
        ".acme.contacts.Person.PhoneNumber",
    )

    address_book = file.message_type.add()
    address_book.name = "AddressBook"
    add_field(address_book, "people", 1, FieldDescriptorProto.TYPE_MESSAGE, ".acme.contacts.Person", repeated=True)
    add_field(address_book, "owner", 2, FieldDescriptorProto.TYPE_MESSAGE, "Person")

    return file


def legacy_file() -> FileDescriptorProto:
    """A proto2 file with a group field, which has no Ruby type, and a `ruby_package` override."""
    file = FileDescriptorProto(name="legacy/search.proto", package="legacy.search", syntax="proto2")
    file.options.ruby_package = "Legacy::SearchApi"

    response = file.message_type.add()
    response.name = "SearchResponse"
    result = response.nested_type.add()
    result.name = "Result"
    add_field(result, "url", 1, FieldDescriptorProto.TYPE_STRING)

    add_field(response, "total", 1, FieldDescriptorProto.TYPE_UINT64)
    result_type = ".legacy.search.SearchResponse.Result"
    add_field(response, "result", 2, FieldDescriptorProto.TYPE_GROUP, result_type, repeated=True)
    add_field(response, "best", 3, FieldDescriptorProto.TYPE_GROUP, result_type)
    return file


def field_of(message, name: str):
    """Find a field view of a message view by name."""
    for field in message.fields:
        if field.name == name:
            return field
    raise KeyError(name)


@pytest.fixture
def contacts_loader() -> DescriptorLoader:
    loader = DescriptorLoader()
    loader.add_file(contacts_file())
    return loader


@pytest.fixture
def legacy_loader() -> DescriptorLoader:
    loader = DescriptorLoader()
    loader.add_file(legacy_file())
    return loader


@pytest.fixture
def descriptor_set() -> FileDescriptorSet:
    return FileDescriptorSet(file=[contacts_file()])
