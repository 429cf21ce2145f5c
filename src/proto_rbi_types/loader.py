"""Builds schema views from protobuf descriptors.

Descriptors are usually obtained with `protoc --include_imports --descriptor_set_out=...`.
Loading is done in two passes: all files first register their messages and enums, fields
are linked afterwards, so files can be added in any order.
"""

from __future__ import annotations

import logging
from pathlib import Path

from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    EnumDescriptorProto,
    FieldDescriptorProto,
    FileDescriptorProto,
    FileDescriptorSet,
)

from proto_rbi_types.errors import UnresolvedReferenceError
from proto_rbi_types.proto_types import (
    MAP_KEY_FIELD_NUMBER,
    MAP_VALUE_FIELD_NUMBER,
    ElementCategory,
    FieldShape,
    category_of,
)
from proto_rbi_types.schema import Entity, Enum, Field, FieldElement, Message, SchemaFile

logger = logging.getLogger(__name__)


def load_descriptor_set(path: str | Path) -> FileDescriptorSet:
    """Read a serialized `FileDescriptorSet`.

    Args:
        path (str | Path): Path of the binary descriptor set.

    Returns:
        FileDescriptorSet: The parsed descriptor set.
    """
    data = Path(path).read_bytes()
    return FileDescriptorSet.FromString(data)


class DescriptorLoader:
    """Registry of all messages and enums of the loaded files, keyed by their full protobuf name."""

    def __init__(self) -> None:
        self._files: dict[str, SchemaFile] = {}
        self._messages: dict[str, Message] = {}
        self._enums: dict[str, Enum] = {}
        self._message_protos: dict[str, DescriptorProto] = {}
        self._unlinked: list[Message] = []

    @property
    def files(self) -> list[SchemaFile]:
        """All loaded files, in load order."""
        return list(self._files.values())

    def add_descriptor_set(self, descriptor_set: FileDescriptorSet) -> list[SchemaFile]:
        """Register every file of a descriptor set.

        Args:
            descriptor_set (FileDescriptorSet): The descriptor set.

        Returns:
            list[SchemaFile]: The registered files. Files that were already loaded are skipped.
        """
        added: list[SchemaFile] = []
        for file_proto in descriptor_set.file:
            if file_proto.name in self._files:
                logger.debug(f"Skipping already loaded file {file_proto.name}")
                continue
            added.append(self.add_file(file_proto))
        return added

    def add_file(self, file_proto: FileDescriptorProto) -> SchemaFile:
        """Register the messages and enums of a file.

        Args:
            file_proto (FileDescriptorProto): The file descriptor.

        Returns:
            SchemaFile: The view of the file.
        """
        schema_file = SchemaFile(
            name=file_proto.name,
            package=file_proto.package,
            ruby_package=file_proto.options.ruby_package,
        )
        self._files[schema_file.name] = schema_file
        logger.debug(f"Loading {schema_file.name} (package '{schema_file.package}')")

        for enum_proto in file_proto.enum_type:
            self._register_enum(enum_proto, schema_file, None)

        pending: list[tuple[DescriptorProto, Message | None]] = [(m, None) for m in file_proto.message_type]
        while pending:
            message_proto, parent = pending.pop()
            message = Message(
                name=message_proto.name,
                file=schema_file,
                parent=parent,
                map_entry=message_proto.options.map_entry,
            )
            self._messages[message.full_name] = message
            self._message_protos[message.full_name] = message_proto
            self._unlinked.append(message)

            for enum_proto in message_proto.enum_type:
                self._register_enum(enum_proto, schema_file, message)
            pending.extend((nested, message) for nested in message_proto.nested_type)

        return schema_file

    def link(self) -> None:
        """Build the fields of all messages registered since the last call.

        Raises:
            UnresolvedReferenceError: If a field references a type that was never loaded.
        """
        while self._unlinked:
            message = self._unlinked[-1]
            fields = [self._build_field(message, f) for f in self._message_protos[message.full_name].field]
            message.fields.extend(fields)
            self._unlinked.pop()

    def message(self, full_name: str) -> Message:
        """Look up a message by its fully-qualified protobuf name, with or without leading dot."""
        self.link()
        return self._messages[full_name.lstrip(".")]

    def enum(self, full_name: str) -> Enum:
        """Look up an enum by its fully-qualified protobuf name, with or without leading dot."""
        self.link()
        return self._enums[full_name.lstrip(".")]

    def messages(self, include_map_entries: bool = False) -> list[Message]:
        """All linked messages, ordered by their full name.

        Args:
            include_map_entries (bool, optional): Also return the synthetic map entry messages.
                Defaults to False.

        Returns:
            list[Message]: The messages.
        """
        self.link()
        return [
            self._messages[name]
            for name in sorted(self._messages)
            if include_map_entries or not self._messages[name].map_entry
        ]

    def _register_enum(self, enum_proto: EnumDescriptorProto, schema_file: SchemaFile, parent: Message | None):
        enum = Enum(name=enum_proto.name, file=schema_file, parent=parent)
        self._enums[enum.full_name] = enum

    def _build_field(self, message: Message, field_proto: FieldDescriptorProto) -> Field:
        element = self._build_element(message, field_proto)

        if field_proto.label != FieldDescriptorProto.LABEL_REPEATED:
            return Field(field_proto.name, FieldShape.SINGULAR, element, message=message)

        entry = element.entity
        if isinstance(entry, Message) and entry.map_entry:
            key_proto, value_proto = self._map_entry_fields(entry)
            return Field(
                field_proto.name,
                FieldShape.MAP,
                self._build_element(entry, value_proto),
                key=self._build_element(entry, key_proto),
                message=message,
            )

        return Field(field_proto.name, FieldShape.REPEATED, element, message=message)

    def _build_element(self, scope: Message, field_proto: FieldDescriptorProto) -> FieldElement:
        category = category_of(field_proto.type)
        entity: Entity | None = None
        if category in (ElementCategory.MESSAGE, ElementCategory.ENUM):
            entity = self._lookup(field_proto, scope)
        return FieldElement(category, field_proto.type, entity)

    def _map_entry_fields(self, entry: Message) -> tuple[FieldDescriptorProto, FieldDescriptorProto]:
        by_number = {f.number: f for f in self._message_protos[entry.full_name].field}
        return by_number[MAP_KEY_FIELD_NUMBER], by_number[MAP_VALUE_FIELD_NUMBER]

    def _lookup(self, field_proto: FieldDescriptorProto, scope: Message) -> Entity:
        """Resolve the `type_name` of a field.

        Fully-qualified names start with a dot. Relative names are searched from the innermost
        enclosing scope outwards, following protobuf scoping rules.
        """
        type_name = field_proto.type_name
        if type_name.startswith("."):
            candidates = [type_name[1:]]
        else:
            scope_parts = scope.full_name.split(".")
            candidates = [".".join([*scope_parts[:i], type_name]) for i in range(len(scope_parts), -1, -1)]

        for candidate in candidates:
            if candidate in self._messages:
                return self._messages[candidate]
            if candidate in self._enums:
                return self._enums[candidate]

        raise UnresolvedReferenceError(f"{scope.full_name}.{field_proto.name}", type_name)
