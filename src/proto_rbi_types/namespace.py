"""Ruby namespaces of protobuf files and qualified names of their messages and enums."""

from __future__ import annotations

from proto_rbi_types import helper
from proto_rbi_types.proto_types import NAMESPACE_SEPARATOR
from proto_rbi_types.schema import Entity, SchemaFile


def ruby_package(file: SchemaFile) -> str:
    """The package that Ruby code of a file lives in, before case conversion.

    The `ruby_package` option takes precedence over the protobuf package.

    Args:
        file (SchemaFile): The schema file.

    Returns:
        str: The raw package name.
    """
    return file.ruby_package or file.package


def namespace_segments(file: SchemaFile) -> list[str]:
    """Every enclosing module of a file's generated code, outermost first.

    A package `a.b.c` yields `["A", "A::B", "A::B::C"]`, so that callers can open each
    module level in turn.

    Args:
        file (SchemaFile): The schema file.

    Returns:
        list[str]: The cumulative module names. Empty if the file has no package.
    """
    components = [helper.upper_camel_case(component) for component in helper.split_package(ruby_package(file))]
    return [NAMESPACE_SEPARATOR.join(components[: i + 1]) for i in range(len(components))]


def package_namespace(file: SchemaFile) -> str:
    """The innermost module of a file's generated code, e.g. `A::B::C`."""
    segments = namespace_segments(file)
    if not segments:
        return ""
    return segments[-1]


def qualified_name(entity: Entity) -> str:
    """The fully-qualified Ruby constant of a message or enum.

    The parent chain is walked iteratively up to the top-level entity.

    Examples:
        Top-level `Foo` in package `a.b` resolves to `A::B::Foo`.
        `Bar` nested in `Foo` resolves to `A::B::Foo::Bar`.
        `Foo` in a file without package resolves to `::Foo`.

    Args:
        entity (Entity): The message or enum.

    Returns:
        str: The qualified name.
    """
    names: list[str] = []
    outer: Entity | None = entity
    while outer is not None:
        names.append(helper.capitalize(outer.name))
        outer = outer.parent
    names.reverse()

    return helper.join_scopes(package_namespace(entity.file), NAMESPACE_SEPARATOR.join(names))
