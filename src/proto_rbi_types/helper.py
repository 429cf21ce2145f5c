"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations

import re

from proto_rbi_types.proto_types import NAMESPACE_SEPARATOR

_COMPONENT_SEPARATORS = re.compile(r"\.|::")
_WORD_SEPARATORS = re.compile(r"[_\-]+")


def capitalize(name: str) -> str:
    """Uppercase the first character of a name, keeping the rest as is.

    E.g. 'inner' becomes 'Inner', 'fooBar' becomes 'FooBar', 'foo_bar' becomes 'Foo_bar'.

    Args:
        name (str): The original name.

    Returns:
        str: The capitalized name.
    """
    return name[:1].upper() + name[1:]


def upper_camel_case(word: str) -> str:
    """Convert a single package component to upper camel case.

    Underscores and dashes delimit words, the first letter of each word is capitalized.

    Examples:
        >>> upper_camel_case("billing")
        'Billing'
        >>> upper_camel_case("my_pkg")
        'MyPkg'
        >>> upper_camel_case("fooBar")
        'FooBar'

    Args:
        word (str): The package component.

    Returns:
        str: The component in upper camel case.
    """
    return "".join(capitalize(part) for part in _WORD_SEPARATORS.split(word) if part)


def split_package(package: str) -> list[str]:
    """Split a package into its components.

    Both protobuf (`a.b`) and Ruby (`A::B`) spellings are accepted, empty components are dropped.

    Args:
        package (str): The package name.

    Returns:
        list[str]: The components, outermost first.
    """
    return [component for component in _COMPONENT_SEPARATORS.split(package) if component]


def join_scopes(*scopes: str) -> str:
    """Join Ruby scopes with `::`.

    An empty outermost scope yields a leading `::`, which refers to the top-level constant.
    """
    return NAMESPACE_SEPARATOR.join(scopes)
