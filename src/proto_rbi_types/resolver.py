"""Resolution of Sorbet type expressions for protobuf fields."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import assert_never

from proto_rbi_types import namespace, proto_types
from proto_rbi_types.errors import UnsupportedTypeError
from proto_rbi_types.proto_types import ElementCategory, FieldShape, UsageContext
from proto_rbi_types.schema import Field, FieldElement

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Outcome of resolving several fields without stopping at the first failure.

    Attributes:
        types: Resolved type expressions, keyed by field name
        errors: One error per field that could not be resolved
    """

    types: dict[str, str] = field(default_factory=dict)
    errors: list[UnsupportedTypeError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class TypeResolver:
    """Maps fields to the type expressions used in RBI signatures of generated Ruby classes.

    The resolver holds no state, a single instance can be shared between threads.
    """

    def resolve(self, field: Field, context: UsageContext) -> str:
        """Resolve the type expression of a field for one accessor.

        Args:
            field (Field): The field to resolve.
            context (UsageContext): The accessor the expression annotates.

        Raises:
            UnsupportedTypeError: If an element type of the field is not supported.

        Returns:
            str: The type expression.
        """
        match field.shape:
            case FieldShape.MAP:
                type_name = self._resolve_map(field, context)
            case FieldShape.REPEATED:
                type_name = self._resolve_repeated(field, context)
            case FieldShape.SINGULAR:
                type_name = self.resolve_element(field, field.element)
            case _:
                assert_never(field.shape)

        logger.debug(f"Resolved {field.name} ({context.value}) to {type_name}")
        return type_name

    def getter_type(self, field: Field) -> str:
        """Type expression of the read accessor."""
        return self.resolve(field, UsageContext.GETTER)

    def setter_type(self, field: Field) -> str:
        """Type expression of the write accessor."""
        return self.resolve(field, UsageContext.SETTER)

    def initializer_type(self, field: Field) -> str:
        """Type expression of the constructor argument."""
        return self.resolve(field, UsageContext.INITIALIZER)

    def resolve_fields(
        self,
        fields: Iterable[Field],
        context: UsageContext,
        fail_fast: bool = True,
    ) -> ResolutionResult:
        """Resolve several fields for one accessor.

        Args:
            fields (Iterable[Field]): The fields to resolve.
            context (UsageContext): The accessor the expressions annotate.
            fail_fast (bool, optional): Raise the first error instead of collecting it. Defaults to True.

        Raises:
            UnsupportedTypeError: On the first unsupported field, if `fail_fast` is set.

        Returns:
            ResolutionResult: The resolved types and, unless failing fast, the collected errors.
        """
        result = ResolutionResult()
        for field in fields:
            try:
                result.types[field.name] = self.resolve(field, context)
            except UnsupportedTypeError as e:
                if fail_fast:
                    raise
                logger.error(str(e))
                result.errors.append(e)

        return result

    def resolve_element(self, field: Field, element: FieldElement) -> str:
        """Resolve a scalar, enum or message element of a field.

        Enums are represented by their name, hence `:string`.

        Args:
            field (Field): The field that owns the element, used for error reporting.
            element (FieldElement): The element to resolve.

        Raises:
            UnsupportedTypeError: If the element category is `UNSUPPORTED`.

        Returns:
            str: The type expression of the element.
        """
        match element.category:
            case ElementCategory.INTEGER:
                return proto_types.INTEGER_TAG
            case ElementCategory.FLOAT:
                return proto_types.FLOAT_TAG
            case ElementCategory.STRING:
                return proto_types.STRING_TAG
            case ElementCategory.BOOLEAN:
                return proto_types.BOOLEAN_TAG
            case ElementCategory.ENUM:
                return proto_types.STRING_TAG
            case ElementCategory.MESSAGE:
                if element.entity is None:
                    raise UnsupportedTypeError(field, element.proto_type)
                return namespace.qualified_name(element.entity)
            case ElementCategory.UNSUPPORTED:
                raise UnsupportedTypeError(field, element.proto_type)
            case _:
                assert_never(element.category)

    def _resolve_map(self, field: Field, context: UsageContext) -> str:
        if context is UsageContext.SETTER:
            return proto_types.UNTYPED_MAP

        if field.key is None:
            raise UnsupportedTypeError(field, field.element.proto_type)
        key = self.resolve_element(field, field.key)
        value = self.resolve_element(field, field.element)
        return proto_types.HASH_TEMPLATE.format(key=key, value=value)

    def _resolve_repeated(self, field: Field, context: UsageContext) -> str:
        # See https://github.com/protocolbuffers/protobuf/issues/4969
        if context is UsageContext.SETTER:
            return proto_types.UNTYPED_REPEATED

        element = self.resolve_element(field, field.element)
        return proto_types.ARRAY_TEMPLATE.format(element=element)
