from collections.abc import Callable, Collection
from typing import Any

from graphql import (
    GraphQLField,
    GraphQLFieldMap,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLType,
    GraphQLUnionType,
)

from graphql_sock import log
from graphql_sock.directive import apply_semantic_non_null_directive
from graphql_sock.wrappers import NullabilityMode, is_introspection_type, is_semantic_non_null_type


class TypeConverter:
    """
    Rewrites semantic non-nullability of output types into strict or nullable form.

    A converter holds the named types it has already built, keyed by name, so every named type is
    rebuilt at most once and references to it (including cyclic ones) resolve to the same new object.
    Use one converter per conversion run.
    """

    def __init__(self, mode: NullabilityMode) -> None:
        self.mode = mode
        self._cache: dict[str, GraphQLNamedType] = {}

    def convert_type(self, type_: GraphQLType | None) -> GraphQLType | None:
        """
        Convert a (possibly wrapped) type.

        Args:
            type_: The type to convert, or None for an absent root type.

        Returns:
            GraphQLType | None: The converted type, or None if the type is absent or an introspection type.
        """
        if type_ is None:
            return None

        if is_semantic_non_null_type(type_):
            inner = self.convert_type(type_.of_type)
            if self.mode is NullabilityMode.STRICT and not isinstance(inner, GraphQLNonNull):
                return GraphQLNonNull(inner)  # type: ignore[arg-type]
            return inner

        if isinstance(type_, GraphQLNonNull):
            inner = self.convert_type(type_.of_type)
            if isinstance(inner, GraphQLNonNull):
                return inner
            return GraphQLNonNull(inner)  # type: ignore[arg-type]

        if isinstance(type_, GraphQLList):
            return GraphQLList(self.convert_type(type_.of_type))  # type: ignore[arg-type]

        return self.convert_named_type(type_)  # type: ignore[arg-type]

    def convert_named_type(self, type_: GraphQLNamedType) -> GraphQLNamedType | None:
        if is_introspection_type(type_.name):
            return None

        cached = self._cache.get(type_.name)
        if cached is not None:
            return cached

        # Member thunks only run after the new type is cached, which is what breaks cycles.
        new_type = self._build_named_type(type_)
        self._cache[type_.name] = new_type
        return new_type

    def convert_types(self, types: Collection[GraphQLNamedType]) -> list[Any]:
        """Convert a collection of named types, dropping the ones that are excluded from the output."""
        converted = (self.convert_named_type(type_) for type_ in types)
        return [type_ for type_ in converted if type_ is not None]

    def _build_named_type(self, type_: GraphQLNamedType) -> GraphQLNamedType:
        if isinstance(type_, GraphQLObjectType):
            log.debug(f"Converting object type '{type_.name}' to {self.mode.value}")
            object_kwargs = type_.to_kwargs()
            return GraphQLObjectType(
                **{
                    **object_kwargs,
                    "fields": self._convert_fields(object_kwargs["fields"]),
                    "interfaces": self._convert_types_thunk(object_kwargs["interfaces"]),
                }
            )

        if isinstance(type_, GraphQLInterfaceType):
            log.debug(f"Converting interface type '{type_.name}' to {self.mode.value}")
            interface_kwargs = type_.to_kwargs()
            return GraphQLInterfaceType(
                **{
                    **interface_kwargs,
                    "fields": self._convert_fields(interface_kwargs["fields"]),
                    "interfaces": self._convert_types_thunk(interface_kwargs["interfaces"]),
                }
            )

        if isinstance(type_, GraphQLUnionType):
            log.debug(f"Converting union type '{type_.name}' to {self.mode.value}")
            union_kwargs = type_.to_kwargs()
            return GraphQLUnionType(**{**union_kwargs, "types": self._convert_types_thunk(union_kwargs["types"])})

        # Scalars, enums and input objects carry no output nullability
        return type_

    def _convert_fields(self, fields: GraphQLFieldMap) -> Callable[[], GraphQLFieldMap]:
        def convert_fields() -> GraphQLFieldMap:
            converted: GraphQLFieldMap = {}
            for field_name, field in fields.items():
                semantic_field = apply_semantic_non_null_directive(field)
                field_kwargs = semantic_field.to_kwargs()
                field_kwargs["type_"] = self.convert_type(semantic_field.type)  # type: ignore[typeddict-item]
                converted[field_name] = GraphQLField(**field_kwargs)
            return converted

        return convert_fields

    def _convert_types_thunk(self, types: Collection[GraphQLNamedType]) -> Callable[[], list[Any]]:
        return lambda: self.convert_types(types)


def convert_type(type_: GraphQLType, mode: NullabilityMode) -> GraphQLType | None:
    """Convert a single type with a fresh converter."""
    return TypeConverter(mode).convert_type(type_)
