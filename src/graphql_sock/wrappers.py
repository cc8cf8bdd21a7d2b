from enum import Enum
from typing import Any, TypeGuard

from graphql import GraphQLNonNull, GraphQLType, GraphQLWrappingType


class NullabilityMode(str, Enum):
    STRICT = "strict"
    NULLABLE = "nullable"


class GraphQLSemanticNonNull(GraphQLWrappingType[GraphQLType]):
    """Semantic-Non-Null Type Wrapper

    Marks a position as non-null in practice without the executor enforcing it.
    Like GraphQLNonNull it cannot wrap a non-null type. Directly nested semantic markers are
    tolerated and collapse into one when resolved or converted.
    """

    def __init__(self, type_: GraphQLType) -> None:
        if isinstance(type_, GraphQLNonNull):
            raise TypeError(f"Expected {type_} to be a GraphQL nullable type.")
        super().__init__(type_=type_)

    def __str__(self) -> str:
        return f"{self.of_type}*"


def is_semantic_non_null_type(type_: Any) -> TypeGuard[GraphQLSemanticNonNull]:
    return isinstance(type_, GraphQLSemanticNonNull)


def is_introspection_type(type_name: str) -> bool:
    return type_name.startswith("__")
