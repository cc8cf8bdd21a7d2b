from graphql_sock.logger import get_logger

__version__ = "1.0.0"

log = get_logger("graphql_sock")

from graphql_sock.schema import convert_schema, semantic_to_nullable, semantic_to_strict  # noqa: E402
from graphql_sock.wrappers import GraphQLSemanticNonNull, NullabilityMode  # noqa: E402

__all__ = [
    "GraphQLSemanticNonNull",
    "NullabilityMode",
    "convert_schema",
    "log",
    "semantic_to_nullable",
    "semantic_to_strict",
]
