from typing import cast

from graphql import GraphQLObjectType, GraphQLSchema

from graphql_sock import log
from graphql_sock.converter import TypeConverter
from graphql_sock.directive import SEMANTIC_NON_NULL_DIRECTIVE
from graphql_sock.wrappers import NullabilityMode, is_introspection_type


def convert_schema(schema: GraphQLSchema, mode: NullabilityMode) -> GraphQLSchema:
    """
    Derive a new schema with all semantic non-nullability converted to the given mode.

    The input schema is left untouched. Introspection types and the @semanticNonNull directive
    definition are not carried over.

    Args:
        schema: The semantically annotated GraphQL schema.
        mode: Whether semantic non-null positions become non-null (strict) or nullable.

    Returns:
        GraphQLSchema: The converted schema.
    """
    converter = TypeConverter(mode)

    query = converter.convert_type(schema.query_type)
    mutation = converter.convert_type(schema.mutation_type)
    subscription = converter.convert_type(schema.subscription_type)
    types = converter.convert_types(
        [type_ for type_name, type_ in schema.type_map.items() if not is_introspection_type(type_name)]
    )
    directives = [directive for directive in schema.directives if directive.name != SEMANTIC_NON_NULL_DIRECTIVE]

    converted_schema = GraphQLSchema(
        query=cast(GraphQLObjectType | None, query),
        mutation=cast(GraphQLObjectType | None, mutation),
        subscription=cast(GraphQLObjectType | None, subscription),
        types=types,
        directives=directives,
        description=schema.description,
        extensions=schema.extensions,
        ast_node=schema.ast_node,
        extension_ast_nodes=schema.extension_ast_nodes,
    )
    log.info(f"Converted {len(types)} types to {mode.value} nullability")

    return converted_schema


def semantic_to_strict(schema: GraphQLSchema) -> GraphQLSchema:
    """Convert semantic non-null positions into enforced non-null types."""
    return convert_schema(schema, NullabilityMode.STRICT)


def semantic_to_nullable(schema: GraphQLSchema) -> GraphQLSchema:
    """Convert semantic non-null positions into nullable types."""
    return convert_schema(schema, NullabilityMode.NULLABLE)
