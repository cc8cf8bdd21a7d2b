from collections.abc import Collection

from graphql import (
    DirectiveNode,
    FieldDefinitionNode,
    GraphQLField,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLType,
    IntValueNode,
    ListValueNode,
    print_ast,
)

from graphql_sock import log
from graphql_sock.wrappers import GraphQLSemanticNonNull, is_semantic_non_null_type

SEMANTIC_NON_NULL_DIRECTIVE = "semanticNonNull"
LEVELS_ARGUMENT = "levels"
DEFAULT_LEVELS = (0,)


def find_directive(element: GraphQLField | GraphQLNamedType, directive_name: str) -> DirectiveNode | None:
    """Return the first application of a directive on a GraphQL element, if any."""
    if element.ast_node and element.ast_node.directives:
        for directive in element.ast_node.directives:
            if directive.name.value == directive_name:
                return directive
    return None


def has_given_directive(element: GraphQLField | GraphQLNamedType, directive_name: str) -> bool:
    """Check whether a GraphQL element (field, named type) has a particular specified directive."""
    return find_directive(element, directive_name) is not None


def get_semantic_non_null_levels(field: GraphQLField) -> list[int] | None:
    """
    Read the levels of a field's @semanticNonNull application.

    Args:
        field: The GraphQL field to inspect.

    Returns:
        list[int] | None: None if the directive is not applied. Otherwise the integer entries of the
        `levels` list literal in their given order, or [0] if `levels` is not given as a list.
    """
    directive = find_directive(field, SEMANTIC_NON_NULL_DIRECTIVE)
    if directive is None:
        return None

    levels_arg = next((arg for arg in directive.arguments or () if arg.name.value == LEVELS_ARGUMENT), None)
    if levels_arg is None or not isinstance(levels_arg.value, ListValueNode):
        return list(DEFAULT_LEVELS)

    levels = [int(value.value) for value in levels_arg.value.values if isinstance(value, IntValueNode)]
    if len(levels) != len(levels_arg.value.values):
        log.debug(f"Ignoring non-integer entries in @{SEMANTIC_NON_NULL_DIRECTIVE}({print_ast(levels_arg)})")
    return levels


def resolve_semantic_non_null(type_: GraphQLType, levels: Collection[int], level: int = 0) -> GraphQLType:
    """
    Turn level-indexed semantic non-nullability into explicit GraphQLSemanticNonNull wrappers.

    Level 0 is the outermost position of the type; each list increments the level of its item type.
    Existing semantic markers are discarded so that the given levels always win, and a non-null
    wrapper at an annotated level is replaced by the semantic marker.

    Args:
        type_: The (possibly wrapped) output type of a field.
        levels: The levels that are semantically non-null.
        level: The level of `type_` within the field type.

    Returns:
        GraphQLType: The type with semantic markers at exactly the given levels.
    """
    if is_semantic_non_null_type(type_):
        return resolve_semantic_non_null(type_.of_type, levels, level)

    if isinstance(type_, GraphQLNonNull):
        inner = resolve_semantic_non_null(type_.of_type, levels, level)
        if level in levels:
            return inner
        return GraphQLNonNull(inner)

    if isinstance(type_, GraphQLList):
        inner_list = GraphQLList(resolve_semantic_non_null(type_.of_type, levels, level + 1))
        if level in levels:
            return GraphQLSemanticNonNull(inner_list)
        return inner_list

    if level in levels:
        return GraphQLSemanticNonNull(type_)
    return type_


def strip_directive(node: FieldDefinitionNode, directive_name: str) -> FieldDefinitionNode:
    """Return a copy of a field definition node without the applications of the given directive."""
    kwargs = {key: getattr(node, key) for key in node.keys}
    kwargs["directives"] = tuple(d for d in node.directives or () if d.name.value != directive_name)
    return node.__class__(**kwargs)


def apply_semantic_non_null_directive(field: GraphQLField) -> GraphQLField:
    """
    Convert a field using the @semanticNonNull directive into one using GraphQLSemanticNonNull wrappers.

    Fields without the directive are returned as they are. Otherwise a new field is returned whose type
    carries the resolved markers and whose AST node no longer carries the directive.
    """
    levels = get_semantic_non_null_levels(field)
    if levels is None:
        return field

    kwargs = field.to_kwargs()
    kwargs["type_"] = resolve_semantic_non_null(field.type, levels)  # type: ignore[typeddict-item]
    if field.ast_node:
        kwargs["ast_node"] = strip_directive(field.ast_node, SEMANTIC_NON_NULL_DIRECTIVE)
    return GraphQLField(**kwargs)
