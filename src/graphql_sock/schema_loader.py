from pathlib import Path
from typing import Any, cast

from ariadne import load_schema_from_path
from graphql import (
    DirectiveNode,
    EnumTypeDefinitionNode,
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLSchema,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    Node,
    ObjectTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeDefinitionNode,
    build_schema,
    parse,
    print_ast,
    print_schema,
    specified_directives,
    validate_schema,
)

from graphql_sock import log
from graphql_sock.errors import SchemaValidationError

SPECIFIED_DIRECTIVE_NAMES = frozenset(directive.name for directive in specified_directives)


def resolve_graphql_files(paths: list[Path]) -> list[Path]:
    """Resolve a list of paths (files and directories) into a flat list of unique GraphQL files.

    Args:
        paths: List of file or directory paths

    Returns:
        Flat list of unique GraphQL file paths (deduplicated and sorted)
    """
    resolved_files: set[Path] = set()

    for path in paths:
        if path.is_file():
            resolved_files.add(path)
        elif path.is_dir():
            for file in path.rglob("*.graphql"):
                resolved_files.add(file)

    return sorted(resolved_files)


def build_schema_str(graphql_schema_paths: list[Path]) -> str:
    """Concatenate the SDL of the given GraphQL files."""
    schema_str = ""
    for graphql_file in graphql_schema_paths:
        schema_str += load_schema_from_path(graphql_file) + "\n"
    return schema_str


def load_schema(graphql_schema_paths: Path | list[Path]) -> GraphQLSchema:
    """Load and build a GraphQL schema from files or folders."""
    if isinstance(graphql_schema_paths, Path):
        graphql_schema_paths = [graphql_schema_paths]

    schema_str = build_schema_str(resolve_graphql_files(graphql_schema_paths))
    schema = build_schema(schema_str)
    log.info("Successfully built the given GraphQL schema string.")
    log.debug(f"Read schema: \n{print_schema(schema)}")
    return schema


def check_correct_schema(schema: GraphQLSchema) -> list[str]:
    """Check that the schema conforms to the GraphQL specification.

    Args:
        schema: The GraphQL schema to validate

    Returns:
        list[str]: List of error messages, empty if the schema is valid
    """
    return [f"  - {error.message}" for error in validate_schema(schema)]


def assert_valid_schema(schema: GraphQLSchema) -> None:
    """Raise SchemaValidationError if the schema does not validate."""
    schema_errors = check_correct_schema(schema)
    if schema_errors:
        raise SchemaValidationError(schema_errors)


def get_applied_directives(element: Any) -> list[DirectiveNode]:
    """Collect the custom directive applications of a schema element from its AST nodes.

    Specified directives (`@deprecated`, `@specifiedBy`, ...) are left out since `print_schema`
    already prints them from the element itself.
    """
    nodes = [element.ast_node, *(getattr(element, "extension_ast_nodes", None) or ())]
    return [
        directive
        for node in nodes
        if node is not None
        for directive in node.directives or ()
        if directive.name.value not in SPECIFIED_DIRECTIVE_NAMES
    ]


def add_applied_directives(node: Node, element: Any) -> None:
    directives = get_applied_directives(element)
    if directives:
        node.directives = (*(node.directives or ()), *directives)  # type: ignore[attr-defined]


def print_schema_with_directives_preserved(schema: GraphQLSchema) -> str:
    """Print schema while preserving custom directive applications.

    The output of `print_schema` is parsed back and every definition in it gets the directive
    applications of the matching schema element, so descriptions and multi-line argument lists
    cannot misplace them.

    Args:
        schema: The GraphQL schema to print

    Returns:
        Schema string with all custom directive applications preserved
    """
    document = parse(print_schema(schema))

    for definition in document.definitions:
        if isinstance(definition, SchemaDefinitionNode):
            add_applied_directives(definition, schema)
            continue
        if not isinstance(definition, TypeDefinitionNode):
            continue

        type_ = schema.type_map[definition.name.value]
        add_applied_directives(definition, type_)

        if isinstance(definition, ObjectTypeDefinitionNode | InterfaceTypeDefinitionNode):
            fields = cast(GraphQLObjectType | GraphQLInterfaceType, type_).fields
            for field_node in definition.fields or ():
                field = fields[field_node.name.value]
                add_applied_directives(field_node, field)
                for arg_node in field_node.arguments or ():
                    add_applied_directives(arg_node, field.args[arg_node.name.value])

        elif isinstance(definition, InputObjectTypeDefinitionNode):
            input_fields = cast(GraphQLInputObjectType, type_).fields
            for input_field_node in definition.fields or ():
                add_applied_directives(input_field_node, input_fields[input_field_node.name.value])

        elif isinstance(definition, EnumTypeDefinitionNode):
            enum_values = cast(GraphQLEnumType, type_).values
            for value_node in definition.values or ():
                add_applied_directives(value_node, enum_values[value_node.name.value])

    return print_ast(document)


def write_schema(schema: GraphQLSchema, output: Path, preserve_directives: bool = True) -> str:
    """Print a schema to a file, ending with a single newline.

    Args:
        schema: The GraphQL schema to write
        output: Output file path
        preserve_directives: Whether to keep custom directive applications in the printed SDL

    Returns:
        The written SDL
    """
    sdl = print_schema_with_directives_preserved(schema) if preserve_directives else print_schema(schema)
    sdl = sdl.rstrip("\n")
    output.parent.mkdir(parents=True, exist_ok=True)
    _ = output.write_text(sdl + "\n")
    log.debug(f"Wrote {len(sdl)} characters to {output}")
    return sdl
