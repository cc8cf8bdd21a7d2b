import logging
import sys
from pathlib import Path
from typing import Any

import rich_click as click
from ariadne.exceptions import GraphQLFileSyntaxError
from graphql import GraphQLError, GraphQLInterfaceType, GraphQLObjectType, GraphQLSchema
from rich.traceback import install

from graphql_sock import __version__, log
from graphql_sock.config import ConversionConfig, load_conversion_config
from graphql_sock.converter import convert_type
from graphql_sock.directive import get_semantic_non_null_levels, resolve_semantic_non_null
from graphql_sock.errors import ConfigError, SchemaValidationError
from graphql_sock.schema import convert_schema
from graphql_sock.schema_loader import assert_valid_schema, load_schema, resolve_graphql_files, write_schema
from graphql_sock.wrappers import NullabilityMode, is_introspection_type


class PathResolverOption(click.Option):
    def process_value(self, ctx: click.Context, value: Any) -> list[Path] | None:
        value = super().process_value(ctx, value)
        if not value:
            return None
        return resolve_graphql_files(list(set(value)))


schema_option = click.option(
    "--schema",
    "-s",
    "--input",
    "-i",
    "schemas",
    type=click.Path(exists=True, path_type=Path),
    cls=PathResolverOption,
    required=True,
    multiple=True,
    help="The GraphQL schema file or directory containing schema files. Can be specified multiple times.",
)


output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    required=True,
    help="Output file",
)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file containing the conversion configuration",
)


plain_option = click.option(
    "--plain",
    is_flag=True,
    default=False,
    help="Drop custom directive applications from the printed schema",
)


skip_validation_option = click.option(
    "--skip-validation",
    is_flag=True,
    default=False,
    help="Convert the schema without validating it first",
)


def load_config_or_exit(config_path: Path | None) -> ConversionConfig:
    try:
        return load_conversion_config(config_path)
    except ConfigError as e:
        log.error(str(e))
        sys.exit(1)


def load_schema_or_exit(schemas: list[Path], validate: bool) -> GraphQLSchema:
    try:
        schema = load_schema(schemas)
    except (GraphQLError, GraphQLFileSyntaxError, TypeError) as e:
        log.error(f"Invalid schema: {e}")
        sys.exit(1)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)

    if validate:
        try:
            assert_valid_schema(schema)
        except SchemaValidationError as e:
            log.error("Schema validation failed:")
            for error in e.errors:
                log.error(error)
            log.error(f"Found {len(e.errors)} validation error(s). Please fix the schema before converting.")
            sys.exit(1)

    return schema


def run_conversion(
    schemas: list[Path],
    output: Path,
    mode: NullabilityMode,
    config: ConversionConfig,
    plain: bool,
    skip_validation: bool,
) -> None:
    schema = load_schema_or_exit(schemas, validate=config.validate_schema and not skip_validation)
    converted = convert_schema(schema, mode)

    try:
        _ = write_schema(converted, output, preserve_directives=config.preserve_directives and not plain)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)

    log.success(f"Successfully converted schema to {mode.value} nullability in {output}")


@click.group(context_settings={"auto_envvar_prefix": "GRAPHQL_SOCK"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    """Convert semantic nullability of GraphQL schemas."""
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


@click.command(name="to-strict")
@schema_option
@output_option
@config_option
@plain_option
@skip_validation_option
def to_strict(
    schemas: list[Path], output: Path, config_path: Path | None, plain: bool, skip_validation: bool
) -> None:
    """Turn semantic non-null positions into non-null types."""
    config = load_config_or_exit(config_path)
    run_conversion(schemas, output, NullabilityMode.STRICT, config, plain, skip_validation)


@click.command(name="to-nullable")
@schema_option
@output_option
@config_option
@plain_option
@skip_validation_option
def to_nullable(
    schemas: list[Path], output: Path, config_path: Path | None, plain: bool, skip_validation: bool
) -> None:
    """Turn semantic non-null positions into nullable types."""
    config = load_config_or_exit(config_path)
    run_conversion(schemas, output, NullabilityMode.NULLABLE, config, plain, skip_validation)


@click.command()
@schema_option
@output_option
@config_option
@click.option(
    "--mode",
    "-m",
    type=click.Choice([mode.value for mode in NullabilityMode], case_sensitive=False),
    help="Target nullability. Defaults to the mode of the config file, or strict.",
)
@plain_option
@skip_validation_option
def convert(
    schemas: list[Path],
    output: Path,
    config_path: Path | None,
    mode: str | None,
    plain: bool,
    skip_validation: bool,
) -> None:
    """Convert semantic non-null positions to the given nullability mode."""
    config = load_config_or_exit(config_path)
    target_mode = NullabilityMode(mode.lower()) if mode else config.mode or NullabilityMode.STRICT
    run_conversion(schemas, output, target_mode, config, plain, skip_validation)


@click.command(name="inspect")
@schema_option
def inspect_schema(schemas: list[Path]) -> None:
    """List the fields that are semantically non-null and what they convert to."""
    schema = load_schema_or_exit(schemas, validate=False)

    report: dict[str, Any] = {}
    for type_name, type_obj in schema.type_map.items():
        if is_introspection_type(type_name) or not isinstance(type_obj, GraphQLObjectType | GraphQLInterfaceType):
            continue

        for field_name, field in type_obj.fields.items():
            levels = get_semantic_non_null_levels(field)
            if levels is None:
                continue

            semantic_type = resolve_semantic_non_null(field.type, levels)
            report[f"{type_name}.{field_name}"] = {
                "declared": str(field.type),
                "levels": levels,
                "strict": str(convert_type(semantic_type, NullabilityMode.STRICT)),
                "nullable": str(convert_type(semantic_type, NullabilityMode.NULLABLE)),
            }

    if not report:
        log.hint("No fields use @semanticNonNull")
        return

    log.rule(f"Found {len(report)} semantically non-null field(s)")
    log.print_dict(report)


cli.add_command(convert)
cli.add_command(inspect_schema)
cli.add_command(to_nullable)
cli.add_command(to_strict)

if __name__ == "__main__":
    cli()
