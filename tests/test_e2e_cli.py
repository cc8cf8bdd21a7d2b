from pathlib import Path

import pytest
from click.testing import CliRunner

from graphql_sock import __version__
from graphql_sock.cli import cli, to_nullable, to_strict
from tests.conftest import TestSchemaData

SEMANTIC = str(TestSchemaData.SEMANTIC_SCHEMA)


@pytest.fixture(scope="module")
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def out(tmp_path: Path) -> Path:
    return tmp_path / "out" / "schema.graphql"


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0, result.output
    assert __version__ in result.output


def test_to_strict(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(cli, ["to-strict", "-s", SEMANTIC, "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Successfully converted schema to strict" in result.output

    sdl = out.read_text()
    assert sdl.endswith("}\n")
    assert not sdl.endswith("\n\n")
    assert "  tags: [[String!]]!\n" in sdl
    assert "  emails: [String!]!\n" in sdl
    assert '  height: Float! @unit(name: "m")\n' in sdl
    assert "semanticNonNull" not in sdl


def test_to_nullable(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(cli, ["to-nullable", "--input", SEMANTIC, "--output", str(out)])
    assert result.exit_code == 0, result.output

    sdl = out.read_text()
    assert "  tags: [[String]]\n" in sdl
    assert "  emails: [String]!\n" in sdl
    assert "  posts(first: Int!, after: String): [Post!]\n" in sdl
    assert "semanticNonNull" not in sdl


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ([], "  me: User!\n"),
        (["--mode", "strict"], "  me: User!\n"),
        (["--mode", "nullable"], "  me: User\n"),
        (["-m", "NULLABLE"], "  me: User\n"),
        (["--config", str(TestSchemaData.NULLABLE_CONFIG)], "  me: User\n"),
        (["--config", str(TestSchemaData.NULLABLE_CONFIG), "--mode", "strict"], "  me: User!\n"),
    ],
)
def test_convert_mode_selection(runner: CliRunner, out: Path, args: list[str], expected: str) -> None:
    result = runner.invoke(cli, ["convert", "-s", SEMANTIC, "-o", str(out), *args])
    assert result.exit_code == 0, result.output
    assert expected in out.read_text()


def test_config_can_drop_directives(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(cli, ["convert", "-s", SEMANTIC, "-o", str(out), "-c", str(TestSchemaData.NULLABLE_CONFIG)])
    assert result.exit_code == 0, result.output
    assert "  height: Float\n" in out.read_text()


def test_plain_drops_directives(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(cli, ["to-strict", "-s", SEMANTIC, "-o", str(out), "--plain"])
    assert result.exit_code == 0, result.output
    assert "  height: Float!\n" in out.read_text()


def test_schema_directory(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(cli, ["to-strict", "-s", str(TestSchemaData.SPLIT_SCHEMA_DIR), "-o", str(out)])
    assert result.exit_code == 0, result.output

    sdl = out.read_text()
    assert "  authors: [Author!]\n" in sdl
    assert "  books: [Book!]!\n" in sdl
    assert "  author: Author\n" in sdl


def test_invalid_schema_fails(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(cli, ["to-strict", "-s", str(TestSchemaData.INVALID_SCHEMA), "-o", str(out)])
    assert result.exit_code == 1
    assert "Schema validation failed" in result.output
    assert not out.exists()


def test_invalid_schema_with_skip_validation(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(
        cli, ["to-nullable", "-s", str(TestSchemaData.INVALID_SCHEMA), "-o", str(out), "--skip-validation"]
    )
    assert result.exit_code == 0, result.output
    assert "  name: String\n" in out.read_text()


def test_syntax_error_fails(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(cli, ["to-strict", "-s", str(TestSchemaData.BROKEN_SCHEMA), "-o", str(out)])
    assert result.exit_code == 1
    assert "Invalid schema" in result.output


def test_invalid_config_fails(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(
        cli, ["convert", "-s", SEMANTIC, "-o", str(out), "-c", str(TestSchemaData.UNKNOWN_KEY_CONFIG)]
    )
    assert result.exit_code == 1
    assert not out.exists()


def test_missing_output_fails(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["to-strict", "-s", SEMANTIC])
    assert result.exit_code == 2


@pytest.mark.parametrize(("command", "expected"), [(to_strict, "  me: User!\n"), (to_nullable, "  me: User\n")])
def test_standalone_commands(runner: CliRunner, out: Path, command: object, expected: str) -> None:
    result = runner.invoke(command, ["-i", SEMANTIC, "-o", str(out)])  # type: ignore[arg-type]
    assert result.exit_code == 0, result.output
    assert expected in out.read_text()


def test_log_file(runner: CliRunner, out: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "sock.log"
    result = runner.invoke(cli, ["--log-file", str(log_file), "to-strict", "-s", SEMANTIC, "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Converted" in log_file.read_text()


def test_inspect(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["inspect", "-s", SEMANTIC])
    assert result.exit_code == 0, result.output
    assert "semantically non-null field(s)" in result.output
    assert '"User.tags"' in result.output
    assert '"[[String!]]!"' in result.output
    assert '"User.nickname"' not in result.output


def test_inspect_without_annotations(runner: CliRunner, tmp_path: Path) -> None:
    schema_file = tmp_path / "plain.graphql"
    _ = schema_file.write_text("type Query { a: String }\n")

    result = runner.invoke(cli, ["inspect", "-s", str(schema_file)])
    assert result.exit_code == 0, result.output
    assert "No fields use @semanticNonNull" in result.output


def test_inspect_does_not_validate(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["inspect", "-s", str(TestSchemaData.INVALID_SCHEMA)])
    assert result.exit_code == 0, result.output
    assert '"User.name"' in result.output


def test_inspect_unbuildable_schema_fails(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["inspect", "-s", str(TestSchemaData.SPLIT_SCHEMA_DIR / "query.graphql")])
    assert result.exit_code == 1
    assert "Invalid schema" in result.output


def test_directives_next_to_described_arguments(runner: CliRunner, out: Path) -> None:
    result = runner.invoke(cli, ["to-strict", "-s", str(TestSchemaData.DESCRIBED_SCHEMA), "-o", str(out)])
    assert result.exit_code == 0, result.output

    sdl = out.read_text()
    assert '  ): Float! @unit(name: "m")\n' in sdl
    assert '  size: Float @unit(name: "cm")\n' in sdl
    assert "    rounded: Boolean\n" in sdl

    nullable_out = out.with_name("nullable.graphql")
    result = runner.invoke(cli, ["to-nullable", "-s", str(TestSchemaData.DESCRIBED_SCHEMA), "-o", str(nullable_out)])
    assert result.exit_code == 0, result.output
    assert '  ): Float @unit(name: "m")\n' in nullable_out.read_text()

    # The written schema is valid input again
    result = runner.invoke(cli, ["to-nullable", "-s", str(out), "-o", str(out.with_name("again.graphql"))])
    assert result.exit_code == 0, result.output
