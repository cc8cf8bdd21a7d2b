from pathlib import Path

import pytest
from graphql import GraphQLSchema, GraphQLType, GraphQLWrappingType

from graphql_sock.schema_loader import load_schema
from graphql_sock.wrappers import is_semantic_non_null_type


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    SEMANTIC_SCHEMA: Path = TESTS_DATA_DIR / "semantic.graphql"
    INVALID_SCHEMA: Path = TESTS_DATA_DIR / "invalid.graphql"
    BROKEN_SCHEMA: Path = TESTS_DATA_DIR / "broken.graphql"
    DESCRIBED_SCHEMA: Path = TESTS_DATA_DIR / "described.graphql"
    SPLIT_SCHEMA_DIR: Path = TESTS_DATA_DIR / "split"

    NULLABLE_CONFIG: Path = TESTS_DATA_DIR / "nullable.yaml"
    UNKNOWN_KEY_CONFIG: Path = TESTS_DATA_DIR / "unknown_key.yaml"


def has_semantic_non_null(type_: GraphQLType) -> bool:
    """Check whether a semantic-non-null marker appears anywhere in a wrapped type."""
    while isinstance(type_, GraphQLWrappingType):
        if is_semantic_non_null_type(type_):
            return True
        type_ = type_.of_type
    return False


@pytest.fixture(scope="module")
def semantic_schema() -> GraphQLSchema:
    assert TestSchemaData.SEMANTIC_SCHEMA.exists(), f"Missing test file: {TestSchemaData.SEMANTIC_SCHEMA}"
    return load_schema(TestSchemaData.SEMANTIC_SCHEMA)
