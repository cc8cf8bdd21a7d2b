class SockError(Exception):
    """Base class for errors raised while loading, configuring or converting a schema."""


class SchemaValidationError(SockError, ValueError):
    """Raised when the input schema does not conform to the GraphQL specification.

    The individual validation messages are kept in ``errors`` so callers can report them one by one.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__(f"Found {len(errors)} validation error(s) in the schema")
        self.errors = errors


class ConfigError(SockError, ValueError):
    """Raised when a conversion config file cannot be read or is invalid."""
