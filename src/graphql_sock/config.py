from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from graphql_sock import log
from graphql_sock.errors import ConfigError
from graphql_sock.wrappers import NullabilityMode


class ConversionConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    mode: NullabilityMode | None = None
    preserve_directives: bool = Field(True, alias="preserveDirectives")
    validate_schema: bool = Field(True, alias="validateSchema")


def load_conversion_config(config_path: Path | None) -> ConversionConfig:
    """
    Load and validate a conversion configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None to use the defaults.

    Returns:
        ConversionConfig: The validated configuration.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, its root is not a mapping,
            or validation against ConversionConfig fails.
    """
    if config_path is None:
        log.debug("No conversion config provided")
        return ConversionConfig()

    raw: Any
    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read conversion config {config_path}: {e}") from e

    log.debug("Loaded conversion config from %s", config_path)

    # Treat empty file or explicit YAML null as "defaults"
    if raw is None or raw == {}:
        return ConversionConfig()

    if not isinstance(raw, dict):
        raise ConfigError(f"Conversion config root must be a mapping (YAML object), got {type(raw).__name__}")

    try:
        return ConversionConfig.model_validate(cast(dict[str, Any], raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid conversion config {config_path}: {e}") from e
