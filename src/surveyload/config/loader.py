"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Minimal configs only need: project, schema.org_node_col, schema.columns
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from surveyload.config.settings import (
    ColumnConfig,
    LoaderConfig,
    LoggingConfig,
    SchemaConfig,
    SurveyConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def _parse_columns(raw_columns: Any) -> list[ColumnConfig]:
    """Parse the column list, accepting a list of mappings."""
    if not isinstance(raw_columns, list):
        msg = "Config 'schema.columns' must be a list"
        raise ValueError(msg)

    columns = []
    for i, raw in enumerate(raw_columns):
        if not isinstance(raw, dict):
            msg = f"Config 'schema.columns[{i}]' must be a mapping"
            raise ValueError(msg)
        columns.append(ColumnConfig(**raw))
    return columns


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> SurveyConfig:
    """
    Load survey configuration from YAML file(s).

    Minimal config requires only:
        - project: str
        - schema.org_node_col: str
        - schema.columns: list of {code, text, min_value, max_value}

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated SurveyConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        # Try to find base.yaml in same directory
        potential_base = config_path.parent / "base.yaml"
        is_self = potential_base.resolve() == config_path.resolve()
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and not is_self
            else {}
        )

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    project = merged.get("project")
    if not project:
        msg = "Config must specify 'project' name"
        raise ValueError(msg)

    schema_data = merged.get("schema")
    if not schema_data:
        msg = "Config must specify 'schema'"
        raise ValueError(msg)

    org_node_col = schema_data.get("org_node_col")
    if not org_node_col:
        msg = "Config must specify 'schema.org_node_col'"
        raise ValueError(msg)

    survey_schema = SchemaConfig(
        org_node_col=str(org_node_col),
        columns=_parse_columns(schema_data.get("columns", [])),
    )

    # Loader options (all have defaults)
    loader = LoaderConfig(**merged.get("loader", {}))

    logging_data = merged.get("logging", {})
    logging = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        json_output=logging_data.get("json_output", False),
    )

    return SurveyConfig(
        project=project,
        survey_schema=survey_schema,
        loader=loader,
        logging=logging,
    )
