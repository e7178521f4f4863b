"""CLI formatters package."""

from .json import (
    format_data_paths_json,
    format_env_vars_json,
    format_json,
    format_models_json,
    format_providers_json,
    provider_summary,
)
from .table import (
    create_console,
    format_data_paths_table,
    format_env_vars_table,
    format_models_table,
    format_provider_table,
    format_providers_table,
)
from .yaml import format_yaml

__all__ = [
    "format_json",
    "format_yaml",
    "format_providers_json",
    "format_models_json",
    "format_data_paths_json",
    "format_env_vars_json",
    "provider_summary",
    "create_console",
    "format_providers_table",
    "format_provider_table",
    "format_models_table",
    "format_data_paths_table",
    "format_env_vars_table",
]
