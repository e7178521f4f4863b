"""Helper functions for CLI operations."""

import os
import sys
import warnings
from typing import Any, Callable, Dict, List, Optional

import click

from ...config_paths import ENV_DATA_DIR, ENV_REGISTRY_PATH, ENV_REGISTRY_URL
from ...errors import ProviderNotFoundError, UninitializedRegistryWarning
from ...logging import ENV_LOG_LEVEL
from ...registry import LLMRegistry, RegistryConfig


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    PROVIDER_NOT_FOUND = 3
    DATA_SOURCE_ERROR = 4
    UPDATE_AVAILABLE = 10  # CI-friendly code for update check


SUPPORTED_FORMATS = ["table", "json", "yaml"]


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    # Auto-detect based on TTY
    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def resolve_log_level(verbose: int = 0, quiet: int = 0, debug: bool = False) -> str:
    """Map verbosity flags to a logging level name.

    Without flags the ``LLMR_LOG_LEVEL`` environment variable applies, then
    ``WARNING``.
    """
    if debug:
        return "DEBUG"
    if verbose > quiet:
        return "DEBUG" if verbose >= 2 else "INFO"
    if quiet > verbose:
        return "CRITICAL" if quiet >= 2 else "ERROR"
    return os.getenv(ENV_LOG_LEVEL, "WARNING").upper()


def handle_error(error: Exception, exit_code: Optional[int] = None) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use; derived from the error type if None
    """
    if exit_code is None:
        exit_code = ExitCode.PROVIDER_NOT_FOUND if isinstance(error, ProviderNotFoundError) else ExitCode.GENERIC_ERROR
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code)


def load_registry(ctx_obj: Dict[str, Any], require_document: bool = True) -> LLMRegistry:
    """Build the registry for a CLI invocation.

    Args:
        ctx_obj: Click context object holding the global options
        require_document: Exit with DATA_SOURCE_ERROR if no document loads

    Returns:
        Registry instance
    """
    config = RegistryConfig(registry_path=ctx_obj.get("registry_path"))
    with warnings.catch_warnings():
        # The CLI reports a missing document itself
        warnings.simplefilter("ignore", UninitializedRegistryWarning)
        registry = LLMRegistry(config=config)

    if require_document and not registry.is_loaded:
        result = registry.load_result
        handle_error(
            click.ClickException(f"No registry document available ({result.error}). Run 'llmr update apply' first."),
            ExitCode.DATA_SOURCE_ERROR,
        )
    return registry


def render(ctx_obj: Dict[str, Any], data: Any, table_renderer: Callable[[Any], None]) -> None:
    """Write ``data`` in the format selected on the command line.

    Args:
        ctx_obj: Click context object holding the global options
        data: JSON-compatible data for json/yaml output
        table_renderer: Called with a Rich console for table output
    """
    from ..formatters import create_console, format_json, format_yaml

    format_type = ctx_obj.get("format", "json")
    if format_type == "json":
        format_json(data)
    elif format_type == "yaml":
        format_yaml(data)
    else:
        table_renderer(create_console(no_color=ctx_obj.get("no_color", False)))


def get_llmr_env_vars() -> Dict[str, Optional[str]]:
    """Get all LLMR_* environment variables.

    Returns:
        Dictionary of LLMR environment variables and their values
    """
    llmr_vars: Dict[str, Optional[str]] = {}
    for key, value in os.environ.items():
        if key.startswith("LLMR_"):
            llmr_vars[key] = value

    # Include commonly used variables even if not set
    common_vars: List[str] = [
        ENV_REGISTRY_PATH,
        ENV_DATA_DIR,
        ENV_REGISTRY_URL,
        ENV_LOG_LEVEL,
    ]

    for var in common_vars:
        if var not in llmr_vars:
            llmr_vars[var] = None

    return llmr_vars


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string
    """
    if size_bytes == 0:
        return "0 B"

    size_names = ["B", "KB", "MB", "GB"]
    size = float(size_bytes)
    i = 0
    while size >= 1024 and i < len(size_names) - 1:
        size /= 1024.0
        i += 1

    return f"{size:.1f} {size_names[i]}"
