"""Rich table formatter for CLI output."""

import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...document import Model, Provider
from .json import provider_summary


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    # Let Rich use the actual terminal width to avoid truncating headers
    return Console(file=output, no_color=no_color)


def _format_value(value: Any) -> str:
    """Format a cell value for display in a table."""
    if value is None:
        return "N/A"
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, int) and value >= 1_000:
        # Context windows and similar token counts
        if value >= 1_000_000:
            return f"{value/1_000_000:.1f}M"
        return f"{value/1_000:.0f}K"
    return str(value)


def format_providers_table(providers: List[Provider], console: Optional[Console] = None) -> None:
    """Format providers as a Rich table.

    Args:
        providers: Providers to list
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="LLM Providers", show_header=True, header_style="bold magenta")

    table.add_column("Provider", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Website", style="dim")
    table.add_column("Models", justify="right")
    table.add_column("Auth", justify="center")

    for provider in providers:
        summary = provider_summary(provider)
        table.add_row(
            provider.id,
            _format_value(summary["name"]),
            _format_value(provider.website),
            str(summary["model_count"]),
            _format_value(summary["auth_type"]),
        )

    console.print(table)


def format_provider_table(provider: Provider, console: Optional[Console] = None) -> None:
    """Format a single provider's details.

    Args:
        provider: Provider to show
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title=f"Provider: {provider.id}", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")

    for key, value in provider.to_dict().items():
        if key == "models":
            table.add_row(key, ", ".join(provider.model_ids) or "N/A")
        else:
            table.add_row(key, _format_value(value))

    console.print(table)


def format_models_table(provider_id: str, models: List[Model], console: Optional[Console] = None) -> None:
    """Format a provider's models as a Rich table.

    Extra columns are taken from the passthrough fields the models carry.

    Args:
        provider_id: Owning provider
        models: Models to list
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    if not models:
        console.print(f"[dim]Provider '{provider_id}' lists no models[/dim]")
        return

    extra_columns: List[str] = []
    for model in models:
        for key, value in model.extra.items():
            if key not in extra_columns and not isinstance(value, (dict, list)):
                extra_columns.append(key)

    table = Table(title=f"Models: {provider_id}", show_header=True, header_style="bold magenta")
    table.add_column("Model", style="cyan", no_wrap=True)
    table.add_column("Name")
    for column in extra_columns:
        table.add_column(column.replace("_", " ").title(), justify="right")

    for model in models:
        row = [model.id, _format_value(model.name)]
        row.extend(_format_value(model.get(column)) for column in extra_columns)
        table.add_row(*row)

    console.print(table)


def format_data_paths_table(paths: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Format data paths as a Rich table.

    Args:
        paths: Path information
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Data Source Paths", show_header=True, header_style="bold magenta")

    table.add_column("Source", style="cyan")
    table.add_column("Path", style="dim")
    table.add_column("Status", justify="center")
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="dim")

    for source, path_info in paths.items():
        if isinstance(path_info, dict):
            path = path_info.get("path") or "N/A"
            exists = path_info.get("exists", False)
            size = path_info.get("size_formatted") or "N/A"
            modified = path_info.get("modified") or "N/A"
        else:
            path = str(path_info) if path_info else "N/A"
            exists = path_info is not None
            size = "N/A"
            modified = "N/A"

        status = "✓" if exists else "✗"
        status_style = "green" if exists else "red"

        table.add_row(source, path, Text(status, style=status_style), size, modified)

    console.print(table)


def format_env_vars_table(env_vars: Dict[str, Optional[str]], console: Optional[Console] = None) -> None:
    """Format environment variables as a Rich table.

    Args:
        env_vars: Environment variables
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="LLMR Environment Variables", show_header=True, header_style="bold magenta")

    table.add_column("Variable", style="cyan")
    table.add_column("Value", style="yellow")
    table.add_column("Set", justify="center")

    for key, value in sorted(env_vars.items()):
        is_set = value is not None
        display_value = value if is_set else "[dim]<not set>[/dim]"
        status = "✓" if is_set else "✗"
        status_style = "green" if is_set else "red"

        table.add_row(key, display_value, Text(status, style=status_style))

    console.print(table)
