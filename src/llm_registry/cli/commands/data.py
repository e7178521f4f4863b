"""Data inspection commands for the llmr CLI."""

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import click

from ...config_paths import (
    ENV_REGISTRY_PATH,
    REGISTRY_FILENAME,
    get_bundled_registry_path,
    get_registry_path,
    get_registry_url,
    get_user_data_dir,
)
from ..formatters import (
    create_console,
    format_data_paths_json,
    format_data_paths_table,
    format_env_vars_json,
    format_env_vars_table,
    format_json,
    format_yaml,
)
from ..utils import ExitCode, format_file_size, get_llmr_env_vars, handle_error, load_registry, output_option, render


def _file_info(path: Optional[str]) -> Dict[str, Any]:
    """Describe a registry file location.

    Args:
        path: File path, or None if the location does not apply

    Returns:
        Dictionary with path, existence, size and modification time
    """
    if not path:
        return {"path": None, "exists": False}

    file_path = Path(path)
    info: Dict[str, Any] = {"path": str(file_path), "exists": file_path.is_file()}
    if info["exists"]:
        stat_result = file_path.stat()
        info["size"] = stat_result.st_size
        info["size_formatted"] = format_file_size(stat_result.st_size)
        info["modified"] = datetime.fromtimestamp(stat_result.st_mtime).isoformat(timespec="seconds")
    return info


@click.group()
def data() -> None:
    """Inspect registry data sources and contents."""
    pass


@data.command()
@click.pass_context
def paths(ctx: click.Context) -> None:
    """Show resolved data source paths and precedence."""
    try:
        bundled = get_bundled_registry_path()
        sources = {
            "active": _file_info(get_registry_path(ctx.obj.get("registry_path"))),
            "environment": _file_info(os.getenv(ENV_REGISTRY_PATH)),
            "user_data": _file_info(str(get_user_data_dir() / REGISTRY_FILENAME)),
            "bundled": _file_info(str(bundled) if bundled else None),
        }
        url = get_registry_url()
        payload = format_data_paths_json(sources)
        payload["registry_url"] = url

        def _table(console: Any) -> None:
            format_data_paths_table(sources, console)
            console.print(f"[bold]Remote URL:[/bold] {url}")

        render(ctx.obj, payload, _table)
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)


@data.command()
@click.pass_context
def env(ctx: click.Context) -> None:
    """Show effective LLMR_* environment variables."""
    try:
        env_vars = get_llmr_env_vars()
        render(ctx.obj, format_env_vars_json(env_vars), lambda console: format_env_vars_table(env_vars, console))
    except Exception as e:
        handle_error(e)


@data.command()
@output_option
@click.pass_context
def dump(ctx: click.Context, output: Optional[str] = None) -> None:
    """Dump the loaded registry document.

    Writes JSON unless --format yaml is given; table output is not available
    for whole documents.
    """
    try:
        registry = load_registry(ctx.obj)
        document = registry.document
        if document is None:
            handle_error(click.ClickException("No registry document is loaded"), ExitCode.DATA_SOURCE_ERROR)
            return
        writer = format_yaml if ctx.obj["format"] == "yaml" else format_json

        if output:
            with open(output, "w", encoding="utf-8") as f:
                writer(document.to_dict(), f)
            console = create_console(output=click.get_text_stream("stderr"), no_color=ctx.obj["no_color"])
            console.print(f"Registry written to {output}")
        else:
            writer(document.to_dict())
    except Exception as e:
        handle_error(e)
