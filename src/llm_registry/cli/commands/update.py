"""Update management commands for the llmr CLI."""

import sys
from typing import Any, Optional

import click

from ...sync import SyncResult, SyncStatus, check_for_updates, sync_registry
from ..utils import ExitCode, handle_error, render, url_option


def _result_payload(result: SyncResult) -> dict:
    return {
        "success": result.success,
        "status": result.status.value,
        "message": result.message,
        "path": result.path,
        "url": result.url,
        "sha256": result.sha256,
    }


@click.group()
def update() -> None:
    """Keep the local registry copy current.

    The local copy lives in the user data directory unless --registry-path or
    LLMR_REGISTRY_PATH point elsewhere.
    """
    pass


@update.command()
@url_option
@click.pass_context
def check(ctx: click.Context, url: Optional[str] = None) -> None:
    """Check whether the remote registry differs from the local copy.

    Exit codes:
      0: Registry is up to date
      4: Remote registry could not be fetched
     10: Update available (CI-friendly)
    """
    try:
        result = check_for_updates(url=url, path=ctx.obj.get("registry_path"))

        def _table(console: Any) -> None:
            if result.status is SyncStatus.ALREADY_CURRENT:
                console.print("✅ [green]Registry is up to date[/green]")
            elif result.status is SyncStatus.UPDATE_AVAILABLE:
                console.print(f"🔄 [yellow]{result.message}[/yellow]")
            else:
                console.print(f"❌ [red]{result.message}[/red]")
            console.print(f"Local copy: {result.path}")
            console.print(f"Remote: {result.url}")

        render(ctx.obj, _result_payload(result), _table)
    except Exception as e:
        handle_error(e)

    if result.status is SyncStatus.ERROR:
        sys.exit(ExitCode.DATA_SOURCE_ERROR)
    if result.status is SyncStatus.UPDATE_AVAILABLE:
        sys.exit(ExitCode.UPDATE_AVAILABLE)


@update.command()
@url_option
@click.option("--force", is_flag=True, help="Rewrite the local copy even if it is already current.")
@click.pass_context
def apply(ctx: click.Context, url: Optional[str] = None, force: bool = False) -> None:
    """Download the remote registry and replace the local copy.

    The download is validated before anything is written, the file is
    replaced atomically, and its permissions are preserved.
    """
    try:
        result = sync_registry(url=url, path=ctx.obj.get("registry_path"), force=force)

        def _table(console: Any) -> None:
            if result.status is SyncStatus.UPDATED:
                console.print("✅ [green]Registry updated successfully[/green]")
            elif result.status is SyncStatus.ALREADY_CURRENT:
                console.print("✓ Registry is already up to date")
            else:
                console.print(f"❌ [red]{result.message}[/red]")
            console.print(f"Local copy: {result.path}")

        render(ctx.obj, _result_payload(result), _table)
    except Exception as e:
        handle_error(e)

    if not result.success:
        sys.exit(ExitCode.DATA_SOURCE_ERROR)
