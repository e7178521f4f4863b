#!/usr/bin/env python3
"""Command line utility for syncing the local registry copy from the remote source."""

import sys
from typing import Optional

import click

from ..logging import configure_logging
from ..sync import SyncStatus, check_for_updates, sync_registry


def run_sync(
    verbose: bool = False,
    force: bool = False,
    url: Optional[str] = None,
    path: Optional[str] = None,
    check_only: bool = False,
) -> int:
    """Sync the local registry copy from the remote source.

    Args:
        verbose: Whether to print verbose output
        force: Rewrite the local copy even if it is already current
        url: Custom registry URL
        path: Custom local registry file
        check_only: Only check for updates without downloading

    Returns:
        int: Exit code (0 for success, 1 for failure)
    """
    if check_only:
        result = check_for_updates(url=url, path=path)
        if not result.success:
            print(f"❌ Error checking for updates: {result.message}")
            return 1
        if result.status == SyncStatus.UPDATE_AVAILABLE:
            print("✅ Registry update is available")
        else:
            print("✓ Registry is already up to date")
    else:
        result = sync_registry(url=url, path=path, force=force)
        if not result.success:
            print(f"❌ Error syncing registry: {result.message}")
            return 1
        if result.status == SyncStatus.UPDATED:
            print("✅ Registry updated successfully")
        else:
            print("✓ Registry is already up to date")

    if verbose:
        print(f"\nStatus: {result.status.value}")
        print(f"Message: {result.message}")
        print(f"Local registry file: {result.path}")
        print(f"Remote URL: {result.url}")
    return 0


@click.command()
@click.option("-v", "--verbose", is_flag=True, help="Show verbose output")
@click.option("-f", "--force", is_flag=True, help="Rewrite the local copy even if unchanged")
@click.option("--url", help="Custom registry URL")
@click.option("--path", type=click.Path(dir_okay=False), help="Custom local registry file")
@click.option("--check", is_flag=True, help="Check for updates without downloading")
def main(
    verbose: bool = False,
    force: bool = False,
    url: Optional[str] = None,
    path: Optional[str] = None,
    check: bool = False,
) -> None:
    """Sync the local LLM registry copy from the remote source.

    The command will:
    1. Download the registry JSON
    2. Check that it is a well-formed registry document
    3. Atomically replace the local file, keeping its permissions
    4. Read the file back to confirm it was written intact

    Examples:
        # Sync from the default URL
        $ llmr-sync

        # Sync with step-by-step logging
        $ llmr-sync -v

        # Sync from a custom URL into a custom file
        $ llmr-sync --url https://example.com/llm_registry.json --path ./llm_registry.json

        # Check for updates without downloading
        $ llmr-sync --check
    """
    configure_logging("INFO" if verbose else None)
    sys.exit(run_sync(verbose=verbose, force=force, url=url, path=path, check_only=check))


if __name__ == "__main__":
    main()
