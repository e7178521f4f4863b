"""Provider inspection commands for the llmr CLI."""

from typing import Any

import click

from ..formatters import (
    create_console,
    format_json,
    format_provider_table,
    format_providers_json,
    format_providers_table,
    format_yaml,
)
from ..utils import handle_error, load_registry, render


@click.group()
def providers() -> None:
    """List and inspect providers."""
    pass


@providers.command("list")
@click.pass_context
def list_providers(ctx: click.Context) -> None:
    """List all providers in registry order."""
    try:
        registry = load_registry(ctx.obj)
        available = registry.list_providers()
        render(ctx.obj, format_providers_json(available), lambda console: format_providers_table(available, console))
    except Exception as e:
        handle_error(e)


@providers.command()
@click.argument("provider_id")
@click.pass_context
def show(ctx: click.Context, provider_id: str) -> None:
    """Show the full registry entry of PROVIDER_ID."""
    try:
        registry = load_registry(ctx.obj)
        provider = registry.get_provider(provider_id)
        render(ctx.obj, provider.to_dict(), lambda console: format_provider_table(provider, console))
    except Exception as e:
        handle_error(e)


@providers.command()
@click.argument("provider_id")
@click.pass_context
def website(ctx: click.Context, provider_id: str) -> None:
    """Print the website of PROVIDER_ID."""
    try:
        registry = load_registry(ctx.obj)
        url = registry.get_provider_website(provider_id)

        def _plain(console: Any) -> None:
            if url is None:
                console.print(f"[dim]Provider '{provider_id}' has no website[/dim]")
            else:
                console.print(url, soft_wrap=True)

        render(ctx.obj, {"provider": provider_id, "website": url}, _plain)
    except Exception as e:
        handle_error(e)


@providers.command()
@click.argument("provider_id")
@click.pass_context
def auth(ctx: click.Context, provider_id: str) -> None:
    """Print the auth configuration of PROVIDER_ID."""
    try:
        registry = load_registry(ctx.obj)
        auth_config = registry.get_provider_auth(provider_id)
        data = {"provider": provider_id, "auth": auth_config}

        format_type = ctx.obj["format"]
        if format_type == "yaml":
            format_yaml(data)
        elif format_type == "json" or auth_config is not None:
            # Auth objects are free-form, so tables fall back to JSON
            format_json(data)
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            console.print(f"[dim]Provider '{provider_id}' has no auth configuration[/dim]")
    except Exception as e:
        handle_error(e)

