"""Model listing commands for the llmr CLI."""

import click

from ..formatters import format_models_json, format_models_table
from ..utils import handle_error, load_registry, render


@click.group()
def models() -> None:
    """List the models offered by a provider."""
    pass


@models.command("list")
@click.argument("provider_id")
@click.pass_context
def list_models(ctx: click.Context, provider_id: str) -> None:
    """List the models of PROVIDER_ID in registry order.

    Examples:
      llmr models list openai
      llmr --format json models list anthropic
    """
    try:
        registry = load_registry(ctx.obj)
        provider_models = registry.get_provider_models(provider_id)
        render(
            ctx.obj,
            format_models_json(provider_id, provider_models),
            lambda console: format_models_table(provider_id, provider_models, console),
        )
    except Exception as e:
        handle_error(e)
