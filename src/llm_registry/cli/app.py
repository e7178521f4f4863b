"""Main CLI application for the LLM provider registry."""

from typing import Optional

import click
import rich_click as rich_click

from ..logging import configure_logging
from .utils import SUPPORTED_FORMATS, resolve_format, resolve_log_level

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


@click.group(cls=rich_click.RichGroup)
@click.option(
    "--registry-path",
    type=click.Path(dir_okay=False),
    help="Registry JSON file to use. Takes precedence over LLMR_REGISTRY_PATH.",
)
@click.option(
    "--format",
    type=click.Choice(SUPPORTED_FORMATS, case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.version_option(package_name="llm-registry", prog_name="llmr", message="%(prog)s version: %(version)s")
@click.pass_context
def app(
    ctx: click.Context,
    registry_path: Optional[str] = None,
    format: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
) -> None:
    """LLM provider registry CLI - look up providers, models and auth settings.

    Examples:
      # List all providers
      llmr providers list

      # List the models of one provider
      llmr models list openai

      # Show where the registry is read from
      llmr data paths

      # Refresh the local copy from the published registry
      llmr update apply
    """
    ctx.ensure_object(dict)

    log_level = resolve_log_level(verbose=verbose, quiet=quiet, debug=debug)
    configure_logging(log_level)

    ctx.obj.update(
        {
            "registry_path": registry_path,
            "format": resolve_format(format),
            "format_explicit": format is not None,
            "verbose": verbose,
            "quiet": quiet,
            "debug": debug,
            "no_color": no_color,
            "log_level": log_level,
        }
    )


# Import and register subcommands after the group exists to avoid circular
# imports at runtime.
from .commands import data, models, providers, update  # noqa: E402

app.add_command(providers.providers)
app.add_command(models.models)
app.add_command(data.data)
app.add_command(update.update)


if __name__ == "__main__":
    app()
