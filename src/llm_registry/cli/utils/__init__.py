"""CLI utilities package."""

from .helpers import (
    SUPPORTED_FORMATS,
    ExitCode,
    format_file_size,
    get_llmr_env_vars,
    handle_error,
    load_registry,
    render,
    resolve_format,
    resolve_log_level,
)
from .options import output_option, url_option

__all__ = [
    "ExitCode",
    "SUPPORTED_FORMATS",
    "resolve_format",
    "resolve_log_level",
    "handle_error",
    "load_registry",
    "render",
    "get_llmr_env_vars",
    "format_file_size",
    "output_option",
    "url_option",
]
