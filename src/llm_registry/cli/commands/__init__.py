"""CLI commands package."""

# Import all command modules to make them available
from . import data, models, providers, update

__all__ = ["data", "models", "providers", "update"]
