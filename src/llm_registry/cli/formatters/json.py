"""JSON output formatter for CLI."""

import datetime as _dt
import json
import sys
from enum import Enum as _Enum
from typing import Any, Dict, List, Mapping, Optional, TextIO

from ...document import Model, Provider


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - datetime/date -> ISO 8601 string
    - Enum -> value (fallback to name)
    - registry objects -> their JSON dict
    - Fallback -> str(obj)
    """
    if isinstance(obj, (_dt.datetime, _dt.date)):
        return obj.isoformat()
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    if isinstance(obj, (Provider, Model)):
        return obj.to_dict()
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        default=_default_serializer,
    )
    output.write("\n")


def provider_summary(provider: Provider) -> Dict[str, Any]:
    """Summarize a provider for listings."""
    auth = provider.auth
    return {
        "id": provider.id,
        "name": provider.name,
        "website": provider.website,
        "model_count": len(provider.models),
        "auth_type": auth.get("type") if isinstance(auth, Mapping) else None,
    }


def format_providers_json(providers: List[Provider]) -> Dict[str, Any]:
    """Format providers list for JSON output.

    Providers keep document order.

    Args:
        providers: Providers to list

    Returns:
        Formatted data structure
    """
    return {"providers": [provider_summary(p) for p in providers], "count": len(providers)}


def format_models_json(provider_id: str, models: List[Model]) -> Dict[str, Any]:
    """Format a provider's models for JSON output.

    Args:
        provider_id: Owning provider
        models: Models to list

    Returns:
        Formatted data structure
    """
    return {"provider": provider_id, "models": [m.to_dict() for m in models], "count": len(models)}


def format_data_paths_json(paths: Dict[str, Any]) -> Dict[str, Any]:
    """Format data paths for JSON output.

    Args:
        paths: Path information

    Returns:
        Formatted data structure
    """
    return {
        "data_sources": paths,
        "resolution_order": [
            "--registry-path option",
            "LLMR_REGISTRY_PATH environment variable",
            "User data directory (LLMR_DATA_DIR)",
            "Bundled package data",
        ],
    }


def format_env_vars_json(env_vars: Dict[str, Optional[str]]) -> Dict[str, Any]:
    """Format environment variables for JSON output.

    Args:
        env_vars: Environment variables

    Returns:
        Formatted data structure
    """
    return {
        "environment_variables": {key: {"value": value, "set": value is not None} for key, value in env_vars.items()},
        "set_count": sum(1 for v in env_vars.values() if v is not None),
        "total_count": len(env_vars),
    }
