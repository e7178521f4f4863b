"""Registry of LLM providers, their models, websites and auth configuration.

This package loads a single JSON registry document (from memory, a local copy
or a remote URL) and answers point lookups over it. It also keeps the local
copy in sync with the published registry.
"""

# Version of the package
try:
    from importlib.metadata import version as _version

    __version__ = _version("llm-registry")
except ImportError:
    raise ImportError(
        "Failed to determine package version. This package requires Python 3.9+ "
        "where importlib.metadata is available, or must be installed as a package."
    )

# Import main components for easier access
from .document import Model, Provider, RegistryDocument
from .errors import (
    DuplicateProviderError,
    HttpStatusError,
    LLMRegistryError,
    NetworkError,
    ParseError,
    ProviderNotFoundError,
    RegistryNotLoadedError,
    SyncError,
    UninitializedRegistryWarning,
)
from .load_result import LoadResult, LoadStatus
from .registry import LLMRegistry, RegistryConfig, get_registry
from .sources import (
    DocumentSource,
    InMemorySource,
    LocalFileSource,
    RemoteSource,
    fetch_remote,
    load_local,
)
from .sync import SyncResult, SyncStatus, check_for_updates, sync_registry

# Define public API
__all__ = [
    # Core registry
    "LLMRegistry",
    "RegistryConfig",
    "get_registry",
    # Data model
    "RegistryDocument",
    "Provider",
    "Model",
    # Loading
    "DocumentSource",
    "InMemorySource",
    "LocalFileSource",
    "RemoteSource",
    "LoadResult",
    "LoadStatus",
    "load_local",
    "fetch_remote",
    # Sync
    "sync_registry",
    "check_for_updates",
    "SyncResult",
    "SyncStatus",
    # Errors
    "LLMRegistryError",
    "ParseError",
    "NetworkError",
    "HttpStatusError",
    "ProviderNotFoundError",
    "RegistryNotLoadedError",
    "DuplicateProviderError",
    "SyncError",
    "UninitializedRegistryWarning",
]
