"""Core registry functionality for LLM provider lookups.

This module provides the LLMRegistry class, a read-only view over one
:class:`RegistryDocument` snapshot.

Typical usage:

    from llm_registry import LLMRegistry

    registry = LLMRegistry()                 # local copy (or bundled data)
    registry = LLMRegistry(data)             # explicit document
    registry = LLMRegistry.fetch()           # latest remote document

    registry.get_provider_models("openai")

"""

import asyncio
import threading
import warnings
from typing import Any, Dict, List, Optional, Union

from .config_paths import get_registry_path, get_registry_url
from .document import Model, Provider, RegistryDocument, thaw
from .errors import ProviderNotFoundError, RegistryNotLoadedError, UninitializedRegistryWarning
from .load_result import LoadResult, LoadStatus
from .logging import LogEvent, log_error, log_info, log_warning
from .sources import DEFAULT_TIMEOUT, DocumentSource, InMemorySource, LocalFileSource, RemoteSource

DocumentLike = Union[RegistryDocument, Dict[str, Any]]


class RegistryConfig:
    """Configuration for the provider registry."""

    def __init__(
        self,
        registry_path: Optional[str] = None,
        registry_url: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        strict: bool = False,
    ):
        """Initialize registry configuration.

        Args:
            registry_path: Custom path to the registry JSON file. If None, the
                           default location is used.
            registry_url: Custom remote URL. If None, the default URL is used.
            timeout: Timeout in seconds for remote fetches, or None to wait
                     indefinitely.
            strict: Raise on a corrupt local file instead of falling back to
                    an empty registry.
        """
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        self.registry_path = get_registry_path(registry_path)
        self.registry_url = get_registry_url(registry_url)
        self.timeout = timeout
        self.strict = strict


class LLMRegistry:
    """Read-only accessor over a registry document."""

    _default_instance: Optional["LLMRegistry"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "LLMRegistry":
        """Get the default registry instance with standard configuration.

        The instance is created on first use, never at import time.

        Returns:
            The default LLMRegistry instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                cls._default_instance = cls()
            return cls._default_instance

    @staticmethod
    def cleanup() -> None:
        """Drop the default registry instance."""
        with LLMRegistry._instance_lock:
            LLMRegistry._default_instance = None

    def __init__(self, data: Optional[DocumentLike] = None, config: Optional[RegistryConfig] = None):
        """Initialize a new registry instance.

        Args:
            data: Registry document to use verbatim. If None, the local copy is
                  loaded from ``config.registry_path``.
            config: Configuration for this registry instance. If None, default
                    configuration is used.

        Raises:
            ParseError: If ``data`` is malformed, or if the local file is
                        malformed and ``config.strict`` is set
            DuplicateProviderError: Same conditions, for repeated provider ids
        """
        self.config = config or RegistryConfig()
        self._swap_lock = threading.Lock()
        self._document: Optional[RegistryDocument] = None

        if data is not None:
            self._source: DocumentSource = InMemorySource(data)
            self._document = RegistryDocument.from_dict(data)
            self._load_result = LoadResult.loaded(self._document)
            return

        self._source = LocalFileSource(self.config.registry_path)
        result = self._source.load()
        self._load_result = result

        if result.status is LoadStatus.LOADED:
            self._document = result.document
            return

        if result.status is LoadStatus.ERROR:
            if self.config.strict and result.exception is not None:
                raise result.exception
            log_error(
                LogEvent.REGISTRY_LOAD,
                "Local registry could not be loaded, continuing without a document",
                path=result.path,
                error=result.error,
            )

        message = (
            "No local registry found. Please use LLMRegistry.fetch() or provide data in constructor."
            if result.status is LoadStatus.ABSENT
            else f"Local registry is unusable ({result.error}). "
            "Please use LLMRegistry.fetch() or provide data in constructor."
        )
        log_warning(LogEvent.REGISTRY_LOAD, message, path=result.path)
        warnings.warn(message, UninitializedRegistryWarning, stacklevel=2)

    @classmethod
    def fetch(cls, url: Optional[str] = None, config: Optional[RegistryConfig] = None) -> "LLMRegistry":
        """Create a registry from the latest remote document.

        Args:
            url: Custom URL. Defaults to ``config.registry_url``.
            config: Configuration for the new instance

        Returns:
            A fully loaded registry

        Raises:
            NetworkError: If the request could not be completed
            HttpStatusError: If the server answered with a status other than 200
            ParseError: If the body is not a well-formed registry document
        """
        config = config or RegistryConfig()
        source = RemoteSource(url or config.registry_url, timeout=config.timeout)
        document = source.fetch()
        registry = cls(document, config=config)
        registry._swap(document, source, LoadResult.loaded(document, path=source.url))
        return registry

    @classmethod
    async def afetch(cls, url: Optional[str] = None, config: Optional[RegistryConfig] = None) -> "LLMRegistry":
        """Awaitable variant of :meth:`fetch`.

        The HTTP request runs in a worker thread so the event loop is not
        blocked. Raises the same errors as :meth:`fetch`.
        """
        return await asyncio.to_thread(cls.fetch, url, config)

    @classmethod
    def from_file(cls, path: str, strict: bool = True) -> "LLMRegistry":
        """Create a registry from a specific JSON file.

        Args:
            path: Registry file
            strict: Raise on a malformed file instead of degrading
        """
        return cls(config=RegistryConfig(registry_path=path, strict=strict))

    @property
    def document(self) -> Optional[RegistryDocument]:
        """The current document snapshot, or None if no document is loaded."""
        return self._document

    @property
    def is_loaded(self) -> bool:
        """Whether a document is available."""
        return self._document is not None

    @property
    def load_result(self) -> LoadResult:
        """Outcome of the most recent successful or construction-time load."""
        return self._load_result

    @property
    def source(self) -> DocumentSource:
        """Where the current document came from."""
        return self._source

    def _swap(self, document: RegistryDocument, source: DocumentSource, result: LoadResult) -> None:
        # Readers take a single reference to the document, so one assignment
        # under the lock is enough to keep them from seeing a mix of snapshots
        with self._swap_lock:
            self._document = document
            self._source = source
            self._load_result = result

    def reload(self, source: Optional[DocumentSource] = None) -> RegistryDocument:
        """Replace the document with a freshly loaded one.

        Args:
            source: Where to load from. Defaults to the local registry file.

        Returns:
            The new document

        Raises:
            LLMRegistryError: If the source yields no document; the previous
                              document stays in place
            OSError: If the local file exists but cannot be read
        """
        source = source or LocalFileSource(self.config.registry_path)
        result = source.load()
        if result.status is not LoadStatus.LOADED or result.document is None:
            if result.exception is not None:
                raise result.exception
            raise RegistryNotLoadedError(result.error or f"No registry document at {source.describe()}")
        self._swap(result.document, source, result)
        log_info(
            LogEvent.REGISTRY_LOAD,
            "Registry reloaded",
            source=source.describe(),
            providers=len(result.document.providers),
        )
        return result.document

    def refresh_from_remote(self, url: Optional[str] = None) -> RegistryDocument:
        """Fetch the remote document and swap it in.

        On any failure the previously loaded document is left unchanged.

        Args:
            url: Custom URL. Defaults to ``config.registry_url``.

        Returns:
            The new document

        Raises:
            NetworkError: If the request could not be completed
            HttpStatusError: If the server answered with a status other than 200
            ParseError: If the body is not a well-formed registry document
        """
        source = RemoteSource(url or self.config.registry_url, timeout=self.config.timeout)
        document = source.fetch()
        self._swap(document, source, LoadResult.loaded(document, path=source.url))
        return document

    def _require_provider(self, provider_id: str) -> Provider:
        document = self._document
        if document is None:
            raise RegistryNotLoadedError(
                f"Provider with ID '{provider_id}' not found: no registry is loaded.",
                provider_id=provider_id,
                available_providers=[],
            )
        provider = document.find_provider(provider_id)
        if provider is None:
            raise ProviderNotFoundError(
                f"Provider with ID '{provider_id}' not found.",
                provider_id=provider_id,
                available_providers=document.provider_ids,
            )
        return provider

    def list_providers(self) -> List[Provider]:
        """Get all providers.

        Returns:
            Providers in document order; an empty list if no document is loaded
        """
        document = self._document
        if document is None:
            return []
        return list(document.providers)

    def list_provider_ids(self) -> List[str]:
        """Get the ids of all providers, in document order."""
        document = self._document
        if document is None:
            return []
        return document.provider_ids

    def has_provider(self, provider_id: str) -> bool:
        """Check whether a provider with this id exists."""
        document = self._document
        return document is not None and document.find_provider(provider_id) is not None

    def get_provider(self, provider_id: str) -> Provider:
        """Get a provider by id.

        Raises:
            ProviderNotFoundError: If no provider has this id
            RegistryNotLoadedError: If no document is loaded
        """
        return self._require_provider(provider_id)

    def get_provider_models(self, provider_id: str) -> List[Model]:
        """Get the models of a provider.

        Args:
            provider_id: The ID of the provider

        Returns:
            Models in document order; an empty list if the provider lists none

        Raises:
            ProviderNotFoundError: If no provider has this id
            RegistryNotLoadedError: If no document is loaded
        """
        return list(self._require_provider(provider_id).models)

    def get_provider_website(self, provider_id: str) -> Optional[str]:
        """Get a provider's website.

        Args:
            provider_id: The ID of the provider

        Returns:
            The website URL, or None if the provider has none

        Raises:
            ProviderNotFoundError: If no provider has this id
            RegistryNotLoadedError: If no document is loaded
        """
        return self._require_provider(provider_id).website

    def get_provider_auth(self, provider_id: str) -> Optional[Any]:
        """Get a provider's auth configuration (``api_config.auth``).

        Args:
            provider_id: The ID of the provider

        Returns:
            A copy of the auth configuration, or None if the provider has no
            ``api_config`` or no ``auth`` in it

        Raises:
            ProviderNotFoundError: If no provider has this id
            RegistryNotLoadedError: If no document is loaded
        """
        return thaw(self._require_provider(provider_id).auth)

    def get_data_info(self) -> Dict[str, Any]:
        """Get information about the data source and its status.

        Returns:
            Dictionary describing where the current document came from
        """
        document = self._document
        result = self._load_result
        return {
            "source": self._source.describe(),
            "source_type": type(self._source).__name__,
            "registry_path": self.config.registry_path,
            "registry_url": self.config.registry_url,
            "loaded": document is not None,
            "load_status": result.status.value,
            "load_error": result.error if result.status is not LoadStatus.LOADED else None,
            "provider_count": len(document.providers) if document is not None else 0,
            "model_count": sum(len(p.models) for p in document.providers) if document is not None else 0,
        }


def get_registry() -> LLMRegistry:
    """Get the default registry instance.

    This is a convenience function for :meth:`LLMRegistry.get_default`.

    Returns:
        LLMRegistry: The default registry instance
    """
    return LLMRegistry.get_default()
