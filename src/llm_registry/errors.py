"""Error types for the LLM provider registry.

This module defines the error types raised while loading, fetching,
querying and synchronising the registry document.
"""

from typing import Any, Dict, Iterable, List, Optional, Set, Union


class LLMRegistryError(Exception):
    """Base class for all registry-related errors.

    This is the parent class for all registry-specific exceptions.
    """

    pass


class ParseError(LLMRegistryError):
    """Raised when registry content is not a well-formed registry document.

    This covers both malformed JSON and JSON whose shape does not match the
    registry layout (for example ``providers`` not being a list).

    Examples:
        >>> try:
        ...     RegistryDocument.from_json("{not json")
        ... except ParseError as e:
        ...     print(f"Could not parse registry: {e}")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        """Initialize parse error.

        Args:
            message: Error message
            path: Optional path of the local file being parsed
            url: Optional URL of the remote document being parsed
        """
        super().__init__(message)
        self.message = message
        self.path = path
        self.url = url


class NetworkError(LLMRegistryError):
    """Raised when a network operation fails.

    Examples:
        >>> try:
        ...     LLMRegistry.fetch()
        ... except NetworkError as e:
        ...     print(f"Network error: {e}")
    """

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        """Initialize network error.

        Args:
            message: Error message
            url: Optional URL that was being accessed
        """
        super().__init__(message)
        self.message = message
        self.url = url


class HttpStatusError(NetworkError):
    """Raised when the remote source answers with a non-success status.

    Examples:
        >>> try:
        ...     LLMRegistry.fetch("https://example.com/missing.json")
        ... except HttpStatusError as e:
        ...     print(f"Server answered {e.status_code}")
    """

    def __init__(self, message: str, status_code: int, url: Optional[str] = None) -> None:
        """Initialize HTTP status error.

        Args:
            message: Error message
            status_code: HTTP status code returned by the server
            url: Optional URL that was being accessed
        """
        super().__init__(message, url=url)
        self.status_code = status_code


class ProviderNotFoundError(LLMRegistryError):
    """Raised when a provider id matches no provider in the registry.

    This is different from a provider that exists but has no website, models
    or auth configuration; those lookups return an empty or ``None`` result.

    Examples:
        >>> try:
        ...     registry.get_provider_models("nonexistent")
        ... except ProviderNotFoundError as e:
        ...     print(f"Provider {e.provider_id} does not exist")
    """

    def __init__(
        self,
        message: str,
        provider_id: Optional[str] = None,
        available_providers: Optional[Union[List[str], Set[str], Dict[str, Any], Iterable[str]]] = None,
    ) -> None:
        """Initialize provider not found error.

        Args:
            message: Error message
            provider_id: The provider id that was looked up
            available_providers: Ids of the providers that do exist (optional)
        """
        super().__init__(message)
        self.message = message
        self.provider_id = provider_id
        if available_providers is not None:
            if isinstance(available_providers, dict):
                self.available_providers: Optional[List[str]] = list(available_providers.keys())
            else:
                self.available_providers = list(available_providers)
        else:
            self.available_providers = None

    def __str__(self) -> str:
        """Return string representation of the error.

        Returns:
            Error message
        """
        return self.message


class RegistryNotLoadedError(ProviderNotFoundError):
    """Raised by id-keyed lookups on a registry that holds no document.

    Subclasses :class:`ProviderNotFoundError` because no provider can exist
    without a document, while still letting callers tell the two apart.
    """

    pass


class DuplicateProviderError(LLMRegistryError):
    """Raised when two providers in one document share the same id."""

    def __init__(self, message: str, provider_id: str) -> None:
        """Initialize duplicate provider error.

        Args:
            message: Error message
            provider_id: The id that appears more than once
        """
        super().__init__(message)
        self.message = message
        self.provider_id = provider_id


class SyncError(LLMRegistryError):
    """Raised when the local registry copy could not be replaced safely."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize sync error.

        Args:
            message: Error message
            path: Optional path of the local registry file
        """
        super().__init__(message)
        self.message = message
        self.path = path


class UninitializedRegistryWarning(UserWarning):
    """Issued when a registry handle is built without any document.

    The handle stays usable: ``list_providers()`` returns an empty list and
    id-keyed lookups raise :class:`RegistryNotLoadedError`.
    """

    pass
