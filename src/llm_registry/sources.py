"""Document sources for the LLM provider registry.

A source knows how to produce a :class:`RegistryDocument`. The registry picks
its source at construction time instead of sniffing the runtime environment:

- :class:`InMemorySource` wraps a document the caller already holds
- :class:`LocalFileSource` reads the persisted JSON copy
- :class:`RemoteSource` downloads the document with a single HTTP GET
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests

from .config_paths import get_registry_path, get_registry_url
from .document import RegistryDocument
from .errors import HttpStatusError, LLMRegistryError, NetworkError, ParseError
from .load_result import LoadResult
from .logging import LogEvent, log_debug, log_error, log_info

# Seconds to wait for the remote source before giving up
DEFAULT_TIMEOUT = 30.0


class DocumentSource(ABC):
    """Something a registry document can be loaded from."""

    @abstractmethod
    def load(self) -> LoadResult:
        """Load the document.

        Returns:
            LoadResult describing the outcome; never raises for I/O or parse
            problems
        """

    @abstractmethod
    def describe(self) -> str:
        """Short human readable description of the source."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()!r})"


class InMemorySource(DocumentSource):
    """Source backed by a document the caller supplies."""

    def __init__(self, data: Union[RegistryDocument, Dict[str, Any]]) -> None:
        self._data = data

    def load(self) -> LoadResult:
        try:
            return LoadResult.loaded(RegistryDocument.from_dict(self._data))
        except LLMRegistryError as e:
            return LoadResult.failed(e)

    def describe(self) -> str:
        return "in-memory document"


class LocalFileSource(DocumentSource):
    """Source backed by the persisted JSON copy of the registry."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        """Initialize the source.

        Args:
            path: Registry file. If None, the path is resolved through
                :func:`get_registry_path`.
        """
        self.path = get_registry_path(str(path) if path else None)

    def load(self) -> LoadResult:
        file_path = Path(self.path)
        if not file_path.is_file():
            log_debug(LogEvent.REGISTRY_LOAD, "No local registry file", path=self.path)
            return LoadResult.absent(f"Registry file not found: {self.path}", path=self.path)

        try:
            text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            error = ParseError(f"Registry file is not valid UTF-8: {e}", path=self.path)
            log_error(LogEvent.REGISTRY_LOAD, error.message, path=self.path)
            return LoadResult.failed(error, path=self.path)
        except OSError as e:
            log_error(LogEvent.REGISTRY_LOAD, f"Could not read registry file: {e}", path=self.path)
            return LoadResult.failed(e, path=self.path)

        try:
            document = RegistryDocument.from_json(text, path=self.path)
        except LLMRegistryError as e:
            log_error(LogEvent.REGISTRY_LOAD, f"Invalid registry file: {e}", path=self.path)
            return LoadResult.failed(e, path=self.path)

        log_debug(
            LogEvent.REGISTRY_LOAD,
            "Loaded local registry",
            path=self.path,
            providers=len(document.providers),
        )
        return LoadResult.loaded(document, path=self.path)

    def describe(self) -> str:
        return self.path


class RemoteSource(DocumentSource):
    """Source backed by a remote JSON document.

    Exactly one request is made per fetch; there are no retries.
    """

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        """Initialize the source.

        Args:
            url: Registry URL. If None, resolved through :func:`get_registry_url`.
            timeout: Request timeout in seconds, or None to wait indefinitely
        """
        self.url = get_registry_url(url)
        self.timeout = timeout

    def fetch_text(self) -> str:
        """Download the raw document body.

        Returns:
            The body decoded as UTF-8

        Raises:
            NetworkError: If the request could not be completed
            HttpStatusError: If the server answered with a status other than 200
            ParseError: If the body is not valid UTF-8
        """
        log_info(LogEvent.REGISTRY_FETCH, "Fetching registry", url=self.url)
        try:
            response = requests.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            log_error(LogEvent.REGISTRY_FETCH, f"Failed to fetch registry: {e}", url=self.url)
            raise NetworkError(f"Failed to fetch registry: {e}", url=self.url) from e

        try:
            if response.status_code != 200:
                log_error(LogEvent.REGISTRY_FETCH, f"HTTP error {response.status_code}", url=self.url)
                raise HttpStatusError(
                    f"HTTP error! status: {response.status_code}",
                    status_code=response.status_code,
                    url=self.url,
                )
            try:
                return response.content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"Registry response is not valid UTF-8: {e}", url=self.url) from e
        finally:
            # Ensure response is closed to prevent resource leaks
            response.close()

    def fetch(self) -> RegistryDocument:
        """Download and parse the document.

        Raises:
            NetworkError: If the request could not be completed
            HttpStatusError: If the server answered with a status other than 200
            ParseError: If the body is not a well-formed registry document
        """
        text = self.fetch_text()
        try:
            document = RegistryDocument.from_json(text, url=self.url)
        except LLMRegistryError as e:
            log_error(LogEvent.REGISTRY_FETCH, f"Failed to parse registry JSON: {e}", url=self.url)
            raise
        log_info(
            LogEvent.REGISTRY_FETCH,
            "Fetched registry",
            url=self.url,
            providers=len(document.providers),
        )
        return document

    def load(self) -> LoadResult:
        try:
            return LoadResult.loaded(self.fetch(), path=self.url)
        except LLMRegistryError as e:
            return LoadResult.failed(e, path=self.url)

    def describe(self) -> str:
        return self.url


def load_local(path: Optional[Union[str, Path]] = None) -> LoadResult:
    """Load the persisted registry copy.

    Args:
        path: Registry file; resolved through :func:`get_registry_path` if None

    Returns:
        LoadResult with status LOADED, ABSENT (no file) or ERROR (unreadable
        or malformed file)
    """
    return LocalFileSource(path).load()


def fetch_remote(url: Optional[str] = None, timeout: Optional[float] = DEFAULT_TIMEOUT) -> RegistryDocument:
    """Fetch the registry document from a remote URL.

    Args:
        url: Registry URL; resolved through :func:`get_registry_url` if None
        timeout: Request timeout in seconds

    Returns:
        The parsed document

    Raises:
        NetworkError: If the request could not be completed
        HttpStatusError: If the server answered with a status other than 200
        ParseError: If the body is not a well-formed registry document
    """
    return RemoteSource(url, timeout=timeout).fetch()
