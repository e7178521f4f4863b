"""Data model for the LLM provider registry document.

The registry is a single JSON document::

    {
      "providers": [
        {
          "id": "openai",
          "website": "https://openai.com",
          "api_config": {"auth": {...}},
          "models": [{"id": "gpt-4o", "name": "GPT-4o", ...}]
        }
      ]
    }

Only the fields needed for lookups are interpreted. Every other key is kept
verbatim so that a document can be loaded and written back without loss.
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import DuplicateProviderError, ParseError


def _describe_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def freeze(value: Any) -> Any:
    """Return a read-only copy of decoded JSON.

    Objects become ``MappingProxyType`` views over fresh dicts and arrays
    become tuples, recursively. Scalars are returned as-is.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Return a plain, mutable copy of frozen (or plain) JSON data."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class Model:
    """A single model offered by a provider.

    Instances are hashable on ``id`` and ``name``.

    Attributes:
        id: Model identifier as used by the provider's API
        name: Display name, if the registry gives one
        raw: Read-only view of the model entry as found in the document, or
            None for models built directly
    """

    id: str
    name: Optional[str] = None
    raw: Optional[Mapping[str, Any]] = field(default=None, repr=False, hash=False)

    def __post_init__(self) -> None:
        if self.raw is not None:
            object.__setattr__(self, "raw", freeze(self.raw))

    @classmethod
    def from_dict(cls, data: Any, provider_id: str = "", **context: Optional[str]) -> "Model":
        """Build a model from its JSON object.

        Args:
            data: Decoded JSON object for the model
            provider_id: Owning provider, used in error messages
            **context: ``path``/``url`` forwarded to :class:`ParseError`

        Raises:
            ParseError: If the entry is not an object or has no string ``id``
        """
        if not isinstance(data, dict):
            raise ParseError(
                f"Model entry of provider '{provider_id}' must be an object, got {_describe_type(data)}",
                **context,
            )
        model_id = data.get("id")
        if not isinstance(model_id, str):
            raise ParseError(f"Model entry of provider '{provider_id}' has no string 'id'", **context)
        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ParseError(
                f"Model '{model_id}' of provider '{provider_id}' has a non-string 'name'",
                **context,
            )
        return cls(id=model_id, name=name, raw=data)

    @property
    def extra(self) -> Dict[str, Any]:
        """Passthrough fields other than ``id`` and ``name``."""
        if self.raw is None:
            return {}
        return {key: thaw(value) for key, value in self.raw.items() if key not in ("id", "name")}

    def get(self, key: str, default: Any = None) -> Any:
        """Return a copy of any field of the model entry."""
        if self.raw is None or key not in self.raw:
            return default
        return thaw(self.raw[key])

    def to_dict(self) -> Dict[str, Any]:
        """Return the model entry as a plain JSON-compatible dict."""
        if self.raw is not None:
            return thaw(self.raw)
        data: Dict[str, Any] = {"id": self.id}
        if self.name is not None:
            data["name"] = self.name
        return data


@dataclass(frozen=True)
class Provider:
    """An LLM vendor entry.

    Instances are hashable on ``id``, ``website`` and ``models``.

    Attributes:
        id: Unique provider identifier
        website: Provider website URL, if any
        models: Models offered by the provider, in document order
        api_config: Read-only view of the API configuration object, if any
        raw: Read-only view of the provider entry as found in the document,
            or None for providers built directly
    """

    id: str
    website: Optional[str] = None
    models: Tuple[Model, ...] = ()
    api_config: Optional[Mapping[str, Any]] = field(default=None, hash=False)
    raw: Optional[Mapping[str, Any]] = field(default=None, repr=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "models", tuple(self.models))
        if self.api_config is not None:
            object.__setattr__(self, "api_config", freeze(self.api_config))
        if self.raw is not None:
            object.__setattr__(self, "raw", freeze(self.raw))

    @classmethod
    def from_dict(cls, data: Any, **context: Optional[str]) -> "Provider":
        """Build a provider from its JSON object.

        Args:
            data: Decoded JSON object for the provider
            **context: ``path``/``url`` forwarded to :class:`ParseError`

        Raises:
            ParseError: If the entry does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ParseError(f"Provider entry must be an object, got {_describe_type(data)}", **context)

        provider_id = data.get("id")
        if not isinstance(provider_id, str):
            raise ParseError("Provider entry has no string 'id'", **context)

        website = data.get("website")
        if website is not None and not isinstance(website, str):
            raise ParseError(f"Provider '{provider_id}' has a non-string 'website'", **context)

        # A missing or null models list means the provider has no models
        raw_models = data.get("models")
        if raw_models is None:
            raw_models = []
        if not isinstance(raw_models, list):
            raise ParseError(
                f"Provider '{provider_id}' field 'models' must be an array, got {_describe_type(raw_models)}",
                **context,
            )

        api_config = data.get("api_config")
        if api_config is not None and not isinstance(api_config, dict):
            raise ParseError(f"Provider '{provider_id}' field 'api_config' must be an object", **context)

        models = tuple(Model.from_dict(entry, provider_id=provider_id, **context) for entry in raw_models)
        return cls(id=provider_id, website=website, models=models, api_config=api_config, raw=data)

    @property
    def name(self) -> Optional[str]:
        """Display name from the ``name`` passthrough field, if it is a string."""
        name = self.raw.get("name") if self.raw is not None else None
        return name if isinstance(name, str) else None

    @property
    def auth(self) -> Optional[Any]:
        """The read-only ``api_config.auth`` value, or None if either level is absent."""
        if self.api_config is None:
            return None
        return self.api_config.get("auth")

    @property
    def model_ids(self) -> List[str]:
        """Ids of the provider's models, in document order."""
        return [model.id for model in self.models]

    def to_dict(self) -> Dict[str, Any]:
        """Return the provider entry as a plain JSON-compatible dict."""
        if self.raw is not None:
            return thaw(self.raw)
        data: Dict[str, Any] = {"id": self.id}
        if self.website is not None:
            data["website"] = self.website
        if self.api_config is not None:
            data["api_config"] = thaw(self.api_config)
        if self.models:
            data["models"] = [model.to_dict() for model in self.models]
        return data


@dataclass(frozen=True)
class RegistryDocument:
    """Top-level registry container.

    Instances are immutable snapshots: a reload builds a new document instead
    of patching an existing one. They are hashable on ``providers``.

    Attributes:
        providers: Providers in document order
        raw: Read-only view of the whole document as decoded, or None for
            documents built directly
    """

    providers: Tuple[Provider, ...] = ()
    raw: Optional[Mapping[str, Any]] = field(default=None, repr=False, hash=False)
    _index: Dict[str, Provider] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "providers", tuple(self.providers))
        if self.raw is not None:
            object.__setattr__(self, "raw", freeze(self.raw))
        index: Dict[str, Provider] = {}
        for provider in self.providers:
            if provider.id in index:
                raise DuplicateProviderError(
                    f"Provider id '{provider.id}' appears more than once in the registry",
                    provider_id=provider.id,
                )
            index[provider.id] = provider
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None, url: Optional[str] = None) -> "RegistryDocument":
        """Build a document from decoded JSON.

        The input is deep-copied, so later changes to ``data`` do not leak
        into the document.

        Args:
            data: Decoded JSON value
            path: Source file, used in error messages
            url: Source URL, used in error messages

        Returns:
            RegistryDocument instance

        Raises:
            ParseError: If the value does not have the registry shape
            DuplicateProviderError: If two providers share an id
        """
        if isinstance(data, RegistryDocument):
            return data
        if not isinstance(data, Mapping):
            raise ParseError(
                f"Registry document must be a JSON object, got {_describe_type(data)}",
                path=path,
                url=url,
            )

        raw = thaw(data)
        raw_providers = raw.get("providers")
        if raw_providers is None:
            raw_providers = []
        if not isinstance(raw_providers, list):
            raise ParseError(
                f"Registry field 'providers' must be an array, got {_describe_type(raw_providers)}",
                path=path,
                url=url,
            )

        providers = tuple(Provider.from_dict(entry, path=path, url=url) for entry in raw_providers)
        return cls(providers=providers, raw=raw)

    @classmethod
    def from_json(cls, text: str, path: Optional[str] = None, url: Optional[str] = None) -> "RegistryDocument":
        """Parse a document from JSON text.

        Raises:
            ParseError: If the text is not well-formed JSON or not a registry
            DuplicateProviderError: If two providers share an id
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            source = path or url or "registry document"
            raise ParseError(f"Invalid JSON in {source}: {e}", path=path, url=url) from e
        return cls.from_dict(data, path=path, url=url)

    @property
    def provider_ids(self) -> List[str]:
        """Ids of all providers, in document order."""
        return [provider.id for provider in self.providers]

    def find_provider(self, provider_id: str) -> Optional[Provider]:
        """Look a provider up by exact id match.

        Returns:
            The provider, or None if no provider has this id
        """
        return self._index.get(provider_id)

    def to_dict(self) -> Dict[str, Any]:
        """Return the whole document as a plain JSON-compatible dict."""
        if self.raw is not None:
            return thaw(self.raw)
        return {"providers": [provider.to_dict() for provider in self.providers]}

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize the document to JSON text."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
