"""Tests for the registry data model."""

import copy
import json
from typing import Any, Dict

import pytest

from llm_registry import Model, Provider, RegistryDocument
from llm_registry.errors import DuplicateProviderError, ParseError


class TestParsing:
    """Tests for building documents from JSON data."""

    def test_providers_keep_document_order(self, sample_data: Dict[str, Any]) -> None:
        """Test providers are exposed in input order without loss."""
        document = RegistryDocument.from_dict(sample_data)
        assert document.provider_ids == ["openai", "anthropic", "ollama"]
        assert len(document.providers) == len(sample_data["providers"])

    def test_interpreted_fields(self, sample_data: Dict[str, Any]) -> None:
        """Test id, website, models and api_config are interpreted."""
        document = RegistryDocument.from_dict(sample_data)
        openai = document.find_provider("openai")

        assert openai is not None
        assert openai.website == "https://openai.com"
        assert openai.model_ids == ["gpt-4", "gpt-4o"]
        assert openai.models[0] == Model.from_dict({"id": "gpt-4", "name": "GPT-4", "context_window": 8192})
        assert openai.auth == {"type": "bearer", "header": "Authorization", "env_var": "OPENAI_API_KEY"}

    def test_absent_optional_fields(self, sample_data: Dict[str, Any]) -> None:
        """Test providers without models, website or auth."""
        document = RegistryDocument.from_dict(sample_data)

        anthropic = document.find_provider("anthropic")
        assert anthropic is not None
        assert anthropic.api_config == {"base_url": "https://api.anthropic.com/v1"}
        assert anthropic.auth is None

        ollama = document.find_provider("ollama")
        assert ollama is not None
        assert ollama.models == ()
        assert ollama.website is None
        assert ollama.api_config is None
        assert ollama.auth is None

    def test_null_models_means_no_models(self) -> None:
        """Test a null models field is treated like a missing one."""
        document = RegistryDocument.from_dict({"providers": [{"id": "a", "models": None}]})
        provider = document.find_provider("a")
        assert provider is not None
        assert provider.models == ()

    def test_missing_providers_is_empty_registry(self) -> None:
        """Test a document without providers is an empty registry."""
        document = RegistryDocument.from_dict({"version": "1"})
        assert document.providers == ()
        assert document.find_provider("openai") is None

    def test_model_passthrough_fields(self, sample_data: Dict[str, Any]) -> None:
        """Test model fields other than id and name are kept."""
        document = RegistryDocument.from_dict(sample_data)
        openai = document.find_provider("openai")
        assert openai is not None
        gpt4o = openai.models[1]

        assert gpt4o.name == "GPT-4o"
        assert gpt4o.extra == {"context_window": 128000, "modalities": ["text", "image"]}
        assert gpt4o.get("modalities") == ["text", "image"]
        assert gpt4o.get("missing", "default") == "default"

    def test_input_is_not_aliased(self, sample_data: Dict[str, Any]) -> None:
        """Test changes to the input dict do not reach the document."""
        document = RegistryDocument.from_dict(sample_data)
        sample_data["providers"][0]["website"] = "https://changed.example"
        sample_data["providers"][0]["models"].clear()

        openai = document.find_provider("openai")
        assert openai is not None
        assert openai.website == "https://openai.com"
        assert document.to_dict()["providers"][0]["website"] == "https://openai.com"
        assert len(openai.models) == 2

    def test_returned_copies_do_not_mutate_document(self, sample_data: Dict[str, Any]) -> None:
        """Test mutating serialized output leaves the document intact."""
        document = RegistryDocument.from_dict(sample_data)
        dumped = document.to_dict()
        dumped["providers"].pop()

        model = document.providers[0].models[0]
        model.get("context_window")
        extra = model.extra
        extra["context_window"] = 1

        assert len(document.providers) == 3
        assert model.get("context_window") == 8192

    def test_passthrough_data_is_read_only(self, sample_data: Dict[str, Any]) -> None:
        """Test nested passthrough data cannot be changed in place."""
        document = RegistryDocument.from_dict(sample_data)
        openai = document.find_provider("openai")
        assert openai is not None

        with pytest.raises(TypeError):
            openai.raw["website"] = "https://changed.example"  # type: ignore[index]
        with pytest.raises(TypeError):
            document.raw["version"] = "3"  # type: ignore[index]
        assert openai.raw["models"][1]["modalities"] == ("text", "image")  # type: ignore[index]

    def test_direct_construction_is_read_only(self) -> None:
        """Test dicts passed to the constructors are copied and frozen."""
        api_config = {"auth": {"type": "bearer"}}
        provider = Provider(id="local", api_config=api_config)
        api_config["auth"]["type"] = "changed"

        assert provider.auth == {"type": "bearer"}
        with pytest.raises(TypeError):
            provider.api_config["auth"] = None  # type: ignore[index]

    def test_objects_are_hashable(self, sample_data: Dict[str, Any]) -> None:
        """Test documents, providers and models can be hashed and used in sets."""
        document = RegistryDocument.from_dict(sample_data)
        again = RegistryDocument.from_dict(sample_data)
        openai = document.find_provider("openai")
        assert openai is not None

        assert hash(document) == hash(again)
        assert len({document, again}) == 1
        assert openai in set(document.providers)
        assert {openai.models[0]: "first"}[openai.models[0]] == "first"

    def test_provider_name(self, sample_data: Dict[str, Any]) -> None:
        """Test the provider display name comes from the passthrough field."""
        document = RegistryDocument.from_dict(sample_data)
        openai = document.find_provider("openai")
        ollama = document.find_provider("ollama")
        assert openai is not None and ollama is not None

        assert openai.name == "OpenAI"
        assert ollama.name is None
        assert Provider(id="local").name is None

    def test_from_document_returns_same_instance(self, sample_data: Dict[str, Any]) -> None:
        """Test passing an existing document is a no-op."""
        document = RegistryDocument.from_dict(sample_data)
        assert RegistryDocument.from_dict(document) is document


class TestMalformedDocuments:
    """Tests for shape errors."""

    @pytest.mark.parametrize(
        "data",
        [
            [],
            "providers",
            {"providers": {"id": "openai"}},
            {"providers": ["openai"]},
            {"providers": [{"website": "https://openai.com"}]},
            {"providers": [{"id": 42}]},
            {"providers": [{"id": "openai", "models": {"id": "gpt-4"}}]},
            {"providers": [{"id": "openai", "models": ["gpt-4"]}]},
            {"providers": [{"id": "openai", "models": [{"name": "GPT-4"}]}]},
            {"providers": [{"id": "openai", "api_config": "bearer"}]},
            {"providers": [{"id": "openai", "website": ["https://openai.com"]}]},
        ],
    )
    def test_shape_errors_raise_parse_error(self, data: Any) -> None:
        """Test structural problems raise ParseError."""
        with pytest.raises(ParseError):
            RegistryDocument.from_dict(data)

    def test_invalid_json(self) -> None:
        """Test malformed JSON raises ParseError with source context."""
        with pytest.raises(ParseError) as exc_info:
            RegistryDocument.from_json('{"providers": [', path="/tmp/llm_registry.json")

        assert exc_info.value.path == "/tmp/llm_registry.json"
        assert "Invalid JSON" in str(exc_info.value)

    def test_duplicate_provider_ids(self) -> None:
        """Test duplicate provider ids are rejected."""
        data = {"providers": [{"id": "openai"}, {"id": "anthropic"}, {"id": "openai"}]}
        with pytest.raises(DuplicateProviderError) as exc_info:
            RegistryDocument.from_dict(data)
        assert exc_info.value.provider_id == "openai"

    def test_duplicate_check_on_direct_construction(self) -> None:
        """Test the duplicate check also guards the dataclass constructor."""
        with pytest.raises(DuplicateProviderError):
            RegistryDocument(providers=(Provider(id="a"), Provider(id="a")))


class TestSerialization:
    """Tests for writing documents back out."""

    def test_round_trip(self, sample_data: Dict[str, Any]) -> None:
        """Test load -> serialize -> reload yields an equal document."""
        original = copy.deepcopy(sample_data)
        document = RegistryDocument.from_json(json.dumps(sample_data))
        reloaded = RegistryDocument.from_json(document.to_json())

        assert reloaded == document
        assert reloaded.to_dict() == original

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"providers": []},
            {"providers": [{"id": "bare"}]},
            {"providers": [{"id": "p", "models": [{"id": "m"}]}], "version": "1"},
        ],
    )
    def test_round_trip_minimal_documents(self, data: Dict[str, Any]) -> None:
        """Test documents with empty or missing containers serialize back unchanged."""
        document = RegistryDocument.from_dict(data)

        assert document.to_dict() == data
        assert RegistryDocument.from_dict(document.to_dict()) == document
        assert RegistryDocument.from_json(document.to_json()) == document

    def test_unknown_top_level_keys_survive(self, sample_data: Dict[str, Any]) -> None:
        """Test passthrough keys are written back."""
        document = RegistryDocument.from_dict(sample_data)
        assert document.to_dict()["version"] == "2.1.0"

    def test_to_json_keeps_unicode(self) -> None:
        """Test non-ASCII text is written as-is."""
        document = RegistryDocument.from_dict({"providers": [{"id": "zhipu", "name": "智谱"}]})
        assert "智谱" in document.to_json()

    def test_constructed_objects_serialize(self) -> None:
        """Test objects built without raw data still serialize."""
        provider = Provider(
            id="local",
            website="https://example.com",
            models=(Model(id="m1", name="Model 1"),),
            api_config={"auth": {"type": "none"}},
        )
        document = RegistryDocument(providers=(provider,))

        assert document.to_dict() == {
            "providers": [
                {
                    "id": "local",
                    "website": "https://example.com",
                    "api_config": {"auth": {"type": "none"}},
                    "models": [{"id": "m1", "name": "Model 1"}],
                }
            ]
        }
        assert document.find_provider("local") is provider
