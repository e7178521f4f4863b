"""Shared fixtures for the registry tests."""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Generator
from unittest.mock import MagicMock

import pytest

from llm_registry import LLMRegistry


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Keep every test away from the real user data directory and network config.

    Returns:
        The temporary data directory
    """
    data_dir = tmp_path / "user-data"
    monkeypatch.setenv("LLMR_DATA_DIR", str(data_dir))
    monkeypatch.delenv("LLMR_REGISTRY_PATH", raising=False)
    monkeypatch.delenv("LLMR_REGISTRY_URL", raising=False)
    monkeypatch.delenv("LLMR_LOG_LEVEL", raising=False)
    LLMRegistry.cleanup()
    yield data_dir
    LLMRegistry.cleanup()


@pytest.fixture
def sample_data() -> Dict[str, Any]:
    """A small registry document covering present and absent optional fields."""
    return {
        "version": "2.1.0",
        "providers": [
            {
                "id": "openai",
                "name": "OpenAI",
                "website": "https://openai.com",
                "api_config": {
                    "base_url": "https://api.openai.com/v1",
                    "auth": {"type": "bearer", "header": "Authorization", "env_var": "OPENAI_API_KEY"},
                },
                "models": [
                    {"id": "gpt-4", "name": "GPT-4", "context_window": 8192},
                    {"id": "gpt-4o", "name": "GPT-4o", "context_window": 128000, "modalities": ["text", "image"]},
                ],
            },
            {
                "id": "anthropic",
                "website": "https://www.anthropic.com",
                "api_config": {"base_url": "https://api.anthropic.com/v1"},
                "models": [{"id": "claude-3-5-sonnet-latest", "name": "Claude 3.5 Sonnet"}],
            },
            {"id": "ollama"},
        ],
    }


@pytest.fixture
def registry_file(tmp_path: Path, sample_data: Dict[str, Any]) -> Path:
    """Write the sample document to a JSON file.

    Returns:
        Path to the file
    """
    path = tmp_path / "llm_registry.json"
    path.write_text(json.dumps(sample_data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Build fake ``requests`` responses.

    Returns:
        Factory taking ``status_code`` and ``body`` (str, bytes or JSON data)
    """

    def _make(status_code: int = 200, body: Any = None) -> MagicMock:
        if body is None:
            body = b""
        elif isinstance(body, str):
            body = body.encode("utf-8")
        elif not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        response = MagicMock()
        response.status_code = status_code
        response.content = body
        return response

    return _make
