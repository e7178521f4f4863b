"""Thread-safety tests for the `LLMRegistry` default instance and document swaps."""

from __future__ import annotations

import threading
from typing import Any, Dict, List

from llm_registry import LLMRegistry, get_registry
from llm_registry.sources import InMemorySource


def test_singleton_thread_safety() -> None:  # noqa: D401
    """Ensure multiple threads receive the exact same registry instance."""
    instance_ids: List[int] = []

    def _get_instance() -> None:  # noqa: WPS430
        instance_ids.append(id(get_registry()))

    threads = [threading.Thread(target=_get_instance) for _ in range(50)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    # All retrieved ids must be identical.
    assert len(set(instance_ids)) == 1, "LLMRegistry default instance is not thread-safe"


def test_readers_see_whole_snapshots(sample_data: Dict[str, Any]) -> None:
    """Readers racing a reload see either the old or the new document, never a mix."""
    registry = LLMRegistry(sample_data)
    replacement = {"providers": [{"id": "openai", "website": "https://platform.openai.com", "models": []}]}
    observed: List[tuple] = []
    stop = threading.Event()

    def _read() -> None:  # noqa: WPS430
        while not stop.is_set():
            document = registry.document
            assert document is not None
            provider = document.find_provider("openai")
            assert provider is not None
            observed.append((provider.website, len(provider.models)))

    readers = [threading.Thread(target=_read) for _ in range(4)]
    for th in readers:
        th.start()
    for i in range(20):
        registry.reload(InMemorySource(replacement if i % 2 == 0 else sample_data))
    stop.set()
    for th in readers:
        th.join()

    assert set(observed) <= {("https://openai.com", 2), ("https://platform.openai.com", 0)}
