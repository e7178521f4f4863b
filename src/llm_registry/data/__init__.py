"""Bundled data package for the LLM provider registry.

This namespace exposes the packaged registry copy (llm_registry.json) via
importlib.resources. It is not intended for direct import by users.
"""
